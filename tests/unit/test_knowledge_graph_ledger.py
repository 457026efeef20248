"""Tests for ContributionLedger."""
from __future__ import annotations

from notegraph.knowledge_graph.ledger import ContributionLedger
from notegraph.knowledge_graph.models import ContributionKind, Node


class TestContributionLedger:
    def test_starts_empty(self):
        ledger = ContributionLedger()
        assert len(ledger) == 0
        assert ledger.events == ()

    def test_record_create(self):
        ledger = ContributionLedger()
        event = ledger.record_create(Node(name="AI"), "alice")
        assert event.kind is ContributionKind.CREATE
        assert event.node_name == "AI"
        assert event.contributor_id == "alice"
        assert event.before is None
        assert event.timestamp.tzinfo is not None

    def test_snapshots_are_copies(self):
        node = Node(name="AI", importance=10)
        ledger = ContributionLedger()
        ledger.record_create(node)
        node.importance = 99
        assert ledger.events[0].after.importance == 10

    def test_default_contributor(self):
        ledger = ContributionLedger(default_contributor="system")
        assert ledger.record_create(Node(name="AI")).contributor_id == "system"
        assert ledger.record_create(Node(name="ML"), "bob").contributor_id == "bob"

    def test_update_and_merge_keep_before(self):
        ledger = ContributionLedger()
        before = Node(name="AI", importance=10)
        ledger.record_update(before, before.copy(importance=20), "alice")
        ledger.record_merge(before, before.copy(contributor_count=2), "bob")
        kinds = [e.kind for e in ledger]
        assert kinds == [ContributionKind.UPDATE, ContributionKind.MERGE]
        assert all(e.before.importance == 10 for e in ledger)

    def test_events_for_follows_renames(self):
        ledger = ContributionLedger()
        original = Node(name="ML")
        ledger.record_create(original, "alice")
        ledger.record_update(original, original.copy(name="Machine Learning"), "bob")
        ledger.record_create(Node(name="AI"), "carol")

        assert len(ledger.events_for("ML")) == 2
        assert [e.contributor_id for e in ledger.events_for("Machine Learning")] == ["bob"]
        assert ledger.contributors_for("ML") == ["alice", "bob"]

    def test_contributors_skip_anonymous_and_duplicates(self):
        ledger = ContributionLedger()
        node = Node(name="AI")
        ledger.record_create(node)
        ledger.record_update(node, node, "alice")
        ledger.record_update(node, node, "alice")
        assert ledger.contributors_for("AI") == ["alice"]

    def test_extend_and_to_dicts(self):
        source = ContributionLedger()
        source.record_create(Node(name="AI"), "alice")
        ledger = ContributionLedger()
        ledger.extend(source.events)

        (record,) = ledger.to_dicts()
        assert record["kind"] == "create"
        assert record["contributor_id"] == "alice"
        assert record["after"]["name"] == "AI"
        assert record["before"] is None

    def test_iteration_is_a_snapshot(self):
        ledger = ContributionLedger()
        ledger.record_create(Node(name="a"))
        for _ in ledger:
            ledger.record_create(Node(name="b"))
        assert len(ledger) == 2
