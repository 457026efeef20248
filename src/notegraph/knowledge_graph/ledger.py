"""Contribution ledger: append-only audit trail of node create/update/merge events."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from notegraph.knowledge_graph.models import ContributionEvent, ContributionKind, Node

_logger = logging.getLogger(__name__)


class ContributionLedger:
    """Records who created, changed or merged each node.

    Events are snapshots: the nodes stored in ``before``/``after`` are
    copies, so later changes to a graph never rewrite history. Nothing is
    ever deduplicated or removed; persisting the trail is up to the caller.
    """

    def __init__(self, default_contributor: str | None = None) -> None:
        self._events: list[ContributionEvent] = []
        self._default_contributor = default_contributor

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[ContributionEvent]:
        return iter(tuple(self._events))

    @property
    def events(self) -> tuple[ContributionEvent, ...]:
        return tuple(self._events)

    def _append(
        self,
        kind: ContributionKind,
        after: Node,
        before: Node | None,
        contributor_id: str | None,
    ) -> ContributionEvent:
        event = ContributionEvent(
            node_name=after.name if before is None else before.name,
            kind=kind,
            after=after.copy(),
            before=before.copy() if before is not None else None,
            contributor_id=contributor_id or self._default_contributor,
        )
        self._events.append(event)
        _logger.debug("ledger: %s %s by %s", kind.value, event.node_name, event.contributor_id)
        return event

    def record_create(self, node: Node, contributor_id: str | None = None) -> ContributionEvent:
        return self._append(ContributionKind.CREATE, node, None, contributor_id)

    def record_update(
        self, before: Node, after: Node, contributor_id: str | None = None
    ) -> ContributionEvent:
        return self._append(ContributionKind.UPDATE, after, before, contributor_id)

    def record_merge(
        self, before: Node, after: Node, contributor_id: str | None = None
    ) -> ContributionEvent:
        return self._append(ContributionKind.MERGE, after, before, contributor_id)

    def extend(self, events: Iterable[ContributionEvent]) -> None:
        """Append already-built events, e.g. the ones returned by a fusion."""
        self._events.extend(events)

    def events_for(self, node_name: str) -> list[ContributionEvent]:
        """Events touching *node_name*, including renames into or out of it."""
        return [
            e
            for e in self._events
            if e.node_name == node_name or e.after.name == node_name
        ]

    def contributors_for(self, node_name: str) -> list[str]:
        """Distinct contributor ids for a node, in first-contribution order."""
        contributors: list[str] = []
        for event in self.events_for(node_name):
            if event.contributor_id is not None and event.contributor_id not in contributors:
                contributors.append(event.contributor_id)
        return contributors

    def to_dicts(self) -> list[dict]:
        from notegraph.knowledge_graph.serialization import event_to_dict

        return [event_to_dict(e) for e in self._events]
