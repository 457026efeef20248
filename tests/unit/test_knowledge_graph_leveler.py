"""Tests for tag leveling and importance scoring."""
from __future__ import annotations

import random

import pytest

from notegraph.knowledge_graph.cooccurrence import CoOccurrenceAnalyzer, TagAnalysis
from notegraph.knowledge_graph.leveler import NodeLeveler
from notegraph.knowledge_graph.models import ValidationError


def _analysis(frequency: dict[str, int]) -> TagAnalysis:
    return TagAnalysis(tags=list(frequency), frequency=dict(frequency))


class TestNodeLeveler:
    def test_levels_and_importance(self, sample_documents):
        analysis = CoOccurrenceAnalyzer().analyze(sample_documents)
        nodes = NodeLeveler(max_level=3, rng=random.Random(0)).level_nodes(analysis)

        assert [n.name for n in nodes] == ["python", "ml", "web", "data"]
        assert [n.level for n in nodes] == [1, 1, 2, 2]
        assert [n.importance for n in nodes] == [100, 67, 33, 33]
        assert nodes[0].description == "Tag: python"
        assert all(n.category == "knowledge" for n in nodes)
        assert all(n.connection_count == 0 for n in nodes)

    def test_ties_keep_discovery_order(self):
        nodes = NodeLeveler().level_nodes(_analysis({"b": 1, "a": 2, "c": 1}))
        assert [n.name for n in nodes] == ["a", "b", "c"]

    def test_bucket_size_rounds_up(self):
        freq = {f"t{i}": 10 - i for i in range(7)}
        nodes = NodeLeveler(max_level=3).level_nodes(_analysis(freq))
        assert [n.level for n in nodes] == [1, 1, 1, 2, 2, 2, 3]

    def test_fewer_tags_than_levels(self):
        nodes = NodeLeveler(max_level=3).level_nodes(_analysis({"a": 2, "b": 1}))
        assert [n.level for n in nodes] == [1, 2]

    def test_single_tag(self):
        (node,) = NodeLeveler().level_nodes(_analysis({"only": 4}))
        assert node.level == 1
        assert node.importance == 100

    def test_importance_rounds_half_up(self):
        nodes = NodeLeveler().level_nodes(_analysis({"a": 8, "b": 1}))
        assert nodes[1].importance == 13

    def test_levels_never_exceed_max(self):
        freq = {f"t{i}": 1 for i in range(10)}
        nodes = NodeLeveler(max_level=4).level_nodes(_analysis(freq))
        assert {n.level for n in nodes} <= {1, 2, 3, 4}

    def test_empty_analysis(self):
        assert NodeLeveler().level_nodes(TagAnalysis()) == []

    def test_positions_inside_canvas(self):
        leveler = NodeLeveler(canvas_width=100.0, canvas_height=50.0, rng=random.Random(3))
        for node in leveler.level_nodes(_analysis({"a": 1, "b": 1, "c": 1})):
            x, y = node.position
            assert 0.0 <= x < 100.0
            assert 0.0 <= y < 50.0

    def test_seeded_positions_repeat(self):
        analysis = _analysis({"a": 2, "b": 1})
        first = NodeLeveler(rng=random.Random(42)).level_nodes(analysis)
        second = NodeLeveler(rng=random.Random(42)).level_nodes(analysis)
        assert [n.position for n in first] == [n.position for n in second]

    @pytest.mark.parametrize("max_level", [0, -1, 1.5, True])
    def test_invalid_max_level(self, max_level):
        with pytest.raises(ValidationError, match="max_level"):
            NodeLeveler(max_level=max_level)
