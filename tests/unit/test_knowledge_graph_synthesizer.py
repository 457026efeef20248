"""Tests for structural relation synthesis."""
from __future__ import annotations

import pytest

from notegraph.knowledge_graph.models import Node, ValidationError
from notegraph.knowledge_graph.synthesizer import RelationSynthesizer, structural_strength


class TestStructuralStrength:
    def test_category_match_level_mismatch(self):
        ai = Node(name="AI", category="knowledge", level=1, importance=80)
        ml = Node(name="ML", category="knowledge", level=2, importance=70)
        assert structural_strength(ai, ml) == pytest.approx(0.76)

    def test_nothing_in_common(self):
        a = Node(name="a", category="x", level=1, importance=0)
        b = Node(name="b", category="y", level=2, importance=100)
        assert structural_strength(a, b) == pytest.approx(0.1)

    def test_identical_attributes_capped_at_one(self):
        a = Node(name="a", importance=50)
        b = Node(name="b", importance=50)
        assert structural_strength(a, b) == pytest.approx(1.0)
        assert structural_strength(a, b) <= 1.0

    def test_symmetric(self):
        a = Node(name="a", category="x", level=3, importance=10)
        b = Node(name="b", category="x", level=1, importance=95)
        assert structural_strength(a, b) == structural_strength(b, a)


class TestRelationSynthesizer:
    def test_one_relation_per_pair_above_threshold(self, make_node):
        nodes = [
            make_node("AI", importance=80),
            make_node("ML", level=2, importance=70),
            make_node("Cooking", category="life", level=3, importance=0),
        ]
        relations = RelationSynthesizer(min_relation=0.5).synthesize(nodes)
        assert [(r.source_name, r.target_name) for r in relations] == [("AI", "ML")]
        assert relations[0].relation_type == "related"
        assert relations[0].strength == pytest.approx(0.76)

    def test_zero_threshold_connects_everything(self, make_node):
        nodes = [make_node(name) for name in ("a", "b", "c", "d")]
        relations = RelationSynthesizer(min_relation=0.0).synthesize(nodes)
        assert len(relations) == 6
        assert len({r.key for r in relations}) == 6

    def test_custom_strength_is_clipped(self, make_node):
        nodes = [make_node("a"), make_node("b")]
        high = RelationSynthesizer(strength_fn=lambda x, y: 5.0).synthesize(nodes)
        assert high[0].strength == 1.0

        low = RelationSynthesizer(min_relation=0.0, strength_fn=lambda x, y: -2.0).synthesize(nodes)
        assert low[0].strength == 0.0

    def test_custom_strength_respects_threshold(self, make_node):
        nodes = [make_node("a"), make_node("b")]
        relations = RelationSynthesizer(min_relation=0.3, strength_fn=lambda x, y: 0.29).synthesize(nodes)
        assert relations == []

    def test_custom_relation_type(self, make_node):
        relations = RelationSynthesizer(relation_type="similar").synthesize([make_node("a"), make_node("b")])
        assert relations[0].relation_type == "similar"

    def test_empty_and_single(self, make_node):
        synthesizer = RelationSynthesizer()
        assert synthesizer.synthesize([]) == []
        assert synthesizer.synthesize([make_node("a")]) == []

    def test_invalid_threshold(self):
        with pytest.raises(ValidationError):
            RelationSynthesizer(min_relation=-0.5)
