"""Structural relation synthesis for fused node sets."""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from notegraph.knowledge_graph.models import (
    DEFAULT_RELATION_TYPE,
    Node,
    Relation,
    check_threshold,
)

_logger = logging.getLogger(__name__)

StrengthFn = Callable[[Node, Node], float]

BASE_STRENGTH = 0.1
CATEGORY_BONUS = 0.3
LEVEL_BONUS = 0.2
IMPORTANCE_WEIGHT = 0.4


def structural_strength(node_a: Node, node_b: Node) -> float:
    """Cheap attribute-overlap score between two nodes, at most 1.0."""
    strength = BASE_STRENGTH
    if node_a.category == node_b.category:
        strength += CATEGORY_BONUS
    if node_a.level == node_b.level:
        strength += LEVEL_BONUS
    importance_diff = abs(node_a.importance - node_b.importance)
    strength += (100 - importance_diff) / 100 * IMPORTANCE_WEIGHT
    return min(strength, 1.0)


class RelationSynthesizer:
    """Generates one relation per sufficiently similar node pair.

    The default scorer is :func:`structural_strength`. Callers that want
    another notion of similarity pass ``strength_fn``; whatever it returns
    is clipped into [0, 1] before the threshold is applied.
    """

    def __init__(
        self,
        min_relation: float = 0.3,
        strength_fn: StrengthFn | None = None,
        relation_type: str = DEFAULT_RELATION_TYPE,
    ) -> None:
        self._min_relation = check_threshold(min_relation)
        self._strength_fn = strength_fn or structural_strength
        self._relation_type = relation_type

    def synthesize(self, nodes: Sequence[Node]) -> list[Relation]:
        relations: list[Relation] = []
        for i in range(len(nodes)):
            for j in range(i + 1, len(nodes)):
                node_a, node_b = nodes[i], nodes[j]
                if node_a.name == node_b.name:
                    continue
                strength = min(max(float(self._strength_fn(node_a, node_b)), 0.0), 1.0)
                if strength < self._min_relation:
                    continue
                relations.append(
                    Relation(
                        source_name=node_a.name,
                        target_name=node_b.name,
                        relation_type=self._relation_type,
                        strength=strength,
                    )
                )
        _logger.debug(
            "synthesized %d relations over %d nodes (min_relation=%.2f)",
            len(relations),
            len(nodes),
            self._min_relation,
        )
        return relations
