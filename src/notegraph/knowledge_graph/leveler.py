"""Level and importance assignment for analysed tags."""
from __future__ import annotations

import math
import random

from notegraph.knowledge_graph.cooccurrence import TagAnalysis
from notegraph.knowledge_graph.models import DEFAULT_CATEGORY, Node, ValidationError


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class NodeLeveler:
    """Turns tag frequencies into leveled, importance-ranked nodes.

    Tags are stably sorted by descending frequency and cut into
    ``max_level`` contiguous buckets of ``ceil(T / max_level)``; the most
    frequent bucket is level 1. Importance is the frequency normalised to
    the most frequent tag, on a 0-100 scale.
    """

    DEFAULT_MAX_LEVEL: int = 3

    def __init__(
        self,
        max_level: int = DEFAULT_MAX_LEVEL,
        canvas_width: float = 800.0,
        canvas_height: float = 600.0,
        rng: random.Random | None = None,
    ) -> None:
        if isinstance(max_level, bool) or not isinstance(max_level, int) or max_level < 1:
            raise ValidationError(f"max_level must be a positive integer, got {max_level!r}")
        self._max_level = max_level
        self._width = canvas_width
        self._height = canvas_height
        self._rng = rng or random.Random()

    def level_nodes(self, analysis: TagAnalysis) -> list[Node]:
        if not analysis.tags:
            return []

        ranked = sorted(analysis.tags, key=lambda tag: analysis.frequency[tag], reverse=True)
        bucket_size = math.ceil(len(ranked) / self._max_level)
        max_frequency = analysis.max_frequency

        nodes: list[Node] = []
        for index, tag in enumerate(ranked):
            level = min(index // bucket_size + 1, self._max_level)
            importance = min(100, _round_half_up(100 * analysis.frequency[tag] / max_frequency))
            nodes.append(
                Node(
                    name=tag,
                    description=f"Tag: {tag}",
                    category=DEFAULT_CATEGORY,
                    level=level,
                    importance=importance,
                    position=(self._rng.random() * self._width, self._rng.random() * self._height),
                    connection_count=0,
                )
            )
        return nodes
