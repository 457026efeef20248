"""Personal knowledge map: a leveled concept graph derived from tagged notes."""
from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from notegraph.knowledge_graph.cooccurrence import CoOccurrenceAnalyzer, Document, TagAnalysis
from notegraph.knowledge_graph.ledger import ContributionLedger
from notegraph.knowledge_graph.leveler import NodeLeveler
from notegraph.knowledge_graph.models import (
    DEFAULT_RELATION_TYPE,
    ContributionEvent,
    Graph,
    Relation,
)

_logger = logging.getLogger(__name__)


@dataclass
class KnowledgeMap:
    graph: Graph
    analysis: TagAnalysis
    max_level: int
    events: list[ContributionEvent] = field(default_factory=list)

    def summary(self) -> dict[str, Any]:
        return {
            "total_notes": self.analysis.document_count,
            "unique_tags": len(self.analysis.tags),
            "total_relations": len(self.graph.relations),
            "min_relation": self.analysis.min_relation,
            "max_level": self.max_level,
        }


def build_knowledge_map(
    documents: Iterable[Document],
    min_relation: float = CoOccurrenceAnalyzer.DEFAULT_MIN_RELATION,
    max_level: int = NodeLeveler.DEFAULT_MAX_LEVEL,
    *,
    contributor_id: str | None = None,
    ledger: ContributionLedger | None = None,
    rng: random.Random | None = None,
    canvas_width: float = 800.0,
    canvas_height: float = 600.0,
) -> KnowledgeMap:
    """Analyse *documents* and assemble a graph of tag nodes and co-occurrence relations.

    Every node gets a ``create`` event credited to *contributor_id*; the
    events are appended to *ledger* once the map is fully built.
    """
    analyzer = CoOccurrenceAnalyzer(min_relation)
    leveler = NodeLeveler(max_level, canvas_width=canvas_width, canvas_height=canvas_height, rng=rng)

    analysis = analyzer.analyze(documents)
    graph = Graph.from_parts(leveler.level_nodes(analysis))
    for pair in analysis.pairs:
        graph.add_relation(
            Relation(
                source_name=pair.tag_a,
                target_name=pair.tag_b,
                relation_type=DEFAULT_RELATION_TYPE,
                strength=pair.ratio,
            )
        )

    pending = ContributionLedger()
    for node in graph.node_list():
        pending.record_create(node, contributor_id)

    knowledge_map = KnowledgeMap(
        graph=graph,
        analysis=analysis,
        max_level=max_level,
        events=list(pending.events),
    )
    if ledger is not None:
        ledger.extend(knowledge_map.events)

    _logger.info(
        "knowledge map: %d notes -> %d nodes, %d relations",
        analysis.document_count,
        len(graph),
        len(graph.relations),
    )
    return knowledge_map
