"""Knowledge graph fusion engine: co-occurrence analysis, leveling, fusion and provenance."""
from __future__ import annotations

from notegraph.knowledge_graph.cooccurrence import (
    CoOccurrenceAnalyzer,
    Document,
    TagAnalysis,
    TagPair,
)
from notegraph.knowledge_graph.fusion import FusionEngine, FusionResult, fuse
from notegraph.knowledge_graph.knowledge_map import KnowledgeMap, build_knowledge_map
from notegraph.knowledge_graph.ledger import ContributionLedger
from notegraph.knowledge_graph.leveler import NodeLeveler
from notegraph.knowledge_graph.models import (
    ConflictRecord,
    ConflictResolution,
    ConflictType,
    ContributionEvent,
    ContributionKind,
    FusionStrategy,
    Graph,
    Node,
    NodeSource,
    Relation,
    ValidationError,
)
from notegraph.knowledge_graph.synthesizer import RelationSynthesizer, structural_strength

__all__ = [
    "Node",
    "Relation",
    "Graph",
    "NodeSource",
    "ConflictRecord",
    "ConflictResolution",
    "ConflictType",
    "ContributionEvent",
    "ContributionKind",
    "FusionStrategy",
    "ValidationError",
    "Document",
    "TagAnalysis",
    "TagPair",
    "CoOccurrenceAnalyzer",
    "NodeLeveler",
    "RelationSynthesizer",
    "structural_strength",
    "FusionEngine",
    "FusionResult",
    "fuse",
    "ContributionLedger",
    "KnowledgeMap",
    "build_knowledge_map",
]
