from __future__ import annotations

__version__ = "0.3.0"
__author__ = "Notegraph Contributors"

from notegraph.knowledge_graph import (
    ContributionLedger,
    FusionEngine,
    FusionStrategy,
    Graph,
    Node,
    Relation,
    ValidationError,
    build_knowledge_map,
    fuse,
)

__all__ = [
    "Node",
    "Relation",
    "Graph",
    "FusionStrategy",
    "FusionEngine",
    "ContributionLedger",
    "ValidationError",
    "build_knowledge_map",
    "fuse",
]
