"""Tests for the top-level notegraph package."""
from __future__ import annotations

import notegraph


def test_version():
    assert notegraph.__version__ == "0.3.0"


def test_public_api_exports():
    for name in (
        "ContributionLedger",
        "FusionEngine",
        "FusionStrategy",
        "Graph",
        "Node",
        "Relation",
        "ValidationError",
        "build_knowledge_map",
        "fuse",
    ):
        assert hasattr(notegraph, name), name
