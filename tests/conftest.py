"""Pytest configuration and fixtures for notegraph tests.

Every test runs against an isolated data directory so a developer's own
~/.notegraph/config/settings.toml never leaks into assertions.
"""

from __future__ import annotations

import os

import pytest

from notegraph.knowledge_graph.cooccurrence import Document
from notegraph.knowledge_graph.models import Node


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config loading at an empty temp dir and clear cached services."""
    from notegraph.api.dependencies import reset_services

    for key in list(os.environ):
        if key.startswith("NOTEGRAPH_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("NOTEGRAPH_DATA_DIR", str(tmp_path / "notegraph-data"))
    reset_services()
    yield
    reset_services()


@pytest.fixture
def ai_source() -> list[dict]:
    return [{"name": "AI", "category": "knowledge", "level": 1, "importance": 80}]


@pytest.fixture
def ai_ml_target() -> list[dict]:
    return [
        {"name": "AI", "category": "knowledge", "level": 1, "importance": 60},
        {"name": "ML", "category": "knowledge", "level": 2, "importance": 70},
    ]


@pytest.fixture
def sample_documents() -> list[Document]:
    """Four notes: python x3, ml x2, web x1, data x1."""
    return [
        Document(id="n1", tags=("python", "ml")),
        Document(id="n2", tags=("python", "web")),
        Document(id="n3", tags=("python", "ml", "data")),
    ]


@pytest.fixture
def make_node():
    def _make(name: str, **kwargs) -> Node:
        return Node(name=name, **kwargs)

    return _make
