"""Conversion between knowledge graph records and JSON-ready dicts."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from notegraph.knowledge_graph.cooccurrence import Document
from notegraph.knowledge_graph.models import (
    DEFAULT_CATEGORY,
    DEFAULT_IMPORTANCE,
    DEFAULT_LEVEL,
    DEFAULT_RELATION_TYPE,
    ConflictRecord,
    ContributionEvent,
    Node,
    Relation,
    ValidationError,
)

if TYPE_CHECKING:
    from notegraph.knowledge_graph.fusion import FusionResult
    from notegraph.knowledge_graph.knowledge_map import KnowledgeMap


def _get(data: Mapping[str, Any], key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


def _as_int(data: Mapping[str, Any], key: str, default: int) -> int:
    value = _get(data, key, default)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def node_from_dict(data: Mapping[str, Any]) -> Node:
    """Build a Node from a payload mapping; absent fields take Node defaults."""
    if not isinstance(data, Mapping):
        raise ValidationError(f"node must be an object, got {type(data).__name__}")
    if "name" not in data or data.get("name") is None:
        raise ValidationError("missing required field 'name'")
    return Node(
        name=data["name"],
        description=_get(data, "description", ""),
        category=_get(data, "category", DEFAULT_CATEGORY),
        level=_as_int(data, "level", DEFAULT_LEVEL),
        importance=_as_int(data, "importance", DEFAULT_IMPORTANCE),
        position=(_get(data, "position_x", 0.0), _get(data, "position_y", 0.0)),
        connection_count=_as_int(data, "connection_count", 0),
        contributor_count=_as_int(data, "contributor_count", 1),
        sources=tuple(_get(data, "sources", ())),
    )


def node_to_dict(node: Node) -> dict[str, Any]:
    return {
        "name": node.name,
        "description": node.description,
        "category": node.category,
        "level": node.level,
        "importance": node.importance,
        "position_x": node.position[0],
        "position_y": node.position[1],
        "connection_count": node.connection_count,
        "contributor_count": node.contributor_count,
        "sources": [s.value for s in node.sources],
    }


def nodes_from_payload(items: Any, field_name: str = "nodes") -> list[Node]:
    """Parse a list of node mappings, naming the offending index on failure."""
    if not isinstance(items, list):
        raise ValidationError(f"{field_name} must be a list")
    nodes: list[Node] = []
    for index, item in enumerate(items):
        try:
            nodes.append(node_from_dict(item))
        except ValidationError as exc:
            raise ValidationError(f"{field_name}[{index}]: {exc}") from exc
    return nodes


def relation_from_dict(data: Mapping[str, Any]) -> Relation:
    for key in ("source_name", "target_name"):
        if data.get(key) is None:
            raise ValidationError(f"missing required field '{key}'")
    return Relation(
        source_name=data["source_name"],
        target_name=data["target_name"],
        relation_type=_get(data, "relation_type", DEFAULT_RELATION_TYPE),
        strength=_get(data, "strength", 0.5),
        contributor_count=_as_int(data, "contributor_count", 1),
    )


def relation_to_dict(relation: Relation) -> dict[str, Any]:
    return {
        "source_name": relation.source_name,
        "target_name": relation.target_name,
        "relation_type": relation.relation_type,
        "strength": relation.strength,
        "contributor_count": relation.contributor_count,
    }


def conflict_to_dict(conflict: ConflictRecord) -> dict[str, Any]:
    return {
        "type": conflict.type.value,
        "node_name": conflict.node_name,
        "resolution": conflict.resolution.value,
        "source_data": node_to_dict(conflict.source_data),
        "target_data": node_to_dict(conflict.target_data),
    }


def event_to_dict(event: ContributionEvent) -> dict[str, Any]:
    return {
        "node_name": event.node_name,
        "contributor_id": event.contributor_id,
        "kind": event.kind.value,
        "before": node_to_dict(event.before) if event.before is not None else None,
        "after": node_to_dict(event.after),
        "timestamp": event.timestamp.isoformat(),
    }


def documents_from_payload(items: Any, field_name: str = "notes") -> list[Document]:
    """Parse ``[{"id": ..., "tags": [...]}, ...]``; a missing id becomes the list index."""
    if not isinstance(items, list):
        raise ValidationError(f"{field_name} must be a list")
    documents: list[Document] = []
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise ValidationError(f"{field_name}[{index}]: note must be an object")
        tags = item.get("tags") or []
        if isinstance(tags, str) or not isinstance(tags, Iterable):
            raise ValidationError(f"{field_name}[{index}]: tags must be a list of strings")
        doc_id = item.get("id")
        document = Document(id=str(index if doc_id is None else doc_id), tags=tuple(tags))
        try:
            document.unique_tags()
        except ValidationError as exc:
            raise ValidationError(f"{field_name}[{index}]: {exc}") from exc
        documents.append(document)
    return documents


def fusion_result_to_dict(result: FusionResult) -> dict[str, Any]:
    return {
        "strategy": result.strategy.value,
        "nodes": [node_to_dict(n) for n in result.nodes],
        "relations": [relation_to_dict(r) for r in result.relations],
        "conflicts": [conflict_to_dict(c) for c in result.conflicts],
        "events": [event_to_dict(e) for e in result.events],
    }


def knowledge_map_to_dict(knowledge_map: KnowledgeMap) -> dict[str, Any]:
    return {
        "nodes": [node_to_dict(n) for n in knowledge_map.graph.node_list()],
        "relations": [relation_to_dict(r) for r in knowledge_map.graph.relations],
        "analysis": knowledge_map.summary(),
        "events": [event_to_dict(e) for e in knowledge_map.events],
    }
