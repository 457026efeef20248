"""REST API router for group knowledge graph fusion."""
from __future__ import annotations

import logging
import uuid
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from notegraph.api.dependencies import get_config, get_fusion_engine
from notegraph.knowledge_graph.models import ValidationError
from notegraph.knowledge_graph.serialization import (
    conflict_to_dict,
    event_to_dict,
    node_to_dict,
    relation_to_dict,
)

router = APIRouter(tags=["fusion"])

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pydantic request/response models
# ---------------------------------------------------------------------------


class NodePayload(BaseModel):
    name: str
    description: str
    category: str
    level: int
    importance: int
    position_x: float
    position_y: float
    connection_count: int
    contributor_count: int
    sources: list[str]


class RelationPayload(BaseModel):
    source_name: str
    target_name: str
    relation_type: str
    strength: float
    contributor_count: int


class ConflictPayload(BaseModel):
    type: str
    node_name: str
    resolution: str
    source_data: NodePayload
    target_data: NodePayload


class FusionRequest(BaseModel):
    fusion_type: str = Field(
        "smart",
        description="Fusion strategy: smart|merge|add (unknown values run smart)",
    )
    source_nodes: list[dict[str, Any]]
    target_nodes: list[dict[str, Any]] | None = None
    min_relation: float | None = Field(None, ge=0.0, le=1.0)
    initiator_id: str | None = None
    target_contributor_id: str | None = None


class FusionGraphPayload(BaseModel):
    nodes: list[NodePayload]
    relations: list[RelationPayload]


class FusionResponse(BaseModel):
    fusion_id: str
    group_id: str
    fusion_type: str
    result: FusionGraphPayload
    conflicts: list[ConflictPayload]
    events: list[dict[str, Any]]


def _make_fusion_id() -> str:
    return f"fus_{uuid.uuid4().hex[:12]}"


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/groups/{group_id}/fuse", response_model=FusionResponse)
def fuse_group_graph(group_id: str, body: FusionRequest) -> FusionResponse:
    """Fuse two contributors' node sets for a group.

    Membership checks and persistence of the result happen outside this
    service; the response carries everything the caller needs to store.
    """
    config = get_config()
    engine = get_fusion_engine()
    min_relation = body.min_relation if body.min_relation is not None else config.fusion.min_relation

    try:
        result = engine.fuse(
            body.source_nodes,
            body.target_nodes,
            strategy=body.fusion_type,
            min_relation=min_relation,
            source_contributor=body.initiator_id,
            target_contributor=body.target_contributor_id,
        )
    except ValidationError as exc:
        raise HTTPException(400, str(exc))

    fusion_id = _make_fusion_id()
    logger.info(
        "group %s fusion %s (%s): %d nodes, %d conflicts",
        group_id,
        fusion_id,
        result.strategy.value,
        len(result.nodes),
        len(result.conflicts),
    )

    return FusionResponse(
        fusion_id=fusion_id,
        group_id=group_id,
        fusion_type=result.strategy.value,
        result=FusionGraphPayload(
            nodes=[NodePayload(**node_to_dict(n)) for n in result.nodes],
            relations=[RelationPayload(**relation_to_dict(r)) for r in result.relations],
        ),
        conflicts=[ConflictPayload(**conflict_to_dict(c)) for c in result.conflicts],
        events=[event_to_dict(e) for e in result.events],
    )
