"""REST API router for building a personal knowledge map from tagged notes."""
from __future__ import annotations

import random
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from notegraph.api.dependencies import get_config
from notegraph.api.routers.fusion import NodePayload, RelationPayload
from notegraph.knowledge_graph.knowledge_map import build_knowledge_map
from notegraph.knowledge_graph.models import ValidationError
from notegraph.knowledge_graph.serialization import (
    documents_from_payload,
    node_to_dict,
    relation_to_dict,
)

router = APIRouter(prefix="/knowledge-map", tags=["knowledge_map"])


class AnalyzeRequest(BaseModel):
    notes: list[dict[str, Any]] = Field(..., min_length=1)
    min_relation: float | None = Field(None, ge=0.0, le=1.0)
    max_level: int | None = Field(None, ge=1)
    seed: int | None = None


class AnalysisSummary(BaseModel):
    total_notes: int
    unique_tags: int
    total_relations: int
    min_relation: float
    max_level: int


class AnalyzeResponse(BaseModel):
    nodes: list[NodePayload]
    relations: list[RelationPayload]
    analysis: AnalysisSummary


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze_notes(body: AnalyzeRequest) -> AnalyzeResponse:
    """Derive leveled tag nodes and co-occurrence relations from notes."""
    analysis_config = get_config().analysis
    seed = body.seed if body.seed is not None else analysis_config.layout_seed

    try:
        documents = documents_from_payload(body.notes, "notes")
        knowledge_map = build_knowledge_map(
            documents,
            min_relation=body.min_relation if body.min_relation is not None else analysis_config.min_relation,
            max_level=body.max_level if body.max_level is not None else analysis_config.max_level,
            rng=random.Random(seed),
            canvas_width=analysis_config.canvas_width,
            canvas_height=analysis_config.canvas_height,
        )
    except ValidationError as exc:
        raise HTTPException(400, str(exc))

    return AnalyzeResponse(
        nodes=[NodePayload(**node_to_dict(n)) for n in knowledge_map.graph.node_list()],
        relations=[RelationPayload(**relation_to_dict(r)) for r in knowledge_map.graph.relations],
        analysis=AnalysisSummary(**knowledge_map.summary()),
    )
