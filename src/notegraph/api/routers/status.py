"""Status endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

import notegraph.api.dependencies as deps
from notegraph import __version__


router = APIRouter()


_SERVER_STARTED_AT = datetime.now(timezone.utc).isoformat()


@router.get("/status")
async def get_status():
    """Return version and the active engine defaults."""
    config = deps.get_config()
    return {
        "version": __version__,
        "server_started_at": _SERVER_STARTED_AT,
        "fusion": {
            "default_strategy": config.fusion.default_strategy,
            "min_relation": config.fusion.min_relation,
        },
        "analysis": {
            "min_relation": config.analysis.min_relation,
            "max_level": config.analysis.max_level,
        },
    }
