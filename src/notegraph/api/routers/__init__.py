"""FastAPI route handlers organized by resource."""
from notegraph.api.routers.fusion import router as fusion_router
from notegraph.api.routers.knowledge_map import router as knowledge_map_router
from notegraph.api.routers.status import router as status_router

__all__ = [
    "fusion_router",
    "knowledge_map_router",
    "status_router",
]
