"""FastAPI application initialization and configuration."""
from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notegraph import __version__
from notegraph.api.dependencies import get_config, get_fusion_engine
from notegraph.api.routers import fusion_router, knowledge_map_router, status_router
from notegraph.config.constants import ERROR_INVALID_PORT
from notegraph.core.logging_config import get_logger, setup_logging

_logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # --- startup ---
    get_fusion_engine()
    _logger.info("notegraph API %s started", __version__)
    yield


# Create FastAPI app
app = FastAPI(
    title="Notegraph API",
    description="Knowledge map analysis and group knowledge graph fusion",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware, origins from config (localhost-only by default)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(fusion_router, prefix="/api")
app.include_router(knowledge_map_router, prefix="/api")
app.include_router(status_router, prefix="/api", tags=["status"])


def main(host: str | None = None, port: int | None = None) -> int:
    """Run the server with configurable host and port."""
    import uvicorn

    config = get_config()
    setup_logging(config.logging)

    host = host or config.server.host
    port = port if port is not None else config.server.port
    if not 1 <= port <= 65535:
        print(ERROR_INVALID_PORT.format(port=port))
        return 1

    print("Starting Notegraph server...")
    print(f"  URL: http://{host}:{port}")
    print()
    print("Press Ctrl+C to stop")

    uvicorn.run(app, host=host, port=port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
