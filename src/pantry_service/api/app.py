"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pantry_service.api.hooks import router as hooks_router
from pantry_service.api.rpc import router as rpc_router
from pantry_service.api.rpc import service_error_handler
from pantry_service.app_logging import configure_logging
from pantry_service.containers import AppContainer
from pantry_service.domain.errors import ServiceError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_exception_handler(ServiceError, service_error_handler)

    app.include_router(rpc_router)
    app.include_router(hooks_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
