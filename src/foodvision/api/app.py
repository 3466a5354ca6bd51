"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from foodvision.api.hooks import router as hooks_router
from foodvision.api.meals import router as meals_router
from foodvision.app_logging import configure_logging
from foodvision.containers import AppContainer
from foodvision.errors import FoodVisionError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="FoodVision", lifespan=lifespan)
    app.state.container = container

    app.include_router(meals_router)
    app.include_router(hooks_router)

    @app.exception_handler(FoodVisionError)
    async def pipeline_error(request: Request, exc: FoodVisionError) -> JSONResponse:
        """Return classified failures with their user-facing message."""
        logger.info(
            "Request failed: %s",
            exc.kind,
            extra={"path": request.url.path, "retryable": exc.retryable},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.message,
                "kind": exc.kind,
                "retryable": exc.retryable,
            },
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
