"""
Selector Registry - FastAPI Application
Main entry point for the selector lookup service.
Loads the OpenChain signature export and resolves 4-byte and 32-byte selectors to signatures.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from selector_registry.api.services.selector_service import selector_service
from selector_registry.core.config import is_production, settings
from selector_registry.core.logging import get_logger, log_error, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Loads the selector registry on startup.
    """
    # Startup
    setup_logging()
    if settings.SELECTOR_LOAD_ON_STARTUP:
        try:
            await selector_service.load()
        except Exception as e:
            log_error(e, {"path": settings.SELECTOR_EXPORT_PATH})
            raise
    yield


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Lookup of EVM function and event selectors against the OpenChain signature database export",
        version="1.0.0",
        docs_url=None if is_production() else "/docs",
        redoc_url=None if is_production() else "/redoc",
        openapi_url=None if is_production() else "/openapi.json",
        lifespan=lifespan,
    )

    logger.info(f"CORS configured with origins: {settings.ALLOWED_ORIGINS}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    from selector_registry.api.routers import selector_router

    app.include_router(
        selector_router.router, prefix="/api/v1/selectors", tags=["Selectors"]
    )

    @app.get("/")
    async def root():
        """Root endpoint for health check."""
        return {
            "message": "Selector Registry API",
            "version": "1.0.0",
            "status": "healthy",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "registry": {
                "source": selector_service.source,
                "selectors": len(selector_service.registry),
            },
        }

    return app


# Create the FastAPI app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "selector_registry.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )
