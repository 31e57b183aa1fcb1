"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from adaptive_ux.api.routes import api_router
from adaptive_ux.core.context import AdaptiveContext
from adaptive_ux.logging_config import setup_logging
from adaptive_ux.settings import AdaptiveSettings, settings


def create_app(context: AdaptiveContext | None = None) -> FastAPI:
    """Create the API application.

    Args:
        context: Pipeline to serve; built from settings when omitted
    """
    app_settings: AdaptiveSettings = context.settings if context is not None else settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        # Startup
        if app.state.adaptive_context is None:
            app.state.adaptive_context = AdaptiveContext.create(app_settings)
        await app.state.adaptive_context.init()
        yield
        # Shutdown
        await app.state.adaptive_context.close()

    app = FastAPI(
        title="Adaptive UX API",
        description="Interaction tracking and usage-driven layout ordering",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.adaptive_context = context

    # Front ends post interactions from the browser
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=app_settings.api_v1_prefix)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


setup_logging()

app = create_app()
