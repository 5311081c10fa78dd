"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers
- Problem handlers (failure-to-problem mapping)
- Logging configuration

No classification logic belongs here.
"""

from typing import Optional

from fastapi import FastAPI

from api_problem.core.config import Settings, settings
from api_problem.interfaces.asgi import register_problem_handlers
from api_problem.interfaces.health import router as health_router
from api_problem.interfaces.middleware import AdapterConfiguration
from api_problem.shared.logging import configure_logging


def build_adapter_configuration(
    app_settings: Settings,
) -> AdapterConfiguration:
    """Derive the problem adapter options from application settings."""
    return AdapterConfiguration(
        stack_trace=app_settings.problem_stack_trace,
        content_type=app_settings.problem_content_type,
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root of the application. The settings are
    kept on ``app.state.settings`` for routes that need them.

    Args:
        app_settings: Settings to build from. Defaults to the
            environment-loaded settings.

    Returns:
        A fully configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    configure_logging(
        level=app_settings.log_level, adapter_level=app_settings.adapter_log_level
    )

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
    )
    app.state.settings = app_settings

    # --- Problem Handlers ---
    register_problem_handlers(app, build_adapter_configuration(app_settings))

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")

    return app


app = create_app()
