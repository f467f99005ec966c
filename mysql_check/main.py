"""
FastAPI Application Entry Point
"""

from fastapi import FastAPI

from mysql_check import __version__
from mysql_check.api.health import router as health_router
from mysql_check.core.context import AppContext


def create_app(context: AppContext) -> FastAPI:
    app = FastAPI(
        title="mysql-check",
        description="MySQL liveness and writability probe",
        version=__version__,
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
    )
    app.state.context = context

    # Routes
    app.include_router(health_router)

    return app
