from __future__ import annotations

from fastapi import FastAPI

from hosting_functions.config import Settings, get_settings
from hosting_functions.logging import setup_logging
from hosting_functions.routes import functions, health
from hosting_functions.utils.middleware import cors_middleware, request_id_middleware


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Alatyr Hosting Functions", docs_url=None, redoc_url=None, openapi_url=None)
    # Last registered is outermost.
    app.middleware("http")(cors_middleware(settings, functions.FUNCTIONS_PREFIX))
    app.middleware("http")(request_id_middleware())
    app.include_router(health.router)
    app.include_router(functions.router)
    return app


app = create_app()
