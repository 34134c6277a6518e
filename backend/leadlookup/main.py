"""Punto de entrada principal para la aplicación FastAPI."""

import logging

from fastapi import FastAPI

from leadlookup.api.routes.health import router as health_router
from leadlookup.api.routes.lead import router as lead_router
from leadlookup.core.config import settings
from leadlookup.core.logging import configure_logging, get_logger, resolve_log_level
from leadlookup.core.middleware import CORSHeadersMiddleware, RequestLoggingMiddleware
from leadlookup.core.security import mask_secret


def create_app() -> FastAPI:
    """Crea y configura la instancia de FastAPI."""
    default_log_level = logging.DEBUG if settings.environment != "production" else logging.INFO
    configure_logging(
        level=resolve_log_level(settings.log_level, default=default_log_level),
        log_file=settings.log_file_path,
    )

    app = FastAPI(title="Lead Lookup API", version="0.1.0", root_path="/api")

    # El último middleware agregado es el más externo: el log incluye las respuestas CORS.
    app.add_middleware(CORSHeadersMiddleware, allow_origin=settings.cors_allow_origin)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health_router)
    app.include_router(lead_router)

    log = get_logger("leadlookup")
    if not settings.gc_client_id or not settings.gc_client_secret:
        log.warning("config.credentials_missing")
    else:
        log.info(
            "config.loaded",
            extra={
                "environment": settings.environment,
                "gc_client_id": mask_secret(settings.gc_client_id),
                "gc_api_base_url": settings.gc_api_base_url,
            },
        )

    return app


app = create_app()
