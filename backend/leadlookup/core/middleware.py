"""Middlewares del servicio de búsqueda de leads."""

from __future__ import annotations

import time
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from leadlookup.core.config import settings
from leadlookup.core.logging import get_logger, resolve_log_level

logger = get_logger("leadlookup.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Registra información básica de cada request entrante."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        level: str | int | None = None,
        skip_prefixes: tuple[str, ...] | None = None,
    ) -> None:
        super().__init__(app)
        self.level = resolve_log_level(level if level is not None else settings.request_log_level)
        self.skip_prefixes = (
            skip_prefixes if skip_prefixes is not None else settings.request_log_skip_prefixes
        )

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path.startswith(self.skip_prefixes):
            return await call_next(request)

        request_id = uuid4().hex
        start = time.perf_counter()
        client_ip = request.headers.get("x-forwarded-for")
        if client_ip:
            client_ip = client_ip.split(",")[0].strip()
        elif request.client:
            client_ip = request.client.host

        logger.log(
            self.level,
            "request.started",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": path,
                "client_ip": client_ip,
            },
        )

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception(
                "request.failed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": path,
                    "duration_ms": round(duration_ms, 2),
                    "client_ip": client_ip,
                },
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["x-request-id"] = request_id

        logger.log(
            self.level,
            "request.completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Agrega encabezados CORS fijos a cada respuesta y contesta OPTIONS con 204.

    El endpoint se consume desde un script embebido en la consola del
    contact center, por lo que los encabezados se envían aunque el request
    no traiga `Origin`.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        allow_origin: str = "*",
        allow_methods: tuple[str, ...] = ("GET", "OPTIONS"),
        allow_headers: tuple[str, ...] = ("Content-Type",),
    ) -> None:
        super().__init__(app)
        self.headers = {
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": ",".join(allow_methods),
            "Access-Control-Allow-Headers": ",".join(allow_headers),
        }

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=self.headers)

        response = await call_next(request)
        response.headers.update(self.headers)
        return response
