"""Caché del token OAuth client-credentials de Genesys Cloud.

Un único token vive por proceso. Se reutiliza mientras falten más de
`margin_seconds` para su vencimiento; después se solicita uno nuevo. Dos
refrescos simultáneos no se coordinan: ambos tokens son válidos y el último
en escribir queda en caché.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache

import httpx

from leadlookup.core.config import settings
from leadlookup.core.errors import ConfigurationError, UpstreamAuthError
from leadlookup.core.logging import get_logger, log_event
from leadlookup.core.security import mask_secret

logger = get_logger(__name__)

TOKEN_PATH = "/oauth/token"


@dataclass(slots=True, frozen=True)
class Credential:
    """Token bearer y su instante de expiración (epoch en segundos)."""

    token: str
    expires_at: float

    def is_valid(self, now: float, margin: float) -> bool:
        return now < self.expires_at - margin


class TokenCache:
    """Mantiene un token bearer y lo renueva cuando está por vencer."""

    def __init__(
        self,
        client_id: str | None,
        client_secret: str | None,
        *,
        auth_base_url: str,
        margin_seconds: float = 30.0,
        clock: Callable[[], float] = time.time,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.auth_base_url = auth_base_url.rstrip("/")
        self.margin_seconds = margin_seconds
        self._clock = clock
        self._transport = transport
        self._credential: Credential | None = None

    @property
    def credential(self) -> Credential | None:
        return self._credential

    async def get_token(self) -> str:
        """Retorna el token en caché o solicita uno nuevo si venció."""
        credential = self._credential
        if credential is not None and credential.is_valid(self._clock(), self.margin_seconds):
            return credential.token
        return await self.refresh()

    async def refresh(self) -> str:
        """Intercambia client id/secret por un token nuevo y lo guarda en caché."""
        if not self.client_id or not self.client_secret:
            raise ConfigurationError("Missing GC_CLIENT_ID / GC_CLIENT_SECRET env vars.")

        form = {
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }
        url = f"{self.auth_base_url}{TOKEN_PATH}"
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(url, data=form)
        except httpx.RequestError as exc:
            logger.warning("token.request_failed", extra={"url": url, "error": str(exc)})
            raise UpstreamAuthError(0, "Network Error", str(exc)) from exc

        if not response.is_success:
            logger.error(
                "token.rejected",
                extra={
                    "status": response.status_code,
                    "client_id": mask_secret(self.client_id),
                },
            )
            raise UpstreamAuthError(response.status_code, response.reason_phrase, response.text)

        try:
            data = response.json()
            token = data["access_token"]
            expires_in = float(data["expires_in"])
        except (ValueError, KeyError, TypeError) as exc:
            raise UpstreamAuthError(
                response.status_code, "Invalid token payload", response.text
            ) from exc

        self._credential = Credential(token=token, expires_at=self._clock() + expires_in)
        log_event(
            logger,
            "token.refreshed",
            client_id=mask_secret(self.client_id),
            expires_in=expires_in,
        )
        return token

    def invalidate(self) -> None:
        """Descarta el token actual; el próximo `get_token` pedirá uno nuevo."""
        self._credential = None


@lru_cache(maxsize=1)
def get_token_cache() -> TokenCache:
    """Retorna la caché de tokens compartida por todo el proceso."""
    return TokenCache(
        settings.gc_client_id,
        settings.gc_client_secret,
        auth_base_url=settings.gc_auth_base_url,
        margin_seconds=settings.token_expiry_margin_seconds,
    )
