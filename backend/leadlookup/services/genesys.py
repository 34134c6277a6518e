"""Cliente mínimo para la API REST de Genesys Cloud."""

from __future__ import annotations

from functools import lru_cache
from typing import Any
from urllib.parse import quote

import httpx

from leadlookup.core.config import settings
from leadlookup.core.errors import UpstreamApiError
from leadlookup.core.logging import get_logger

from .credentials import TokenCache, get_token_cache

logger = get_logger(__name__)


def _segment(value: str) -> str:
    return quote(str(value), safe="")


def call_conversation_path(conversation_id: str) -> str:
    return f"/api/v2/conversations/calls/{_segment(conversation_id)}"


def conversation_path(conversation_id: str) -> str:
    return f"/api/v2/conversations/{_segment(conversation_id)}"


def contact_path(contact_list_id: str, contact_id: str) -> str:
    return (
        f"/api/v2/outbound/contactlists/{_segment(contact_list_id)}"
        f"/contacts/{_segment(contact_id)}"
    )


class GenesysClient:
    """Ejecuta GET autenticados contra la API usando la caché de tokens."""

    def __init__(
        self,
        token_cache: TokenCache,
        *,
        api_base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.token_cache = token_cache
        self.api_base_url = api_base_url.rstrip("/")
        self._transport = transport

    async def call(self, path: str) -> Any:
        """Hace `GET path` y retorna el JSON decodificado.

        Raises:
            UpstreamApiError: si la respuesta no es 2xx, si falla la red o si
                el cuerpo no es JSON.
            UpstreamAuthError, ConfigurationError: propagados desde la caché de tokens.
        """
        token = await self.token_cache.get_token()
        url = f"{self.api_base_url}{path}"
        headers = {"Authorization": f"Bearer {token}", "Accept": "application/json"}

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(url, headers=headers)
        except httpx.RequestError as exc:
            logger.warning("genesys.request_failed", extra={"path": path, "error": str(exc)})
            raise UpstreamApiError(0, "Network Error", str(exc)) from exc

        if not response.is_success:
            logger.info(
                "genesys.non_success", extra={"path": path, "status": response.status_code}
            )
            raise UpstreamApiError(response.status_code, response.reason_phrase, response.text)

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamApiError(
                response.status_code, "Invalid JSON body", response.text
            ) from exc


@lru_cache(maxsize=1)
def get_genesys_client() -> GenesysClient:
    """Retorna el cliente compartido configurado desde `settings`."""
    return GenesysClient(get_token_cache(), api_base_url=settings.gc_api_base_url)
