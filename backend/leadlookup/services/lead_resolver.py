"""Orquesta conversación → extracción → lead para un `conversationId`."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from leadlookup.core.errors import (
    ExtractionFailedError,
    LeadLookupError,
    MissingParameterError,
)
from leadlookup.core.logging import get_logger, log_event

from . import genesys
from .extraction import OutboundIds, extract_outbound_ids

logger = get_logger(__name__)

EXTRACTION_FAILED_MESSAGE = "Could not find contactId/contactListId in conversation payload."
EXTRACTION_FAILED_TIP = (
    "Open browser devtools > Network/Console and share a redacted conversation payload "
    "so we can harden key extraction."
)

# La ruta de llamadas cubre la mayoría de los casos; la genérica cubre
# conversaciones que no son de voz.
CONVERSATION_PATHS: tuple[Callable[[str], str], ...] = (
    genesys.call_conversation_path,
    genesys.conversation_path,
)


@dataclass(slots=True)
class LeadLookup:
    """Resultado exitoso: ambos identificadores y el registro del lead."""

    contact_id: str
    contact_list_id: str
    lead: Any


class LeadResolver:
    """Resuelve el lead de discado saliente asociado a una conversación."""

    def __init__(self, client: genesys.GenesysClient) -> None:
        self.client = client

    async def fetch_conversation(self, conversation_id: str) -> Any:
        """Prueba cada ruta de conversación en orden; propaga el error del último intento."""
        *fallible, last = CONVERSATION_PATHS
        for build_path in fallible:
            path = build_path(conversation_id)
            try:
                return await self.client.call(path)
            except LeadLookupError as exc:
                log_event(
                    logger,
                    "conversation.fallback",
                    level=logging.WARNING,
                    conversation_id=conversation_id,
                    failed_path=path,
                    status=getattr(exc, "status", None),
                    error=str(exc),
                )
        return await self.client.call(last(conversation_id))

    async def extract_ids(self, conversation_id: str) -> OutboundIds:
        """Descarga la conversación y retorna los identificadores encontrados."""
        conversation = await self.fetch_conversation(conversation_id)
        return extract_outbound_ids(conversation)

    async def resolve(self, conversation_id: str | None) -> LeadLookup:
        """Ejecuta la búsqueda completa.

        Raises:
            MissingParameterError: si no se recibió `conversation_id`.
            ExtractionFailedError: si falta contactId o contactListId.
            UpstreamApiError, UpstreamAuthError, ConfigurationError: fallas de Genesys
                o de configuración, sin modificar.
        """
        if not conversation_id or not conversation_id.strip():
            raise MissingParameterError("Missing conversationId")

        ids = await self.extract_ids(conversation_id)
        contact_id, contact_list_id = ids.contact_id, ids.contact_list_id
        if not contact_id or not contact_list_id:
            log_event(
                logger,
                "lead.extraction_failed",
                level=logging.WARNING,
                conversation_id=conversation_id,
                contact_id_found=contact_id is not None,
                contact_list_id_found=contact_list_id is not None,
            )
            raise ExtractionFailedError(EXTRACTION_FAILED_MESSAGE, tip=EXTRACTION_FAILED_TIP)

        lead = await self.client.call(genesys.contact_path(contact_list_id, contact_id))
        log_event(
            logger,
            "lead.resolved",
            conversation_id=conversation_id,
            contact_id=contact_id,
            contact_list_id=contact_list_id,
        )
        return LeadLookup(contact_id=contact_id, contact_list_id=contact_list_id, lead=lead)


def get_lead_resolver() -> LeadResolver:
    """Dependencia FastAPI que entrega un resolver con el cliente compartido."""
    return LeadResolver(genesys.get_genesys_client())
