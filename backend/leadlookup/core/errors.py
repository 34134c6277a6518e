"""Jerarquía de errores reportados por la búsqueda de leads."""

from __future__ import annotations


class LeadLookupError(RuntimeError):
    """Base para todos los errores que la API traduce a una respuesta HTTP."""


class ConfigurationError(LeadLookupError):
    """Faltan credenciales del cliente OAuth; no tiene sentido reintentar."""


class UpstreamError(LeadLookupError):
    """Respuesta no exitosa de Genesys Cloud."""

    label = "Genesys Cloud error"

    def __init__(self, status: int, status_text: str, body: str = "") -> None:
        self.status = status
        self.status_text = status_text
        self.body = body
        message = f"{self.label} {status} {status_text}".strip()
        if body:
            message = f"{message}: {body}"
        super().__init__(message)


class UpstreamAuthError(UpstreamError):
    """El endpoint de tokens rechazó el intercambio client-credentials."""

    label = "Token error"


class UpstreamApiError(UpstreamError):
    """La API REST devolvió un estado fuera del rango 2xx."""

    label = "GC API error"


class MissingParameterError(LeadLookupError):
    """El request no incluyó `conversationId`."""


class ExtractionFailedError(LeadLookupError):
    """La conversación no contiene contactId/contactListId reconocibles."""

    def __init__(self, message: str, *, tip: str) -> None:
        self.tip = tip
        super().__init__(message)
