"""Esquemas Pydantic de las respuestas de la API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LeadResponse(BaseModel):
    """Lead resuelto junto con los identificadores usados para buscarlo."""

    model_config = ConfigDict(populate_by_name=True)

    contact_id: str = Field(alias="contactId")
    contact_list_id: str = Field(alias="contactListId")
    lead: Any


class ErrorResponse(BaseModel):
    """Error genérico devuelto en 400 y 500."""

    error: str


class ExtractionErrorResponse(ErrorResponse):
    """Error 422 con sugerencia para quien opera la integración."""

    tip: str
