"""Endpoint que resuelve el lead de discado de una conversación."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from leadlookup.api import schemas
from leadlookup.core.errors import (
    ExtractionFailedError,
    LeadLookupError,
    MissingParameterError,
)
from leadlookup.core.logging import get_logger
from leadlookup.services.lead_resolver import LeadResolver, get_lead_resolver

logger = get_logger(__name__)

router = APIRouter(prefix="/lead", tags=["lead"])


def _error(status_code: int, model: schemas.ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=model.model_dump())


@router.get(
    "",
    response_model=schemas.LeadResponse,
    summary="Obtiene el lead de discado asociado a una conversación",
    responses={
        400: {"model": schemas.ErrorResponse},
        422: {"model": schemas.ExtractionErrorResponse},
        500: {"model": schemas.ErrorResponse},
    },
)
async def get_lead(
    conversation_id: str | None = Query(
        default=None,
        alias="conversationId",
        description="Identificador de la conversación en Genesys Cloud.",
    ),
    resolver: LeadResolver = Depends(get_lead_resolver),
) -> schemas.LeadResponse | JSONResponse:
    """Resuelve conversación → contactId/contactListId → lead."""
    try:
        result = await resolver.resolve(conversation_id)
    except MissingParameterError as exc:
        return _error(400, schemas.ErrorResponse(error=str(exc)))
    except ExtractionFailedError as exc:
        return _error(
            422,
            schemas.ExtractionErrorResponse(error=str(exc), tip=exc.tip),
        )
    except LeadLookupError as exc:
        logger.error(
            "lead.lookup_failed",
            extra={"conversation_id": conversation_id, "error_type": type(exc).__name__},
        )
        return _error(500, schemas.ErrorResponse(error=str(exc)))
    except Exception as exc:
        logger.exception("lead.unexpected_error", extra={"conversation_id": conversation_id})
        return _error(
            500,
            schemas.ErrorResponse(error=str(exc) or type(exc).__name__),
        )

    return schemas.LeadResponse(
        contact_id=result.contact_id,
        contact_list_id=result.contact_list_id,
        lead=result.lead,
    )
