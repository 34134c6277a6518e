"""Endpoint de salud mínimo para validaciones rápidas."""
from fastapi import APIRouter

from leadlookup.core.config import settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Estado del servicio")
def healthcheck() -> dict[str, str]:
    """Indica que la API está viva y si hay credenciales de Genesys configuradas.

    No contacta a Genesys: un token inválido sólo se detecta al buscar un lead.
    """
    configured = bool(settings.gc_client_id and settings.gc_client_secret)
    return {"status": "ok", "credentials": "configured" if configured else "missing"}
