"""Configuración central basada en variables de entorno."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Valores globales leídos desde `.env` o el entorno."""

    environment: str = "development"
    log_level: str | None = Field(
        default=None,
        description="Nivel de logging global (ej. debug, info, warning). Cuando no se define, usa un valor por ambiente.",
    )
    request_log_level: str = Field(
        default="info",
        description=(
            "Nivel con el que se registran las solicitudes en el middleware. "
            "Valores más altos (warning/error) reducen registros de peticiones exitosas."
        ),
    )
    request_log_skip_prefixes: tuple[str, ...] = Field(
        default=("/health", "/api/health", "/favicon"),
        description="Prefijos de ruta para los que no se registrarán eventos de request.started/completed.",
    )
    log_file_path: str | None = None
    # Se aceptan los nombres heredados del despliegue serverless (GC_CLIENT_ID / GC_CLIENT_SECRET)
    gc_client_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LEADLOOKUP_GC_CLIENT_ID", "GC_CLIENT_ID"),
    )
    gc_client_secret: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LEADLOOKUP_GC_CLIENT_SECRET", "GC_CLIENT_SECRET"),
    )
    gc_auth_base_url: str = Field(
        default="https://login.mypurecloud.ie",
        description="Host de login OAuth de la región Genesys Cloud.",
    )
    gc_api_base_url: str = Field(
        default="https://api.mypurecloud.ie",
        description="Host de la API REST de la región Genesys Cloud.",
    )
    token_expiry_margin_seconds: float = Field(
        default=30.0,
        description="Segundos antes del vencimiento a partir de los cuales el token se considera expirado.",
    )
    cors_allow_origin: str = "*"
    model_config = SettingsConfigDict(env_file=".env", env_prefix="LEADLOOKUP_", extra="allow")


settings = Settings()
