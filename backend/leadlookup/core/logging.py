"""Configuración de logging estructurado para el servicio."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

# Atributos propios de LogRecord; el resto proviene de `extra=`.
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """Formatter que serializa cada registro como un objeto JSON por línea."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRIBUTES:
                continue
            payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: int = logging.INFO, *, log_file: str | None = None) -> None:
    """Configura el logger raíz con salida JSON a stderr y, opcionalmente, a archivo."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    root_logger.addHandler(handler)

    if not log_file:
        return

    try:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
    except OSError:
        root_logger.exception(
            "No fue posible iniciar el handler de archivo", extra={"log_file": log_file}
        )
        return
    file_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(file_handler)


def resolve_log_level(value: str | int | None, *, default: int = logging.INFO) -> int:
    """Convierte valores configurables a constantes numéricas de logging."""
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return default
        if candidate.isdigit():
            return int(candidate)
        mapped = logging.getLevelNamesMapping().get(candidate.upper())
        if isinstance(mapped, int):
            return mapped
    return default


def get_logger(name: str) -> logging.Logger:
    """Retorna un logger hijo con el nombre solicitado."""
    return logging.getLogger(name)


def log_event(
    logger: logging.Logger, message: str, *, level: int = logging.INFO, **extra: Any
) -> None:
    """Helper para enviar eventos con campos adicionales en formato JSON."""
    if extra:
        logger.log(level, message, extra=extra)
    else:
        logger.log(level, message)
