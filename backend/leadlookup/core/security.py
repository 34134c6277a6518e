"""Helpers para manipular credenciales sin exponerlas."""


def mask_secret(value: str | None) -> str | None:
    """Enmascara secretos para logging seguro."""
    if not value:
        return value
    if len(value) <= 4:
        return "***"
    return f"{value[:2]}***{value[-2:]}"
