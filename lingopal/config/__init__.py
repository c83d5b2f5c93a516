from typing import Any

from .settings import Settings, get_settings


def env(key: str, default: Any = None) -> Any:
    """Access any environment variable through settings.

    Defined settings fields are returned with their validated type; anything
    else falls back to the raw value captured by ``extra="allow"``.
    """
    settings = get_settings()

    value = getattr(settings, key.upper(), None)
    if value is not None:
        return value

    extra = settings.model_extra or {}
    return extra.get(key.lower(), extra.get(key.upper(), default))


__all__ = ["Settings", "env", "get_settings"]
