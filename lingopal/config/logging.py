import logging
import logging.config
from typing import Any


# Vendor clients log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "LiteLLM", "litellm")


def setup_logging(level: str = "INFO") -> dict[str, Any]:
    """Send application logs to the console at ``level``.

    Third-party HTTP and model client loggers stay at WARNING unless
    ``level`` is DEBUG.
    """
    level = level.upper()
    vendor_level = level if level == "DEBUG" else "WARNING"
    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "default", "level": level},
        },
        "loggers": {name: {"level": vendor_level} for name in NOISY_LOGGERS},
        "root": {"level": level, "handlers": ["console"]},
    }

    logging.config.dictConfig(config)
    return config
