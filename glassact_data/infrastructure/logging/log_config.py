"""Centralized logging configuration.

Applies per-category log levels from Settings so that noisy loggers
(e.g. uvicorn access lines) can be silenced without
affecting other parts of the application.

Usage:
    from glassact_data.infrastructure.logging.log_config import setup_logging
    setup_logging()   # Call once at startup (in the lifespan or the CLI)
"""

import logging
import sys

from glassact_data.config import get_settings


# ── Logger-name → Settings-field mapping ────────────────────────────

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_projection": [
        "glassact_data.application.services",
        "glassact_data.infrastructure.registry",
    ],
}


def setup_logging(level: str | None = None) -> None:
    """Configure Python logging levels from application settings.

    ``level`` overrides the root level from settings (the CLI's --log-level).
    """
    settings = get_settings()
    root_level = _parse_level(level or settings.log_level)

    root = logging.getLogger()
    root.setLevel(root_level)

    # Ensure at least one handler exists (uvicorn usually adds one,
    # but when running the CLI or tests it may not).
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(levelname)-8s %(name)s — %(message)s",
            )
        )
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        raw_level: str = getattr(settings, settings_field, "INFO")
        category_level = _parse_level(raw_level)
        if level and settings_field == "log_level_projection":
            category_level = root_level

        for name in logger_names:
            logging.getLogger(name).setLevel(category_level)

    logging.getLogger(__name__).debug(
        "Logging configured — root=%s, uvicorn=%s, projection=%s",
        logging.getLevelName(root_level),
        settings.log_level_uvicorn,
        settings.log_level_projection,
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
