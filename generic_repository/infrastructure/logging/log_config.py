"""Logging setup for scripts and services that use the repository.

SQL statement logging and the repository's own save/conflict messages are
tuned independently through Settings.

Usage:
    from generic_repository.infrastructure.logging.log_config import setup_logging
    setup_logging()   # Call once at startup
"""

import logging
import sys

from generic_repository.config import get_settings

_FORMAT = "%(levelname)-8s %(name)s: %(message)s"

# Settings field -> logger names whose level it controls
_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite"),
    "log_level_repository": ("generic_repository",),
}


def setup_logging() -> None:
    """Apply the root and per-category levels from Settings."""
    settings = get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s, sql=%s, repository=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_repository,
    )


def _parse_level(raw: str) -> int:
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else logging.INFO
