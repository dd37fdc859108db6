"""Process-wide logging setup for the console entry point."""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
PACKAGE_LOGGER = "shiritori_search"

# The Gradio server logs every HTTP round trip at INFO through these.
NOISY_LOGGERS = ("httpx", "urllib3", "gradio")

_configured = False


def resolve_level(value: Optional[str | int]) -> int:
    """Turn ``"debug"``, ``"10"`` or ``logging.DEBUG`` into a level number.

    Missing or unrecognised values fall back to ``INFO``.
    """

    if value is None:
        return logging.INFO
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[str | int] = None, *, force: bool = False) -> int:
    """Install the root handler and return the level the package logs at.

    ``level`` wins over ``SHIRITORI_LOG_LEVEL``. Later calls are no-ops
    unless ``force`` is set, in which case existing root handlers are
    replaced. Search start/finish lines are logged at ``INFO``, so that is
    the default.
    """

    global _configured

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _configured and not force:
        return package_logger.getEffectiveLevel()

    if level is None:
        level = os.environ.get("SHIRITORI_LOG_LEVEL")
    resolved = resolve_level(level)

    logging.basicConfig(level=resolved, format=LOG_FORMAT, force=force)
    package_logger.setLevel(resolved)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))
    _configured = True
    return resolved


__all__ = ["LOG_FORMAT", "configure_logging", "resolve_level"]
