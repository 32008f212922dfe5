"""Shared logging helpers for cvmerge."""

from __future__ import annotations

import logging

from cvmerge.config.env import optional_env_var
from cvmerge.config.errors import ConfigurationError

LOG_LEVEL_VAR = "CVMERGE_LOG_LEVEL"


def resolve_log_level(level: int | str | None = None) -> int:
    """Return a numeric level from ``level`` or ``CVMERGE_LOG_LEVEL``, defaulting to INFO."""

    value = level if level is not None else optional_env_var(LOG_LEVEL_VAR)
    if value is None:
        return logging.INFO
    if isinstance(value, int):
        return value
    resolved = logging.getLevelNamesMapping().get(value.upper())
    if resolved is None:
        raise ConfigurationError(f"Unknown log level {value!r}")
    return resolved


def configure_logging(*, level: int | str | None = None, force: bool = False) -> None:
    """Set up the root logger for scripts embedding the merge engine.

    Library modules only create ``logging.getLogger(__name__)`` loggers; calling
    this is left to the entry point. Detection and merge log at DEBUG, imports
    at INFO. Pass ``force=True`` to replace handlers installed earlier.
    """

    logging.basicConfig(
        level=resolve_log_level(level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
