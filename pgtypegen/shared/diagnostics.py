"""Process-scoped diagnostic context.

One ``Diagnostics`` instance is created at startup and handed to every
component that needs to report progress, so nothing logs through ambient
module-level state.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, TextIO

LOGGER_NAME = "pgtypegen"
DEFAULT_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _resolve_level(value: str | None) -> int:
    if not value:
        return logging.getLevelName(DEFAULT_LEVEL)
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.strip().upper())
    # getLevelName returns "Level X" for unknown names
    if isinstance(level, int):
        return level
    return logging.getLevelName(DEFAULT_LEVEL)


@dataclass(frozen=True)
class Diagnostics:
    """Logger handle passed explicitly through the pipeline."""

    logger: logging.Logger

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        stream: TextIO | None = None,
    ) -> Diagnostics:
        """Configure the tool logger from ``LOG_LEVEL``.

        Calling this more than once replaces the previous handler rather
        than stacking a second one.
        """
        env = os.environ if env is None else env
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(_resolve_level(env.get("LOG_LEVEL")))
        logger.propagate = False

        for handler in list(logger.handlers):
            logger.removeHandler(handler)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        return cls(logger=logger)

    @classmethod
    def silent(cls) -> Diagnostics:
        """A context that drops everything. Used when no logging is wanted."""
        logger = logging.getLogger(f"{LOGGER_NAME}.silent")
        if not logger.handlers:
            logger.addHandler(logging.NullHandler())
        logger.propagate = False
        return cls(logger=logger)

    def child(self, name: str) -> Diagnostics:
        """Derive a component-scoped context sharing the same handlers."""
        return Diagnostics(logger=self.logger.getChild(name))

    def debug(self, message: str, *args: object) -> None:
        self.logger.debug(message, *args)

    def info(self, message: str, *args: object) -> None:
        self.logger.info(message, *args)

    def warning(self, message: str, *args: object) -> None:
        self.logger.warning(message, *args)

    def error(self, message: str, *args: object) -> None:
        self.logger.error(message, *args)
