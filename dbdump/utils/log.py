"""Logging setup for the dbdump command line and library callers.

dbdump logs through module loggers under the ``dbdump`` namespace; this
module only decides where records go and how they look.
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, Optional, Sequence

# SQLAlchemy statement loggers silenced while dumping/loading
SQL_LOGGERS: tuple[str, ...] = ("sqlalchemy.engine", "sqlalchemy.engine.Engine")

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Formats records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(level: str = "INFO", fmt: str = "text") -> logging.Logger:
    """Install a stderr handler on the ``dbdump`` logger.

    Calling it again replaces the previously installed handler.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        fmt: ``text`` or ``json``

    Returns:
        The configured ``dbdump`` logger
    """
    logger = logging.getLogger("dbdump")
    for handler in list(logger.handlers):
        if getattr(handler, "_dbdump_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))
    handler._dbdump_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    return logger


@contextmanager
def quiet_logging(
    names: Sequence[str] = SQL_LOGGERS, engine: Optional[Any] = None
) -> Iterator[None]:
    """Raise the given loggers to WARNING for the duration of a block.

    An engine created with ``echo=True`` logs through its own instance
    logger regardless of these levels, so its ``echo`` flag is switched
    off as well when one is given.

    Previous levels and the echo flag are restored even if the block raises.
    """
    loggers = [logging.getLogger(name) for name in names]
    previous = [lg.level for lg in loggers]
    for lg in loggers:
        lg.setLevel(logging.WARNING)
    echo = getattr(engine, "echo", False)
    if engine is not None and echo:
        engine.echo = False
    try:
        yield
    finally:
        if engine is not None and echo:
            engine.echo = echo
        for lg, level in zip(loggers, previous):
            lg.setLevel(level)
