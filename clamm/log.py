"""
Logging setup for the pool engine

Engine modules log through ``logging.getLogger(__name__)`` and attach an
event dictionary via ``extra={"event": "pool.swap", ...}``. This module
installs a JSON formatter that emits the message together with those fields.
"""

import logging
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from .config import settings

# Largest integer a JSON consumer can read back exactly as a double
_MAX_SAFE_INT = 2 ** 53

_handler: Optional[logging.Handler] = None


class EventFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter for pool events.

    Adds the ``event`` field to every record and renders fixed-point values
    (sqrtPriceX96, fee growth) as decimal strings so they survive parsing.
    """

    def __init__(
        self,
        fmt: str = "%(asctime)s %(levelname)s %(name)s %(message)s",
        include_events: bool = True,
    ):
        """
        Args:
            fmt: Log format string
            include_events: Emit event extras, otherwise only the ``fmt`` fields
        """
        super().__init__(fmt=fmt)
        self.include_events = include_events
        self.fmt_fields = set(self.parse())

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        if not self.include_events:
            for key in [k for k in log_record if k not in self.fmt_fields]:
                del log_record[key]
            return

        log_record["event"] = getattr(record, "event", None)

        for key, value in log_record.items():
            if isinstance(value, int) and not isinstance(value, bool) and abs(value) >= _MAX_SAFE_INT:
                log_record[key] = str(value)


def configure_logging(level: Optional[str] = None, include_events: Optional[bool] = None) -> logging.Logger:
    """Configure the ``clamm`` logger hierarchy

    Args:
        level: Log level name, defaults to ``settings.LOG_LEVEL``
        include_events: Emit event extras, defaults to ``settings.LOG_EVENTS``

    Returns:
        The package root logger
    """
    global _handler

    logger = logging.getLogger("clamm")
    logger.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper()))

    if include_events is None:
        include_events = settings.LOG_EVENTS

    # Prevent duplicate handlers
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(EventFormatter(include_events=include_events))
    logger.addHandler(_handler)
    return logger
