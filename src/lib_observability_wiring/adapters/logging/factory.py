"""Per-container logging pipeline.

The factory owns one :class:`logging.Logger` per category. Loggers are built
outside the global :mod:`logging` manager and do not propagate, so two
containers in the same process never share handlers.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence


class LoggerFactory:
    """Create category loggers wired to the container's logging providers.

    Examples
    --------
    >>> import io
    >>> stream = io.StringIO()
    >>> factory = LoggerFactory([logging.StreamHandler(stream)])
    >>> factory.create_logger("billing").info("ready")
    >>> stream.getvalue()
    'ready\\n'
    >>> factory.create_logger("billing") is factory.create_logger("billing")
    True
    """

    def __init__(self, handlers: Sequence[logging.Handler], level: int = logging.INFO) -> None:
        self._handlers = tuple(handlers)
        self._level = level
        self._loggers: dict[str, logging.Logger] = {}
        self._lock = threading.Lock()

    @property
    def handlers(self) -> tuple[logging.Handler, ...]:
        return self._handlers

    def create_logger(self, category: str) -> logging.Logger:
        with self._lock:
            logger = self._loggers.get(category)
            if logger is None:
                logger = logging.Logger(category, self._level)
                logger.propagate = False
                for handler in self._handlers:
                    logger.addHandler(handler)
                self._loggers[category] = logger
            return logger
