"""JSON console logging provider.

Purpose
-------
Write one JSON document per log entry to standard output, with a fixed
timestamp pattern and, optionally, the active logging scopes. Formatting is
delegated to :mod:`pythonjsonlogger`; this module only fixes the options.

Contents
--------
* :data:`TIMESTAMP_FORMAT` – ``strftime`` pattern ``"%Y-%m-%d %H:%M:%S "``.
* :class:`JsonConsoleOptions` – frozen option set (scopes, timestamp format).
* :class:`JsonConsoleFormatter` – ``JsonFormatter`` adding ``scopes``.
* :class:`JsonConsoleHandler` – ``StreamHandler`` wired to the formatter.
* :func:`plain_console_handler` – the host's default non-JSON console output.

Output shape
------------
``{"timestamp": "2026-10-18 06:09:00 ", "level": "INFO", "category":
"billing.events.InvoicePaid", "message": "InvoicePaid", "service_name":
"Billing", "event_type": "InvoicePaid", "payload": {...}, "scopes": [...]}``
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Final, TextIO

from pythonjsonlogger.json import JsonFormatter

from ...observability import current_scopes

TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S "
"""Fixed timestamp pattern (note the trailing space)."""

_FIELDS: Final[str] = "%(asctime)s %(levelname)s %(name)s %(message)s"
_RENAMES: Final[dict[str, str]] = {"asctime": "timestamp", "levelname": "level", "name": "category"}


@dataclass(frozen=True, slots=True)
class JsonConsoleOptions:
    """Options applied to the JSON console provider at registration time."""

    include_scopes: bool = True
    timestamp_format: str = TIMESTAMP_FORMAT


DEFAULT_OPTIONS: Final[JsonConsoleOptions] = JsonConsoleOptions()


class JsonConsoleFormatter(JsonFormatter):
    """Render records as JSON with renamed core fields and optional scopes."""

    def __init__(self, options: JsonConsoleOptions = DEFAULT_OPTIONS) -> None:
        super().__init__(_FIELDS, datefmt=options.timestamp_format, rename_fields=dict(_RENAMES))
        self.options = options

    def add_fields(self, log_data: dict[str, Any], record: logging.LogRecord, message_dict: dict[str, Any]) -> None:
        super().add_fields(log_data, record, message_dict)
        if self.options.include_scopes:
            scopes = current_scopes()
            if scopes:
                log_data["scopes"] = scopes


class JsonConsoleHandler(logging.StreamHandler):
    """Console handler emitting :class:`JsonConsoleFormatter` output.

    *stream* defaults to ``sys.stdout`` as it is at construction time, so
    output redirection installed before the container resolves its providers
    is honoured.
    """

    def __init__(self, options: JsonConsoleOptions = DEFAULT_OPTIONS, stream: TextIO | None = None) -> None:
        super().__init__(stream if stream is not None else sys.stdout)
        self.options = options
        self.setFormatter(JsonConsoleFormatter(options))


def plain_console_handler(stream: TextIO | None = None) -> logging.Handler:
    """Return the host's default human-readable console handler."""

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    return handler
