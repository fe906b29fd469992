"""Logging scopes and the package's own structured diagnostics.

Purpose
-------
Carry correlation state (request ids, tenant ids, ...) through
``contextvars`` so JSON console output can enrich every entry with the active
scopes, and keep the library's own diagnostics quiet unless the host attaches
a handler.

Contents
    - ``SCOPES``: context variable holding the active scope stack.
    - ``begin_scope``: context manager pushing a scope for the enclosed block.
    - ``current_scopes``: snapshot of the active scopes, outermost first.
    - ``get_logger``: returns the package logger (``NullHandler`` attached).
    - ``log_debug`` / ``log_info``: emit structured entries via a single
      private emitter.

System Integration
    :class:`~lib_observability_wiring.adapters.logging.json_console.JsonConsoleFormatter`
    reads :func:`current_scopes` when scope inclusion is enabled; the
    composition root uses the ``log_*`` helpers to narrate registrations.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Final

SCOPES: ContextVar[tuple[Mapping[str, Any], ...]] = ContextVar("lib_observability_wiring_scopes", default=())
"""Active logging scopes, outermost first."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_observability_wiring")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers."""

    return _LOGGER


@contextmanager
def begin_scope(**state: Any) -> Iterator[dict[str, Any]]:
    """Push *state* as a logging scope for the duration of the ``with`` block.

    Scopes nest; leaving the block restores the previous stack even when an
    exception propagates.

    Examples
    --------
    >>> with begin_scope(request_id="abc-123"):
    ...     with begin_scope(tenant="acme"):
    ...         current_scopes()
    [{'request_id': 'abc-123'}, {'tenant': 'acme'}]
    >>> current_scopes()
    []
    """

    scope = dict(state)
    token = SCOPES.set(SCOPES.get() + (scope,))
    try:
        yield scope
    finally:
        SCOPES.reset(token)


def current_scopes() -> list[dict[str, Any]]:
    """Return copies of the active scopes, outermost first."""

    return [dict(scope) for scope in SCOPES.get()]


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug log entry that includes the active scopes."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info log entry that includes the active scopes."""

    _emit(logging.INFO, message, fields)


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    _LOGGER.log(level, message, extra={"context": _with_scopes(fields)})


def _with_scopes(fields: Mapping[str, Any]) -> dict[str, Any]:
    context: dict[str, Any] = {"scopes": current_scopes()}
    context.update(fields)
    return context
