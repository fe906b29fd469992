"""Typed emitters and the per-container emitter registry.

Purpose
-------
Let any component ask for "an emitter for ``InvoicePaid``" and receive the
same instance every time, while emitters for other payload types stay
separate.

Contents
--------
* :class:`LoggingEmitter` – generic emitter writing :class:`LoggingEvent`
  envelopes through a category logger.
* :class:`EmitterRegistry` – one emitter per payload type, built on first use.

System Role
-----------
The registrar registers :class:`EmitterRegistry` as a thread-safe singleton in
the container; :func:`lib_observability_wiring.core.get_emitter` resolves it.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Generic, TypeVar

from ..adapters.logging.factory import LoggerFactory
from ..domain.context import ServiceContext
from ..domain.errors import ArgumentMissing, InvalidArgument
from ..domain.events import LoggingEvent, category_name

T = TypeVar("T")


class LoggingEmitter(Generic[T]):
    """Emit payloads of ``payload_type`` as structured log entries.

    The service name is read from the injected context on every emission, so
    an emitter created before startup finished still reports the final name.
    """

    def __init__(self, payload_type: type[T], logger: logging.Logger, context: ServiceContext) -> None:
        self._payload_type = payload_type
        self._logger = logger
        self._context = context

    @property
    def payload_type(self) -> type[T]:
        return self._payload_type

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def emit(self, payload: T, *, level: int = logging.INFO) -> None:
        """Log *payload* at *level*.

        Raises
        ------
        ArgumentMissing
            When *payload* is ``None``.
        InvalidArgument
            When *payload* is not an instance of :attr:`payload_type`.
        """

        event = self._event(payload)
        self._logger.log(level, event.event_type, extra=event.to_fields())

    def error(self, payload: T, exc: BaseException | None = None) -> None:
        """Log *payload* at ERROR, including *exc* as exception info."""

        event = self._event(payload)
        exc_info = (type(exc), exc, exc.__traceback__) if exc is not None else None
        self._logger.error(event.event_type, exc_info=exc_info, extra=event.to_fields())

    def _event(self, payload: Any) -> LoggingEvent:
        if payload is None:
            raise ArgumentMissing("payload")
        if not isinstance(payload, self._payload_type):
            raise InvalidArgument(
                f"{type(payload).__qualname__} payload passed to emitter for {self._payload_type.__qualname__}"
            )
        return LoggingEvent.create(payload, self._context, self._payload_type)

    def __repr__(self) -> str:
        return f"LoggingEmitter[{self._payload_type.__qualname__}]"


class EmitterRegistry:
    """Memoise one :class:`LoggingEmitter` per payload type.

    Examples
    --------
    >>> registry = EmitterRegistry(ServiceContext("Billing"), LoggerFactory([]))
    >>> registry.get(dict) is registry.get(dict)
    True
    >>> registry.get(dict) is registry.get(list)
    False
    >>> len(registry)
    2
    """

    def __init__(self, context: ServiceContext, logger_factory: LoggerFactory) -> None:
        self._context = context
        self._logger_factory = logger_factory
        self._emitters: dict[type, LoggingEmitter[Any]] = {}
        self._lock = threading.Lock()

    @property
    def context(self) -> ServiceContext:
        return self._context

    def get(self, payload_type: type[T]) -> LoggingEmitter[T]:
        """Return the emitter for *payload_type*, creating it on first request."""

        if payload_type is None:
            raise ArgumentMissing("payload_type")
        if not isinstance(payload_type, type):
            raise InvalidArgument(f"payload_type must be a class, got {payload_type!r}")
        with self._lock:
            emitter = self._emitters.get(payload_type)
            if emitter is None:
                logger = self._logger_factory.create_logger(category_name(payload_type))
                emitter = LoggingEmitter(payload_type, logger, self._context)
                self._emitters[payload_type] = emitter
            return emitter

    def __contains__(self, payload_type: object) -> bool:
        return payload_type in self._emitters

    def __len__(self) -> int:
        return len(self._emitters)
