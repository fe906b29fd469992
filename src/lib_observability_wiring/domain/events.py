"""Logging event value object built for every emission.

Purpose
-------
Give emitted payloads a stable envelope (service name, event type, payload
fields) so downstream log processors can rely on the same keys regardless of
the payload's Python type.

Contents
--------
* :class:`LoggingEvent` – frozen envelope with :meth:`LoggingEvent.to_fields`.
* :func:`event_type_name` – short name used as the event type and log message.
* :func:`category_name` – dotted path used as the logger category.
* :func:`payload_fields` – converts payload objects into plain dictionaries.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .context import ServiceContext


def event_type_name(payload_type: type) -> str:
    """Return the short type name used as event type.

    Examples
    --------
    >>> event_type_name(dict)
    'dict'
    """

    return payload_type.__qualname__


def category_name(payload_type: type) -> str:
    """Return the fully qualified name of *payload_type* used as logger category.

    Examples
    --------
    >>> category_name(dict)
    'builtins.dict'
    """

    return f"{payload_type.__module__}.{payload_type.__qualname__}"


def payload_fields(payload: Any) -> dict[str, Any]:
    """Convert *payload* into a plain dictionary suitable for JSON output.

    Dataclass instances, mappings, objects exposing ``model_dump()`` and plain
    objects with a ``__dict__`` are supported. Anything else is wrapped as
    ``{"value": payload}``.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class InvoicePaid:
    ...     invoice_id: str
    ...     amount: int
    >>> payload_fields(InvoicePaid("inv-1", 30))
    {'invoice_id': 'inv-1', 'amount': 30}
    >>> payload_fields(42)
    {'value': 42}
    """

    if dataclasses.is_dataclass(payload) and not isinstance(payload, type):
        return dataclasses.asdict(payload)
    if isinstance(payload, Mapping):
        return dict(payload)
    model_dump = getattr(payload, "model_dump", None)
    if callable(model_dump):
        return dict(model_dump())
    if hasattr(payload, "__dict__"):
        return {key: value for key, value in vars(payload).items() if not key.startswith("_")}
    return {"value": payload}


@dataclass(frozen=True, slots=True)
class LoggingEvent:
    """Structured envelope for a single emitted payload.

    Examples
    --------
    >>> event = LoggingEvent.create({"order_id": 7}, ServiceContext("Orders"))
    >>> event.to_fields()
    {'service_name': 'Orders', 'event_type': 'dict', 'payload': {'order_id': 7}}
    """

    service_name: str
    event_type: str
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, payload: Any, context: ServiceContext, payload_type: type | None = None) -> LoggingEvent:
        """Build an event for *payload*, reading the service name from *context* now."""

        resolved_type = payload_type or type(payload)
        return cls(
            service_name=context.name,
            event_type=event_type_name(resolved_type),
            payload=payload_fields(payload),
        )

    def to_fields(self) -> dict[str, Any]:
        """Return the keys passed as ``extra`` to :meth:`logging.Logger.log`."""

        return {
            "service_name": self.service_name,
            "event_type": self.event_type,
            "payload": dict(self.payload),
        }
