"""Service identity shared by every logging event.

Purpose
-------
Hold the deployment-time service name that each emitted event carries. The
name is written once at startup by the registrar and read by every emitter
afterwards.

Contents
--------
* :data:`UNKNOWN_SERVICE` – sentinel used when no usable name was supplied.
* :func:`normalize_service_name` – ``None``/blank fallback rule.
* :class:`ServiceContext` – mutable holder injected into emitters.
* :data:`SERVICE_CONTEXT` – process-wide default context.
* :func:`get_service_name` / :func:`set_service_name` – helpers bound to the
  process-wide context.

System Role
-----------
Containers inject :data:`SERVICE_CONTEXT` unless they were created with their
own :class:`ServiceContext`. Writing the process-wide context affects every
emitter created afterwards, including emitters owned by unrelated call sites.
"""

from __future__ import annotations

from typing import Final

UNKNOWN_SERVICE: Final[str] = "UnknownService"
"""Fallback service name for ``None``, empty, or whitespace-only input."""


def normalize_service_name(service_name: str | None) -> str:
    """Return *service_name* unchanged or :data:`UNKNOWN_SERVICE` when blank.

    Examples
    --------
    >>> normalize_service_name("billing")
    'billing'
    >>> normalize_service_name("   ")
    'UnknownService'
    >>> normalize_service_name(None)
    'UnknownService'
    """

    if service_name is None or not service_name.strip():
        return UNKNOWN_SERVICE
    return service_name


class ServiceContext:
    """Mutable holder for the service name used by logging events.

    A concrete name is never replaced by the fallback sentinel: once a real
    name has been set, :meth:`set_name` with a blank value keeps it.

    Examples
    --------
    >>> context = ServiceContext()
    >>> context.name
    'UnknownService'
    >>> context.set_name("Billing")
    'Billing'
    >>> context.set_name(None)
    'Billing'
    >>> context.reset()
    >>> context.is_default
    True
    """

    __slots__ = ("_name",)

    def __init__(self, name: str | None = None) -> None:
        self._name = normalize_service_name(name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_default(self) -> bool:
        return self._name == UNKNOWN_SERVICE

    def set_name(self, service_name: str | None) -> str:
        """Store the normalised *service_name* and return the effective name."""

        candidate = normalize_service_name(service_name)
        if candidate == UNKNOWN_SERVICE and not self.is_default:
            return self._name
        self._name = candidate
        return self._name

    def reset(self) -> None:
        """Return to the fallback sentinel (used by test isolation helpers)."""

        self._name = UNKNOWN_SERVICE

    def __repr__(self) -> str:
        return f"ServiceContext(name={self._name!r})"


SERVICE_CONTEXT: Final[ServiceContext] = ServiceContext()
"""Process-wide context injected into containers by default."""


def get_service_name() -> str:
    """Return the process-wide service name."""

    return SERVICE_CONTEXT.name


def set_service_name(service_name: str | None) -> str:
    """Set the process-wide service name and return the effective value."""

    return SERVICE_CONTEXT.set_name(service_name)
