"""Application-layer ports describing collaborator responsibilities.

Purpose
-------
Define the structural contracts the composition root relies on so that
consumers can substitute their own implementations (a test double emitter, a
different environment source) without touching the wiring.

Contents
--------
* :class:`Emitter` – accepts a typed payload and forwards it to logging.
* :class:`EnvLoader` – materialises prefixed environment variables.
* :data:`ServiceNameSelector` – extracts a service name from bound settings.

System Role
-----------
:class:`~lib_observability_wiring.application.emitters.LoggingEmitter` and
:class:`~lib_observability_wiring.adapters.env.default.DefaultEnvLoader`
implement these protocols; ``tests/adapters/test_port_contracts.py`` keeps
them honest.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Optional, Protocol, TypeVar, runtime_checkable

T_contra = TypeVar("T_contra", contravariant=True)


@runtime_checkable
class Emitter(Protocol[T_contra]):
    """Forward payloads of one type into the structured logging pipeline."""

    @property
    def payload_type(self) -> type:
        """Type of payload accepted by :meth:`emit`."""

    def emit(self, payload: T_contra, *, level: int = logging.INFO) -> None:
        """Log *payload* at *level*."""

    def error(self, payload: T_contra, exc: BaseException | None = None) -> None:
        """Log *payload* at ERROR, attaching *exc* when given."""


@runtime_checkable
class EnvLoader(Protocol):
    """Translate environment variables into nested configuration dictionaries."""

    def load(self, prefix: str) -> Mapping[str, object]:
        """Return variables that match *prefix* (``__`` for nesting)."""


ServiceNameSelector = Callable[[Optional[Any]], Optional[str]]
"""Callable receiving the bound settings (or ``None``) and returning a name."""
