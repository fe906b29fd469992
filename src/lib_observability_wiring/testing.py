"""Test isolation helpers for the process-wide service name.

Purpose
    The registrar writes the process-wide service context; suites that call it
    from several tests need the name restored afterwards so one test's name
    never leaks into the next.

Contents
    - ``isolated_service_context``: context manager resetting the process-wide
      context on entry and restoring the previous name on exit.

System Integration
    Used by the autouse fixture in ``tests/conftest.py``; consumers can reuse
    it in their own suites.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from .domain.context import SERVICE_CONTEXT, ServiceContext


@contextmanager
def isolated_service_context(context: ServiceContext = SERVICE_CONTEXT) -> Iterator[ServiceContext]:
    """Reset *context* for the enclosed block and restore its previous name afterwards.

    Examples
    --------
    >>> from lib_observability_wiring.domain.context import set_service_name, get_service_name
    >>> with isolated_service_context():
    ...     _ = set_service_name("Scratch")
    ...     get_service_name()
    'Scratch'
    """

    previous = context.name
    context.reset()
    try:
        yield context
    finally:
        context.reset()
        context.set_name(previous)
