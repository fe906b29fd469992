"""Shared fixtures keeping the process-wide service name isolated per test."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from lib_observability_wiring import create_container
from lib_observability_wiring.domain.context import ServiceContext
from lib_observability_wiring.testing import isolated_service_context


@pytest.fixture(autouse=True)
def _isolated_service_name() -> Iterator[ServiceContext]:
    """Every test starts from ``UnknownService`` and leaves no name behind."""

    with isolated_service_context() as context:
        yield context


@pytest.fixture()
def container():
    """Host container bound to the process-wide context (reset by the autouse fixture)."""

    return create_container()
