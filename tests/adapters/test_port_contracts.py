"""Adapter contract tests for the application-layer ports.

Verify the default implementations keep satisfying the protocols in
``src/lib_observability_wiring/application/ports.py`` so consumers can rely on
the structural contracts when substituting their own collaborators.
"""

from __future__ import annotations

import io
from dataclasses import dataclass

from lib_observability_wiring import add_observability_from_config, configuration_from_environ, create_container
from lib_observability_wiring.adapters.env.default import DefaultEnvLoader
from lib_observability_wiring.adapters.logging.factory import LoggerFactory
from lib_observability_wiring.adapters.logging.json_console import JsonConsoleHandler
from lib_observability_wiring.application import ports
from lib_observability_wiring.application.emitters import EmitterRegistry
from lib_observability_wiring.domain.context import ServiceContext


@dataclass
class Heartbeat:
    sequence: int


class StaticEnvLoader:
    """Stand-in loader proving the composition root only needs the port."""

    def __init__(self, payload: dict[str, object]) -> None:
        self.payload = payload
        self.prefixes: list[str] = []

    def load(self, prefix: str) -> dict[str, object]:
        self.prefixes.append(prefix)
        return self.payload


def test_logging_emitter_satisfies_emitter_port() -> None:
    registry = EmitterRegistry(ServiceContext(), LoggerFactory([JsonConsoleHandler(stream=io.StringIO())]))
    assert isinstance(registry.get(Heartbeat), ports.Emitter)


def test_default_env_loader_satisfies_env_port() -> None:
    assert isinstance(DefaultEnvLoader(environ={}), ports.EnvLoader)


def test_custom_env_loader_plugs_into_composition_root() -> None:
    loader = StaticEnvLoader({"service_name": "FromLoader"})
    assert isinstance(loader, ports.EnvLoader)
    section = configuration_from_environ("ANY", loader=loader)
    container = create_container(ServiceContext())
    add_observability_from_config(container, section, lambda settings: settings["service_name"])
    assert loader.prefixes == ["ANY"]
    assert container.service_context().name == "FromLoader"
