"""End-to-end coverage of the registrar and the logging configurator.

These tests exercise the public wiring functions against real
``dependency_injector`` containers: the host container from
``create_container`` and bare ``DynamicContainer`` instances.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Optional

import pytest
from dependency_injector import containers, providers
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from lib_observability_wiring import (
    UNKNOWN_SERVICE,
    ArgumentMissing,
    ConfigurationSection,
    InvalidArgument,
    NotRegistered,
    ServiceContext,
    add_json_console_logging,
    add_observability,
    add_observability_from_config,
    begin_scope,
    configuration_from_environ,
    create_container,
    get_emitter,
    get_service_name,
    use_json_console_logging,
)
from lib_observability_wiring.adapters.logging.json_console import JsonConsoleHandler


@dataclass
class InvoicePaid:
    invoice_id: str
    amount: int


@dataclass
class InvoiceVoided:
    invoice_id: str


@dataclass
class ServiceSettings:
    service_name: Optional[str] = None


@dataclass
class RequiredNameSettings:
    service_name: str


def json_lines(output: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


# observability registrar -------------------------------------------------


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(st.text(min_size=1).filter(lambda value: value.strip() != ""))
def test_non_blank_name_becomes_process_wide_name(name: str) -> None:
    container = create_container()
    try:
        add_observability(container, name)
        assert get_service_name() == name
    finally:
        container.service_context().reset()


@pytest.mark.parametrize("name", [None, "", " ", "\t\n", "   "])
def test_blank_name_falls_back(container, name: Optional[str]) -> None:
    add_observability(container, name)
    assert get_service_name() == UNKNOWN_SERVICE


def test_returns_same_container_for_chaining(container) -> None:
    assert add_observability(container, "Billing") is container
    assert add_json_console_logging(container) is container
    assert use_json_console_logging(container) is container


def test_missing_container_raises_and_registers_nothing() -> None:
    with pytest.raises(ArgumentMissing) as info:
        add_observability(None, "Billing")  # type: ignore[type-var]
    assert info.value.argument == "container"
    assert get_service_name() == UNKNOWN_SERVICE


def test_non_string_name_is_rejected(container) -> None:
    with pytest.raises(InvalidArgument):
        add_observability(container, 42)  # type: ignore[arg-type]
    assert "emitters" not in container.providers


def test_same_payload_type_yields_same_emitter(container) -> None:
    add_observability(container, "Billing")
    assert get_emitter(container, InvoicePaid) is get_emitter(container, InvoicePaid)


def test_distinct_payload_types_yield_distinct_emitters(container) -> None:
    add_observability(container, "Billing")
    paid = get_emitter(container, InvoicePaid)
    voided = get_emitter(container, InvoiceVoided)
    assert paid is not voided
    assert paid.payload_type is InvoicePaid
    assert voided.payload_type is InvoiceVoided


def test_emitters_are_per_container() -> None:
    first = add_observability(create_container(ServiceContext()), "A")
    second = add_observability(create_container(ServiceContext()), "B")
    assert get_emitter(first, InvoicePaid) is not get_emitter(second, InvoicePaid)


def test_emitter_before_registration_raises(container) -> None:
    with pytest.raises(NotRegistered):
        get_emitter(container, InvoicePaid)


def test_reregistration_keeps_registry_and_updates_name(container) -> None:
    add_observability(container, "Billing")
    emitter = get_emitter(container, InvoicePaid)
    add_observability(container, "Payments")
    assert get_emitter(container, InvoicePaid) is emitter
    assert get_service_name() == "Payments"


def test_blank_reregistration_does_not_revert_name(container) -> None:
    add_observability(container, "Billing")
    add_observability(container, "  ")
    assert get_service_name() == "Billing"


def test_dedicated_context_leaves_process_name_alone() -> None:
    context = ServiceContext()
    container = add_observability(create_container(context), "Isolated")
    assert context.name == "Isolated"
    assert get_service_name() == UNKNOWN_SERVICE
    assert get_emitter(container, InvoicePaid) is not None


def test_bare_dynamic_container_receives_required_providers() -> None:
    container = containers.DynamicContainer()
    add_observability(container, "Bare")
    for name in ("service_context", "logging_providers", "logger_factory", "emitters"):
        assert name in container.providers
    assert container.logging_providers.args == ()
    assert get_service_name() == "Bare"


# registration from configuration ---------------------------------------


def test_config_selector_name_is_used(container) -> None:
    section = ConfigurationSection({"ServiceName": "BillingService"})
    add_observability_from_config(
        container,
        section,
        lambda settings: settings.service_name if settings else None,
        settings_type=ServiceSettings,
    )
    assert get_service_name() == "BillingService"


def test_config_selector_returning_none_falls_back(container) -> None:
    add_observability_from_config(container, {"ServiceName": "Ignored"}, lambda settings: None)
    assert get_service_name() == UNKNOWN_SERVICE


def test_config_empty_section_passes_none_to_selector(container) -> None:
    received: list[object] = []

    def selector(settings: Optional[ServiceSettings]) -> Optional[str]:
        received.append(settings)
        return None

    add_observability_from_config(container, ConfigurationSection({}), selector, settings_type=ServiceSettings)
    assert received == [None]
    assert get_service_name() == UNKNOWN_SERVICE


@pytest.mark.parametrize("raw", ["2024", "true", "1.5"])
def test_config_from_environ_keeps_scalar_looking_names(container, raw: str) -> None:
    section = configuration_from_environ("BILLING", environ={"BILLING_SERVICE_NAME": raw})
    add_observability_from_config(
        container,
        section,
        lambda settings: settings.service_name if settings else None,
        settings_type=ServiceSettings,
    )
    assert get_service_name() == raw


def test_config_missing_required_setting_falls_back(container) -> None:
    add_observability_from_config(
        container,
        {"Port": 80},
        lambda settings: settings.service_name if settings else None,
        settings_type=RequiredNameSettings,
    )
    assert get_service_name() == UNKNOWN_SERVICE


def test_config_from_container_configuration_provider(container) -> None:
    container.config.from_dict({"service_settings": {"service_name": "FromProvider"}})
    add_observability_from_config(
        container,
        container.config.service_settings,
        lambda settings: settings and settings.service_name,
        settings_type=ServiceSettings,
    )
    assert get_service_name() == "FromProvider"


def test_config_provider_without_value_falls_back(container) -> None:
    add_observability_from_config(container, container.config.missing, lambda settings: settings)
    assert get_service_name() == UNKNOWN_SERVICE


@pytest.mark.parametrize(
    ("arguments", "missing"),
    [
        ((None, {}, lambda settings: None), "container"),
        (("container", None, lambda settings: None), "configuration_section"),
        (("container", {}, None), "service_name_selector"),
    ],
)
def test_config_missing_arguments_raise(container, arguments, missing: str) -> None:
    resolved = tuple(container if argument == "container" else argument for argument in arguments)
    with pytest.raises(ArgumentMissing) as info:
        add_observability_from_config(*resolved)
    assert info.value.argument == missing
    assert "emitters" not in container.providers


def test_config_rejects_non_mapping_source(container) -> None:
    with pytest.raises(InvalidArgument):
        add_observability_from_config(container, ["not", "a", "mapping"], lambda settings: None)  # type: ignore[arg-type]


# logging configurator --------------------------------------------------


def test_add_json_console_logging_is_additive(container) -> None:
    initial = len(container.logging_providers.args)
    add_json_console_logging(container)
    after_first = len(container.logging_providers.args)
    add_json_console_logging(container)
    after_second = len(container.logging_providers.args)
    assert initial < after_first < after_second


def test_add_json_console_logging_keeps_host_default(container) -> None:
    add_json_console_logging(container)
    handlers = container.logging_providers()
    assert len(handlers) == 2
    assert not isinstance(handlers[0], JsonConsoleHandler)
    assert isinstance(handlers[1], JsonConsoleHandler)


def test_use_json_console_logging_clears_previous_providers(container) -> None:
    container.logging_providers.add_args(providers.Factory(logging.StreamHandler))
    add_json_console_logging(container)
    use_json_console_logging(container)
    handlers = container.logging_providers()
    assert len(handlers) == 1
    assert isinstance(handlers[0], JsonConsoleHandler)


def test_use_json_console_logging_twice_still_exclusive(container) -> None:
    use_json_console_logging(container)
    use_json_console_logging(container)
    assert len(container.logging_providers.args) == 1


@pytest.mark.parametrize("configure", [add_json_console_logging, use_json_console_logging])
def test_logging_configurators_require_container(configure) -> None:
    with pytest.raises(ArgumentMissing):
        configure(None)


def test_json_console_provider_options(container) -> None:
    use_json_console_logging(container)
    (handler,) = container.logging_providers()
    assert handler.options.include_scopes is True
    assert handler.options.timestamp_format == "%Y-%m-%d %H:%M:%S "


# full pipeline ---------------------------------------------------------


def test_emitted_event_reaches_json_console(container, capsys) -> None:
    use_json_console_logging(add_observability(container, "Billing"))
    with begin_scope(request_id="abc-123"):
        get_emitter(container, InvoicePaid).emit(InvoicePaid("inv-1", 30))
    (entry,) = json_lines(capsys.readouterr().out)
    assert entry["service_name"] == "Billing"
    assert entry["event_type"] == "InvoicePaid"
    assert entry["payload"] == {"invoice_id": "inv-1", "amount": 30}
    assert entry["scopes"] == [{"request_id": "abc-123"}]


def test_additive_registration_writes_plain_and_json(container, capsys) -> None:
    add_json_console_logging(add_observability(container, "Billing"))
    get_emitter(container, InvoiceVoided).emit(InvoiceVoided("inv-2"))
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert len(json_lines("\n".join(lines))) == 1


def test_duplicate_json_providers_double_emit(container, capsys) -> None:
    use_json_console_logging(add_observability(container, "Billing"))
    add_json_console_logging(container)
    get_emitter(container, InvoiceVoided).emit(InvoiceVoided("inv-3"))
    assert len(json_lines(capsys.readouterr().out)) == 2
