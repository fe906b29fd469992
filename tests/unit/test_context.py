"""Service name normalisation and the process-wide context.

Covers the fallback rule for blank names, the no-revert rule once a concrete
name is set, and the isolation helper used by the suite itself.
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from lib_observability_wiring.domain.context import (
    SERVICE_CONTEXT,
    UNKNOWN_SERVICE,
    ServiceContext,
    get_service_name,
    normalize_service_name,
    set_service_name,
)
from lib_observability_wiring.testing import isolated_service_context

NON_BLANK_NAMES = st.text(min_size=1).filter(lambda value: value.strip() != "")
BLANK_NAMES = st.one_of(st.none(), st.text(alphabet=" \t\r\n  ", max_size=8))


@given(NON_BLANK_NAMES)
def test_non_blank_names_are_kept_verbatim(name: str) -> None:
    """Names are stored exactly, including surrounding whitespace."""

    assert normalize_service_name(name) == name
    assert ServiceContext(name).name == name


@given(BLANK_NAMES)
def test_blank_names_fall_back(name: str | None) -> None:
    assert normalize_service_name(name) == UNKNOWN_SERVICE
    assert ServiceContext(name).name == UNKNOWN_SERVICE


def test_fallback_does_not_replace_concrete_name() -> None:
    context = ServiceContext()
    assert context.set_name("Orders") == "Orders"
    assert context.set_name("   ") == "Orders"
    assert context.set_name(None) == "Orders"
    assert context.name == "Orders"


def test_concrete_name_replaces_concrete_name() -> None:
    context = ServiceContext("Orders")
    assert context.set_name("Billing") == "Billing"


def test_reset_returns_to_sentinel() -> None:
    context = ServiceContext("Orders")
    context.reset()
    assert context.is_default
    assert context.name == UNKNOWN_SERVICE


def test_process_wide_helpers_use_shared_context() -> None:
    set_service_name("Inventory")
    assert get_service_name() == "Inventory"
    assert SERVICE_CONTEXT.name == "Inventory"


def test_isolated_service_context_restores_previous_name() -> None:
    set_service_name("Outer")
    with isolated_service_context() as context:
        assert context.is_default
        set_service_name("Inner")
        assert get_service_name() == "Inner"
    assert get_service_name() == "Outer"


def test_autouse_fixture_starts_from_sentinel() -> None:
    assert get_service_name() == UNKNOWN_SERVICE
