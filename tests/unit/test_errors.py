from __future__ import annotations

from lib_observability_wiring.domain.errors import (
    ArgumentMissing,
    BindingError,
    InvalidArgument,
    NotRegistered,
    ObservabilityError,
)


def test_error_hierarchy() -> None:
    assert issubclass(InvalidArgument, ObservabilityError)
    assert issubclass(ArgumentMissing, InvalidArgument)
    assert issubclass(BindingError, ObservabilityError)
    assert issubclass(NotRegistered, ObservabilityError)
    for exception in (InvalidArgument(""), ArgumentMissing("x"), BindingError(""), NotRegistered("")):
        assert isinstance(exception, ObservabilityError)


def test_builtin_families_are_kept() -> None:
    assert isinstance(ArgumentMissing("container"), ValueError)
    assert isinstance(NotRegistered("emitters"), LookupError)


def test_argument_missing_names_the_parameter() -> None:
    error = ArgumentMissing("service_name_selector")
    assert error.argument == "service_name_selector"
    assert "service_name_selector" in str(error)
