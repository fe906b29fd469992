"""Bind configuration mappings to typed settings objects.

Purpose
-------
Turn a configuration section into the settings object the caller's
service-name selector expects. Keys are matched ignoring case and separators so that
``SERVICE_NAME`` from the environment, ``ServiceName`` from a JSON document and
``service_name`` on a dataclass all meet.

Values are converted to the annotated field type: raw strings become
``int``/``float``/``bool`` where the field asks for one, and scalars bound to a
``str`` field are kept as text.

Contents
    - ``bind_settings``: public entry point.
    - ``_bind_dataclass``: recursive stanza for dataclass types.
    - ``_convert``: scalar conversion driven by the field annotation.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import Mapping
from typing import Any, TypeVar

from ..domain.config import fold_key
from ..domain.errors import BindingError, InvalidArgument
from ..observability import log_debug

T = TypeVar("T")

_TRUE: frozenset[str] = frozenset({"true", "1", "yes", "on"})
_FALSE: frozenset[str] = frozenset({"false", "0", "no", "off"})


def bind_settings(data: Mapping[str, Any], settings_type: type[T]) -> T | None:
    """Bind *data* to *settings_type*, returning ``None`` when it cannot be populated.

    An empty section, or one lacking a value for a required dataclass field,
    binds to ``None`` so the caller's selector decides what happens next.

    Parameters
    ----------
    data:
        Section contents.
    settings_type:
        A dataclass type, or ``dict`` to receive a plain copy.

    Raises
    ------
    InvalidArgument
        When *settings_type* is neither a dataclass nor ``dict``.
    BindingError
        When a value cannot be converted to its field's annotated type.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class ServiceSettings:
    ...     service_name: str | None = None
    ...     port: int = 80
    >>> bind_settings({"ServiceName": "Billing", "Port": "8080"}, ServiceSettings)
    ServiceSettings(service_name='Billing', port=8080)
    >>> bind_settings({}, ServiceSettings) is None
    True
    """

    if not data:
        return None
    if settings_type is dict:
        return dict(data)  # type: ignore[return-value]
    if not (dataclasses.is_dataclass(settings_type) and isinstance(settings_type, type)):
        raise InvalidArgument(f"settings_type must be a dataclass or dict, got {settings_type!r}")
    return _bind_dataclass(data, settings_type)


def _bind_dataclass(data: Mapping[str, Any], settings_type: type[T]) -> T | None:
    lookup = {fold_key(key): value for key, value in data.items()}
    try:
        hints = typing.get_type_hints(settings_type)
    except NameError:
        # locally defined annotations; conversion needs resolvable hints
        hints = {}
    kwargs: dict[str, Any] = {}
    for spec in dataclasses.fields(settings_type):
        if not spec.init:
            continue
        required = spec.default is dataclasses.MISSING and spec.default_factory is dataclasses.MISSING
        key = fold_key(spec.name)
        if key not in lookup:
            if required:
                log_debug("settings_unbound", settings_type=settings_type.__qualname__, field=spec.name)
                return None
            continue
        value = lookup[key]
        hint = _unwrap_optional(hints.get(spec.name))
        if isinstance(value, Mapping) and dataclasses.is_dataclass(hint) and isinstance(hint, type):
            value = _bind_dataclass(value, hint)
            if value is None:
                if required:
                    return None
                continue
        else:
            value = _convert(value, hint, f"{settings_type.__name__}.{spec.name}")
        kwargs[spec.name] = value
    return settings_type(**kwargs)


def _unwrap_optional(hint: Any) -> Any:
    if typing.get_origin(hint) in (typing.Union, types.UnionType):
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _convert(value: Any, hint: Any, target: str) -> Any:
    """Convert scalar *value* to *hint* where the annotation names a scalar type.

    >>> _convert(2024, str, "S.name"), _convert("8080", int, "S.port"), _convert("Off", bool, "S.debug")
    ('2024', 8080, False)
    """

    if value is None or isinstance(value, (Mapping, list)):
        return value
    if hint is str:
        return value if isinstance(value, str) else str(value)
    if not isinstance(value, str):
        return value
    if hint is bool:
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise BindingError(f"{target} expects a boolean, got {value!r}")
    if hint in (int, float):
        try:
            return hint(value.strip())
        except ValueError as exc:
            raise BindingError(f"{target} expects {hint.__name__}, got {value!r}") from exc
    return value
