"""Configuration section value object.

Purpose
-------
Represent a read-only slice of application configuration that the registrar
can bind to a typed settings object. The section is a plain value object: it
performs no I/O, so any configuration collaborator (environment variables,
framework settings, hand-built dictionaries) can produce one.

Contents
--------
* :class:`ConfigurationSection` – ``Mapping`` implementation with dotted
  lookups, convention-insensitive child sections, and :meth:`ConfigurationSection.bind`.
* :data:`EMPTY_SECTION` – canonical empty instance.

System Role
-----------
:func:`lib_observability_wiring.core.add_observability_from_config` accepts a
section (or any mapping, which it wraps) and binds it before applying the
caller's service-name selector.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeVar, overload

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ConfigurationSection(Mapping[str, Any]):
    """Immutable mapping describing one configuration section.

    Parameters
    ----------
    _data:
        Raw mapping for the section. Wrapped in ``MappingProxyType`` during
        initialisation to enforce immutability.
    path:
        Dotted path of the section inside the wider configuration (``""`` for
        the root).

    Examples
    --------
    >>> root = ConfigurationSection({"ServiceSettings": {"ServiceName": "Billing", "Port": 8080}})
    >>> section = root.get_section("servicesettings")
    >>> section.path
    'ServiceSettings'
    >>> section.get("ServiceName")
    'Billing'
    >>> root.get("ServiceSettings.Port")
    8080
    """

    _data: Mapping[str, Any]
    path: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "_data", MappingProxyType(dict(self._data)))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def exists(self) -> bool:
        """Return ``True`` when the section holds at least one key."""

        return bool(self._data)

    @overload
    def get(self, key: str, *, default: T) -> T:  # type: ignore[override]
        ...

    @overload
    def get(self, key: str, *, default: None = ...) -> Any | None:  # type: ignore[override]
        ...

    def get(self, key: str, *, default: Any = None) -> Any:
        """Resolve *key* as a dotted path and return ``default`` when missing."""

        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, Mapping):
                return default
            matched = _match_key(current, part)
            if matched is None:
                return default
            current = current[matched]
        return current

    def get_section(self, key: str) -> ConfigurationSection:
        """Return the child section under *key*, matched with :func:`fold_key`.

        Missing keys or scalar values yield an empty section so callers can
        bind unconditionally and let the binder report absence as ``None``.

        Examples
        --------
        >>> ConfigurationSection({"a": 1}).get_section("missing").exists
        False
        """

        matched = _match_key(self._data, key)
        child = self._data.get(matched) if matched is not None else None
        child_path = f"{self.path}.{matched or key}" if self.path else (matched or key)
        if not isinstance(child, Mapping):
            return ConfigurationSection({}, child_path)
        return ConfigurationSection(child, child_path)

    def bind(self, settings_type: type[T]) -> T | None:
        """Bind the section to *settings_type* (see :func:`bind_settings`)."""

        from ..application.binding import bind_settings

        return bind_settings(self._data, settings_type)

    def as_dict(self) -> dict[str, Any]:
        """Return a mutable deep copy of the section."""

        return _thaw(self._data)

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialise the section to JSON.

        Examples
        --------
        >>> ConfigurationSection({"service": {"name": "demo"}}).to_json()
        '{"service":{"name":"demo"}}'
        """

        return json.dumps(self.as_dict(), indent=indent, separators=(",", ":"), ensure_ascii=False)


def fold_key(key: str) -> str:
    """Fold case and drop ``_``/``-`` so naming conventions compare equal.

    >>> fold_key("Service_Name") == fold_key("serviceName") == fold_key("SERVICE-NAME")
    True
    """

    return key.replace("_", "").replace("-", "").lower()


def _match_key(mapping: Mapping[str, Any], key: str) -> str | None:
    """Return the key in *mapping* matching *key* under :func:`fold_key`, preferring exact hits."""

    if key in mapping:
        return key
    folded = fold_key(key)
    for existing in mapping:
        if fold_key(existing) == folded:
            return existing
    return None


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_thaw(item) for item in value]
    return value


EMPTY_SECTION = ConfigurationSection({})
"""Shared empty section; safe to reuse because sections are immutable."""
