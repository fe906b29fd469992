"""Environment variable adapter.

Purpose
-------
Translate prefixed process environment variables into the nested mapping a
:class:`~lib_observability_wiring.domain.config.ConfigurationSection` wraps.
Deployments commonly inject the service identity this way
(``BILLING_SERVICESETTINGS__SERVICENAME=Billing``).

Key behaviours
--------------
* Only keys starting with ``<PREFIX>_`` are captured.
* ``__`` is the nesting delimiter (``FOO__BAR`` → ``{"foo": {"bar": ...}}``).
* Light scalar coercion (bools, ints, floats, ``null``/``none``) unless the
  loader is built with ``coerce=False``; settings binding then converts raw
  strings by field annotation.
* Emits a debug event via :mod:`lib_observability_wiring.observability`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from ...observability import log_debug


def default_env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('billing-api')
    'BILLING_API'
    """

    return slug.replace("-", "_").upper()


class DefaultEnvLoader:
    """Load environment variables that belong to one prefix.

    Examples
    --------
    >>> loader = DefaultEnvLoader(environ={'DEMO_SERVICE_NAME': 'Billing', 'DEMO_HTTP__PORT': '8080'})
    >>> payload = loader.load('DEMO')
    >>> payload['service_name'], payload['http']['port']
    ('Billing', 8080)
    """

    def __init__(self, *, environ: Mapping[str, str] | None = None, coerce: bool = True) -> None:
        self._environ = os.environ if environ is None else environ
        self._coerce_values = coerce

    def load(self, prefix: str) -> dict[str, object]:
        """Return a nested mapping built from variables that carry *prefix*."""

        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        collected: dict[str, object] = {}
        for key, value in self._environ.items():
            if prefix and not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :]
            if stripped:
                assign_nested(collected, stripped, _coerce(value) if self._coerce_values else value)
        log_debug("env_variables_loaded", prefix=prefix, keys=sorted(collected))
        return collected


def assign_nested(target: dict[str, object], key: str, value: object) -> None:
    """Assign *value* inside *target* using ``__`` as a nesting delimiter.

    Keys are stored lower-case.

    >>> data: dict[str, object] = {}
    >>> assign_nested(data, 'SERVICE__NAME', 'demo')
    >>> data
    {'service': {'name': 'demo'}}
    """

    *parents, leaf = key.lower().split("__")
    cursor = target
    for part in parents:
        child = cursor.setdefault(part, {})
        if not isinstance(child, dict):
            raise ValueError(f"Cannot override scalar with mapping for key {key}")
        cursor = child
    cursor[leaf] = value


def _coerce(value: str) -> object:
    """Coerce textual environment values to Python primitives where possible.

    >>> _coerce('true'), _coerce('10'), _coerce('3.5'), _coerce('none'), _coerce('Billing')
    (True, 10, 3.5, None, 'Billing')
    """

    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    if not any(char.isdigit() for char in value):
        # keeps names such as "Infinity" or "NaN" as text
        return value
    try:
        return float(value)
    except ValueError:
        return value
