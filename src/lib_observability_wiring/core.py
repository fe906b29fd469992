"""Composition root for ``lib_observability_wiring``.

Purpose
-------
Provide the registration entry points a host calls once at startup: the
observability registrar (service name + emitter rule) and the JSON console
logging configurator. Every entry point takes the service container and
returns it so calls chain:

>>> container = create_container(ServiceContext())
>>> use_json_console_logging(add_observability(container, "Billing")) is container
True

Contents
--------
* :func:`create_container` – build a :class:`HostContainer`.
* :func:`add_observability` – register emitters and set the service name.
* :func:`add_observability_from_config` – same, with the name taken from a
  configuration section through a selector.
* :func:`add_json_console_logging` – additive JSON console provider.
* :func:`use_json_console_logging` – exclusive JSON console provider.
* :func:`get_emitter` – resolve the emitter for a payload type.
* :func:`configuration_from_environ` – section built from prefixed env vars.

System Role
-----------
Works with any :mod:`dependency_injector` container. Providers the wiring
needs (``service_context``, ``logging_providers``, ``logger_factory``) are
added to bare containers on first use; containers created by
:func:`create_container` already carry them.

Side Effects
------------
:func:`add_observability` writes the container's :class:`ServiceContext`. For
containers using the default context this is process-wide state read by every
emitter created afterwards, including emitters owned by unrelated call sites.
Call it once during startup, before the host serves requests.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, TypeVar

from dependency_injector import containers, providers

from .adapters.env.default import DefaultEnvLoader, default_env_prefix
from .adapters.logging.factory import LoggerFactory
from .adapters.logging.json_console import DEFAULT_OPTIONS, JsonConsoleHandler
from .application.emitters import EmitterRegistry, LoggingEmitter
from .application.ports import EnvLoader, ServiceNameSelector
from .containers import HostContainer
from .domain.config import EMPTY_SECTION, ConfigurationSection
from .domain.context import SERVICE_CONTEXT, ServiceContext, normalize_service_name
from .domain.errors import ArgumentMissing, InvalidArgument, NotRegistered
from .observability import log_debug, log_info

T = TypeVar("T")
C = TypeVar("C", bound=containers.DynamicContainer)

EMITTERS = "emitters"
SERVICE_CONTEXT_PROVIDER = "service_context"
LOGGING_PROVIDERS = "logging_providers"
LOGGER_FACTORY = "logger_factory"


def create_container(service_context: ServiceContext | None = None) -> containers.DynamicContainer:
    """Return a new :class:`HostContainer` instance.

    Parameters
    ----------
    service_context:
        Context injected into emitters. Defaults to the process-wide
        :data:`~lib_observability_wiring.domain.context.SERVICE_CONTEXT`; pass
        a dedicated one to keep the container's identity isolated.
    """

    container = HostContainer()
    if service_context is not None:
        container.service_context.override(providers.Object(service_context))
    return container


def add_observability(container: C, service_name: str | None) -> C:
    """Register emitters in *container* and set the service name.

    Parameters
    ----------
    container:
        Service container receiving the ``emitters`` provider.
    service_name:
        Name reported by every logging event. ``None``, empty, and
        whitespace-only values fall back to ``"UnknownService"``; a fallback
        never replaces a name that was already set.

    Returns
    -------
    The same *container*, for chaining.

    Raises
    ------
    ArgumentMissing
        When *container* is ``None``. Nothing is registered.
    InvalidArgument
        When *service_name* is neither ``None`` nor a string.

    Notes
    -----
    The ``emitters`` provider is registered once per container; later calls
    keep the existing registry (and therefore the emitters already handed
    out) and only update the service name.
    """

    if container is None:
        raise ArgumentMissing("container")
    if service_name is not None and not isinstance(service_name, str):
        raise InvalidArgument(f"service_name must be a string, got {type(service_name).__qualname__}")

    _ensure_logging(container)
    context_provider = _ensure_provider(container, SERVICE_CONTEXT_PROVIDER, lambda: providers.Object(SERVICE_CONTEXT))
    if EMITTERS not in container.providers:
        container.set_provider(
            EMITTERS,
            providers.ThreadSafeSingleton(
                EmitterRegistry,
                context=context_provider,
                logger_factory=container.providers[LOGGER_FACTORY],
            ),
        )

    context: ServiceContext = context_provider()
    requested = normalize_service_name(service_name)
    effective = context.set_name(service_name)
    if effective != requested:
        log_debug("service_name_kept", service_name=effective, requested=requested)
    log_info("observability_registered", service_name=effective)
    return container


def add_observability_from_config(
    container: C,
    configuration_section: ConfigurationSection | Mapping[str, Any] | providers.Provider,
    service_name_selector: ServiceNameSelector,
    *,
    settings_type: type | None = None,
) -> C:
    """Register observability with the service name read from configuration.

    Parameters
    ----------
    container:
        Service container (see :func:`add_observability`).
    configuration_section:
        A :class:`ConfigurationSection`, any mapping, or a
        :mod:`dependency_injector` configuration provider such as
        ``container.config.service_settings``.
    service_name_selector:
        Receives the bound settings (``None`` when the section is empty) and
        returns the service name or ``None``.
    settings_type:
        Dataclass the section is bound to. Without it the selector receives a
        plain ``dict``.

    Raises
    ------
    ArgumentMissing
        When any of *container*, *configuration_section*, or
        *service_name_selector* is ``None``.

    Examples
    --------
    >>> container = create_container(ServiceContext())
    >>> section = {"ServiceName": "Billing"}
    >>> _ = add_observability_from_config(container, section, lambda s: s and s["ServiceName"])
    >>> container.service_context().name
    'Billing'
    """

    if container is None:
        raise ArgumentMissing("container")
    if configuration_section is None:
        raise ArgumentMissing("configuration_section")
    if service_name_selector is None:
        raise ArgumentMissing("service_name_selector")

    section = _as_section(configuration_section)
    settings = section.bind(settings_type or dict)
    service_name = service_name_selector(settings)
    return add_observability(container, service_name)


def add_json_console_logging(container: C) -> C:
    """Add a JSON console provider, keeping the providers already registered.

    The provider includes scopes and uses the ``"%Y-%m-%d %H:%M:%S "``
    timestamp pattern. Calls are not deduplicated: every call adds another
    provider, and each provider writes its own copy of every entry.

    Raises
    ------
    ArgumentMissing
        When *container* is ``None``.
    """

    if container is None:
        raise ArgumentMissing("container")
    logging_providers = _ensure_logging(container)
    logging_providers.add_args(providers.Factory(JsonConsoleHandler, options=DEFAULT_OPTIONS))
    log_debug("json_console_added", providers=len(logging_providers.args))
    return container


def use_json_console_logging(container: C) -> C:
    """Replace every registered logging provider with the JSON console provider.

    Raises
    ------
    ArgumentMissing
        When *container* is ``None``.
    """

    if container is None:
        raise ArgumentMissing("container")
    logging_providers = _ensure_logging(container)
    cleared = len(logging_providers.args)
    logging_providers.clear_args()
    log_debug("logging_providers_cleared", cleared=cleared)
    return add_json_console_logging(container)


def get_emitter(container: containers.DynamicContainer, payload_type: type[T]) -> LoggingEmitter[T]:
    """Return the singleton emitter for *payload_type* held by *container*.

    Raises
    ------
    ArgumentMissing
        When *container* or *payload_type* is ``None``.
    NotRegistered
        When :func:`add_observability` was never called on *container*.
    """

    if container is None:
        raise ArgumentMissing("container")
    provider = container.providers.get(EMITTERS)
    if provider is None:
        raise NotRegistered("emitters are not registered; call add_observability() during startup")
    registry: EmitterRegistry = provider()
    return registry.get(payload_type)


def configuration_from_environ(
    prefix: str,
    *,
    environ: Mapping[str, str] | None = None,
    loader: EnvLoader | None = None,
) -> ConfigurationSection:
    """Build a configuration section from variables named ``<PREFIX>_...``.

    *prefix* may be given as a slug (``billing-api`` reads ``BILLING_API_...``).
    Values stay raw strings; :meth:`ConfigurationSection.bind` converts them
    to the settings fields' annotated types, so ``BILLING_SERVICE_NAME=2024``
    binds as the text ``"2024"``.

    Examples
    --------
    >>> section = configuration_from_environ("BILLING", environ={"BILLING_SERVICE_NAME": "Billing"})
    >>> section.get("service_name")
    'Billing'
    """

    env_loader = loader or DefaultEnvLoader(environ=environ, coerce=False)
    data = env_loader.load(default_env_prefix(prefix))
    if not data:
        return EMPTY_SECTION
    return ConfigurationSection(data)


def _as_section(source: Any) -> ConfigurationSection:
    if isinstance(source, ConfigurationSection):
        return source
    if isinstance(source, providers.Provider):
        source = source()
        if source is None:
            return EMPTY_SECTION
    if isinstance(source, Mapping):
        return ConfigurationSection(source)
    raise InvalidArgument(f"configuration_section must be a mapping, got {type(source).__qualname__}")


def _ensure_provider(container: containers.DynamicContainer, name: str, build: Callable[[], providers.Provider]) -> Any:
    provider = container.providers.get(name)
    if provider is None:
        provider = build()
        container.set_provider(name, provider)
    return provider


def _ensure_logging(container: containers.DynamicContainer) -> providers.List:
    logging_providers = _ensure_provider(container, LOGGING_PROVIDERS, providers.List)
    _ensure_provider(
        container,
        LOGGER_FACTORY,
        lambda: providers.Singleton(LoggerFactory, handlers=logging_providers),
    )
    return logging_providers
