"""Host container mirroring what a web host hands its services.

The declarative container provides the pieces the registrar and the logging
configurator plug into:

* ``service_context`` – the :class:`ServiceContext` emitters read names from.
* ``logging_providers`` – list of handler factories (the host default is a
  plain console handler).
* ``logger_factory`` – per-container logging pipeline built from the providers.

``emitters`` is deliberately absent; :func:`lib_observability_wiring.core.add_observability`
registers it.
"""

from __future__ import annotations

from dependency_injector import containers, providers

from .adapters.logging.factory import LoggerFactory
from .adapters.logging.json_console import plain_console_handler
from .domain.context import SERVICE_CONTEXT


class HostContainer(containers.DeclarativeContainer):
    """Service container with logging and service identity wired in."""

    config = providers.Configuration()

    service_context = providers.Object(SERVICE_CONTEXT)

    logging_providers = providers.List(
        providers.Factory(plain_console_handler),
    )

    logger_factory = providers.Singleton(
        LoggerFactory,
        handlers=logging_providers,
    )
