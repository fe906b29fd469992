"""Public package surface for observability wiring.

Register typed emitters and the service name into a dependency-injection
container, and attach JSON console logging either alongside the host's other
logging providers or in place of them::

    container = create_container()
    add_observability(container, "Billing")
    use_json_console_logging(container)
    get_emitter(container, InvoicePaid).emit(InvoicePaid(invoice_id="inv-1"))
"""

from __future__ import annotations

from .application.emitters import EmitterRegistry, LoggingEmitter
from .containers import HostContainer
from .core import (
    add_json_console_logging,
    add_observability,
    add_observability_from_config,
    configuration_from_environ,
    create_container,
    get_emitter,
    use_json_console_logging,
)
from .domain.config import ConfigurationSection
from .domain.context import UNKNOWN_SERVICE, ServiceContext, get_service_name
from .domain.errors import ArgumentMissing, BindingError, InvalidArgument, NotRegistered, ObservabilityError
from .observability import begin_scope, get_logger

__all__ = [
    "ArgumentMissing",
    "BindingError",
    "ConfigurationSection",
    "EmitterRegistry",
    "HostContainer",
    "InvalidArgument",
    "LoggingEmitter",
    "NotRegistered",
    "ObservabilityError",
    "ServiceContext",
    "UNKNOWN_SERVICE",
    "add_json_console_logging",
    "add_observability",
    "add_observability_from_config",
    "begin_scope",
    "configuration_from_environ",
    "create_container",
    "get_emitter",
    "get_logger",
    "get_service_name",
    "use_json_console_logging",
]
