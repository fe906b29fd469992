"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by the registrar, the logging configurator,
the configuration binder, and consuming applications. All failures are
startup-time programming errors, raised synchronously to the caller.

Contents
--------
* :class:`ObservabilityError` – umbrella base class for all library errors.
* :class:`InvalidArgument` – an argument carries an unusable value or type.
* :class:`ArgumentMissing` – a required argument is ``None``.
* :class:`BindingError` – a configuration section cannot be bound to a
  settings type.
* :class:`NotRegistered` – an emitter was requested from a container that
  never received the observability registration.

System Role
-----------
``InvalidArgument`` derives from :class:`ValueError` and ``NotRegistered`` from
:class:`LookupError` so callers that only know the builtin families keep
working. Callers catch :class:`ObservabilityError` to handle every library
failure uniformly.
"""

from __future__ import annotations


class ObservabilityError(Exception):
    """Base type for all exceptions emitted by ``lib_observability_wiring``."""


class InvalidArgument(ObservabilityError, ValueError):
    """Raised when an argument is present but cannot be used.

    Typical Sources
    ---------------
    A service name that is not a string, a payload that does not match the
    emitter's payload type, or a configuration source that is not a mapping.
    """


class ArgumentMissing(InvalidArgument):
    """Raised when a required argument is ``None``.

    Attributes
    ----------
    argument:
        Name of the parameter that was missing.

    Examples
    --------
    >>> error = ArgumentMissing("container")
    >>> error.argument
    'container'
    >>> str(error)
    'container must not be None'
    """

    def __init__(self, argument: str) -> None:
        super().__init__(f"{argument} must not be None")
        self.argument = argument


class BindingError(ObservabilityError):
    """Signals that a configuration section could not populate a settings type."""


class NotRegistered(ObservabilityError, LookupError):
    """Raised when emitters are requested before :func:`add_observability` ran."""
