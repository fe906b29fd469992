"""CLI adapter for ``lib_observability_wiring`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators check a deployment's logging wiring without writing Python:
``emit`` builds a host container exactly like an application would, registers
observability, configures JSON console logging, and writes one event to
standard output.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_emit` – registers observability and emits a :class:`ConsoleEvent`.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer: it calls the composition root (:mod:`.core`) and never
touches adapters directly.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from importlib import metadata
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import (
    add_json_console_logging,
    add_observability,
    add_observability_from_config,
    configuration_from_environ,
    create_container,
    get_emitter,
    use_json_console_logging,
)
from .observability import begin_scope

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

LEVEL_CHOICES: Final[dict[str, int]] = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass
class ServiceSettings:
    """Settings section read from ``<PREFIX>_SERVICE_NAME``."""

    service_name: Optional[str] = None


@dataclass
class ConsoleEvent:
    """Payload emitted by ``emit``."""

    name: str
    fields: dict[str, Any] = field(default_factory=dict)


def _resolve_version() -> str:
    try:
        return metadata.version("lib_observability_wiring")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Observability wiring for dependency-injection containers",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_observability_wiring",
    message="lib_observability_wiring version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for ``lib_cli_exit_tools``.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_observability_wiring")
    except metadata.PackageNotFoundError:
        click.echo("lib_observability_wiring (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_observability_wiring')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("emit", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--service-name", default=None, help="Service name reported by every event")
@click.option(
    "--env-prefix",
    default=None,
    help="Read the service name from <PREFIX>_SERVICE_NAME instead of --service-name",
)
@click.option("--event", "event_name", default="console", show_default=True, help="Event name")
@click.option("--field", "fields", multiple=True, help="Payload field as key=value (repeatable)")
@click.option("--scope", "scopes", multiple=True, help="Logging scope entry as key=value (repeatable)")
@click.option(
    "--level",
    type=click.Choice(tuple(LEVEL_CHOICES), case_sensitive=False),
    default="info",
    show_default=True,
    help="Log level of the emitted event",
)
@click.option(
    "--exclusive/--additive",
    default=True,
    show_default=True,
    help="Replace the host's console output with JSON or add JSON alongside it",
)
def cli_emit(
    service_name: Optional[str],
    env_prefix: Optional[str],
    event_name: str,
    fields: Sequence[str],
    scopes: Sequence[str],
    level: str,
    exclusive: bool,
) -> None:
    """Register observability, configure JSON console logging, and emit one event.

    ``--exclusive`` (default) leaves JSON as the only console output;
    ``--additive`` keeps the host's plain console line as well.
    """

    if service_name is not None and env_prefix is not None:
        raise click.BadParameter("use either --service-name or --env-prefix", param_hint="--env-prefix")

    payload = _parse_pairs(fields, "--field")
    scope_state = _parse_pairs(scopes, "--scope")

    container = create_container()
    if env_prefix is not None:
        add_observability_from_config(
            container,
            configuration_from_environ(env_prefix),
            _select_service_name,
            settings_type=ServiceSettings,
        )
    else:
        add_observability(container, service_name)
    if exclusive:
        use_json_console_logging(container)
    else:
        add_json_console_logging(container)

    emitter = get_emitter(container, ConsoleEvent)
    with begin_scope(**scope_state):
        emitter.emit(ConsoleEvent(name=event_name, fields=payload), level=LEVEL_CHOICES[level.lower()])


def _select_service_name(settings: Optional[ServiceSettings]) -> Optional[str]:
    return settings.service_name if settings is not None else None


def _parse_pairs(values: Sequence[str], param_hint: str) -> dict[str, str]:
    """Split ``key=value`` options; keys must be non-empty.

    >>> _parse_pairs(["region=eu", "tier=gold=1"], "--field")
    {'region': 'eu', 'tier': 'gold=1'}
    """

    parsed: dict[str, str] = {}
    for value in values:
        key, separator, item = value.partition("=")
        if not separator or not key.strip():
            raise click.BadParameter(f"expected key=value, got {value!r}", param_hint=param_hint)
        parsed[key.strip()] = item
    return parsed


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_observability_wiring",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
