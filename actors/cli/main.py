"""ycsb-tracer CLI actor implemented with Typer."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from packages.tracer_shared.config import (
    TracerSettings,
    load_settings,
    params_from_properties,
)
from packages.tracer_shared.errors import ErrorDetail
from packages.tracer_shared.logging import configure_logging
from services.state.trace_recorder import build_trace_session, replay_lines

SUCCESS_EXIT_CODE = 0
CONFIG_ERROR_EXIT_CODE = 2
REJECTED_OPERATIONS_EXIT_CODE = 3
SINK_FAILURE_EXIT_CODE = 4


@dataclass(frozen=True)
class CliConfig:
    """Global CLI options layered over file and environment settings."""

    config_path: Path | None
    trace_file: Path | None
    mock_values: bool | None
    log_level: str | None
    json_logs: bool | None
    as_json: bool
    properties: tuple[tuple[str, str], ...] = ()


def _cli_params(cfg: CliConfig) -> dict[str, Any]:
    """Return nested settings params for options given on the command line.

    Harness properties form the base; dedicated options override them.
    """
    params = params_from_properties(dict(cfg.properties))
    if cfg.trace_file is not None:
        params.setdefault("trace", {})["file"] = str(cfg.trace_file)
    if cfg.mock_values is not None:
        params.setdefault("trace", {})["mock_values"] = cfg.mock_values
    if cfg.log_level is not None:
        params.setdefault("logging", {})["level"] = cfg.log_level.upper()
    if cfg.json_logs is not None:
        params.setdefault("logging", {})["json_output"] = cfg.json_logs
    return params


def _load(cfg: CliConfig) -> TracerSettings:
    """Resolve settings or exit with a configuration error."""
    try:
        return load_settings(cli_params=_cli_params(cfg), config_path=cfg.config_path)
    except ValidationError as exc:
        issue = exc.errors()[0]
        location = ".".join(str(item) for item in issue.get("loc", ()))
        _emit_error(f"{location or 'settings'}: {issue.get('msg')}", cfg.as_json)
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE) from exc


def _emit_error(message: str, as_json: bool) -> None:
    """Render one error to stderr."""
    if as_json:
        typer.echo(json.dumps({"error": message}), err=True)
        return
    typer.echo(f"error: {message}", err=True)


def _emit_details(errors: list[ErrorDetail], as_json: bool) -> None:
    for error in errors:
        _emit_error(f"{error.code}: {error.message}", as_json)


def _parse_properties(raw: list[str] | None) -> tuple[tuple[str, str], ...]:
    pairs: list[tuple[str, str]] = []
    for item in raw or ():
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(
                f"expected key=value, got {item!r}", param_hint="--property"
            )
        pairs.append((name.strip(), value))
    return tuple(pairs)


def _require_config(ctx: typer.Context) -> CliConfig:
    """Return required CLI config from Typer context."""
    config = ctx.obj
    if not isinstance(config, CliConfig):
        raise RuntimeError("CLI configuration not initialized")
    return config


app = typer.Typer(no_args_is_help=True, help="YCSB workload trace recorder")


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", envvar="TRACER_CONFIG", help="YAML settings file"
    ),
    trace_file: Path | None = typer.Option(
        None, "--trace-file", help="Trace output file (appended)"
    ),
    mock_values: bool | None = typer.Option(
        None,
        "--mock-values/--no-mock-values",
        help="Replace record values with a fixed placeholder",
    ),
    log_level: str | None = typer.Option(None, help="Log level"),
    json_logs: bool | None = typer.Option(
        None, "--json-logs/--plain-logs", help="Log output format"
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON output"),
    properties: list[str] | None = typer.Option(
        None,
        "--property",
        "-p",
        help="Harness property as key=value (e.g. usercount=10); repeatable",
    ),
) -> None:
    """Store global options for all commands."""
    ctx.obj = CliConfig(
        config_path=config,
        trace_file=trace_file,
        mock_values=mock_values,
        log_level=log_level,
        json_logs=json_logs,
        as_json=as_json,
        properties=_parse_properties(properties),
    )


@app.command("replay")
def replay_command(
    ctx: typer.Context,
    ops_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON-lines file of harness operations",
    ),
) -> None:
    """Trace every operation recorded in OPS_FILE."""
    cfg = _require_config(ctx)
    settings = _load(cfg)
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=settings.logging.service,
        environment=settings.logging.environment,
    )

    session = build_trace_session(settings=settings)
    with ops_file.open("r", encoding="utf-8") as handle, session as client:
        report = replay_lines(client, handle)
    failures = session.failures

    summary = {
        "applied": report.applied,
        "rejected": len(report.rejected),
        "skipped": report.skipped,
        "sink_failures": len(failures),
        "trace_file": str(settings.trace.file),
    }
    if cfg.as_json:
        typer.echo(json.dumps(summary, sort_keys=True, separators=(",", ":")))
    else:
        typer.echo(
            f"traced {report.applied} operations to {settings.trace.file}"
            f" (rejected {len(report.rejected)}, skipped {report.skipped})"
        )

    _emit_details(report.rejected, cfg.as_json)
    _emit_details(failures, cfg.as_json)
    if failures:
        raise typer.Exit(code=SINK_FAILURE_EXIT_CODE)
    if report.rejected:
        raise typer.Exit(code=REJECTED_OPERATIONS_EXIT_CODE)
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


@app.command("settings")
def settings_command(ctx: typer.Context) -> None:
    """Print the resolved settings."""
    cfg = _require_config(ctx)
    settings = _load(cfg)
    typer.echo(json.dumps(settings.model_dump(mode="json"), indent=2, sort_keys=True))


if __name__ == "__main__":
    app()
