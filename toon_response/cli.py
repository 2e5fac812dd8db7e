"""Command-line inspector for Toon API response envelopes, built with Typer."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import typer

from toon_response.config.settings import HandlerSettings
from toon_response.errors import EmptyResponseError, MalformedPayloadError, ToonError
from toon_response.handler import ResponseHandler
from toon_response.integration.transport import from_transport_result
from toon_response.logging_config import configure_logging

logger = logging.getLogger(__name__)

SUCCESS_EXIT_CODE = 0
DECODE_ERROR_EXIT_CODE = 2
INVALID_RESPONSE_EXIT_CODE = 3


@dataclass(frozen=True)
class CliConfig:
    """Global CLI options shared by all commands."""

    settings: HandlerSettings
    as_json: bool


def _emit_error(exc: ToonError, as_json: bool) -> None:
    """Render a handling error to stderr."""
    if as_json:
        typer.echo(
            json.dumps(
                {"error": str(exc), "code": exc.code.value, "context": exc.context},
                default=str,
                sort_keys=True,
            ),
            err=True,
        )
        return
    typer.echo(f"error: {exc}", err=True)


def _exit_code_for(exc: ToonError) -> int:
    if isinstance(exc, (EmptyResponseError, MalformedPayloadError)):
        return DECODE_ERROR_EXIT_CODE
    return INVALID_RESPONSE_EXIT_CODE


def _render_human(summary: dict[str, Any]) -> str:
    """Return a human-oriented multi-line rendering of a handler summary."""
    lines = [summary["describe"]]
    if summary["request_id"]:
        lines.append(f"  Request ID:  {summary['request_id']}")
    if summary["api_version"]:
        lines.append(f"  API Version: {summary['api_version']}")
    if summary["timestamp"]:
        lines.append(f"  Timestamp:   {summary['timestamp']}")
    if summary["error_string"]:
        lines.append(f"  Error:       {summary['error_string']}")
    lines.append(f"  Rate limit:  {summary['rate_limit_status']}")
    if summary["rate_limit"] and summary["rate_limit"]["is_rate_limited"]:
        lines.append("  Rate limited!")
    lines.append(f"  Data size:   {summary['data_size']} bytes")
    return "\n".join(lines)


def _load_handler(
    cfg: CliConfig,
    source: typer.FileBinaryRead,
    status_code: int | None,
) -> ResponseHandler:
    if status_code is not None:
        return from_transport_result(status_code, source, settings=cfg.settings)
    return ResponseHandler.from_bytes(source.read())


def _require_config(ctx: typer.Context) -> CliConfig:
    """Return required CLI config from Typer context."""
    config = ctx.obj
    if not isinstance(config, CliConfig):
        raise RuntimeError("CLI configuration not initialized")
    return config


app = typer.Typer(no_args_is_help=True, help="Toon API response envelope inspector")


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str | None = typer.Option(
        None, help="Log level (defaults to TOON_LOG_LEVEL or INFO)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON output"),
) -> None:
    """Store global options for all commands."""
    settings = HandlerSettings()
    configure_logging(log_level or settings.log_level, json_output=settings.log_json)
    ctx.obj = CliConfig(settings=settings, as_json=as_json)


@app.command("inspect")
def inspect_command(
    ctx: typer.Context,
    source: typer.FileBinaryRead = typer.Argument(
        "-", help="Envelope file path, or '-' for stdin"
    ),
    status_code: int | None = typer.Option(
        None, "--status-code", min=100, max=599, help="HTTP status to cross-check"
    ),
    run_validation: bool = typer.Option(
        False, "--validate", help="Run structural validation"
    ),
) -> None:
    """Decode an envelope and print a summary."""
    cfg = _require_config(ctx)
    try:
        handler = _load_handler(cfg, source, status_code)
        if run_validation:
            handler.validate()
    except ToonError as exc:
        logger.debug("Inspect failed", extra={"error_code": exc.code.value})
        _emit_error(exc, cfg.as_json)
        raise typer.Exit(code=_exit_code_for(exc)) from exc

    summary = handler.to_dict()
    summary["describe"] = handler.describe()
    if cfg.as_json:
        typer.echo(json.dumps(summary, sort_keys=True, separators=(",", ":")))
    else:
        typer.echo(_render_human(summary))
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


@app.command("payload")
def payload_command(
    ctx: typer.Context,
    source: typer.FileBinaryRead = typer.Argument(
        "-", help="Envelope file path, or '-' for stdin"
    ),
) -> None:
    """Print the envelope's raw payload JSON."""
    cfg = _require_config(ctx)
    try:
        handler = ResponseHandler.from_bytes(source.read())
    except ToonError as exc:
        _emit_error(exc, cfg.as_json)
        raise typer.Exit(code=_exit_code_for(exc)) from exc

    payload = handler.raw_payload()
    if payload is None:
        typer.echo("null")
    else:
        typer.echo(payload.decode("utf-8"))
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


if __name__ == "__main__":  # pragma: no cover
    app()
