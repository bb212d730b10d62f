from __future__ import annotations

import sys
import json
import logging
import pathlib
from typing import Any, Dict, NoReturn, Optional

import typer
import yaml
import structlog
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from .config import load_config, UsiConfig
from .checksum import ALPHABET, generate_check_character, normalize_spaces_dashes, upper_ascii, verify_key
from .errors import UsiError

console = Console()
err_console = Console(stderr=True)
log = structlog.get_logger()
app = typer.Typer(add_completion=False, no_args_is_help=True, help="usicheck — USI check character tool")

# Exit codes: 0 valid, 1 well-formed but invalid, 2 rejected input.
EXIT_INVALID = 1
EXIT_ERROR = 2


def version_callback(value: bool):
    if value:
        from . import __version__
        console.print(f"usicheck {__version__}")
        raise typer.Exit()


def _configure_logging(level: str) -> None:
    structlog.configure(
        processors=[structlog.processors.add_log_level, structlog.processors.JSONRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
    # Engine modules log through stdlib logging; render those as JSON too.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[structlog.stdlib.add_log_level, structlog.stdlib.add_logger_name],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
        )
    )
    engine_log = logging.getLogger("usicheck")
    engine_log.handlers = [handler]
    engine_log.setLevel(level)
    engine_log.propagate = False


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", help="Path to .usicheck.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, verbosity)."""
    try:
        cfg = load_config(config) if config else UsiConfig()
    except (OSError, yaml.YAMLError, ValidationError) as e:
        raise typer.BadParameter(str(e), param_hint="--config")
    _configure_logging("DEBUG" if verbose else cfg.logging.level)
    ctx.obj = {"config": cfg}
    if verbose:
        log.debug("verbose_enabled", config=str(config) if config else None)


def _config(ctx: typer.Context) -> UsiConfig:
    return ctx.obj["config"]


def _wants_json(flag: bool, cfg: UsiConfig) -> bool:
    return flag or cfg.output.format == "json"


def _emit_json(payload: Dict[str, Any]) -> None:
    typer.echo(json.dumps(payload))


def _fail(value: str, err: UsiError, as_json: bool) -> NoReturn:
    log.info("usi_error", input=value, error=str(err), kind=type(err).__name__)
    if as_json:
        _emit_json({"input": value, "error": str(err), "kind": type(err).__name__})
    else:
        err_console.print(f"[red]Error:[/red] {escape(str(err))}")
    raise typer.Exit(code=EXIT_ERROR)


@app.command()
def verify(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="10-character USI to check"),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON object instead of text"),
):
    """Check a USI against its own check character."""
    cfg = _config(ctx)
    as_json = _wants_json(as_json, cfg)
    if cfg.input.strip_separators:
        key = normalize_spaces_dashes(key)

    try:
        valid = verify_key(key)
    except UsiError as e:
        _fail(key, e, as_json)

    log.info("key_verified", key=key, valid=valid)
    if as_json:
        _emit_json({"key": key, "valid": valid})
    elif valid:
        console.print(f"[green]{escape(key)} is valid[/green]")
    else:
        console.print(f"[yellow]{escape(key)} is invalid[/yellow]")

    if not valid:
        raise typer.Exit(code=EXIT_INVALID)


@app.command()
def generate(
    ctx: typer.Context,
    prefix: str = typer.Argument(..., help="First 9 characters of a USI"),
    full: bool = typer.Option(False, "--full", help="Print the complete 10-character USI"),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON object instead of text"),
):
    """Compute the check character for a 9-character prefix."""
    cfg = _config(ctx)
    as_json = _wants_json(as_json, cfg)
    if cfg.input.strip_separators:
        prefix = normalize_spaces_dashes(prefix)
    if cfg.input.uppercase_prefix:
        prefix = upper_ascii(prefix)

    try:
        check = generate_check_character(prefix)
    except UsiError as e:
        _fail(prefix, e, as_json)

    log.info("check_character_generated", prefix=prefix, check=check)
    if as_json:
        _emit_json({"prefix": prefix, "check": check, "key": prefix + check})
    else:
        console.print(prefix + check if full else check)


@app.command()
def alphabet(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print a JSON array instead of text"),
):
    """Print the 32 characters a USI may contain, in codepoint order."""
    if _wants_json(as_json, _config(ctx)):
        _emit_json({"alphabet": list(ALPHABET), "size": len(ALPHABET)})
    else:
        console.print(ALPHABET)
