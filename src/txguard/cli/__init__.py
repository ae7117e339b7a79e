"""txguard CLI.

Built with Typer; command logic lives in ``commands/`` and Rich formatting
in ``output.py``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from txguard import __version__
from txguard.core.config import LogConfig
from txguard.core.logging import configure_logging_from

from .commands import classify_command, config_app, load_config, retry_policy_command
from .output import console

app = typer.Typer(
    name="txguard",
    help="Classify wallet transaction failures and inspect retry policies",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"txguard v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            exists=True,
            dir_okay=False,
            help="YAML config file; its logging section configures logging",
            envvar="TXGUARD_CONFIG",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            "-L",
            help="Logging level (DEBUG, INFO, WARNING, ERROR); overrides the config file",
            envvar="TXGUARD_LOG_LEVEL",
        ),
    ] = None,
    log_format: Annotated[
        str | None,
        typer.Option(
            "--log-format",
            help="Log format: json or console; overrides the config file",
            envvar="TXGUARD_LOG_FORMAT",
        ),
    ] = None,
) -> None:
    """txguard - wallet error classification and alert tooling."""
    overrides: dict[str, str] = {}
    if log_level is not None:
        level = log_level.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            console.print(f"[red]Invalid log level:[/red] {log_level}")
            raise typer.Exit(1)
        overrides["level"] = level
    if log_format is not None:
        if log_format not in ("json", "console"):
            console.print(f"[red]Invalid log format:[/red] {log_format}")
            raise typer.Exit(1)
        overrides["format"] = log_format

    if config_path is not None:
        config = load_config(config_path)
        ctx.obj = config
        log_config = config.logging
    else:
        # Without a config file the CLI stays quiet unless asked
        log_config = LogConfig(level="WARNING")

    configure_logging_from(log_config.model_copy(update=overrides))


app.command(name="classify")(classify_command)
app.command(name="retry-policy")(retry_policy_command)
app.add_typer(config_app)

__all__ = ["app", "main"]
