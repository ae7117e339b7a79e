"""config command group and shared config loading."""

from __future__ import annotations

from pathlib import Path

import typer
import yaml
from pydantic import ValidationError

from txguard.core.config import TxGuardConfig

from ..output import console

config_app = typer.Typer(name="config", help="Inspect txguard configuration")


def load_config(path: Path) -> TxGuardConfig:
    """Load a YAML config, printing the problem and exiting 1 when invalid."""
    try:
        return TxGuardConfig.from_yaml(path)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {path}")
        for err in e.errors():
            location = ".".join(str(part) for part in err["loc"])
            console.print(f"  [red]{location}[/red]: {err['msg']}")
        raise typer.Exit(1) from None
    except yaml.YAMLError as e:
        console.print(f"[red]Could not parse YAML:[/red] {e}")
        raise typer.Exit(1) from None


@config_app.command("show")
def show(
    ctx: typer.Context,
    path: Path | None = typer.Argument(
        None,
        exists=True,
        dir_okay=False,
        help="YAML config file (defaults to --config, then built-in defaults)",
    ),
) -> None:
    """Validate a configuration file and print the effective settings."""
    if path is not None:
        config = load_config(path)
    else:
        config = ctx.obj if isinstance(ctx.obj, TxGuardConfig) else TxGuardConfig()

    console.print(yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False), end="")
