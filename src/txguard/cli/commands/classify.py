"""classify and retry-policy commands."""

from __future__ import annotations

import json
from enum import Enum

import typer

from txguard.core.config import TxGuardConfig
from txguard.core.errors import (
    ContractRevertError,
    ErrorClassifier,
    ErrorKind,
    TransportError,
)

from ..output import console, parsed_error_panel, retry_policy_table


class InputField(str, Enum):
    """Which shape the classified text is presented in."""

    STRING = "string"
    MESSAGE = "message"
    DETAILS = "details"
    SHORT_MESSAGE = "short-message"


def _build_raw(text: str, field: InputField, revert_reason: str | None) -> object:
    if revert_reason is not None:
        return ContractRevertError(text or "Execution reverted.", reason=revert_reason)
    if field is InputField.MESSAGE:
        return Exception(text)
    if field is InputField.DETAILS:
        return {"details": text}
    if field is InputField.SHORT_MESSAGE:
        return TransportError(short_message=text)
    return text


def classify_command(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Failure text to classify"),
    field: InputField = typer.Option(
        InputField.STRING,
        "--field",
        "-f",
        help="Present the text as a bare string, exception message, details or short message",
    ),
    revert_reason: str | None = typer.Option(
        None,
        "--revert-reason",
        "-r",
        help="Treat the failure as a contract revert with this reason code",
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Classify a failure and show its retry policy."""
    classifier = (
        ErrorClassifier.from_config(ctx.obj)
        if isinstance(ctx.obj, TxGuardConfig)
        else ErrorClassifier()
    )
    parsed = classifier.classify(_build_raw(text, field, revert_reason))

    if json_output:
        policy = parsed.retry_policy
        payload = {
            **parsed.to_dict(),
            "retry": {
                "should_retry": policy.should_retry,
                "retry_delay_ms": policy.retry_delay_ms,
                "max_retries": policy.max_retries,
            },
        }
        console.print_json(json.dumps(payload))
        return

    console.print(parsed_error_panel(parsed))


def retry_policy_command(
    kind: str | None = typer.Argument(None, help="Error kind (e.g. network_error)"),
) -> None:
    """Show the retry policy for one error kind, or for all of them."""
    if kind is None:
        console.print(retry_policy_table(list(ErrorKind)))
        return

    try:
        resolved = ErrorKind.parse(kind)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        console.print(f"Valid kinds: {', '.join(k.value for k in ErrorKind)}")
        raise typer.Exit(1) from None

    console.print(retry_policy_table([resolved]))
