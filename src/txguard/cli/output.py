"""Rich output formatting for the txguard CLI."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from txguard.core.errors import ErrorKind, ParsedError, RetryPolicy, get_retry_strategy

# Shared console; commands print through this instance
console = Console()

KIND_COLORS: dict[ErrorKind, str] = {
    ErrorKind.USER_REJECTED: "yellow",
    ErrorKind.INSUFFICIENT_FUNDS: "red",
    ErrorKind.INSUFFICIENT_LIQUIDITY: "red",
    ErrorKind.INVALID_AMOUNT: "red",
    ErrorKind.NETWORK_ERROR: "blue",
    ErrorKind.CONTRACT_ERROR: "magenta",
    ErrorKind.WALLET_NOT_CONNECTED: "yellow",
    ErrorKind.UNKNOWN: "dim",
}


def format_policy(policy: RetryPolicy) -> str:
    if not policy.should_retry:
        return "no retry"
    return f"retry up to {policy.max_retries}x every {policy.retry_delay_ms}ms"


def parsed_error_panel(parsed: ParsedError) -> Panel:
    color = KIND_COLORS.get(parsed.kind, "white")
    lines = [
        f"[bold]Kind:[/bold] [{color}]{parsed.kind.value}[/{color}]",
        f"[bold]Message:[/bold] {parsed.message}",
    ]
    if parsed.suggestion:
        lines.append(f"[bold]Suggestion:[/bold] {parsed.suggestion}")
    if parsed.action:
        lines.append(f"[bold]Action:[/bold] {parsed.action.label}")
    lines.append(f"[bold]Retry:[/bold] {format_policy(parsed.retry_policy)}")
    return Panel("\n".join(lines), title=parsed.title, border_style=color)


def retry_policy_table(kinds: list[ErrorKind]) -> Table:
    table = Table(title="Retry Policies")
    table.add_column("Kind", style="cyan")
    table.add_column("Retry")
    table.add_column("Delay (ms)", justify="right")
    table.add_column("Max retries", justify="right")
    for kind in kinds:
        policy = get_retry_strategy(kind)
        table.add_row(
            kind.value,
            "[green]yes[/green]" if policy.should_retry else "[red]no[/red]",
            str(policy.retry_delay_ms) if policy.should_retry else "-",
            str(policy.max_retries) if policy.should_retry else "-",
        )
    return table
