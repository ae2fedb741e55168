"""
Output formatters for CLI.
"""

import csv
import json
from datetime import datetime, timezone
from io import StringIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lognorm.core.models import LoginOutcome, SiemLog
from lognorm.core.security import sanitize_csv_cell

__all__ = [
    "render_records",
    "render_table",
    "render_json",
    "render_csv",
    "render_compact",
    "render_fields",
]


# Outcome color mapping for Rich
OUTCOME_STYLES = {
    LoginOutcome.SUCCESS: "green",
    LoginOutcome.ESTABLISH: "cyan",
    LoginOutcome.FAIL: "red",
    LoginOutcome.LOCKOUT: "red bold",
}


def format_millis(value: int | None, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    """Format epoch milliseconds as UTC, or a placeholder."""
    if value is None:
        return "-"
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc).strftime(fmt)


def _user(record: SiemLog) -> str:
    if record.event is not None and record.event.login_type.user_name:
        return record.event.login_type.user_name
    return str(record.get_field("user.name") or "-")


def _source(record: SiemLog) -> str:
    for name in ("source.ip", "source.address", "source.domain"):
        value = record.get_field(name)
        if value is not None:
            return str(value)
    return "-"


def _event_label(record: SiemLog) -> str:
    code = record.get_field("event.code")
    dataset = record.get_field("event.dataset") or ""
    if code is not None:
        return f"{dataset}{code}"
    return str(dataset) or "-"


def render_records(
    records: list[SiemLog],
    output_format: str,
    console: Console,
) -> None:
    """
    Render records in the specified format.

    Args:
        records: Normalized records to render
        output_format: One of "table", "json", "csv", "compact"
        console: Rich Console for output
    """
    match output_format:
        case "table":
            render_table(records, console)
        case "json":
            render_json(records, console)
        case "csv":
            render_csv(records, console)
        case "compact":
            render_compact(records, console)
        case _:
            render_table(records, console)


def render_table(records: list[SiemLog], console: Console) -> None:
    """Render records as a Rich table."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Created", style="dim", width=20)
    table.add_column("Service", width=12)
    table.add_column("Event", width=12)
    table.add_column("Outcome", width=10)
    table.add_column("User", width=16)
    table.add_column("Source", overflow="fold")

    for record in records:
        if record.event is not None:
            style = OUTCOME_STYLES.get(record.event.outcome, "white")
            outcome = f"[{style}]{record.event.outcome.value}[/{style}]"
        else:
            outcome = "-"

        table.add_row(
            format_millis(record.event_created),
            record.service or "-",
            _event_label(record),
            outcome,
            escape(_user(record)),
            escape(_source(record)),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(records)} records[/dim]")


def render_json(records: list[SiemLog], console: Console) -> None:
    """Render records as JSON."""
    output = [record.to_dict() for record in records]
    json_str = json.dumps(output, indent=2, default=str)
    console.print(json_str, highlight=False, markup=False, soft_wrap=True)


def render_csv(records: list[SiemLog], console: Console) -> None:
    """Render records as CSV."""
    fieldnames = [
        "event_created",
        "service",
        "category",
        "event",
        "outcome",
        "user",
        "source",
        "message",
    ]

    output = StringIO()
    writer = csv.DictWriter(output, fieldnames=fieldnames)
    writer.writeheader()

    for record in records:
        row = {
            "event_created": format_millis(record.event_created, "%Y-%m-%dT%H:%M:%SZ"),
            "service": record.service,
            "category": record.category,
            "event": _event_label(record),
            "outcome": record.event.outcome.value if record.event else "",
            "user": _user(record),
            "source": _source(record),
            "message": record.message,
        }
        writer.writerow({key: sanitize_csv_cell(value) for key, value in row.items()})

    console.print(output.getvalue(), end="", highlight=False, markup=False, soft_wrap=True)


def render_compact(records: list[SiemLog], console: Console) -> None:
    """Render records in compact single-line format."""
    for record in records:
        ts = format_millis(record.event_created, "%H:%M:%S")
        service = escape(f"[{record.service}] ") if record.service else ""
        outcome = f" {record.event.outcome.value}" if record.event else ""
        console.print(
            f"[dim]{ts}[/dim] {service}{_event_label(record)}{outcome} "
            f"user={escape(_user(record))} src={escape(_source(record))}",
            highlight=False,
        )


def render_fields(fields: dict[str, str], console: Console) -> None:
    """Render a tokenized field map."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Key", style="cyan")
    table.add_column("Value", overflow="fold")

    for key, value in fields.items():
        table.add_row(escape(key), escape(value))

    console.print(table)
