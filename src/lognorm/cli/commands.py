"""
CLI command implementations.

Wires line sources to the parser registry and the output formatters.
"""

import sys
import time
from dataclasses import dataclass, field
from ipaddress import IPv4Address, IPv6Address

from rich.console import Console
from rich.markup import escape

from lognorm.config import resolve_timezone, settings
from lognorm.core.exceptions import ConfigurationError, NoMatchingParser, ParserError
from lognorm.core.models import SiemLog
from lognorm.core.security import LineTooLongError
from lognorm.parsers import registry
from lognorm.sources import create_source
from lognorm.cli.output import render_records

__all__ = ["ParseStats", "parse_command"]


@dataclass
class ParseStats:
    """Per-run counters reported after parsing."""
    lines: int = 0
    parsed: int = 0
    unmatched: int = 0
    errors: list[str] = field(default_factory=list)


def normalize_lines(
    lines,
    log_format: str | None,
    origin: IPv4Address | IPv6Address | None,
    stats: ParseStats,
    source_name: str,
) -> list[SiemLog]:
    """Run every non-blank line through the registry, counting outcomes."""
    records = []
    for line_number, line in enumerate(lines, 1):
        if not line.strip():
            continue
        stats.lines += 1
        log = SiemLog(message=line, date=time.time_ns() // 1_000_000, origin=origin)
        try:
            records.append(registry.parse(log, format_name=log_format))
            stats.parsed += 1
        except NoMatchingParser:
            stats.unmatched += 1
        except (ParserError, LineTooLongError) as e:
            stats.errors.append(f"{source_name}:{line_number}: {e.message}")
    return records


def parse_command(
    files: tuple[str, ...],
    log_format: str | None,
    origin: IPv4Address | IPv6Address | None,
    output_format: str,
    show_errors: bool,
    quiet: bool,
    console: Console,
    error_console: Console,
) -> int:
    """
    Execute the parse command.

    Returns:
        Exit code (0 = success, 1 = error)
    """
    if log_format is not None and registry.get_parser_class(log_format) is None:
        error_console.print(f"[red]Error:[/red] Unknown format: {escape(log_format)}")
        return 1

    try:
        resolve_timezone(settings.pulse_timezone)
    except ConfigurationError as e:
        error_console.print(f"[red]Configuration error:[/red] {escape(e.message)}")
        return 1

    if not files:
        if sys.stdin.isatty():
            error_console.print("[red]Error:[/red] No files specified")
            return 1
        files = ("-",)

    stats = ParseStats()
    all_records: list[SiemLog] = []

    for file_path in files:
        try:
            source = create_source(file_path)
            all_records.extend(
                normalize_lines(source.read_lines(), log_format, origin, stats, source.name)
            )
        except OSError as e:
            error_console.print(f"[red]Error reading {escape(file_path)}:[/red] {escape(str(e))}")
            return 1
        except ConfigurationError as e:
            error_console.print(f"[red]Configuration error:[/red] {escape(e.message)}")
            return 1

    render_records(all_records, output_format, console)

    if show_errors:
        for message in stats.errors:
            error_console.print(f"[yellow]{escape(message)}[/yellow]")

    if not quiet:
        error_console.print(
            f"[dim]{stats.lines} lines: {stats.parsed} parsed, "
            f"{stats.unmatched} unmatched, {len(stats.errors)} errors[/dim]"
        )

    return 0
