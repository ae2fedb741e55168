"""
Main CLI entry point for lognorm.
"""

import logging
from ipaddress import ip_address

import click
from rich.console import Console
from rich.logging import RichHandler

from lognorm import __version__
from lognorm.config import settings

console = Console()
error_console = Console(stderr=True)


def _configure_logging(verbose: int) -> None:
    """Send library log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.INFO if verbose == 1 else logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def _parse_origin(ctx: click.Context, param: click.Parameter, value: str | None):
    if value is None:
        return None
    try:
        return ip_address(value)
    except ValueError:
        raise click.BadParameter(f"{value!r} is not an IP address") from None


@click.group()
@click.version_option(version=__version__, prog_name="lognorm")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--verbose", "-v", count=True, help="Log parser activity (-v info, -vv debug)")
@click.pass_context
def cli(ctx: click.Context, quiet: bool, verbose: int) -> None:
    """
    lognorm - Network appliance log normalizer

    Turn MySQL general log and PulseSecure VPN lines into structured
    SIEM records.

    Examples:

    \b
        lognorm parse pulse.log
        lognorm parse --format mysql_general --output json general.log
        cat pulse.log | lognorm parse --origin 10.0.0.111
        lognorm fields 'user=alice realm="Users"'
        lognorm formats
    """
    if verbose:
        _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = console
    ctx.obj["error_console"] = error_console


@cli.command()
@click.argument("files", nargs=-1, type=click.Path(exists=True, allow_dash=True))
@click.option(
    "--format", "-f", "log_format",
    help="Only try this format's parser"
)
@click.option(
    "--origin", callback=_parse_origin,
    help="IP address of the device that sent the lines"
)
@click.option(
    "--output", "-o", "output_format",
    type=click.Choice(["table", "json", "csv", "compact"]),
    default=None,
    help="Output format (default: table, or LOGNORM_DEFAULT_OUTPUT)"
)
@click.option(
    "--errors/--no-errors", "show_errors", default=False,
    help="List lines that matched a format but held corrupt fields"
)
@click.pass_context
def parse(
    ctx: click.Context,
    files: tuple[str, ...],
    log_format: str | None,
    origin,
    output_format: str | None,
    show_errors: bool,
) -> None:
    """
    Parse log files and display normalized records.

    Reads standard input when no file is given.

    Examples:

    \b
        lognorm parse pulse.log
        lognorm parse --output json --errors general.log
    """
    from lognorm.cli.commands import parse_command

    exit_code = parse_command(
        files=files,
        log_format=log_format,
        origin=origin,
        output_format=output_format or settings.default_output,
        show_errors=show_errors,
        quiet=ctx.obj.get("quiet", False),
        console=ctx.obj["console"],
        error_console=ctx.obj["error_console"],
    )
    ctx.exit(exit_code)


@cli.command()
@click.argument("text")
def fields(text: str) -> None:
    """
    Show how a key=value line is tokenized.

    Examples:

    \b
        lognorm fields 'id=firewall ivs=Default Network msg="AUT22673: Logout"'
    """
    from lognorm.cli.output import render_fields
    from lognorm.parsers.tokenizer import extract_fields

    render_fields(extract_fields(text), console)


@cli.command()
def formats() -> None:
    """
    List the parsers in the order lines are offered to them.

    Any name in the Formats column is accepted by --format.
    """
    from rich.table import Table
    from lognorm.parsers import registry

    table = Table(title="Supported Log Formats")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Parser", style="cyan")
    table.add_column("Formats", style="green")

    for position, parser_name in enumerate(registry.list_parsers(), 1):
        parser_class = registry.get_parser_class(parser_name)
        table.add_row(str(position), parser_name, ", ".join(parser_class.supported_formats))

    console.print(table)


if __name__ == "__main__":
    cli()
