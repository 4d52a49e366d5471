"""
Main CLI entry point for stream2lines.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from stream2lines import __version__
from stream2lines.core.limits import DEFAULT_MAX_LINE_LENGTH
from stream2lines.domain.eol import encodings as list_encodings

console = Console()
error_console = Console(stderr=True)


def _reader_options(func):
    """Options shared by the commands that read a source."""
    func = click.option(
        "--max-line-length", "-m", type=click.IntRange(min=0),
        default=DEFAULT_MAX_LINE_LENGTH, show_default=True,
        help="Longest accepted line; 0 for unlimited"
    )(func)
    func = click.option(
        "--eol", "-e",
        help="EOL dialect or alias (crlf, lf, basic, 7bit, iso8859, all, dos, unix...)"
    )(func)
    func = click.option(
        "--encoding", "-E",
        type=click.Choice(list_encodings(), case_sensitive=False),
        default="utf8", show_default=True,
        help="Encoding of the input"
    )(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="stream2lines")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--verbose", "-v", is_flag=True, help="Log reader internals to stderr")
@click.pass_context
def cli(ctx: click.Context, quiet: bool, verbose: bool) -> None:
    """
    stream2lines - split byte streams into lines

    Reads a file or standard input chunk by chunk and splits it into
    lines according to an encoding-aware EOL dialect.

    Examples:

    \b
        stream2lines split access.log
        stream2lines split --eol crlf --output json mail.eml
        cat data.txt | stream2lines count -
        stream2lines encodings
    """
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = console
    ctx.obj["error_console"] = error_console

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s",
            handlers=[RichHandler(console=error_console, show_path=False)],
        )


@cli.command()
@click.argument("file", type=click.Path(allow_dash=True), default="-")
@_reader_options
@click.option(
    "--output", "-o", "output_format",
    type=click.Choice(["plain", "json", "table"]),
    default="plain",
    help="Output format (default: plain)"
)
@click.option("--number", "-n", is_flag=True, help="Prefix lines with their number")
@click.pass_context
def split(
    ctx: click.Context,
    file: str,
    encoding: str,
    eol: str | None,
    max_line_length: int,
    output_format: str,
    number: bool,
) -> None:
    """
    Print the lines of FILE (or stdin with "-").

    Examples:

    \b
        stream2lines split app.log
        stream2lines split --encoding latin1 --eol iso8859 legacy.txt
        stream2lines split --max-line-length 0 --output table dump.txt
    """
    from stream2lines.cli.commands import split_command

    exit_code = split_command(
        file_path=file,
        encoding=encoding.lower(),
        eol=eol,
        max_line_length=max_line_length,
        output_format=output_format,
        number=number,
        quiet=ctx.obj.get("quiet", False),
        console=ctx.obj["console"],
        error_console=ctx.obj["error_console"],
    )
    ctx.exit(exit_code)


@cli.command()
@click.argument("file", type=click.Path(allow_dash=True), default="-")
@_reader_options
@click.pass_context
def count(
    ctx: click.Context,
    file: str,
    encoding: str,
    eol: str | None,
    max_line_length: int,
) -> None:
    """
    Count the lines of FILE (or stdin with "-").
    """
    from stream2lines.cli.commands import count_command

    exit_code = count_command(
        file_path=file,
        encoding=encoding.lower(),
        eol=eol,
        max_line_length=max_line_length,
        console=ctx.obj["console"],
        error_console=ctx.obj["error_console"],
    )
    ctx.exit(exit_code)


@cli.command()
@click.pass_context
def encodings(ctx: click.Context) -> None:
    """
    List supported encodings and the EOL dialects each one allows.
    """
    from rich.table import Table
    from stream2lines.domain.eol import (
        default_eol_match,
        encoding_match_level,
        eol_matches,
        parse_encoding,
    )

    table = Table(title="Supported Encodings")
    table.add_column("Encoding", style="cyan")
    table.add_column("Level", justify="right")
    table.add_column("Default", style="green")
    table.add_column("EOL dialects")

    for name in list_encodings():
        family = parse_encoding(name)
        table.add_row(
            name,
            str(encoding_match_level(family)),
            default_eol_match(family).value,
            ", ".join(eol_matches(family)),
        )

    ctx.obj["console"].print(table)


if __name__ == "__main__":
    cli()
