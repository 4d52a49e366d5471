"""
Output formatters for CLI.
"""

import json

import click
from rich.console import Console
from rich.table import Table

__all__ = ["render_lines", "render_table", "render_json", "render_plain"]


NumberedLine = tuple[int, str]


def render_lines(
    lines: list[NumberedLine],
    output_format: str,
    console: Console,
    number: bool = False,
    title: str | None = None,
) -> None:
    """
    Render lines in the specified format.

    Args:
        lines: (line_number, text) pairs
        output_format: One of "plain", "json", "table"
        console: Rich Console for output
        number: Prefix plain output with line numbers
        title: Table title
    """
    match output_format:
        case "plain":
            render_plain(lines, number)
        case "json":
            render_json(lines, console)
        case "table":
            render_table(lines, console, title)
        case _:
            render_plain(lines, number)


def render_plain(lines: list[NumberedLine], number: bool = False) -> None:
    """Write lines verbatim to stdout, one per line."""
    for line_number, text in lines:
        if number:
            click.echo(f"{line_number:>6}  {text}")
        else:
            click.echo(text)


def render_json(lines: list[NumberedLine], console: Console) -> None:
    """Render lines as a JSON array of objects."""
    output = [{"line": n, "text": text} for n, text in lines]
    json_str = json.dumps(output, indent=2, ensure_ascii=False)
    console.print(json_str, highlight=False, markup=False, soft_wrap=True)


def render_table(
    lines: list[NumberedLine],
    console: Console,
    title: str | None = None,
) -> None:
    """Render lines as a Rich table."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Length", style="cyan", justify="right")
    table.add_column("Text", overflow="fold")

    for line_number, text in lines:
        # Truncate long lines
        shown = text if len(text) <= 200 else text[:197] + "..."
        table.add_row(str(line_number), str(len(text)), shown)

    console.print(table)
    console.print(f"\n[dim]Total: {len(lines)} lines[/dim]")
