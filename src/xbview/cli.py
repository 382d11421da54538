"""
xbview CLI.

Commands:

- render: render a listing as HTML, terminal output or JSON
- tokens: dump the classified tokens of a listing
- xref: show which lines reference which, and dangling references
- bytes: show a hex string as bits, hex and decimal
"""

import json
import logging
import sys
from enum import StrEnum
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from xbview._version import get_version
from xbview.cli_ui import console, print_error, print_success, print_warning
from xbview.core.bytes import render_bytes
from xbview.core.errors import XbViewError
from xbview.core.listing import Listing, parse_listing
from xbview.core.manifest import ViewerConfig, resolve_config
from xbview.core.source import load_source
from xbview.render.console import (
    render_byte_table,
    render_console,
    render_dangling_table,
    render_xref_table,
)
from xbview.render.html import render_html

logger = logging.getLogger(__name__)


class OutputFormat(StrEnum):
    HTML = "html"
    CONSOLE = "console"
    JSON = "json"


app = typer.Typer(
    help="xbview – TI Extended BASIC listing viewer",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"xbview version {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """xbview CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load(source: str, config_path: Path | None) -> tuple[Listing, ViewerConfig]:
    """Load config and listing, exiting with code 1 on errors."""
    try:
        config = resolve_config(config_path)
        text = load_source(
            source,
            encoding=config.source.encoding,
            timeout=config.source.timeout,
        )
    except XbViewError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    logger.debug("Rendering %s with config %s", source, config.path or "defaults")
    return parse_listing(text), config


@app.command()
def render(
    source: str = typer.Argument(..., help="Listing file path or http(s) URL"),
    fmt: OutputFormat = typer.Option(
        OutputFormat.CONSOLE, "--format", "-f", help="Output format"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to file"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Render a listing with indentation and syntax highlighting."""
    listing, config = _load(source, config_path)

    if fmt == OutputFormat.CONSOLE:
        if output is None:
            render_console(listing, console, config.render, config.console)
            return
        with output.open("w", encoding="utf-8") as fh:
            render_console(
                listing,
                Console(file=fh, no_color=True, width=200),
                config.render,
                config.console,
            )
    else:
        if fmt == OutputFormat.HTML:
            content = render_html(listing, config.render)
        else:
            content = json.dumps(
                [line.model_dump(mode="json") for line in listing],
                indent=2,
            )
        if output is None:
            typer.echo(content)
            return
        output.write_text(content, encoding="utf-8")

    print_success(f"Wrote {output}")


@app.command()
def tokens(
    source: str = typer.Argument(..., help="Listing file path or http(s) URL"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Dump every classified token of a listing."""
    listing, _ = _load(source, config_path)

    table = Table(title="Tokens")
    table.add_column("line", justify="right")
    table.add_column("group", justify="right")
    table.add_column("class")
    table.add_column("text")
    table.add_column("target")
    for line in listing:
        for index, instruction in enumerate(line.instructions):
            for token in instruction.tokens:
                target = token.target_line if token.target_line is not None else token.target_sub
                table.add_row(
                    line.label,
                    str(index),
                    str(token.kind),
                    repr(token.text),
                    "" if target is None else str(target),
                )
    console.print(table)


@app.command()
def xref(
    source: str = typer.Argument(..., help="Listing file path or http(s) URL"),
    strict: bool = typer.Option(False, "--strict", help="Fail on dangling references"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Show line and subprogram cross-references."""
    listing, _ = _load(source, config_path)

    console.print(render_xref_table(listing))

    dangling = listing.dangling()
    if not dangling:
        print_success("All references resolve")
        return

    console.print(render_dangling_table(dangling))
    print_warning(f"{len(dangling)} dangling reference(s)")
    if strict:
        raise typer.Exit(code=1)


@app.command("bytes")
def bytes_command(
    digits: str = typer.Argument(..., help="Hex digits, e.g. 3C4281A5"),
    prefix: str | None = typer.Option(None, "--prefix", help="Hex prefix (default from config)"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Show a hex string as bits, hex and decimal, one byte per row."""
    try:
        config = resolve_config(config_path)
    except XbViewError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    try:
        rows = render_bytes(digits, prefix if prefix is not None else config.render.hex_prefix)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    console.print(render_byte_table(rows, title=digits))


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
