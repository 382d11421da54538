"""
Terminal render host for parsed listings.

Prints listings and byte tables with rich. Each instruction group gets its
own row, indented by depth, with the line label on the group's first row.
"""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from xbview.core.ir import ByteRow, Instruction, Line
from xbview.core.listing import Listing, Reference
from xbview.core.manifest import ConsoleConfig, RenderConfig

BIT_ON = "■"
BIT_OFF = "·"


def instruction_text(
    instruction: Instruction,
    styles: ConsoleConfig | None = None,
    indent_spaces: int = 2,
) -> Text:
    """Styled text for one instruction group, indentation included."""
    styles = styles or ConsoleConfig()
    text = Text(" " * (instruction.indent * indent_spaces))
    for token in instruction.tokens:
        text.append(token.text, style=styles.style_for(token.kind))
    return text


def line_rows(
    line: Line,
    styles: ConsoleConfig | None = None,
    indent_spaces: int = 2,
) -> list[tuple[str, Text]]:
    """(label, text) rows for a line; only the first row is labelled."""
    rows = []
    for index, instruction in enumerate(line.instructions):
        label = line.label if index == 0 else ""
        rows.append((label, instruction_text(instruction, styles, indent_spaces)))
    if not rows:
        rows.append((line.label, Text("")))
    return rows


def render_console(
    listing: Listing,
    console: Console,
    render: RenderConfig | None = None,
    styles: ConsoleConfig | None = None,
) -> None:
    """Print a listing to the console."""
    render = render or RenderConfig()
    table = Table(box=None, show_header=False, pad_edge=False, padding=(0, 1))
    table.add_column("line", justify="right", style="bright_black", no_wrap=True)
    table.add_column("code", no_wrap=True, overflow="fold")
    for line in listing:
        for label, text in line_rows(line, styles, render.indent_spaces):
            table.add_row(label, text)
    console.print(table)


def render_byte_table(rows: list[ByteRow], title: str | None = None) -> Table:
    """Build a byte inspector table: one column per bit, then hex and decimal."""
    table = Table(title=title, box=box.SIMPLE_HEAVY, show_header=True)
    for bit in range(7, -1, -1):
        table.add_column(str(bit), justify="center", no_wrap=True)
    table.add_column("hex", style="bold yellow", no_wrap=True)
    table.add_column("dec", justify="right", style="magenta", no_wrap=True)

    for row in rows:
        bits = [BIT_ON if bit else BIT_OFF for bit in row.bits]
        if row.is_nibble:
            # A lone nibble is the high half of the byte
            bits += [""] * 4
        table.add_row(*bits, row.hex, str(row.value))
    return table


def render_xref_table(listing: Listing) -> Table:
    """Table of referenced lines and the lines that reference them."""
    table = Table(title="Cross-references", box=box.SIMPLE_HEAVY)
    table.add_column("line", justify="right", style="bold magenta")
    table.add_column("sub", style="bold blue")
    table.add_column("referenced by")

    referenced_by = listing.referenced_by()
    for number in sorted(referenced_by):
        target = listing.by_number[number]
        sources = ", ".join(source.label for source in referenced_by[number])
        table.add_row(str(number), target.sub_name or "", sources)
    return table


def render_dangling_table(dangling: list[Reference]) -> Table:
    """Table of references whose targets are missing."""
    table = Table(title="Dangling references", box=box.SIMPLE_HEAVY)
    table.add_column("line", justify="right")
    table.add_column("target", style="bold red")
    for reference in dangling:
        table.add_row(reference.source.label, reference.target)
    return table
