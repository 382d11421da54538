"""
Whole-listing parsing and cross-reference resolution.

``parse_listing`` splits source text into lines, threads the indentation
depth from each line into the next, and indexes the result by line number
and by declared subprogram name. The resulting ``Listing`` is read-only:
resolution helpers look targets up and return None when they are missing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from . import vocab
from .ir import Line, Token, TokenClass
from .lexer import tokenize_line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reference:
    """A reference from one line to another line or to a subprogram."""

    source: Line
    token: Token

    @property
    def target(self) -> str:
        if self.token.target_line is not None:
            return str(self.token.target_line)
        return self.token.target_sub or ""


@dataclass
class Listing:
    """
    A parsed Extended BASIC listing.

    Lines without a line number (immediate commands) keep their place in
    ``lines`` but are not addressable by number.
    """

    lines: list[Line] = field(default_factory=list)
    by_number: dict[int, Line] = field(init=False, default_factory=dict)
    subprograms: dict[str, Line] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        for line in self.lines:
            if line.line_number is not None:
                # A repeated line number replaces the earlier line
                self.by_number[line.line_number] = line
            if line.sub_name and line.sub_name not in self.subprograms:
                self.subprograms[line.sub_name] = line

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def resolve_line(self, number: int) -> Line | None:
        """Find the line with this number, if any."""
        return self.by_number.get(number)

    def resolve_sub(self, name: str) -> Line | None:
        """Find the line declaring this subprogram, if any."""
        return self.subprograms.get(name)

    def resolve(self, token: Token) -> Line | None:
        """
        Resolve a reference token to its target line.

        Returns None for tokens that are not references and for references
        whose target is not in the listing.
        """
        if token.kind == TokenClass.LINE_REFERENCE and token.target_line is not None:
            return self.resolve_line(token.target_line)
        if token.kind == TokenClass.SUB_REFERENCE and token.target_sub:
            return self.resolve_sub(token.target_sub)
        return None

    def references(self) -> list[Reference]:
        """All references in listing order."""
        return [
            Reference(source=line, token=token)
            for line in self.lines
            for token in line.tokens
            if token.is_reference
        ]

    def referenced_by(self) -> dict[int, list[Line]]:
        """Map each referenced line number to the lines pointing at it."""
        index: dict[int, list[Line]] = {}
        for reference in self.references():
            target = self.resolve(reference.token)
            if target is None or target.line_number is None:
                continue
            sources = index.setdefault(target.line_number, [])
            if not any(line is reference.source for line in sources):
                sources.append(reference.source)
        return index

    def dangling(self) -> list[Reference]:
        """References whose target is not in the listing."""
        return [ref for ref in self.references() if self.resolve(ref.token) is None]


def split_line(raw: str) -> tuple[int | None, str]:
    """
    Separate the line number from the instructions.

    Returns:
        (line_number, instructions); line_number is None for immediate lines
    """
    match = vocab.LINE_RE.match(raw)
    if match is None:
        return None, raw
    number = match.group("number")
    return (int(number) if number is not None else None), match.group("instructions")


def parse_listing(source: str) -> Listing:
    """
    Parse a full listing.

    Blank lines are skipped. Indentation carries from each line to the next.
    """
    lines: list[Line] = []
    indentation = 0
    for raw in vocab.LINE_BREAK_RE.split(source):
        if not raw:
            continue
        line_number, instructions = split_line(raw)
        line, indentation = tokenize_line(line_number, instructions, indentation)
        lines.append(line)

    listing = Listing(lines)
    logger.debug(
        "Parsed %d lines (%d numbered, %d subprograms)",
        len(listing.lines),
        len(listing.by_number),
        len(listing.subprograms),
    )
    return listing
