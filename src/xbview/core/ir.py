"""
Listing IR for xbview.

Frozen models produced by the line tokenizer and consumed by the render
hosts: one ``Line`` per source line, holding ``Instruction`` groups of
classified ``Token`` objects.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# Label used for lines typed without a line number
IMMEDIATE_LABEL = ">"


class TokenClass(StrEnum):
    """Token classifications. Values double as CSS class names."""

    KEYWORD = "keyword"
    COMMENT = "comment"
    STRING = "string"
    NUMBER = "number"
    HEX = "hex"
    OPERATOR = "operator"
    SEPARATOR = "separator"
    TOKEN = "token"
    LINE_REFERENCE = "line-number-reference"
    SUB_REFERENCE = "sub-reference"


class Token(BaseModel):
    """
    A classified piece of a line.

    Separators and operators are tokens too, so the token texts of a line
    (outside string literals) concatenate back to its source.
    """

    text: str = Field(description="Literal text")
    kind: TokenClass = Field(description="Classification")
    target_line: int | None = Field(default=None, description="Referenced line number")
    target_sub: str | None = Field(default=None, description="Referenced subprogram name")

    model_config = ConfigDict(frozen=True)

    @property
    def is_reference(self) -> bool:
        return self.kind in (TokenClass.LINE_REFERENCE, TokenClass.SUB_REFERENCE)

    @property
    def css_class(self) -> str:
        """Class string for the render host."""
        if self.kind == TokenClass.LINE_REFERENCE:
            return f"{TokenClass.NUMBER} {TokenClass.LINE_REFERENCE}"
        if self.kind == TokenClass.SUB_REFERENCE:
            return f"{TokenClass.TOKEN} {TokenClass.SUB_REFERENCE}"
        return str(self.kind)


class Instruction(BaseModel):
    """One rendered instruction group within a line."""

    tokens: list[Token] = Field(default_factory=list)
    source: str = Field(default="", description="Source text of the group")
    indent: int = Field(default=0, description="Indentation depth")
    no_double_colon: bool = Field(
        default=False,
        description="Group ends at THEN/ELSE rather than a :: separator",
    )

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.source


class Line(BaseModel):
    """A parsed line of Extended BASIC."""

    line_number: int | None = Field(description="Line number, None for an immediate line")
    source: str = Field(description="Instruction text after the line number")
    instructions: list[Instruction] = Field(default_factory=list)
    indentation: int = Field(default=0, description="Indentation depth after the line")
    sub_name: str | None = Field(default=None, description="Subprogram declared on this line")

    model_config = ConfigDict(frozen=True)

    @property
    def is_immediate(self) -> bool:
        return self.line_number is None

    @property
    def label(self) -> str:
        if self.line_number is None:
            return IMMEDIATE_LABEL
        return str(self.line_number)

    @property
    def instruction_sources(self) -> list[str]:
        return [instruction.source for instruction in self.instructions]

    @property
    def tokens(self) -> list[Token]:
        """All tokens on the line, in order."""
        return [token for instruction in self.instructions for token in instruction.tokens]


class ByteRow(BaseModel):
    """One byte (or trailing nibble) of a hex literal, ready for a table row."""

    bits: tuple[bool, ...] = Field(description="Bits, most significant first")
    hex: str = Field(description="Prefixed hex text")
    value: int = Field(description="Decimal value")

    model_config = ConfigDict(frozen=True)

    @property
    def is_nibble(self) -> bool:
        return len(self.bits) == 4
