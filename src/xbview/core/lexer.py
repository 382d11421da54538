"""
Line tokenizer for TI Extended BASIC.

Scans one line of code in a single forward pass. While classifying tokens it
also lays the line out into instruction groups, tracks block nesting to
compute indentation, and tags line-number and subprogram references.

This is not a grammar parser: the goal is readable, navigable listings, so
any input produces a result and nothing here raises on malformed code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from . import vocab
from .ir import Instruction, Line, Token, TokenClass

_LEADING_INT_RE = re.compile(r"[-+]?\d+")


@dataclass
class ParseState:
    """
    Scanner state for one line.

    Only ``indentation`` outlives the line: it is returned to the caller and
    fed back in as the incoming indentation of the next line.
    """

    indentation: int = 0
    if_depth: int = 0
    in_string: bool = False
    last_instruction: str = ""
    last_token: str = ""
    in_line_number_list: bool = False
    first_token: bool = True


@dataclass
class _Group:
    """Instruction group under construction."""

    indent: int
    tokens: list[Token] = field(default_factory=list)
    source: str = ""
    no_double_colon: bool = False

    def freeze(self) -> Instruction:
        return Instruction(
            tokens=self.tokens,
            source=self.source,
            indent=max(self.indent, 0),
            no_double_colon=self.no_double_colon,
        )


def classify_token(token: str, last_token: str = "") -> TokenClass:
    """
    Classify a bare token.

    Keywords win over everything. A token right after REM is a comment, and a
    name right after CALL or SUB is never a number or hex literal.
    """
    if token in vocab.KEYWORDS:
        return TokenClass.KEYWORD
    if last_token == vocab.REMARK:
        return TokenClass.COMMENT
    if last_token in (vocab.CALL, vocab.SUB):
        return TokenClass.TOKEN
    if vocab.is_number(token):
        return TokenClass.NUMBER
    if vocab.is_hex(token):
        return TokenClass.HEX
    return TokenClass.TOKEN


def _line_target(token: str) -> int | None:
    match = _LEADING_INT_RE.match(token)
    return int(match.group(0)) if match else None


class LineTokenizer:
    """Tokenizes and lays out a single line."""

    def __init__(self, line_number: int | None, text: str, indentation: int = 0) -> None:
        self.line_number = line_number
        self.text = text
        self.state = ParseState(indentation=indentation)
        self.groups: list[_Group] = [_Group(indent=indentation)]
        self.sub_name: str | None = None
        self.remaining = text

    @property
    def group(self) -> _Group:
        return self.groups[-1]

    def tokenize(self) -> Line:
        while self.remaining:
            if self.state.in_string:
                self._scan_string()
            else:
                self._scan_token()

        return Line(
            line_number=self.line_number,
            source=self.text,
            instructions=[group.freeze() for group in self.groups if group.source],
            indentation=self.state.indentation,
            sub_name=self.sub_name,
        )

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def _emit(self, token: Token, source: str | None = None) -> None:
        self.group.tokens.append(token)
        self.group.source += token.text if source is None else source

    def _emit_separator(self, text: str) -> None:
        kind = TokenClass.OPERATOR if vocab.OPERATOR_RE.fullmatch(text) else TokenClass.SEPARATOR
        self._emit(Token(text=text, kind=kind))

    def _emit_statement_separator(self, text: str) -> bool:
        """
        Close the current instruction with a :: separator.

        Returns True when a new instruction should follow. A repeated or
        leading separator has nothing to close, so it joins the previous
        group (or the first one) instead of leaving an empty group behind.
        """
        token = Token(text=text, kind=TokenClass.SEPARATOR)
        # The :: join is not part of either instruction's source
        if self.group.tokens:
            self.group.tokens.append(token)
            return True
        target = self.groups[-2] if len(self.groups) > 1 else self.group
        target.tokens.append(token)
        return False

    def _open_group(self, indent: int) -> None:
        self.groups.append(_Group(indent=indent))

    def _start_instruction(self) -> None:
        """Begin a new instruction group at the current depth."""
        state = self.state
        self._open_group(state.indentation + state.if_depth)
        state.first_token = True
        state.in_line_number_list = False

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _scan_string(self) -> None:
        """Consume a string literal body up to its closing quote."""
        remaining = self.remaining
        body = ""
        raw = ""
        closed = False

        while remaining:
            index = remaining.find(vocab.QUOTE)
            if index == -1:
                # Unterminated: the rest of the line is the string
                body += remaining
                raw += remaining
                remaining = ""
                break
            body += remaining[:index]
            raw += remaining[: index + 1]
            if remaining[index + 1 : index + 2] == vocab.QUOTE:
                # Doubled quote is a literal quote
                body += vocab.QUOTE
                raw += vocab.QUOTE
                remaining = remaining[index + 2 :]
                continue
            remaining = remaining[index + 1 :]
            closed = True
            break

        if body:
            kind = TokenClass.HEX if vocab.is_hex(body) else TokenClass.STRING
            self._emit(Token(text=body, kind=kind), source=raw[:-1] if closed else raw)
        if closed:
            self._emit(Token(text=vocab.QUOTE, kind=TokenClass.SEPARATOR))

        self.state.in_string = False
        self.remaining = remaining

    def _scan_token(self) -> None:
        state = self.state
        remaining = self.remaining

        statement = vocab.STATEMENT_SEPARATOR_RE.search(remaining)
        separator = vocab.SEPARATOR_RE.search(remaining)
        quote_index = remaining.find(vocab.QUOTE)

        position = len(remaining)
        if statement:
            position = min(position, statement.start())
        if quote_index != -1:
            position = min(position, quote_index)
        if separator:
            position = min(position, separator.start())

        token = remaining[:position]
        ends_statement = statement is not None and statement.start() == position
        if ends_statement:
            boundary = statement.group(0)
        elif position < len(remaining):
            boundary = remaining[position]
        else:
            boundary = ""

        # Everything after a REM keyword is comment text
        if not state.first_token and state.last_instruction == vocab.REMARK:
            self._emit(Token(text=remaining, kind=TokenClass.COMMENT))
            self.remaining = ""
            return

        if token:
            self._handle_token(token)

        opens_instruction = False
        if ends_statement:
            opens_instruction = self._emit_statement_separator(boundary)
        elif boundary:
            self._emit_separator(boundary)

        if token in vocab.CLAUSE_KEYWORDS:
            # The branch body always starts a fresh group
            self.group.no_double_colon = True
            state.last_instruction = token
            self._start_instruction()

        if opens_instruction:
            self._start_instruction()
        elif boundary == vocab.QUOTE:
            state.in_string = True

        self.remaining = remaining[position + len(boundary) :]
        if token:
            state.last_token = token

    def _handle_token(self, token: str) -> None:
        state = self.state
        kind = classify_token(token, state.last_token)

        if state.first_token:
            self._track_structure(token, kind)

        if token == vocab.ELSE:
            self._open_else_group()

        if state.last_instruction == vocab.MULTI_BRANCH and token in vocab.LIST_BRANCH_KEYWORDS:
            state.in_line_number_list = True

        target_line = None
        target_sub = None
        if kind == TokenClass.NUMBER and (
            (
                state.last_instruction in vocab.BRANCH_KEYWORDS
                and state.last_token in vocab.BRANCH_KEYWORDS
            )
            or state.in_line_number_list
        ):
            target_line = _line_target(token)
            if target_line is not None:
                kind = TokenClass.LINE_REFERENCE
        elif kind == TokenClass.TOKEN and state.last_token == vocab.CALL:
            kind = TokenClass.SUB_REFERENCE
            target_sub = token

        self._emit(Token(text=token, kind=kind, target_line=target_line, target_sub=target_sub))
        state.first_token = False

        if state.last_instruction == vocab.SUB and state.last_token == vocab.SUB:
            self.sub_name = token

    def _track_structure(self, token: str, kind: TokenClass) -> None:
        """Bookkeeping for the first token of an instruction."""
        state = self.state
        if kind == TokenClass.KEYWORD:
            state.last_instruction = token

        if token in vocab.BLOCK_OPENERS:
            state.indentation += 1
        elif token in vocab.BLOCK_CLOSERS:
            state.indentation -= 1
            self.group.indent = state.indentation + state.if_depth
        elif token == vocab.CONDITIONAL:
            # IF blocks end with the line, so they get their own counter
            state.if_depth += 1

    def _open_else_group(self) -> None:
        """ELSE goes on its own row, one level out from the THEN body."""
        state = self.state
        indent = state.indentation - 1 + state.if_depth
        if self.group.tokens:
            self.group.no_double_colon = True
            self._open_group(indent)
        else:
            self.group.indent = indent


def tokenize_line(line_number: int | None, text: str, indentation: int = 0) -> tuple[Line, int]:
    """
    Tokenize one line of Extended BASIC.

    Args:
        line_number: Line number, or None for an immediate command
        text: Line text with the line number prefix already removed
        indentation: Indentation depth carried over from the previous line

    Returns:
        The parsed line and the indentation depth for the next line
    """
    line = LineTokenizer(line_number, text, indentation).tokenize()
    return line, line.indentation
