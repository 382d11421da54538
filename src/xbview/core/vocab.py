"""
Extended BASIC vocabulary tables.

Reserved words, branch-capable keywords and the patterns the line tokenizer
uses to find boundaries and classify tokens. Everything here is immutable.
"""

import re

# Known TI Extended BASIC keywords (matched exactly, case-sensitive)
KEYWORDS: frozenset[str] = frozenset(
    {
        # Statements and commands
        "ACCEPT",
        "BREAK",
        "BYE",
        "CALL",
        "CLOSE",
        "CONTINUE",
        "CON",
        "DATA",
        "DEF",
        "DELETE",
        "DIM",
        "DISPLAY",
        "END",
        "FOR",
        "GO",
        "GOSUB",
        "GOTO",
        "IF",
        "IMAGE",
        "INPUT",
        "LET",
        "LINPUT",
        "LIST",
        "MERGE",
        "NEW",
        "NEXT",
        "NUMBER",
        "NUM",
        "OLD",
        "ON",
        "OPEN",
        "OPTION",
        "PRINT",
        "RANDOMIZE",
        "READ",
        "REM",
        "RESEQUENCE",
        "RES",
        "RESTORE",
        "RETURN",
        "RUN",
        "SAVE",
        "STOP",
        "SUB",
        "SUBEND",
        "SUBEXIT",
        "TRACE",
        "UNBREAK",
        "UNTRACE",
        # Clauses
        "ALL",
        "AT",
        "BASE",
        "BEEP",
        "DIGIT",
        "ELSE",
        "ERASE",
        "ERROR",
        "NUMERIC",
        "PROTECTED",
        "REC",
        "SIZE",
        "STEP",
        "THEN",
        "TO",
        "UALPHA",
        "USING",
        "VALIDATE",
        "WARNING",
        # File attributes
        "APPEND",
        "FIXED",
        "INTERNAL",
        "OUTPUT",
        "PERMANENT",
        "RELATIVE",
        "SEQUENTIAL",
        "UPDATE",
        "VARIABLE",
        # Subprograms
        "CHAR",
        "CHARPAT",
        "CHARSET",
        "CLEAR",
        "COINC",
        "COLOR",
        "DELSPRITE",
        "DISTANCE",
        "ERR",
        "GCHAR",
        "HCHAR",
        "INIT",
        "JOYST",
        "KEY",
        "LINK",
        "LOAD",
        "LOCATE",
        "MAGNIFY",
        "MOTION",
        "PATTERN",
        "PEEK",
        "POSITION",
        "SAY",
        "SCREEN",
        "SOUND",
        "SPGET",
        "SPRITE",
        "VCHAR",
        "VERSION",
        # Functions
        "ABS",
        "ASC",
        "ATN",
        "CHR$",
        "COS",
        "EOF",
        "EXP",
        "INT",
        "LEN",
        "LOG",
        "MAX",
        "MIN",
        "PI",
        "POS",
        "RND",
        "RPT$",
        "SEG$",
        "SGN",
        "SIN",
        "SQR",
        "STR$",
        "TAB",
        "TAN",
        "VAL",
        # Logical operators
        "AND",
        "NOT",
        "OR",
        "XOR",
    }
)

# Keywords after which a number is a target line number
BRANCH_KEYWORDS: frozenset[str] = frozenset(
    {
        "GOTO",
        "GO",
        "GOSUB",
        "IF",
        "THEN",
        "ELSE",
        "RESTORE",
        "ON",
        "BREAK",
        "ERROR",
        "CONTINUE",
        "RETURN",
        "RUN",
    }
)

BLOCK_OPENERS: frozenset[str] = frozenset({"FOR", "SUB"})
BLOCK_CLOSERS: frozenset[str] = frozenset({"NEXT", "SUBEND"})

# Keywords that end the current instruction group and start a fresh one
CLAUSE_KEYWORDS: frozenset[str] = frozenset({"THEN", "ELSE"})

# ON ... GOTO / ON ... GOSUB switch into a list of line numbers
MULTI_BRANCH = "ON"
LIST_BRANCH_KEYWORDS: frozenset[str] = frozenset({"GOTO", "GOSUB"})

CONDITIONAL = "IF"
ELSE = "ELSE"
REMARK = "REM"
CALL = "CALL"
SUB = "SUB"

QUOTE = '"'

# Statement separator, surrounding whitespace included
STATEMENT_SEPARATOR_RE = re.compile(r"\s*::\s*")
SEPARATOR_RE = re.compile(r"[\s,;:()+*\-/^&<>=]")
OPERATOR_RE = re.compile(r"[+*\-/^&<>=]")
NUMBER_RE = re.compile(r"^[-+]?([0-9]{0,10}[.])?[0-9]{1,10}([eE][-+]?\d+)?$")
HEX_RE = re.compile(r"^[0-9a-fA-F]{2,}$")

# Optional leading line number, then the instructions
LINE_RE = re.compile(r"^(?:(?P<number>\d+)\s+)?(?P<instructions>.*)$")
LINE_BREAK_RE = re.compile(r"[\r\n]+")


def is_number(text: str) -> bool:
    """Check whether text is a numeric literal."""
    return NUMBER_RE.match(text) is not None


def is_hex(text: str) -> bool:
    """Check whether text is two or more hex digits."""
    return HEX_RE.match(text) is not None
