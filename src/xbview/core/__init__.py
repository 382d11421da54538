"""Core xbview functionality: listing IR, line tokenizer, cross-references, byte inspector."""

from . import ir
from .bytes import render_byte, render_bytes
from .errors import ConfigError, ErrorContext, SourceError, XbViewError
from .lexer import ParseState, classify_token, tokenize_line
from .listing import Listing, Reference, parse_listing, split_line
from .manifest import ViewerConfig, load_config, resolve_config
from .source import load_source

__all__ = [
    "ir",
    "XbViewError",
    "SourceError",
    "ConfigError",
    "ErrorContext",
    "ParseState",
    "classify_token",
    "tokenize_line",
    "Listing",
    "Reference",
    "parse_listing",
    "split_line",
    "render_byte",
    "render_bytes",
    "ViewerConfig",
    "load_config",
    "resolve_config",
    "load_source",
]
