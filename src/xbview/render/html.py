"""
HTML render host for parsed listings.

Renders a ``Listing`` through Jinja2 templates into markup that carries the
token classes as CSS classes and the cross-references as data attributes,
ready for a page script to wire up click and hover navigation. Hex literals
get a hidden byte table each, keyed by ``data-hex``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from xbview.core.bytes import render_bytes
from xbview.core.ir import ByteRow, Line, TokenClass
from xbview.core.listing import Listing
from xbview.core.manifest import RenderConfig

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _indent_filter(level: int, em_per_level: float = 1.0) -> str:
    """Format an indentation depth as a CSS margin."""
    return f"margin-left: {level * em_per_level:g}em"


def _bit_class_filter(bit: bool) -> str:
    return "bit on" if bit else "bit"


def create_jinja_env() -> Environment:
    """Create and configure the Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["indent_style"] = _indent_filter
    env.filters["bit_class"] = _bit_class_filter
    return env


# Module-level singleton
_env: Environment | None = None


def get_jinja_env() -> Environment:
    global _env
    if _env is None:
        _env = create_jinja_env()
    return _env


def hex_tables(listing: Listing, prefix: str = "0x") -> dict[str, list[ByteRow]]:
    """Byte rows for every distinct hex literal in the listing."""
    tables: dict[str, list[ByteRow]] = {}
    for line in listing:
        for token in line.tokens:
            if token.kind == TokenClass.HEX and token.text not in tables:
                tables[token.text] = render_bytes(token.text, prefix)
    return tables


def _context(listing: Listing, config: RenderConfig) -> dict[str, Any]:
    lines: list[Line] = list(listing)
    return {
        "lines": lines,
        "title": config.title,
        "indent_em": config.indent_em,
        "hex_tables": hex_tables(listing, config.hex_prefix),
    }


def render_fragment(listing: Listing, config: RenderConfig | None = None) -> str:
    """Render only the listing markup, for embedding in an existing page."""
    template = get_jinja_env().get_template("fragment.html")
    return template.render(**_context(listing, config or RenderConfig()))


def render_html(listing: Listing, config: RenderConfig | None = None) -> str:
    """Render a standalone HTML page for the listing."""
    template = get_jinja_env().get_template("page.html")
    return template.render(**_context(listing, config or RenderConfig()))
