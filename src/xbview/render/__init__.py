"""Render hosts: HTML pages and terminal output."""

from .console import render_byte_table, render_console
from .html import render_fragment, render_html

__all__ = [
    "render_html",
    "render_fragment",
    "render_console",
    "render_byte_table",
]
