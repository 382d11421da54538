"""
xbview - TI Extended BASIC listing viewer.

Turns Extended BASIC source into indented, syntax-highlighted,
cross-referenced listings.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import ConfigError, SourceError, XbViewError
from .core.listing import Listing, parse_listing

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "Listing",
    "parse_listing",
    "XbViewError",
    "SourceError",
    "ConfigError",
]
