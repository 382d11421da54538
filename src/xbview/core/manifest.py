"""
Configuration for xbview.

Settings live in ``xbview.toml`` or under ``[tool.xbview]`` in
``pyproject.toml``. Every setting has a default, so no file is required.

Example xbview.toml:

    [render]
    indent_em = 2
    hex_prefix = "0&"
    title = "Adventure"

    [source]
    encoding = "latin-1"

    [console.styles]
    keyword = "bold magenta"
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import make_config_error
from .ir import TokenClass

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "xbview.toml"

DEFAULT_STYLES: dict[str, str] = {
    TokenClass.KEYWORD: "bold cyan",
    TokenClass.COMMENT: "italic green",
    TokenClass.STRING: "yellow",
    TokenClass.NUMBER: "magenta",
    TokenClass.HEX: "bold yellow",
    TokenClass.OPERATOR: "red",
    TokenClass.SEPARATOR: "bright_black",
    TokenClass.TOKEN: "white",
    TokenClass.LINE_REFERENCE: "bold magenta underline",
    TokenClass.SUB_REFERENCE: "bold blue underline",
}


@dataclass
class RenderConfig:
    """Layout settings shared by the render hosts."""

    indent_em: float = 1.0  # HTML margin per indentation level
    indent_spaces: int = 2  # Console spaces per indentation level
    hex_prefix: str = "0x"
    title: str = "Extended BASIC listing"


@dataclass
class SourceConfig:
    """Source loading settings."""

    encoding: str = "utf-8"
    timeout: float = 10.0  # Seconds, for remote listings


@dataclass
class ConsoleConfig:
    """Terminal rendering settings."""

    styles: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_STYLES))

    def style_for(self, kind: TokenClass) -> str:
        return self.styles.get(kind, "")


@dataclass
class ViewerConfig:
    """Complete xbview configuration."""

    render: RenderConfig = field(default_factory=RenderConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    console: ConsoleConfig = field(default_factory=ConsoleConfig)
    path: Path | None = None  # File the settings came from


def _expect(value: Any, kinds: type | tuple[type, ...], key: str, location: str) -> Any:
    # bool is an int subclass, but never a valid number here
    if isinstance(value, bool) or not isinstance(value, kinds):
        raise make_config_error(f"Invalid value for '{key}': {value!r}", location)
    return value


def parse_config(data: dict[str, Any], location: str = CONFIG_FILENAME) -> ViewerConfig:
    """
    Build a ViewerConfig from already-parsed TOML data.

    Raises:
        ConfigError: If a section is not a table, a value has the wrong
            type, or a style names an unknown token class
    """
    render_data = _expect(data.get("render", {}), dict, "render", location)
    source_data = _expect(data.get("source", {}), dict, "source", location)
    console_data = _expect(data.get("console", {}), dict, "console", location)
    style_data = _expect(console_data.get("styles", {}), dict, "console.styles", location)

    defaults = RenderConfig()
    render = RenderConfig(
        indent_em=float(
            _expect(
                render_data.get("indent_em", defaults.indent_em),
                (int, float),
                "render.indent_em",
                location,
            )
        ),
        indent_spaces=_expect(
            render_data.get("indent_spaces", defaults.indent_spaces),
            int,
            "render.indent_spaces",
            location,
        ),
        hex_prefix=_expect(
            render_data.get("hex_prefix", defaults.hex_prefix), str, "render.hex_prefix", location
        ),
        title=_expect(render_data.get("title", defaults.title), str, "render.title", location),
    )

    source_defaults = SourceConfig()
    source = SourceConfig(
        encoding=_expect(
            source_data.get("encoding", source_defaults.encoding),
            str,
            "source.encoding",
            location,
        ),
        timeout=float(
            _expect(
                source_data.get("timeout", source_defaults.timeout),
                (int, float),
                "source.timeout",
                location,
            )
        ),
    )

    styles = dict(DEFAULT_STYLES)
    known = {kind.value for kind in TokenClass}
    for kind, style in style_data.items():
        if kind not in known:
            raise make_config_error(f"Unknown token class in console.styles: '{kind}'", location)
        styles[kind] = _expect(style, str, f"console.styles.{kind}", location)

    return ViewerConfig(render=render, source=source, console=ConsoleConfig(styles=styles))


def load_config(path: Path) -> ViewerConfig:
    """
    Load configuration from an xbview.toml or pyproject.toml file.

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise make_config_error(f"Cannot read config: {e}", str(path)) from e
    except tomllib.TOMLDecodeError as e:
        raise make_config_error(
            f"Invalid TOML: {e}", str(path), line=getattr(e, "lineno", None)
        ) from e

    if path.name == "pyproject.toml":
        tool = _expect(data.get("tool", {}), dict, "tool", str(path))
        data = _expect(tool.get("xbview", {}), dict, "tool.xbview", str(path))

    config = parse_config(data, str(path))
    config.path = path
    logger.debug("Loaded config from %s", path)
    return config


def find_config(start: Path) -> Path | None:
    """
    Look for configuration in start and its parents.

    An xbview.toml wins over a pyproject.toml in the same directory; a
    pyproject.toml only counts if it has a [tool.xbview] table.
    """
    for directory in [start, *start.parents]:
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = directory / "pyproject.toml"
        if pyproject.is_file():
            try:
                data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
            except (OSError, tomllib.TOMLDecodeError):
                logger.debug("Skipping unreadable %s", pyproject)
                continue
            tool = data.get("tool")
            if isinstance(tool, dict) and "xbview" in tool:
                return pyproject
    return None


def resolve_config(path: Path | None = None, start: Path | None = None) -> ViewerConfig:
    """Load the given config file, or the nearest one found, or defaults."""
    if path is None:
        path = find_config((start or Path.cwd()).resolve())
    if path is None:
        return ViewerConfig()
    return load_config(path)
