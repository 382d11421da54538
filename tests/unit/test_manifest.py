"""Tests for xbview.toml configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from xbview.core.errors import ConfigError
from xbview.core.ir import TokenClass
from xbview.core.manifest import (
    DEFAULT_STYLES,
    ViewerConfig,
    find_config,
    load_config,
    parse_config,
    resolve_config,
)


class TestParseConfig:
    """parse_config fills defaults and validates types."""

    def test_defaults(self) -> None:
        config = parse_config({})
        assert config.render.indent_em == 1.0
        assert config.render.indent_spaces == 2
        assert config.render.hex_prefix == "0x"
        assert config.source.encoding == "utf-8"
        assert config.console.styles == DEFAULT_STYLES

    def test_overrides(self) -> None:
        config = parse_config(
            {
                "render": {"indent_em": 2, "hex_prefix": "0&", "title": "Game"},
                "source": {"encoding": "latin-1", "timeout": 3},
                "console": {"styles": {"keyword": "bold red"}},
            }
        )
        assert config.render.indent_em == 2.0
        assert config.render.hex_prefix == "0&"
        assert config.render.title == "Game"
        assert config.source.encoding == "latin-1"
        assert config.source.timeout == 3.0
        assert config.console.style_for(TokenClass.KEYWORD) == "bold red"
        assert config.console.style_for(TokenClass.COMMENT) == DEFAULT_STYLES[TokenClass.COMMENT]

    def test_wrong_type(self) -> None:
        with pytest.raises(ConfigError, match="render.indent_spaces"):
            parse_config({"render": {"indent_spaces": "two"}})

    def test_bool_is_not_a_number(self) -> None:
        with pytest.raises(ConfigError):
            parse_config({"render": {"indent_em": True}})

    def test_unknown_style(self) -> None:
        with pytest.raises(ConfigError, match="Unknown token class"):
            parse_config({"console": {"styles": {"bogus": "red"}}})

    @pytest.mark.parametrize(
        "data, key",
        [
            ({"render": 5}, "render"),
            ({"source": "utf-8"}, "source"),
            ({"console": ["x"]}, "console"),
            ({"console": {"styles": ["x"]}}, "console.styles"),
        ],
    )
    def test_section_must_be_table(self, data: dict, key: str) -> None:
        with pytest.raises(ConfigError, match=f"Invalid value for '{key}'"):
            parse_config(data)


class TestLoadConfig:
    """Configuration files on disk."""

    def test_xbview_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "xbview.toml"
        path.write_text('[render]\nindent_em = 2.5\n', encoding="utf-8")
        config = load_config(path)
        assert config.render.indent_em == 2.5
        assert config.path == path

    def test_pyproject_tool_table(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[project]\nname = "x"\n\n[tool.xbview.render]\nhex_prefix = ">"\n',
            encoding="utf-8",
        )
        assert load_config(path).render.hex_prefix == ">"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "xbview.toml"
        path.write_text("[render\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid TOML") as excinfo:
            load_config(path)
        # Python 3.14+ reports the line of the decode error
        assert excinfo.value.context.line == getattr(excinfo.value.__cause__, "lineno", None)

    def test_section_not_a_table_in_file(self, tmp_path: Path) -> None:
        path = tmp_path / "xbview.toml"
        path.write_text("render = 5\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="'render'"):
            load_config(path)

    def test_pyproject_tool_entry_not_a_table(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool]\nxbview = 5\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="tool.xbview"):
            load_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.toml")

    def test_error_mentions_location(self, tmp_path: Path) -> None:
        path = tmp_path / "xbview.toml"
        path.write_text('[render]\ntitle = 3\n', encoding="utf-8")
        with pytest.raises(ConfigError) as excinfo:
            load_config(path)
        assert str(path) in str(excinfo.value)


class TestFindConfig:
    """Configuration discovery walks up from a directory."""

    def test_finds_in_parent(self, tmp_path: Path) -> None:
        (tmp_path / "xbview.toml").write_text("", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == tmp_path / "xbview.toml"

    def test_ignores_pyproject_without_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert find_config(tmp_path) != tmp_path / "pyproject.toml"

    def test_resolve_defaults_without_file(self, tmp_path: Path) -> None:
        config = resolve_config(start=tmp_path)
        assert isinstance(config, ViewerConfig)

    def test_resolve_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        path.write_text('[render]\nindent_spaces = 4\n', encoding="utf-8")
        assert resolve_config(path).render.indent_spaces == 4
