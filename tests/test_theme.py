"""
Theme tests

Tests the built-in tiers, YAML loading and validation, style levels and the
Discord palette restriction.
"""

import pytest
from pygments.style import Style
from pygments.token import Comment, Keyword, Name, String, Token

from typst_ansi_hl.lib.theme import (
    BUILTIN_TIERS,
    Theme,
    ThemeError,
    styleString_discordRestrict,
    tokenType_parse,
)


class TestBuiltinTheme:
    """Default tiers"""

    def test_levels(self):
        theme = Theme.builtin()
        assert theme.level_max() == len(BUILTIN_TIERS)
        assert theme.styles_get(0) == {}

    def test_levels_are_cumulative(self):
        theme = Theme.builtin()
        first = theme.styles_get(1)
        assert Keyword in first
        assert String not in first
        assert String in theme.styles_get(2)
        assert Keyword in theme.styles_get(2)

    def test_style_build(self):
        style = Theme.builtin().style_build(2)
        assert issubclass(style, Style)
        assert style.style_for_token(Keyword)["ansicolor"] == "ansimagenta"

    def test_dropped_tier_inherits_parent(self):
        """String.Escape falls back to String when its tier is off"""
        style = Theme.builtin().style_build(2)
        assert style.style_for_token(String.Escape)["ansicolor"] == "ansigreen"


class TestDiscordRestriction:
    """Only what Discord renders survives"""

    @pytest.mark.parametrize(
        "style_string, expected",
        [
            ("ansired", "ansired"),
            ("ansibrightred", "ansired"),
            ("ansibrightblack", "ansiblack"),
            ("ansiwhite bold", "ansigray bold"),
            ("ansicyan underline", "ansicyan underline"),
            ("italic", ""),
            ("#ff0000 bold", "bold"),
            ("ansigreen bg:ansiblue border:#000", "ansigreen"),
        ],
    )
    def test_restrict(self, style_string, expected):
        assert styleString_discordRestrict(style_string) == expected

    def test_discord_styles(self):
        styles = Theme.builtin().styles_get(4, discord=True)
        assert styles[Comment] == "ansiblack"
        for style_string in styles.values():
            assert "italic" not in style_string
            assert "bright" not in style_string


class TestTokenNames:
    """Token type names from theme files"""

    def test_parse(self):
        assert tokenType_parse("Name.Function") is Name.Function
        assert tokenType_parse("Token.Comment") is Comment
        assert tokenType_parse("Keyword") is Token.Keyword

    @pytest.mark.parametrize("name", ["keyword", "Name.", "Name..Function", "", "Name Function"])
    def test_invalid(self, name):
        with pytest.raises(ThemeError):
            tokenType_parse(name)


class TestThemeFile:
    """YAML theme loading"""

    def test_load(self, tmp_path):
        path = tmp_path / "mine.yaml"
        path.write_text(
            "name: mine\n"
            "tiers:\n"
            "  - Keyword: 'ansired bold'\n"
            "  - String: '#00ff00'\n",
            encoding="utf-8",
        )
        theme = Theme.file_load(str(path))
        assert theme.name == "mine"
        assert theme.level_max() == 2
        assert theme.styles_get(1) == {Keyword: "ansired bold"}

    def test_name_defaults_to_file_stem(self, tmp_path):
        path = tmp_path / "solar.yaml"
        path.write_text("tiers:\n  - Comment: ansiblue\n", encoding="utf-8")
        assert Theme.file_load(str(path)).name == "solar"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ThemeError, match="not found"):
            Theme.file_load(str(tmp_path / "nope.yaml"))

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("tiers: [unclosed\n", encoding="utf-8")
        with pytest.raises(ThemeError, match="Failed to parse"):
            Theme.file_load(str(path))

    @pytest.mark.parametrize(
        "content",
        [
            "just a string\n",
            "name: x\n",
            "tiers: []\n",
            "tiers:\n  - not a mapping\n",
            "tiers:\n  - keyword: ansired\n",
            "tiers:\n  - Keyword: 12\n",
            "tiers:\n  - Keyword: notacolor\n",
        ],
    )
    def test_invalid_content(self, tmp_path, content):
        path = tmp_path / "theme.yaml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ThemeError):
            Theme.file_load(str(path))
