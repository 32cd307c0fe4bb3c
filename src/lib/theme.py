"""
Theme loader and style builder for terminal highlighting.

A theme is an ordered list of tiers. Each tier maps Pygments token types to
Pygments style strings. Tier 0 matters most; when output has to shrink to
meet a size budget, tiers are switched off from the last one backwards.

A custom theme is a YAML file:

    name: mine
    tiers:
      - Keyword: "ansimagenta bold"
        Comment: "ansibrightblack italic"
      - String: "ansigreen"
        Number: "#d19a66"

Token types without a style inherit from their parent token type, so
dropping "String.Escape" falls back to whatever "String" uses.
"""

import re
import yaml
from pathlib import Path
from typing import Any, Dict, List, Type

from pygments.style import Style
from pygments.token import _TokenType, string_to_tokentype


class ThemeError(Exception):
    """Raised when theme loading or validation fails"""
    pass


BUILTIN_TIERS: List[Dict[str, str]] = [
    {
        "Keyword": "ansimagenta",
        "Comment": "ansibrightblack",
        "Generic.Heading": "ansiblue bold",
    },
    {
        "String": "ansigreen",
        "Number": "ansiyellow",
        "Keyword.Constant": "ansiyellow",
        "Name.Function": "ansiblue",
        "String.Delimiter": "ansicyan",
    },
    {
        "Generic.Strong": "bold",
        "Generic.Emph": "italic",
        "Name.Label": "ansicyan",
        "Name.Entity": "ansicyan underline",
        "String.Escape": "ansicyan",
    },
    {
        "Name.Variable": "ansired",
        "Name.Attribute": "ansired",
        "Operator": "ansicyan",
        "Operator.Word": "ansimagenta",
    },
]

TOKEN_NAME = re.compile(r'^[A-Z]\w*(?:\.[A-Z]\w*)*$')

# Discord's ansi code blocks render the eight basic foreground colors,
# bold and underline. Everything else shows up as garbage or not at all.
DISCORD_COLORS = {
    "ansiblack", "ansired", "ansigreen", "ansiyellow",
    "ansiblue", "ansimagenta", "ansicyan", "ansigray",
}
DISCORD_FOLD = {
    "ansibrightblack": "ansiblack",
    "ansibrightred": "ansired",
    "ansibrightgreen": "ansigreen",
    "ansibrightyellow": "ansiyellow",
    "ansibrightblue": "ansiblue",
    "ansibrightmagenta": "ansimagenta",
    "ansibrightcyan": "ansicyan",
    "ansiwhite": "ansigray",
}
DISCORD_ATTRIBUTES = {"bold", "nobold", "underline", "nounderline", "noinherit"}


def styleString_discordRestrict(style_string: str) -> str:
    """
    Reduce a Pygments style string to what Discord renders.

    Bright colors fold to their basic counterpart. Italics, backgrounds,
    borders and hex colors are dropped.

    Example:
        >>> styleString_discordRestrict("ansibrightred italic bg:ansiblue")
        'ansired'
    """
    kept: List[str] = []
    for part in style_string.split():
        part = DISCORD_FOLD.get(part, part)
        if part in DISCORD_COLORS or part in DISCORD_ATTRIBUTES:
            kept.append(part)
    return " ".join(kept)


def tokenType_parse(name: str) -> _TokenType:
    """Convert "String.Double" (or "Token.String.Double") to a token type"""
    if name.startswith("Token."):
        name = name[len("Token."):]
    if not TOKEN_NAME.match(name):
        raise ThemeError(f"Invalid token type name: '{name}'")
    return string_to_tokentype(name)


class Theme:
    """
    Represents a highlighting theme.

    A theme consists of:
      - A name
      - An ordered list of tiers (token type -> style string)
    """

    def __init__(self, name: str, tiers: List[Dict[str, str]]):
        """
        Build a theme from tier mappings.

        Args:
            name: Human readable theme name
            tiers: Ordered tiers, most important first

        Raises:
            ThemeError: If a token type or style string is invalid
        """
        self.name = name
        self.tiers: List[Dict[_TokenType, str]] = []

        for index, tier in enumerate(tiers):
            if not isinstance(tier, dict):
                raise ThemeError(f"Theme '{name}': tier {index} is not a mapping")
            parsed: Dict[_TokenType, str] = {}
            for token_name, style_string in tier.items():
                if not isinstance(style_string, str):
                    raise ThemeError(
                        f"Theme '{name}': style for {token_name} must be a string"
                    )
                parsed[tokenType_parse(str(token_name))] = style_string
            self.tiers.append(parsed)

        # Let Pygments reject malformed style strings now instead of mid-render
        try:
            self.style_build(self.level_max())
        except Exception as e:
            raise ThemeError(f"Theme '{name}' has an invalid style: {e}")

    @classmethod
    def builtin(cls) -> "Theme":
        """Get the default theme (ANSI color names only)"""
        return cls("builtin", BUILTIN_TIERS)

    @classmethod
    def file_load(cls, path: str) -> "Theme":
        """
        Load a theme from a YAML file.

        Args:
            path: Path to the YAML file

        Raises:
            ThemeError: If the file is missing, unreadable or malformed
        """
        theme_path = Path(path).expanduser()
        if not theme_path.exists():
            raise ThemeError(f"Theme file not found: {theme_path}")

        try:
            with open(theme_path, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ThemeError(f"Failed to parse {theme_path}: {e}")
        except Exception as e:
            raise ThemeError(f"Failed to load {theme_path}: {e}")

        if not isinstance(config, dict):
            raise ThemeError(f"Theme file {theme_path} must contain a mapping")
        tiers = config.get('tiers')
        if not isinstance(tiers, list) or not tiers:
            raise ThemeError(f"Theme file {theme_path} needs a non-empty 'tiers' list")

        return cls(str(config.get('name', theme_path.stem)), tiers)

    def level_max(self) -> int:
        """Number of tiers, i.e. the richest style level"""
        return len(self.tiers)

    def styles_get(self, level: int, discord: bool = False) -> Dict[_TokenType, str]:
        """
        Merge the first `level` tiers into a single style mapping.

        Args:
            level: Number of tiers to keep (0 = no styling)
            discord: Restrict style strings to what Discord renders
        """
        styles: Dict[_TokenType, str] = {}
        for tier in self.tiers[:level]:
            for ttype, style_string in tier.items():
                styles[ttype] = (
                    styleString_discordRestrict(style_string) if discord else style_string
                )
        return styles

    def style_build(self, level: int, discord: bool = False) -> Type[Style]:
        """
        Build a Pygments Style class for a style level.

        Args:
            level: Number of tiers to keep
            discord: Restrict style strings to what Discord renders

        Returns:
            Style subclass usable with Terminal256Formatter
        """
        styles = self.styles_get(level, discord)
        class_name = f"{self.name.title().replace('-', '')}Level{level}Style"
        return type(class_name, (Style,), {"default_style": "", "styles": styles})

    def __repr__(self) -> str:
        return f"Theme(name='{self.name}', tiers={len(self.tiers)})"
