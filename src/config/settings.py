"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use TYPST_ANSI_HL_ prefix (e.g., TYPST_ANSI_HL_DISCORD=true).

Settings can also be loaded from a .env file in the working directory.
They only provide defaults: explicit command line flags win.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use TYPST_ANSI_HL_ prefix.

    Examples:
        TYPST_ANSI_HL_SYNTAX_MODE=code
        TYPST_ANSI_HL_SOFT_LIMIT=2000
        TYPST_ANSI_HL_THEME_FILE=~/.config/typst-ansi-hl/theme.yaml
    """

    model_config = SettingsConfigDict(
        env_prefix="TYPST_ANSI_HL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Input normalization
    strip_ansi: bool = Field(
        default=True,
        description="Strip terminal escape sequences from the input",
    )

    unwrap_codeblock: bool = Field(
        default=False,
        description="Remove a surrounding ``` fence from the input",
    )

    # Highlighting
    syntax_mode: Literal["code", "markup", "math"] = Field(
        default="markup",
        description="Grammar the input is highlighted with",
    )

    discord: bool = Field(
        default=False,
        description="Only emit styling that Discord's ansi code blocks render",
    )

    soft_limit: Optional[int] = Field(
        default=None,
        ge=0,
        description="Byte budget for the output; styling is reduced to meet it",
    )

    theme_file: Optional[str] = Field(
        default=None,
        description="YAML theme file replacing the built-in colors",
    )

    # Diagnostics
    debug_mode: bool = Field(
        default=False,
        description="Print tracebacks on failure",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
