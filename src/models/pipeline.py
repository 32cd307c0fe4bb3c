"""
Pipeline data models

Immutable configuration handed to the normalization pipeline and the
result reported back by the highlighting engine.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class SyntaxMode(Enum):
    """
    Grammar the highlighter starts in

    Typst source can be read in three modes:
        CODE   - expressions, as inside `#{ ... }`
        MARKUP - document markup with embedded code and math (the default)
        MATH   - math content, as inside `$ ... $`
    """
    CODE = "code"
    MARKUP = "markup"
    MATH = "math"


@dataclass(frozen=True)
class PipelineConfig:
    """
    Options recognized by the normalization pipeline

    Constructed once from CLI options and never mutated.

    Attributes:
        unwrap_codeblock: Remove a surrounding ``` fence before highlighting
        strip_ansi: Remove terminal escape sequences before highlighting
        syntax_mode: Grammar used by the highlighter
        discord_compatible: Restrict styling to what Discord renders
        soft_size_limit: Optional byte budget for the rendered output
    """
    unwrap_codeblock: bool = False
    strip_ansi: bool = True
    syntax_mode: SyntaxMode = SyntaxMode.MARKUP
    discord_compatible: bool = False
    soft_size_limit: Optional[int] = None

    def __post_init__(self) -> None:
        if self.soft_size_limit is not None and self.soft_size_limit < 0:
            raise ValueError(f"soft size limit must be non-negative, got {self.soft_size_limit}")


@dataclass
class HighlightResult:
    """
    Outcome of a single highlight_to() call

    Attributes:
        bytes_written: Size of the styled byte stream written to the sink
        style_level: Number of theme tiers that stayed active (0 = plain text)
        limit_met: False only if a budget was given and could not be met
    """
    bytes_written: int
    style_level: int
    limit_met: bool = True
