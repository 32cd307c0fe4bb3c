"""
typst-ansi-hl - Typst syntax highlighting for the terminal

Highlights Typst source as ANSI-styled text, optionally for Discord.
"""

__version__ = "0.1.0"

from .lib import (
    codeblock_unwrap,
    ansi_strip,
    text_normalize,
    text_render,
    Highlighter,
    HighlightError,
    Theme,
    ThemeError,
    LOG,
    state_connectToLogger,
)
from .models import SyntaxMode, PipelineConfig, HighlightResult

__all__ = [
    "codeblock_unwrap",
    "ansi_strip",
    "text_normalize",
    "text_render",
    "Highlighter",
    "HighlightError",
    "Theme",
    "ThemeError",
    "LOG",
    "state_connectToLogger",
    "SyntaxMode",
    "PipelineConfig",
    "HighlightResult",
    "__version__",
]
