"""
typst-ansi-hl - Typst syntax highlighting for the terminal

Input normalization, lexers, themes and the ANSI highlighter.
"""

__version__ = "0.1.0"

from .codeblock import codeblock_unwrap
from .ansi import ansi_strip
from .normalize import text_normalize, text_render
from .highlighter import Highlighter, HighlightError
from .theme import Theme, ThemeError
from .log import LOG, state_connectToLogger

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
    "__version__",
]
