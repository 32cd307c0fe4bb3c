"""
Terminal highlighter for Typst source

Turns text into an ANSI-styled byte stream using the Typst lexers, a theme
and Pygments' Terminal256Formatter.

Soft size limit:
    Without a budget the text is rendered once with every theme tier.
    With a budget, tiers are switched off one at a time (least important
    first) until the rendering fits; the last resort is the plain text.
    If even that is too large it is written anyway. Content is never cut.
"""

import io
from typing import BinaryIO, List, Optional, Tuple

from pygments.formatters import Terminal256Formatter
from pygments.token import _TokenType

from ..models.pipeline import SyntaxMode, PipelineConfig, HighlightResult
from .lexer import tokens_get
from .log import LOG
from .theme import Theme


class DiscordTerminalFormatter(Terminal256Formatter):
    """
    Terminal256Formatter that ends every styled token with a full reset.

    Discord only understands SGR 0 for switching styles off, so the
    per-attribute resets (39, 49) the stock formatter emits are replaced.
    """

    RESET = "\x1b[0m"

    def _setup_styles(self):
        super()._setup_styles()
        for ttype, (on, off) in self.style_string.items():
            if off:
                self.style_string[ttype] = (on, self.RESET)


class HighlightError(Exception):
    """Raised when highlighted output cannot be produced or written"""
    pass


class Highlighter:
    """
    Configurable Typst-to-ANSI highlighter

    Example:
        >>> highlighter = Highlighter().syntaxMode_set(SyntaxMode.CODE)
        >>> highlighter.softLimit_set(2000).discord_enable()
        >>> highlighter.highlight_to("#let x = 1", sys.stdout.buffer)
    """

    def __init__(self, theme: Optional[Theme] = None) -> None:
        self.theme = theme or Theme.builtin()
        self.discord = False
        self.syntax_mode = SyntaxMode.MARKUP
        self.soft_limit: Optional[int] = None

    @classmethod
    def from_config(cls, config: PipelineConfig, theme: Optional[Theme] = None) -> "Highlighter":
        """Build a highlighter carrying the formatting options of a PipelineConfig"""
        highlighter = cls(theme).syntaxMode_set(config.syntax_mode)
        if config.discord_compatible:
            highlighter.discord_enable()
        if config.soft_size_limit is not None:
            highlighter.softLimit_set(config.soft_size_limit)
        return highlighter

    def discord_enable(self) -> "Highlighter":
        """Only emit styling Discord's ansi code blocks can display"""
        self.discord = True
        return self

    def syntaxMode_set(self, mode: SyntaxMode) -> "Highlighter":
        self.syntax_mode = mode
        return self

    def softLimit_set(self, limit: int) -> "Highlighter":
        """
        Softly enforce a byte size limit on the output.

        Raises:
            ValueError: If the limit is negative
        """
        if limit < 0:
            raise ValueError(f"soft limit must be non-negative, got {limit}")
        self.soft_limit = limit
        return self

    def tokens_format(self, tokens: List[Tuple[_TokenType, str]], level: int) -> str:
        """
        Render a token stream at a style level.

        Args:
            tokens: (token type, value) pairs covering the whole text
            level: Number of theme tiers to apply (0 = plain text)

        Returns:
            The rendered text, escape sequences included
        """
        if level == 0:
            return "".join(value for _, value in tokens)

        style = self.theme.style_build(level, discord=self.discord)
        formatter_class = DiscordTerminalFormatter if self.discord else Terminal256Formatter
        formatter = formatter_class(style=style)
        buffer = io.StringIO()
        formatter.format(tokens, buffer)
        return buffer.getvalue()

    def render(self, text: str) -> Tuple[bytes, int, bool]:
        """
        Render text to bytes, honoring the soft limit if one is set.

        Returns:
            Tuple of (rendered bytes, style level used, whether the limit was met)
        """
        tokens = list(tokens_get(text, self.syntax_mode))
        LOG(f"Lexed {len(tokens)} tokens in {self.syntax_mode.value} mode", level=3)

        level = self.theme.level_max()
        rendered = self.tokens_format(tokens, level).encode('utf-8')
        if self.soft_limit is None:
            return rendered, level, True

        while len(rendered) > self.soft_limit and level > 0:
            LOG(f"Style level {level} rendered {len(rendered)} bytes, over {self.soft_limit}", level=3)
            level -= 1
            rendered = self.tokens_format(tokens, level).encode('utf-8')

        limit_met = len(rendered) <= self.soft_limit
        if not limit_met:
            LOG(f"Plain text is {len(rendered)} bytes, soft limit {self.soft_limit} not met", level=1)
        return rendered, level, limit_met

    def highlight_to(self, text: str, sink: BinaryIO) -> HighlightResult:
        """
        Highlight text and write the styled byte stream to a sink.

        Args:
            text: Normalized input text
            sink: Binary stream, e.g. sys.stdout.buffer

        Returns:
            HighlightResult describing what was written

        Raises:
            HighlightError: If writing to the sink fails
        """
        rendered, level, limit_met = self.render(text)

        try:
            sink.write(rendered)
            sink.flush()
        except OSError as e:
            raise HighlightError(f"failed to write highlighted output: {e}") from e

        LOG(f"Wrote {len(rendered)} bytes at style level {level}", level=2)
        return HighlightResult(bytes_written=len(rendered), style_level=level, limit_met=limit_met)
