"""
Input normalization pipeline

Orders the two input clean-ups and hands the result to the highlighter:

    raw text -> codeblock_unwrap -> ansi_strip -> Highlighter.highlight_to

The order is fixed. Unwrapping runs on the literal bytes the user supplied,
so a fence line that itself carries escape sequences from an earlier
rendering is not unwrapped; the sequences are removed afterwards.
"""

from typing import BinaryIO, Optional

from ..models.pipeline import PipelineConfig, HighlightResult
from .ansi import ansi_strip
from .codeblock import codeblock_unwrap
from .highlighter import Highlighter
from .log import LOG
from .theme import Theme


def text_normalize(text: str, config: PipelineConfig) -> str:
    """
    Prepare raw input text for the highlighter.

    Args:
        text: Raw input text
        config: Pipeline configuration (only the two boolean flags are used)

    Returns:
        strip(unwrap(text)), each step applied only if its flag is set
    """
    normalized = text

    if config.unwrap_codeblock:
        normalized = codeblock_unwrap(normalized)
        if normalized is text:
            LOG("No surrounding ``` fence found", level=2)
        else:
            LOG(f"Unwrapped ``` fence, {len(normalized)} characters remain", level=2)

    if config.strip_ansi:
        stripped = ansi_strip(normalized)
        LOG(f"Stripped {len(normalized) - len(stripped)} escape characters", level=2)
        normalized = stripped

    return normalized


def text_render(
    text: str,
    config: PipelineConfig,
    sink: BinaryIO,
    theme: Optional[Theme] = None,
) -> HighlightResult:
    """
    Normalize text and write its highlighted rendering to a sink.

    Args:
        text: Raw input text
        config: Pipeline configuration
        sink: Binary stream receiving the styled output
        theme: Optional theme replacing the built-in one

    Returns:
        HighlightResult reported by the highlighter

    Raises:
        HighlightError: If the sink fails while writing
    """
    normalized = text_normalize(text, config)
    highlighter = Highlighter.from_config(config, theme)
    return highlighter.highlight_to(normalized, sink)
