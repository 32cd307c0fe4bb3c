"""
Fenced code block unwrapping

Text copied out of a chat message or a markdown document often arrives
wrapped in a ``` fence:

    ```typ
    = Heading
    ```

codeblock_unwrap() removes exactly one such layer so the highlighter only
sees the body. Anything that is not a well-formed fence around the whole
text is passed through untouched.
"""

FENCE = "```"

# Longest first, so a trailing line terminator is never left in the body
CLOSING_FENCES = (FENCE + "\r\n", FENCE + "\n", FENCE)


def codeblock_unwrap(text: str) -> str:
    """
    Remove one layer of ``` fence surrounding the text.

    The opening line must be the fence followed by an optional language tag
    containing no whitespace at all. The text must end with the fence,
    optionally followed by a newline or CRLF.

    Args:
        text: Raw input text

    Returns:
        The body between the opening line and the closing fence, or the
        input object itself if the text is not wrapped in a fence

    Example:
        >>> codeblock_unwrap("```rs\\nfoo\\n```")
        'foo\\n'
        >>> codeblock_unwrap("``` rs\\nfoo\\n```")
        '``` rs\\nfoo\\n```'
    """
    line_end = text.find("\n")
    if line_end == -1:
        return text

    if not text.startswith(FENCE):
        return text

    # Only assume the language tag has no whitespace; a \r before the \n fails too
    tag = text[len(FENCE):line_end]
    if any(char.isspace() for char in tag):
        return text

    for closing in CLOSING_FENCES:
        if text.endswith(closing):
            body_start = line_end + 1
            body_end = len(text) - len(closing)
            # "```\n" matches both fences on the same characters
            if body_start > body_end:
                return text
            return text[body_start:body_end]

    return text
