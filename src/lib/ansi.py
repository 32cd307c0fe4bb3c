"""
Terminal escape sequence stripping

Input is frequently the output of another colorizing tool (or an earlier
run of this one), so escape sequences are removed before highlighting.
"""

import re

# - CSI sequences: ESC [ params intermediates final (colors, cursor movement)
# - OSC sequences: ESC ] ... terminated by BEL or ST (titles, hyperlinks)
# - DCS / SOS / PM / APC strings: ESC P|X|^|_ ... ST
# - Two byte escapes: ESC followed by a single Fe/Fp/Fs character
# - 8-bit CSI
# - Any introducer left over, e.g. a trailing ESC or ESC before a control character
ANSI_ESCAPE = re.compile(
    r"""
    \x1b\[[0-?]*[ -/]*[@-~]
    | \x1b\][^\x07\x1b]*(?:\x07|\x1b\\)?
    | \x1b[PX^_][^\x1b]*(?:\x1b\\)?
    | \x1b[ -/]*[0-~]
    | \x9b[0-?]*[ -/]*[@-~]
    | \x1b
    | \x9b
    """,
    re.VERBOSE,
)


def ansi_strip(text: str) -> str:
    """
    Remove all terminal escape sequences from text.

    Args:
        text: Input text potentially containing escape sequences

    Returns:
        Text with every escape sequence removed and all other characters
        (including newlines and tabs) preserved
    """
    if "\x1b" not in text and "\x9b" not in text:
        return text
    return ANSI_ESCAPE.sub("", text)
