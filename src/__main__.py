#!/usr/bin/env python3
"""
typst-ansi-hl - Typst syntax highlighting for the terminal

Reads Typst source from a file or standard input and writes it back to
standard output with ANSI color/style escape sequences.

Processing:
    - Input is read fully before anything else happens
    - A surrounding ``` fence is removed (opt-in, -c)
    - Existing escape sequences are stripped (opt-out, -S)
    - The text is highlighted in markup, code or math mode
    - Output can be restricted to what Discord renders (-d) and shrunk
      towards a byte budget by using fewer colors (-l)

Usage:
    typst-ansi-hl [input] [-d] [-c] [-S] [-l LIMIT] [-m MODE]

Examples:
    # Highlight a file
    typst-ansi-hl paper.typ

    # Re-highlight a message copied from Discord, and keep it postable
    xclip -o | typst-ansi-hl -c -d -l 2000

    # Math snippet with logging on stderr
    echo 'sum_(i=0)^n i' | typst-ansi-hl -m math -vv
"""

import sys
from argparse import ArgumentParser, ArgumentTypeError, Namespace, ArgumentDefaultsHelpFormatter
from typing import List, Optional

from .config import appsettings
from .lib import LOG, state_connectToLogger, text_render, __version__
from .lib.highlighter import HighlightError
from .lib.theme import Theme, ThemeError
from .models import ProgramState, SyntaxMode, pipeline


def limit_parse(value: str) -> int:
    """argparse type for the soft limit: a non-negative integer"""
    try:
        limit = int(value)
    except ValueError:
        raise ArgumentTypeError(f"invalid byte count: '{value}'")
    if limit < 0:
        raise ArgumentTypeError(f"byte count must be non-negative: '{value}'")
    return limit


# Define CLI arguments
parser = ArgumentParser(
    prog="typst-ansi-hl",
    description="Highlight Typst source with ANSI escape sequences",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "input",
    nargs="?",
    default=None,
    help="The input path. If unset, stdin is used",
)

parser.add_argument(
    "-d",
    "--discord",
    action="store_true",
    default=appsettings.discord,
    help="Format the output to be Discord-compatible",
)

# Paired on/off flags share a dest, so the last one given wins
parser.add_argument(
    "-s",
    "--strip-ansi",
    dest="strip_ansi",
    action="store_true",
    default=appsettings.strip_ansi,
    help="Strip all ANSI escape sequences from the input before processing",
)

parser.add_argument(
    "-S",
    "--no-strip-ansi",
    dest="strip_ansi",
    action="store_false",
    help="Don't remove escape sequences from the input",
)

parser.add_argument(
    "-c",
    "--unwrap-codeblock",
    dest="unwrap_codeblock",
    action="store_true",
    default=appsettings.unwrap_codeblock,
    help=(
        'If the input is surrounded by "```" lines, remove them. The opening '
        "delimiter may be followed by a non-whitespace word, the closing one by a newline"
    ),
)

parser.add_argument(
    "-C",
    "--no-unwrap-codeblock",
    dest="unwrap_codeblock",
    action="store_false",
    help='Don\'t remove surrounding "```" from the input',
)

parser.add_argument(
    "-l",
    "--soft-limit",
    dest="soft_limit",
    type=limit_parse,
    default=appsettings.soft_limit,
    help=(
        "Softly enforce a byte size limit: fewer colors are used to get below it, "
        "and the text is printed anyway if that is not possible"
    ),
)

parser.add_argument(
    "-m",
    "--mode",
    choices=[mode.value for mode in SyntaxMode],
    default=appsettings.syntax_mode,
    help="The kind of input syntax",
)

parser.add_argument(
    "--theme",
    default=appsettings.theme_file,
    help="YAML theme file replacing the built-in colors",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=0,
    help="Log progress on stderr (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def traceback_maybePrint(state: ProgramState) -> None:
    """Print the active exception's traceback in debug runs"""
    if state.verbosity >= 3 or appsettings.debug_mode:
        import traceback

        traceback.print_exc()


def input_acquire(inputstate: ProgramState) -> ProgramState:
    """
    Read the whole input into memory.

    The input is decoded as UTF-8 from raw bytes so that line endings
    reach the pipeline untouched.

    Args:
        inputstate: Program state with optional input path

    Returns:
        ProgramState with added field:
            - inputText: Full input text

    Exits:
        1 if the file or stdin cannot be read or is not valid UTF-8
    """
    state = inputstate.copy()

    if state.input is not None:
        LOG(f"Reading {state.input}", level=2)
        try:
            state.inputText = state.input.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: failed to read file `{state.input}`: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        LOG("Reading stdin", level=2)
        try:
            state.inputText = sys.stdin.buffer.read().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: failed to read from stdin: {e}", file=sys.stderr)
            sys.exit(1)

    LOG(f"Read {len(state.inputText)} characters", level=1)
    return state


def config_build(inputstate: ProgramState) -> ProgramState:
    """
    Freeze the CLI options into a pipeline configuration.

    Args:
        inputstate: Program state carrying the CLI options

    Returns:
        ProgramState with added field:
            - pipelineConfig: Immutable configuration built from the options

    Exits:
        1 if the options do not form a valid configuration
    """
    state = inputstate.copy()

    try:
        state.pipelineConfig = state.config_make()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Pipeline configuration: {state.pipelineConfig}", level=2)
    return state


def output_highlight(inputstate: ProgramState) -> ProgramState:
    """
    Normalize the input and highlight it onto stdout.

    Args:
        inputstate: Program state with inputText and pipelineConfig

    Returns:
        ProgramState with added field:
            - highlightResult: Bytes written, style level and limit status

    Exits:
        1 if the theme cannot be loaded or the output cannot be written
    """
    state = inputstate.copy()

    try:
        theme = Theme.file_load(state.theme) if state.theme else Theme.builtin()
        LOG(f"Using theme: {theme.name}", level=2)
    except ThemeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        state.highlightResult = text_render(
            state.inputText or "", state.pipelineConfig, sys.stdout.buffer, theme
        )
    except HighlightError as e:
        print(f"Error: failed to highlight input: {e}", file=sys.stderr)
        traceback_maybePrint(state)
        sys.exit(1)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Log a summary of the run on stderr.

    Args:
        inputstate: Program state with highlightResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()
    result = state.highlightResult
    if result is None:
        return state

    LOG(f"Wrote {result.bytes_written} bytes at style level {result.style_level}", level=1)
    if not result.limit_met:
        LOG(f"Soft limit of {state.soft_limit} bytes could not be met", level=1)
    return state


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point - highlight Typst source from a file or stdin.

    Orchestrates the pipeline:
        1. input_acquire: Read the file or stdin
        2. config_build: Freeze the options into a PipelineConfig
        3. output_highlight: Unwrap, strip and highlight onto stdout
        4. results_report: Log a summary

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])
    """
    options: Namespace = parser.parse_args(argv)

    state: ProgramState = ProgramState.state_createFromNamespace(options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, input_acquire, config_build, output_highlight, results_report)


if __name__ == "__main__":
    main()
