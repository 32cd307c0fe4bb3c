"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the current ProgramState's
verbosity level without requiring explicit state passing.

All log output goes to stderr; stdout is reserved for the highlighted text,
so the tool stays usable as a filter at any verbosity.

Usage:
    from typst_ansi_hl.lib.log import LOG, state_connectToLogger

    # At start of the pipeline:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("Appears with -v", level=1)
    LOG("Appears with -vv", level=2)
    LOG("Appears with -vvv", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=-v, 2=-vv, 3=-vvv)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Read 120 characters from stdin", level=1)
        LOG("Unwrapped ``` fence", level=2)
        LOG("Style level 3 rendered 4211 bytes", level=3)
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        # depth=1 reports the caller, not this wrapper
        logger.opt(depth=1).debug(message, **kwargs)
