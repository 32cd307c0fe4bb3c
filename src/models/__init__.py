"""
Models package for typst-ansi-hl

Contains data structures and type definitions for the highlighting pipeline.
"""

from .state import ProgramState, pipeline
from .pipeline import SyntaxMode, PipelineConfig, HighlightResult

__all__ = [
    "ProgramState",
    "pipeline",
    "SyntaxMode",
    "PipelineConfig",
    "HighlightResult",
]
