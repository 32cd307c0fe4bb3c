"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Optional, Type, TypeVar, Callable
from dataclasses import dataclass, field

from .pipeline import SyntaxMode, PipelineConfig, HighlightResult


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the highlighting pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: input, verbosity, discord, strip_ansi, unwrap_codeblock,
          soft_limit, mode, theme
        - input_acquire: inputText
        - config_build: pipelineConfig
        - output_highlight: highlightResult
        - results_report: (no additions, terminal stage)

    Attributes:
        input: Optional input file path (stdin when None)
        verbosity: Logging verbosity level (0-3)
        discord: Restrict output styling to what Discord renders
        strip_ansi: Remove escape sequences from the input
        unwrap_codeblock: Remove a surrounding ``` fence from the input
        soft_limit: Optional output byte budget
        mode: Syntax mode name (code, markup, math)
        theme: Optional path to a YAML theme file
        inputText: Raw text as read from file or stdin
        pipelineConfig: Immutable configuration built from the options
        highlightResult: What the highlighter reported
    """

    # CLI arguments
    input: Optional[Path] = field(default=None)
    verbosity: int = field(default=0)
    discord: bool = field(default=False)
    strip_ansi: bool = field(default=True)
    unwrap_codeblock: bool = field(default=False)
    soft_limit: Optional[int] = field(default=None)
    mode: str = field(default=SyntaxMode.MARKUP.value)
    theme: Optional[str] = field(default=None)

    # Pipeline state
    inputText: Optional[str] = field(default=None)
    pipelineConfig: Optional[PipelineConfig] = field(default=None)
    highlightResult: Optional[HighlightResult] = field(default=None)

    @classmethod
    def state_createFromNamespace(cls: Type["ProgramState"], options: Namespace) -> "ProgramState":
        """
        Create ProgramState from an argparse Namespace.

        Options that have no matching field are ignored.

        Args:
            options: Parsed CLI arguments

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}
        if filtered_options.get("input") is not None:
            filtered_options["input"] = Path(filtered_options["input"])

        return cls(**filtered_options)

    def config_make(self) -> PipelineConfig:
        """
        Build the immutable pipeline configuration from the CLI options.

        Raises:
            ValueError: If the mode is unknown or the soft limit is negative
        """
        return PipelineConfig(
            unwrap_codeblock=self.unwrap_codeblock,
            strip_ansi=self.strip_ansi,
            syntax_mode=SyntaxMode(self.mode),
            discord_compatible=self.discord,
            soft_size_limit=self.soft_limit,
        )

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            input_acquire,
            config_build,
            output_highlight,
            results_report
        )

    This is equivalent to:
        results_report(output_highlight(config_build(input_acquire(initial_state))))

    But reads left-to-right instead of inside-out.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
