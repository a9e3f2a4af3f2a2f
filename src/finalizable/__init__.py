"""finalizable - values that stop changing once they are done."""

from loguru import logger

from .core import Finalizable, State, finalized, working
from .errors import FinalizableError, FinalizedValueError, StepContractError
from .pipeline import Pipeline, PipelineResult, pipeline
from .shortcircuit import Break, Continue, EarlyExit, advance, branch, recompose, short_circuit

__version__ = "0.1.0"

logger.disable("finalizable")

__all__ = [
    "Break",
    "Continue",
    "EarlyExit",
    "Finalizable",
    "FinalizableError",
    "FinalizedValueError",
    "Pipeline",
    "PipelineResult",
    "State",
    "StepContractError",
    "advance",
    "branch",
    "finalized",
    "pipeline",
    "recompose",
    "short_circuit",
    "working",
]
