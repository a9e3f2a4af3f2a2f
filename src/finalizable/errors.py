"""Exception types for finalizable."""

from __future__ import annotations


class FinalizableError(Exception):
    """Base exception for finalizable."""


class FinalizedValueError(FinalizableError):
    """Raised when a working value was required but the container is finalized."""


class StepContractError(FinalizableError, TypeError):
    """Raised when a pipeline step returns something other than a Finalizable."""

    def __init__(self, step_name: str, returned: object) -> None:
        """Initialize with the offending step name and its return value."""
        super().__init__(f"Step '{step_name}' must return a Finalizable, got {type(returned).__name__}")
        self.step_name = step_name
        self.returned = returned


class ConfigurationError(FinalizableError):
    """Raised when logging or settings configuration is invalid."""
