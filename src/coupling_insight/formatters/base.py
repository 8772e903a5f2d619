"""Base formatter interface for Coupling Insight output rendering."""

from abc import ABC, abstractmethod

from ..pipeline import PipelineResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, result: PipelineResult) -> None:
        """Write the formatted result to stdout."""

    @abstractmethod
    def format(self, result: PipelineResult) -> str:
        """Return formatted string representation of a result."""
