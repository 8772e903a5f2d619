"""Exception hierarchy for Coupling Insight."""

from .analysis import (
    AnalysisError,
    EdgeFileError,
    EdgeFormatError,
    InvalidPairError,
)
from .base import CouplingInsightError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidThresholdError,
)

__all__ = [
    "CouplingInsightError",
    "AnalysisError",
    "InvalidPairError",
    "EdgeFileError",
    "EdgeFormatError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidThresholdError",
]
