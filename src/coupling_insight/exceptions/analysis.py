"""Analysis-related exceptions: pairs, edge files."""

from pathlib import Path

from .base import CouplingInsightError


class AnalysisError(CouplingInsightError):
    """Base class for analysis-related errors."""
    pass


class InvalidPairError(AnalysisError):
    """Raised when a coupling pair is built from a single unit."""

    def __init__(self, unit: str):
        super().__init__(
            f"Pair must join two different units, got {unit!r} twice",
            details={"unit": unit},
        )
        self.unit = unit


class EdgeFileError(AnalysisError):
    """Raised when an edge file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot read edge file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class EdgeFormatError(AnalysisError):
    """Raised when an edge file does not hold a valid call-edge document."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Malformed edge file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason
