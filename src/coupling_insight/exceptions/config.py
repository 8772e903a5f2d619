"""Configuration exceptions: settings sources and threshold validation."""

from typing import Any

from .base import CouplingInsightError


class ConfigurationError(CouplingInsightError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value!r}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidThresholdError(InvalidConfigError):
    """Raised when the coupling threshold (CP) is not usable."""

    def __init__(self, value: Any, reason: str):
        super().__init__("coupling_threshold", value, reason)
