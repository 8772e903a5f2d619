"""Configuration loading and management for Coupling Insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in ClusteringConfig)
    2. Global config (~/.coupling-insight.toml)
    3. Project config (./coupling-insight.toml)
    4. Explicit config file
    5. Environment variables (COUPLING_INSIGHT_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(allowed_units=["Shape", "Point"], coupling_threshold=0.25)
    >>> config.coupling_threshold
    0.25
"""

from __future__ import annotations

import math
import numbers
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError, InvalidThresholdError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "COUPLING_INSIGHT_"
CONFIG_FILENAME = "coupling-insight.toml"

# Minimum internal coupling a dendrogram branch needs to stand as a module.
DEFAULT_COUPLING_THRESHOLD = 0.30
UNRESOLVED_UNIT = "<external>"


def validate_threshold(value: Any) -> float:
    """Check a coupling threshold (CP) and return it as a float.

    Any finite, non-negative real number is accepted. Values above 1.0 can
    never be met by a module but are legal: extraction then falls back on
    the module-count limit alone.

    Raises:
        InvalidThresholdError: If the value is not a real number, is NaN or
            infinite, or is negative.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidThresholdError(value, "must be a real number")
    if math.isnan(value) or math.isinf(value):
        raise InvalidThresholdError(value, "must be finite")
    if value < 0:
        raise InvalidThresholdError(value, "must be non-negative")
    return float(value)


def parse_threshold(text: str) -> float:
    """Parse a coupling threshold typed by a user (CLI option, env var).

    Raises:
        InvalidThresholdError: If the text is not a number or the number is
            not a usable threshold.
    """
    try:
        value = float(text)
    except ValueError:
        raise InvalidThresholdError(text, "must be a real number")
    return validate_threshold(value)


@dataclass(frozen=True)
class ClusteringConfig:
    """Configuration for one coupling analysis run.

    The allow-list is an explicit value threaded through every stage, so
    several analyses with different allow-lists never interfere.

    Attributes:
        allowed_units: Units to analyze, in order. Empty means every unit
            that owns a caller key in the store, in first-seen order.
        coupling_threshold: CP, minimum internal average coupling for a
            dendrogram branch to be accepted as a module.
        unresolved_unit: Sentinel unit the parser reports for call targets it
            could not resolve. Never part of the allow-list.
        key_separator: Separator between unit and method in call keys.
        weight_precision: Decimal places used by weight exports.
        verbosity: Logging verbosity level.
    """

    allowed_units: tuple[str, ...] = ()
    coupling_threshold: float = DEFAULT_COUPLING_THRESHOLD
    unresolved_unit: str = UNRESOLVED_UNIT
    key_separator: str = "."
    weight_precision: int = 4
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        object.__setattr__(self, "coupling_threshold", validate_threshold(self.coupling_threshold))

        if isinstance(self.allowed_units, str):
            raise InvalidConfigError("allowed_units", self.allowed_units, "must be a list of unit names")
        units = tuple(dict.fromkeys(self.allowed_units))
        for unit in units:
            if not isinstance(unit, str) or not unit:
                raise InvalidConfigError("allowed_units", unit, "unit names must be non-empty strings")
        if self.unresolved_unit in units:
            raise InvalidConfigError(
                "allowed_units", self.unresolved_unit, "the unresolved sentinel cannot be analyzed"
            )
        object.__setattr__(self, "allowed_units", units)

        if not self.key_separator:
            raise InvalidConfigError("key_separator", self.key_separator, "must not be empty")
        if self.weight_precision < 0:
            raise InvalidConfigError("weight_precision", self.weight_precision, "must be non-negative")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "expected quiet, normal or verbose")

    @property
    def weight_format(self) -> str:
        """Format string used when writing weights, e.g. '.4f'."""
        return f".{self.weight_precision}f"


def load_config(config_file: Optional[Path] = None, **overrides) -> ClusteringConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        Validated ClusteringConfig instance

    Raises:
        ConfigurationError: If a config source is unreadable or names an
            unknown setting
        InvalidThresholdError: If the merged threshold is not usable
    """
    merged: dict = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        merged.update(_load_toml_section(global_config))

    project_config = Path.cwd() / CONFIG_FILENAME
    if project_config.exists():
        merged.update(_load_toml_section(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_section(config_file))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    if "allowed_units" in merged:
        units = merged["allowed_units"]
        if isinstance(units, (list, tuple)):
            merged["allowed_units"] = tuple(units)

    try:
        return ClusteringConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from COUPLING_INSIGHT_* environment variables.

    Supported environment variables:
        COUPLING_INSIGHT_ALLOWED_UNITS: comma-separated unit names
        COUPLING_INSIGHT_COUPLING_THRESHOLD: float
        COUPLING_INSIGHT_UNRESOLVED_UNIT: str
        COUPLING_INSIGHT_KEY_SEPARATOR: str
        COUPLING_INSIGHT_WEIGHT_PRECISION: int
        COUPLING_INSIGHT_VERBOSITY: quiet/normal/verbose
    """
    type_hints = get_type_hints(ClusteringConfig)

    result: dict[str, Any] = {}

    for field_name in ClusteringConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        if field_name == "coupling_threshold":
            result[field_name] = parse_threshold(env_value)
            continue

        try:
            result[field_name] = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if origin is tuple:
        return tuple(part.strip() for part in value.split(",") if part.strip())

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    return value


def _load_toml_section(path: Path) -> dict:
    """Load a TOML file and return its settings.

    Settings may live at the top level or under a ``[coupling_insight]`` table.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

    section = data.get("coupling_insight", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid config file '{path}': [coupling_insight] must be a table")
    return dict(section)
