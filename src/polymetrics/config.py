"""Configuration loading and management for polymetrics.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in MetricsConfig)
    2. Global config (~/.polymetrics.toml)
    3. Project config (<root>/polymetrics.toml)
    4. Explicit config file
    5. Environment variables (POLYMETRICS_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(top_namespace="myapp")
    >>> config.top_namespace
    'myapp'
    >>> config.thresholds.healthy_distance
    0.5
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

CONFIG_FILENAME = "polymetrics.toml"
ENV_PREFIX = "POLYMETRICS_"


@dataclass(frozen=True)
class ThresholdConfig:
    """Classification thresholds over the abstractness/instability plane.

    Attributes:
        healthy_distance: Mean distance below which a workspace is healthy
        balance: Split point for stable-abstract / unstable-concrete filters
        zone_of_pain: A and I both below this = concrete and heavily depended on
        zone_of_uselessness: A and I both above this = clean interface nobody needs
    """

    healthy_distance: float = 0.5
    balance: float = 0.5
    zone_of_pain: float = 0.3
    zone_of_uselessness: float = 0.7

    def __post_init__(self) -> None:
        for field_name in ("healthy_distance", "balance", "zone_of_pain", "zone_of_uselessness"):
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise InvalidConfigError(field_name, value, "must be between 0.0 and 1.0")


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class MetricsConfig:
    """Configuration for a metrics run.

    Attributes:
        top_namespace: Common name prefix stripped before unit-name inference.
            None defers to the workspace files (workspace.toml / workspace.edn).
        include_interface_edges: Count references made by interface modules as
            outgoing unit edges. When False only implementation modules
            contribute to Ce.
        report_all_units: Report every unit kind, not only components and
            generic packages.
        ignored_dirs: Build-output directory names skipped during discovery.
            Hidden directories are always skipped.
        follow_symlinks: Follow symbolic links while walking the tree.
        verbosity: Logging verbosity level.
        thresholds: Classification thresholds.
    """

    top_namespace: Optional[str] = None
    include_interface_edges: bool = True
    report_all_units: bool = False
    ignored_dirs: list[str] = field(
        default_factory=lambda: [
            "target",
            "build",
            "dist",
            "node_modules",
            "venv",
            "__pycache__",
        ]
    )
    follow_symlinks: bool = False
    verbosity: Verbosity = "normal"
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "expected quiet/normal/verbose")
        if self.top_namespace is not None and not self.top_namespace.strip(". "):
            raise InvalidConfigError("top_namespace", self.top_namespace, "must not be blank")
        if any(not name or "/" in name for name in self.ignored_dirs):
            raise InvalidConfigError(
                "ignored_dirs", self.ignored_dirs, "entries must be plain directory names"
            )


def load_config(
    config_file: Optional[Path] = None, root: Optional[Path] = None, **overrides
) -> MetricsConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        root: Workspace root searched for a project config (default: cwd)
        **overrides: Direct overrides (typically from CLI flags). None values
            are ignored so unset CLI options never mask file settings.

    Returns:
        Validated MetricsConfig instance

    Raises:
        ConfigurationError: If a config file is unreadable or missing
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = (root or Path.cwd()) / CONFIG_FILENAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    thresholds = merged.pop("thresholds", None)
    if isinstance(thresholds, dict):
        try:
            merged["thresholds"] = ThresholdConfig(**thresholds)
        except TypeError as e:
            raise ConfigurationError(f"Invalid [thresholds] config: {e}")
    elif isinstance(thresholds, ThresholdConfig):
        merged["thresholds"] = thresholds

    try:
        return MetricsConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load scalar configuration fields from POLYMETRICS_* environment variables.

    Supported environment variables:
        POLYMETRICS_TOP_NAMESPACE: str
        POLYMETRICS_INCLUDE_INTERFACE_EDGES: bool (true/false/1/0)
        POLYMETRICS_REPORT_ALL_UNITS: bool
        POLYMETRICS_FOLLOW_SYMLINKS: bool
        POLYMETRICS_VERBOSITY: quiet/normal/verbose
    """
    type_hints = get_type_hints(MetricsConfig)
    result: dict[str, Any] = {}

    for field_name in MetricsConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot be expressed as a single string
    (lists, nested configs).
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file and return the parsed dict.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
