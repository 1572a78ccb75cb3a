"""Configuration loading and management for Ownership Insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in ScanConfig)
    2. Global config (~/.ownership-insight.toml)
    3. Project config (./ownership-insight.toml)
    4. Explicit config file
    5. Environment variables (OWNERSHIP_* prefix)
    6. CLI / API overrides (passed as kwargs)

Example:
    >>> config = load_config(threshold=0.9, mode="heuristic")
    >>> config.threshold
    0.9
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError, OwnershipInsightError
from .logging_config import VERBOSITY_LEVELS, Verbosity
from .ownership.filters import DEFAULT_EXTENSIONS
from .ownership.models import (
    DEFAULT_MIN_TOTAL,
    ChurnAnchor,
    Fidelity,
    Granularity,
    ScanMode,
    ScanOptions,
    normalize_extension,
)

CONFIG_FILENAME = "ownership-insight.toml"
ENV_PREFIX = "OWNERSHIP_"

_ANCHORS = tuple(a.value for a in ChurnAnchor)
_VERBOSITIES = tuple(VERBOSITY_LEVELS)


@dataclass(frozen=True)
class ScanConfig:
    """Configuration for one ownership or churn scan.

    Attributes:
        Path selection:
            include_all: Score every tracked path, ignoring extensions
            extra_extensions: Extensions added to the allow-list
            extensions: Replacement allow-list (None = built-in list)
            min_total: Minimum lines/touches for a path to be reported

        Ownership:
            mode: "exact" (blame) or "heuristic" (commit touches)
            granularity: "file" or "dir"
            dir_fidelity: "exact" (per-author sums) or "approximate"
                (file winners only)
            threshold: Risk threshold in [0, 1]; ratios above it match
            depth: Directory key depth for "dir" granularity
            max_commits: Commit cap for the heuristic walk (None = all)
            workers: Parallel blame workers (None or 0 = auto)

        Churn:
            window_days: Trailing window; <= 0 disables window and decay
            churn_anchor: "now" (wall clock) or "head" (newest commit)

        Output and runtime:
            limit: Rows shown per result list
            git_timeout_seconds: Timeout per git call (blame, ls-files)
            verbosity: Logging verbosity level (quiet, normal, verbose)
            log_file: Optional file that also receives log records
    """

    # Path selection
    include_all: bool = False
    extra_extensions: list[str] = field(default_factory=list)
    extensions: Optional[list[str]] = None
    min_total: int = DEFAULT_MIN_TOTAL

    # Ownership
    mode: str = ScanMode.EXACT.value
    granularity: str = Granularity.FILE.value
    dir_fidelity: str = Fidelity.EXACT.value
    threshold: float = 0.75
    depth: int = 2
    max_commits: Optional[int] = None
    workers: Optional[int] = None

    # Churn
    window_days: int = 90
    churn_anchor: str = ChurnAnchor.NOW.value

    # Output and runtime
    limit: int = 20
    git_timeout_seconds: int = 120
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, (int, float)):
            raise InvalidConfigError("threshold", self.threshold, "must be a number")
        if math.isnan(self.threshold) or not 0.0 <= self.threshold <= 1.0:
            raise InvalidConfigError("threshold", self.threshold, "must be between 0.0 and 1.0")

        if self.min_total < 0:
            raise InvalidConfigError("min_total", self.min_total, "must be non-negative")
        if self.depth < 0:
            raise InvalidConfigError("depth", self.depth, "must be non-negative")
        if self.workers is not None and self.workers < 0:
            raise InvalidConfigError("workers", self.workers, "must be non-negative")
        if self.max_commits is not None and self.max_commits < 1:
            raise InvalidConfigError("max_commits", self.max_commits, "must be at least 1")
        if self.limit < 1:
            raise InvalidConfigError("limit", self.limit, "must be at least 1")
        if self.git_timeout_seconds < 1:
            raise InvalidConfigError(
                "git_timeout_seconds", self.git_timeout_seconds, "must be at least 1"
            )

        _check_choice("mode", self.mode, [m.value for m in ScanMode])
        _check_choice("granularity", self.granularity, [g.value for g in Granularity])
        _check_choice("dir_fidelity", self.dir_fidelity, [f.value for f in Fidelity])
        _check_choice("churn_anchor", self.churn_anchor, _ANCHORS)
        _check_choice("verbosity", self.verbosity, _VERBOSITIES)

    @property
    def scan_mode(self) -> ScanMode:
        return ScanMode(self.mode)

    @property
    def scan_granularity(self) -> Granularity:
        return Granularity(self.granularity)

    @property
    def fidelity(self) -> Fidelity:
        return Fidelity(self.dir_fidelity)

    @property
    def allowed_extensions(self) -> frozenset[str]:
        if self.extensions is None:
            return DEFAULT_EXTENSIONS
        return frozenset(normalize_extension(e) for e in self.extensions if e.strip())

    def scan_options(self) -> ScanOptions:
        return ScanOptions.build(
            include_all=self.include_all,
            extra_extensions=self.extra_extensions,
            min_total=self.min_total,
        )


def _check_choice(key: str, value: Any, choices) -> None:
    if value not in choices:
        raise InvalidConfigError(key, value, f"expected one of {', '.join(choices)}")


def load_config(config_file: Optional[Path] = None, **overrides) -> ScanConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep lower-priority values.

    Returns:
        Validated ScanConfig instance

    Raises:
        OwnershipInsightError: If a config file is invalid or missing
        InvalidConfigError: If a value is out of range
    """
    merged: dict = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        merged.update(_load_toml_checked(global_config, "global config"))

    project_config = Path.cwd() / CONFIG_FILENAME
    if project_config.exists():
        merged.update(_load_toml_checked(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise OwnershipInsightError(
                f"Config file not found: {config_file}", details={"path": str(config_file)}
            )
        merged.update(_load_toml_checked(config_file, "config file"))

    merged.update(_load_env_vars())

    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    merged.update(overrides)

    try:
        return ScanConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise OwnershipInsightError(f"Invalid configuration: {e}")


def _load_toml_checked(path: Path, label: str) -> dict:
    try:
        data = _load_toml_file(path)
    except OwnershipInsightError:
        raise
    except Exception as e:
        raise OwnershipInsightError(f"Invalid {label} '{path}': {e}", details={"path": str(path)})
    # allow settings to live under a [scan] table as well as at top level
    scan_table = data.pop("scan", None)
    if isinstance(scan_table, dict):
        data.update(scan_table)
    return data


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from OWNERSHIP_* environment variables.

    Every ScanConfig field maps to ``OWNERSHIP_<FIELD>``, e.g.
    ``OWNERSHIP_THRESHOLD=0.9`` or ``OWNERSHIP_EXTRA_EXTENSIONS=vue,svelte``.
    """
    type_hints = get_type_hints(ScanConfig)
    result: dict[str, Any] = {}

    for field_name in ScanConfig.__dataclass_fields__:
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
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        if value.strip().lower() in ("", "none"):
            return None
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return [item.strip() for item in value.split(",") if item.strip()]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        return tomllib.load(f)
