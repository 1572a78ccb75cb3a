"""Public API for Ownership Insight.

Example:
    >>> from ownership_insight import scan_ownership, scan_churn
    >>>
    >>> report = scan_ownership("/path/to/repo", mode="heuristic", granularity="dir")
    >>> report.matches[0].top_author
    'alice@example.com'
    >>>
    >>> churn = scan_churn("/path/to/repo", window_days=30)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .config import ScanConfig, load_config
from .history import GitHistoryProvider
from .logging_config import get_logger
from .ownership.engine import OwnershipEngine
from .ownership.models import ChurnReport, ContributionMap, OwnershipReport

logger = get_logger(__name__)


def _engine(path: Union[str, Path], config: ScanConfig) -> OwnershipEngine:
    # Validates the repository before any scoring starts
    repo = GitHistoryProvider.open(path, timeout=config.git_timeout_seconds)
    return OwnershipEngine(repo.clone, config)


def scan_ownership(
    path: Union[str, Path] = ".",
    config: Optional[ScanConfig] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> OwnershipReport:
    """Score authorship concentration of a git repository.

    Args:
        path: Any path inside the repository
        config: Ready-made configuration; when given, ``config_file`` and
            ``overrides`` are ignored
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g. mode="heuristic", depth=1)

    Raises:
        InvalidConfigError: If a setting such as ``threshold`` is out of range
        RepositoryNotFoundError: If ``path`` is not inside a git repository
    """
    config = config or load_config(config_file=config_file, **overrides)
    logger.info("Scanning ownership of %s", path)
    return _engine(path, config).ownership()


def scan_churn(
    path: Union[str, Path] = ".",
    config: Optional[ScanConfig] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> ChurnReport:
    """Rank paths of a git repository by decay-weighted recent churn."""
    config = config or load_config(config_file=config_file, **overrides)
    logger.info("Scanning churn of %s", path)
    return _engine(path, config).churn()


def blame_summary(
    file: Union[str, Path], repo_path: Union[str, Path] = "."
) -> dict[str, int]:
    """Lines per author for one file at HEAD, sorted by author.

    ``file`` is relative to the repository root.

    Raises:
        AttributionError: If git cannot attribute the file
        RepositoryNotFoundError: If ``repo_path`` is not inside a git repository
    """
    repo = GitHistoryProvider.open(repo_path)
    counts = ContributionMap()
    for hunk in repo.blame(Path(file).as_posix()):
        counts[hunk.author] += hunk.lines
    return dict(sorted(counts.items()))
