"""Exception hierarchy for Ownership Insight."""

from .base import OwnershipInsightError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    RepositoryNotFoundError,
)
from .history import (
    AttributionError,
    CommitDiffError,
    HistoryError,
)

__all__ = [
    "OwnershipInsightError",
    "ConfigurationError",
    "InvalidConfigError",
    "RepositoryNotFoundError",
    "HistoryError",
    "AttributionError",
    "CommitDiffError",
]
