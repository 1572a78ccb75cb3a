"""Ownership concentration and churn scoring."""

from .aggregate import fold_contributions, fold_winners, rollup_churn
from .churn import compute_churn
from .filters import DEFAULT_EXTENSIONS, is_included
from .models import (
    ChurnEntry,
    ChurnReport,
    DirectoryScore,
    Fidelity,
    Granularity,
    OwnershipReport,
    OwnershipScore,
    ScanMode,
    ScanOptions,
)
from .paths import dir_key
from .ranking import partition_scores, rank_scores, validate_threshold

__all__ = [
    "DEFAULT_EXTENSIONS",
    "ChurnEntry",
    "ChurnReport",
    "DirectoryScore",
    "Fidelity",
    "Granularity",
    "OwnershipReport",
    "OwnershipScore",
    "ScanMode",
    "ScanOptions",
    "compute_churn",
    "dir_key",
    "fold_contributions",
    "fold_winners",
    "is_included",
    "partition_scores",
    "rank_scores",
    "rollup_churn",
    "validate_threshold",
]
