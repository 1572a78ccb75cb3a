"""Deterministic ordering and threshold partitioning of results."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from ..exceptions import InvalidConfigError
from .models import AnyScore, ChurnEntry, RankedScores


def validate_threshold(threshold: float) -> float:
    """Reject risk thresholds outside ``[0, 1]``."""
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise InvalidConfigError("threshold", threshold, "must be a number in [0.0, 1.0]")
    if math.isnan(threshold) or not 0.0 <= threshold <= 1.0:
        raise InvalidConfigError("threshold", threshold, "must be between 0.0 and 1.0")
    return float(threshold)


def rank_scores(scores: Iterable[AnyScore]) -> list[AnyScore]:
    """Ratio descending, then total descending, then path ascending."""
    return sorted(scores, key=lambda s: (-s.ratio, -s.total, s.path))


def partition_scores(scores: Sequence[AnyScore], threshold: float) -> RankedScores:
    """Split ranked scores into those strictly above ``threshold`` and all.

    Raises:
        InvalidConfigError: If ``threshold`` is outside ``[0, 1]``.
    """
    threshold = validate_threshold(threshold)
    candidates = rank_scores(scores)
    matches = [s for s in candidates if s.ratio > threshold]
    return RankedScores(matches=matches, candidates=candidates)


def rank_churn(entries: Iterable[ChurnEntry]) -> list[ChurnEntry]:
    """Churn descending, then path ascending."""
    return sorted(entries, key=lambda e: (-e.churn, e.path))
