"""Turn per-author contribution maps into ownership scores.

Exact mode builds a file's contribution map from blame hunks (lines per
author); heuristic mode builds it from commit touches.  Both reduce the map
the same way:

    total      = sum of all contributions
    top_author = author with the largest contribution
    ratio      = top contribution / total

Ties on the largest contribution go to the smallest author identity, so the
winner does not depend on map iteration order.
"""

from __future__ import annotations

from typing import Mapping, Optional

from ..exceptions import AttributionError
from ..history import HistoryProvider
from ..logging_config import get_logger
from .models import ContributionMap, DirectoryScore, OwnershipScore

logger = get_logger(__name__)


def top_contributor(contributions: Mapping[str, int]) -> Optional[tuple[str, int]]:
    """Return ``(author, count)`` of the dominant author, or None if empty."""
    if not contributions:
        return None
    return min(contributions.items(), key=lambda item: (-item[1], item[0]))


def score_contributions(
    path: str, contributions: Mapping[str, int], min_total: int = 0
) -> Optional[OwnershipScore]:
    """Build a file score; None if the file is empty or below ``min_total``."""
    total = sum(contributions.values())
    if total <= 0 or total < min_total:
        return None
    author, count = top_contributor(contributions)
    return OwnershipScore(path=path, top_author=author, ratio=count / total, total=total)


def score_directory(
    key: str, contributions: Mapping[str, int], min_total: int = 0
) -> Optional[DirectoryScore]:
    total = sum(contributions.values())
    if total <= 0 or total < min_total:
        return None
    author, count = top_contributor(contributions)
    return DirectoryScore(path=key, top_author=author, ratio=count / total, total=total)


def exact_contributions(provider: HistoryProvider, path: str) -> Optional[ContributionMap]:
    """Lines per author for ``path`` at the current revision.

    Returns None when the path cannot be attributed (binary, missing from
    HEAD, unreadable); the caller skips it.
    """
    try:
        hunks = provider.blame(path)
    except AttributionError as e:
        logger.debug("Skipping %s: %s", path, e)
        return None

    counts = ContributionMap()
    for hunk in hunks:
        counts[hunk.author] += hunk.lines
    return counts


def score_files(
    contributions: Mapping[str, Mapping[str, int]], min_total: int = 0
) -> list[OwnershipScore]:
    """Score every file in a ``{path: contribution map}`` mapping."""
    scores = []
    for path in sorted(contributions):
        score = score_contributions(path, contributions[path], min_total)
        if score is not None:
            scores.append(score)
    return scores
