"""Touch-count ownership from a single walk of the commit graph.

A touch is one commit by one author changing one path.  Counting touches
needs a single pass over ``commits x changed files`` instead of blaming every
file, at the price of treating a one-character fix like a full rewrite.
"""

from __future__ import annotations

from collections import defaultdict
from typing import AbstractSet, Iterable, Optional

from ..history import CommitRecord
from ..logging_config import get_logger
from .filters import DEFAULT_EXTENSIONS, is_included
from .models import ContributionMap, OwnershipScore, ScanOptions
from .scoring import score_files

logger = get_logger(__name__)


def collect_touches(
    commits: Iterable[CommitRecord],
    options: ScanOptions,
    max_commits: Optional[int] = None,
    allowed: AbstractSet[str] = DEFAULT_EXTENSIONS,
) -> dict[str, ContributionMap]:
    """Count per-(path, author) touches, newest commit first.

    Root commits and commits without a usable diff still count towards
    ``max_commits``; they just contribute nothing.
    """
    touches: dict[str, ContributionMap] = defaultdict(ContributionMap)
    visited = 0
    skipped = 0

    for commit in commits:
        if max_commits is not None and visited >= max_commits:
            break
        visited += 1

        if commit.is_root:
            continue
        if commit.deltas is None:
            skipped += 1
            logger.debug("Skipping commit %s: diff unavailable", commit.sha)
            continue

        # a path listed twice in one diff is still one touch
        seen_paths = set()
        for delta in commit.deltas:
            if delta.path in seen_paths or not is_included(delta.path, options, allowed):
                continue
            seen_paths.add(delta.path)
            touches[delta.path][commit.author] += 1

    logger.info(
        "Touch walk visited %d commits (%d skipped), %d paths", visited, skipped, len(touches)
    )
    return dict(touches)


def score_touches(
    touches: dict[str, ContributionMap], options: ScanOptions
) -> list[OwnershipScore]:
    return score_files(touches, options.min_total)
