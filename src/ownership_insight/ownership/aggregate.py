"""Fold file-level results into directory-level rollups."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Mapping

from .models import ChurnEntry, ContributionMap, DirectoryScore, OwnershipScore
from .paths import dir_key
from .scoring import score_directory


def fold_contributions(
    file_contributions: Mapping[str, Mapping[str, int]], depth: int, min_total: int = 0
) -> list[DirectoryScore]:
    """Directory scores from full per-author maps.

    Works for lines (exact mode) and touches (heuristic mode) alike.  Files
    below ``min_total`` are dropped before folding and add nothing to their
    directory.  The directory winner is taken over the summed per-author map,
    which is not the same as combining the per-file winners: with
    ``a.py = {x: 10, y: 2}`` and ``b.py = {x: 5, y: 13}`` the directory is
    ``x`` with 15 of 30.
    """
    by_dir: dict[str, ContributionMap] = defaultdict(ContributionMap)
    for path in sorted(file_contributions):
        contributions = file_contributions[path]
        total = sum(contributions.values())
        if total <= 0 or total < min_total:
            continue
        by_dir[dir_key(path, depth)].update(contributions)

    scores = []
    for key in sorted(by_dir):
        score = score_directory(key, by_dir[key], min_total)
        if score is not None:
            scores.append(score)
    return scores


def fold_winners(scores: Iterable[OwnershipScore], depth: int) -> list[DirectoryScore]:
    """Lower-fidelity directory scores from file winners only.

    Each file's whole total is credited to its top author.  Use only when
    per-author breakdowns are unavailable; the result over-states the
    dominant share of every directory with mixed files.
    """
    by_dir: dict[str, ContributionMap] = defaultdict(ContributionMap)
    for score in scores:
        by_dir[dir_key(score.path, depth)][score.top_author] += score.total

    results = []
    for key in sorted(by_dir):
        folded = score_directory(key, by_dir[key])
        if folded is not None:
            results.append(folded)
    return results


def rollup_churn(entries: Iterable[ChurnEntry], depth: int) -> list[ChurnEntry]:
    """Sum churn, adds, dels and touches per directory key."""
    sums: dict[str, list] = {}
    for entry in entries:
        key = dir_key(entry.path, depth)
        acc = sums.setdefault(key, [0.0, 0, 0, 0])
        acc[0] += entry.churn
        acc[1] += entry.adds
        acc[2] += entry.dels
        acc[3] += entry.touches

    return [
        ChurnEntry(path=key, churn=churn, adds=adds, dels=dels, touches=touches)
        for key, (churn, adds, dels, touches) in sorted(sums.items())
    ]
