"""Time-decayed churn per file over a trailing window.

Churn for a file is the sum, over commits inside the window, of

    (adds + dels) * w,    w = (window_days - age_days) / window_days

so a change made today weighs 1 and the weight falls linearly to 0 at the
window edge.  ``window_days <= 0`` disables both the window and the decay.
Raw adds, dels and touches are kept undecayed next to the weighted value.
"""

from __future__ import annotations

from typing import AbstractSet, Iterable, Optional

from ..history import CommitRecord
from ..logging_config import get_logger
from .filters import DEFAULT_EXTENSIONS, is_included
from .models import ChurnEntry, ScanOptions
from .ranking import rank_churn

logger = get_logger(__name__)

SECONDS_PER_DAY = 86400


def age_in_days(commit_ts: float, now: float) -> int:
    """Whole days between a commit and ``now``; future commits are age 0."""
    return max(0, int((now - commit_ts) // SECONDS_PER_DAY))


def decay_weight(age_days: int, window_days: int) -> float:
    if window_days <= 0:
        return 1.0
    return max(0.0, window_days - age_days) / window_days


def compute_churn(
    commits: Iterable[CommitRecord],
    window_days: int,
    options: ScanOptions,
    now: float,
    allowed: AbstractSet[str] = DEFAULT_EXTENSIONS,
) -> list[ChurnEntry]:
    """Per-file churn ranked by decayed churn, then path.

    Args:
        commits: Commits newest first.
        window_days: Trailing window length; commits ``window_days`` or more
            days old are ignored.
        options: Path filter settings.  ``min_total`` is not applied.
        now: Unix time the window is anchored to.
    """
    # path -> [churn, adds, dels, touches]
    by_file: dict[str, list] = {}
    skipped = 0

    for commit in commits:
        if commit.is_root:
            continue
        age = age_in_days(commit.timestamp, now)
        if window_days > 0 and age >= window_days:
            continue
        if commit.deltas is None:
            skipped += 1
            logger.debug("Skipping commit %s: diff unavailable", commit.sha)
            continue

        weight = decay_weight(age, window_days)
        for delta in commit.deltas:
            if not is_included(delta.path, options, allowed):
                continue
            change = delta.changed_lines
            # binary, mode-only or empty change: nothing to weigh
            if change == 0:
                continue
            acc = by_file.setdefault(delta.path, [0.0, 0, 0, 0])
            acc[0] += change * weight
            acc[1] += delta.adds
            acc[2] += delta.dels
            acc[3] += 1

    if skipped:
        logger.info("Churn walk skipped %d commits without a usable diff", skipped)

    entries = [
        ChurnEntry(path=path, churn=churn, adds=adds, dels=dels, touches=touches)
        for path, (churn, adds, dels, touches) in by_file.items()
    ]
    return rank_churn(entries)


def resolve_anchor(anchor: str, wall_clock: float, head_ts: Optional[int]) -> float:
    """Unix time the churn window ends at.

    ``"now"`` uses the scan's wall clock; ``"head"`` uses the newest commit,
    which makes results reproducible over a frozen history.
    """
    if anchor == "head" and head_ts is not None:
        return float(head_ts)
    return wall_clock
