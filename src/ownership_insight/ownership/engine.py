"""Run ownership and churn scans against a history provider."""

from __future__ import annotations

import time
from typing import Callable, Optional

from ..config import ScanConfig
from ..history import HistoryProvider
from ..logging_config import get_logger
from .aggregate import fold_contributions, fold_winners, rollup_churn
from .churn import compute_churn, resolve_anchor
from .filters import is_included
from .heuristic import collect_touches, score_touches
from .models import (
    ChurnReport,
    Fidelity,
    Granularity,
    OwnershipReport,
    ScanMode,
)
from .parallel import run_exact_attribution
from .ranking import partition_scores, rank_churn, validate_threshold
from .scoring import score_files

logger = get_logger(__name__)


class OwnershipEngine:
    """Scan one repository according to a ScanConfig.

    Args:
        provider_factory: Returns an independent history handle on each call.
            Parallel blame calls it once per file.
        config: Validated scan configuration.
        clock: Wall-clock source, read once per churn scan.
    """

    def __init__(
        self,
        provider_factory: Callable[[], HistoryProvider],
        config: Optional[ScanConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.provider_factory = provider_factory
        self.config = config or ScanConfig()
        self.clock = clock

    def ownership(self) -> OwnershipReport:
        """Score ownership concentration for files or directories."""
        config = self.config
        threshold = validate_threshold(config.threshold)
        mode = config.scan_mode
        granularity = config.scan_granularity
        options = config.scan_options()
        allowed = config.allowed_extensions

        logger.info("Ownership scan: mode=%s by=%s", mode.value, granularity.value)

        provider = self.provider_factory()
        if mode is ScanMode.EXACT:
            paths = [p for p in provider.list_files() if is_included(p, options, allowed)]
            contributions = run_exact_attribution(
                paths, self.provider_factory, workers=config.workers
            )
            file_scores = score_files(contributions, options.min_total)
        else:
            contributions = collect_touches(
                provider.iter_commits(config.max_commits),
                options,
                max_commits=config.max_commits,
                allowed=allowed,
            )
            file_scores = score_touches(contributions, options)

        fidelity = Fidelity.EXACT
        depth = None
        if granularity is Granularity.FILE:
            scores = file_scores
        else:
            depth = config.depth
            if config.fidelity is Fidelity.APPROXIMATE:
                fidelity = Fidelity.APPROXIMATE
                logger.warning("Directory ownership folded from file winners only (approximate)")
                scores = fold_winners(file_scores, depth)
            else:
                scores = fold_contributions(contributions, depth, options.min_total)

        ranked = partition_scores(scores, threshold)
        logger.info(
            "Scored %d paths from %d files, %d above %.2f",
            len(ranked.candidates),
            len(contributions),
            len(ranked.matches),
            threshold,
        )
        return OwnershipReport(
            mode=mode,
            granularity=granularity,
            threshold=threshold,
            matches=ranked.matches,
            candidates=ranked.candidates,
            fidelity=fidelity,
            depth=depth,
            files_scanned=len(contributions),
        )

    def churn(self) -> ChurnReport:
        """Rank paths by decay-weighted recent change volume."""
        config = self.config
        provider = self.provider_factory()
        wall_clock = self.clock()
        head_ts = provider.head_timestamp() if config.churn_anchor == "head" else None
        now = resolve_anchor(config.churn_anchor, wall_clock, head_ts)

        logger.info(
            "Churn scan: window=%d days anchor=%s by=%s",
            config.window_days,
            config.churn_anchor,
            config.granularity,
        )
        entries = compute_churn(
            provider.iter_commits(),
            config.window_days,
            config.scan_options(),
            now,
            allowed=config.allowed_extensions,
        )

        depth = None
        granularity = config.scan_granularity
        if granularity is Granularity.DIR:
            depth = config.depth
            entries = rank_churn(rollup_churn(entries, depth))

        return ChurnReport(
            granularity=granularity,
            window_days=config.window_days,
            anchor=config.churn_anchor,
            now=now,
            entries=entries,
            depth=depth,
        )
