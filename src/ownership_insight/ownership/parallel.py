"""Fan exact-mode attribution out across worker threads.

Blame is independent per file, so the file list is split across a thread
pool.  History handles are not shared between tasks: every task opens its own
through ``provider_factory``.  Results are gathered only after all tasks have
finished and are returned in path order.
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Optional, Sequence

from ..exceptions import InvalidConfigError
from ..history import HistoryProvider
from ..logging_config import get_logger
from .models import ContributionMap
from .scoring import exact_contributions

logger = get_logger(__name__)

# CPU count capped at 8; blame is mostly waiting on git subprocesses
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)

# Below this many files the pool costs more than it saves
_PARALLEL_MIN_FILES = 10

ProviderFactory = Callable[[], HistoryProvider]


def resolve_workers(workers: Optional[int]) -> int:
    """Effective worker count; ``None`` or ``0`` selects the default."""
    if workers is None or workers == 0:
        return _DEFAULT_WORKERS
    if workers < 0:
        raise InvalidConfigError("workers", workers, "must be non-negative")
    return workers


def _attribute(provider_factory: ProviderFactory, path: str) -> Optional[ContributionMap]:
    return exact_contributions(provider_factory(), path)


def run_exact_attribution(
    paths: Sequence[str],
    provider_factory: ProviderFactory,
    workers: Optional[int] = None,
) -> dict[str, ContributionMap]:
    """Blame every path and return ``{path: lines per author}``.

    Paths that cannot be attributed are left out.  Any other exception
    raised by a task aborts the run.
    """
    max_workers = resolve_workers(workers)
    results: dict[str, ContributionMap] = {}

    if max_workers == 1 or len(paths) < _PARALLEL_MIN_FILES:
        for path in paths:
            counts = _attribute(provider_factory, path)
            if counts is not None:
                results[path] = counts
    else:
        logger.debug("Blaming %d files with %d workers", len(paths), max_workers)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(_attribute, provider_factory, path): path for path in paths
            }
            for future in as_completed(futures):
                counts = future.result()
                if counts is not None:
                    results[futures[future]] = counts

    skipped = len(paths) - len(results)
    if skipped:
        logger.info("Attribution unavailable for %d of %d files", skipped, len(paths))

    return {path: results[path] for path in sorted(results)}
