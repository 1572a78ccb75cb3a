"""Dict-backed history provider for tests and library callers."""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Optional, Sequence

from ..exceptions import AttributionError
from .base import HistoryProvider
from .models import BlameHunk, CommitRecord


class InMemoryHistoryProvider(HistoryProvider):
    """Serve a fixed set of files, blame hunks and commits.

    Args:
        blame: Mapping of path to its blame hunks. Paths present here are the
            tracked files unless ``files`` is given.
        commits: Commits in any order; they are served newest first.
        files: Optional explicit tracked-file list (may include paths that
            have no blame, which then fail attribution).
    """

    def __init__(
        self,
        blame: Optional[Mapping[str, Sequence[BlameHunk]]] = None,
        commits: Iterable[CommitRecord] = (),
        files: Optional[Iterable[str]] = None,
    ):
        self._blame = {path: list(hunks) for path, hunks in (blame or {}).items()}
        self._commits = sorted(commits, key=lambda c: c.timestamp, reverse=True)
        self._files = sorted(files) if files is not None else sorted(self._blame)

    def list_files(self) -> list[str]:
        return list(self._files)

    def blame(self, path: str) -> list[BlameHunk]:
        try:
            return list(self._blame[path])
        except KeyError:
            raise AttributionError(path, "no attribution recorded") from None

    def iter_commits(self, max_commits: Optional[int] = None) -> Iterator[CommitRecord]:
        for index, commit in enumerate(self._commits):
            if max_commits is not None and index >= max_commits:
                break
            yield commit
