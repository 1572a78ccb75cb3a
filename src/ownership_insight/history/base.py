"""History provider interface.

A provider is a read-only handle on one repository. Handles are not assumed
to be safe for concurrent use: parallel work opens one handle per task.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from .models import BlameHunk, CommitRecord


class HistoryProvider(ABC):
    """Read access to tracked files, line attribution and the commit graph."""

    @abstractmethod
    def list_files(self) -> list[str]:
        """Return every tracked path at the current revision."""

    @abstractmethod
    def blame(self, path: str) -> list[BlameHunk]:
        """Return line attribution for ``path`` at the current revision.

        Raises:
            AttributionError: If the path cannot be attributed.
        """

    @abstractmethod
    def iter_commits(self, max_commits: Optional[int] = None) -> Iterator[CommitRecord]:
        """Yield commits newest first, stopping after ``max_commits``."""

    def head_timestamp(self) -> Optional[int]:
        """Commit time of the newest commit, or None for an empty history."""
        for commit in self.iter_commits(max_commits=1):
            return commit.timestamp
        return None
