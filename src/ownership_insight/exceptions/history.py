"""History access errors: recovered locally by skipping the path or commit."""

from .base import OwnershipInsightError


class HistoryError(OwnershipInsightError):
    """Base class for errors raised by a history provider."""

    pass


class AttributionError(HistoryError):
    """Raised when line attribution is unavailable for a path.

    Typical causes are binary files, paths missing from HEAD and files that
    git cannot read.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Cannot attribute lines for {path}", details={"path": path, "reason": reason}
        )
        self.path = path
        self.reason = reason


class CommitDiffError(HistoryError):
    """Raised when a commit or its first-parent diff cannot be resolved."""

    def __init__(self, sha: str, reason: str):
        super().__init__(f"Cannot diff commit {sha}", details={"sha": sha, "reason": reason})
        self.sha = sha
        self.reason = reason
