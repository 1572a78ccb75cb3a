"""Data models exchanged with a history provider."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BlameHunk:
    """A run of consecutive lines last touched by one author."""

    author: str
    lines: int


@dataclass(frozen=True)
class FileDelta:
    path: str
    adds: int
    dels: int
    binary: bool = False

    @property
    def changed_lines(self) -> int:
        return self.adds + self.dels


@dataclass(frozen=True)
class CommitRecord:
    sha: str
    author: str  # author email
    timestamp: int  # unix seconds, commit time
    parents: tuple[str, ...]
    # Diff against the first parent: () for root commits, None when the diff
    # could not be computed.
    deltas: Optional[tuple[FileDelta, ...]] = ()

    @property
    def is_root(self) -> bool:
        return not self.parents
