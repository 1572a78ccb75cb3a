"""Data models for ownership and churn scoring."""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional, Union

from ..exceptions import InvalidConfigError

# author identity -> lines (exact mode) or touches (heuristic mode)
ContributionMap = Counter

DEFAULT_MIN_TOTAL = 25


class ScanMode(str, Enum):
    """Which ownership algorithm produced a result set."""

    EXACT = "exact"  # per-line blame
    HEURISTIC = "heuristic"  # per-commit touch counts


class Granularity(str, Enum):
    FILE = "file"
    DIR = "dir"


class Fidelity(str, Enum):
    """How directory ownership was folded.

    EXACT sums full per-author maps; APPROXIMATE credits each file's whole
    total to its file-level winner.
    """

    EXACT = "exact"
    APPROXIMATE = "approximate"


class ChurnAnchor(str, Enum):
    """Where the churn window ends."""

    NOW = "now"  # wall clock at scan time
    HEAD = "head"  # newest commit, reproducible over a frozen history


def normalize_extension(ext: str) -> str:
    return ext.strip().lstrip(".").lower()


@dataclass(frozen=True)
class ScanOptions:
    """Which paths take part in a scan and the minimum reportable size."""

    include_all: bool = False
    extra_extensions: frozenset[str] = field(default_factory=frozenset)
    min_total: int = DEFAULT_MIN_TOTAL

    def __post_init__(self) -> None:
        normalized = frozenset(
            normalize_extension(e) for e in self.extra_extensions if normalize_extension(e)
        )
        object.__setattr__(self, "extra_extensions", normalized)
        if self.min_total < 0:
            raise InvalidConfigError("min_total", self.min_total, "must be non-negative")

    @classmethod
    def build(
        cls,
        include_all: bool = False,
        extra_extensions: Iterable[str] = (),
        min_total: int = DEFAULT_MIN_TOTAL,
    ) -> "ScanOptions":
        return cls(include_all, frozenset(extra_extensions), min_total)


@dataclass(frozen=True)
class OwnershipScore:
    """Dominant-author share of one file."""

    path: str
    top_author: str
    ratio: float  # top author contribution / total
    total: int  # lines (exact) or touches (heuristic)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DirectoryScore:
    """Dominant-author share over every file folded into a directory key."""

    path: str
    top_author: str
    ratio: float
    total: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


AnyScore = Union[OwnershipScore, DirectoryScore]


@dataclass(frozen=True)
class ChurnEntry:
    path: str
    churn: float  # decay-weighted adds + dels
    adds: int
    dels: int
    touches: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RankedScores:
    matches: list[AnyScore]  # ratio strictly above the threshold
    candidates: list[AnyScore]  # everything, ranked


@dataclass
class OwnershipReport:
    """Ranked ownership scores plus the labels describing how they were made."""

    mode: ScanMode
    granularity: Granularity
    threshold: float
    matches: list[AnyScore]
    candidates: list[AnyScore]
    fidelity: Fidelity = Fidelity.EXACT
    depth: Optional[int] = None
    files_scanned: int = 0

    def warnings(self) -> dict[str, dict[str, Any]]:
        """Paths above the threshold as ``{path: {author, ownership}}``."""
        return {
            s.path: {"author": s.top_author, "ownership": s.ratio}
            for s in sorted(self.matches, key=lambda s: s.path)
        }

    def to_dict(self, limit: Optional[int] = None) -> dict[str, Any]:
        candidates = self.candidates if limit is None else self.candidates[:limit]
        return {
            "mode": self.mode.value,
            "by": self.granularity.value,
            "fidelity": self.fidelity.value,
            "threshold": self.threshold,
            "depth": self.depth,
            "files_scanned": self.files_scanned,
            "matches": [s.to_dict() for s in self.matches],
            "candidates": [s.to_dict() for s in candidates],
        }


@dataclass
class ChurnReport:
    granularity: Granularity
    window_days: int
    anchor: str
    now: float  # unix seconds the window was anchored to
    entries: list[ChurnEntry]
    depth: Optional[int] = None

    def to_dict(self, limit: Optional[int] = None) -> dict[str, Any]:
        rows = self.entries if limit is None else self.entries[:limit]
        return {
            "by": self.granularity.value,
            "window_days": self.window_days,
            "anchor": self.anchor,
            "now": self.now,
            "depth": self.depth,
            "rows": [e.to_dict() for e in rows],
        }
