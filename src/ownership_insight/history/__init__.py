"""History access: tracked files, line attribution and the commit graph."""

from .base import HistoryProvider
from .git import GitHistoryProvider, parse_log_stream, parse_porcelain_blame
from .memory import InMemoryHistoryProvider
from .models import BlameHunk, CommitRecord, FileDelta

__all__ = [
    "HistoryProvider",
    "GitHistoryProvider",
    "InMemoryHistoryProvider",
    "BlameHunk",
    "CommitRecord",
    "FileDelta",
    "parse_log_stream",
    "parse_porcelain_blame",
]
