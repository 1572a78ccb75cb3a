"""
Ownership Insight - authorship concentration and churn for git repositories.

Answers two questions per file or directory: how concentrated is authorship
(the dominant author's share of lines or commits), and how volatile has it
been recently (change volume with older changes fading out).
"""

__version__ = "0.1.0"

from .api import blame_summary, scan_churn, scan_ownership
from .config import ScanConfig, load_config
from .ownership.models import (
    ChurnEntry,
    ChurnReport,
    DirectoryScore,
    OwnershipReport,
    OwnershipScore,
    ScanOptions,
)

__all__ = [
    "scan_ownership",  # Main entry points
    "scan_churn",
    "blame_summary",
    "ScanConfig",
    "load_config",
    "ScanOptions",
    "OwnershipScore",
    "DirectoryScore",
    "ChurnEntry",
    "OwnershipReport",
    "ChurnReport",
]
