"""Base formatter interface for Ownership Insight output rendering."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Union

from ..ownership.models import ChurnReport, OwnershipReport

Report = Union[OwnershipReport, ChurnReport]


class OutputFormat(str, Enum):
    RICH = "rich"
    JSON = "json"


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: Report, limit: Optional[int] = None) -> None:
        """Write the report to stdout."""

    @abstractmethod
    def format(self, report: Report, limit: Optional[int] = None) -> str:
        """Return formatted string representation of the report."""
