"""Setup errors: bad configuration values and unusable repositories.

These abort a scan before any scoring begins.
"""

from pathlib import Path
from typing import Any, Union

from .base import OwnershipInsightError


class ConfigurationError(OwnershipInsightError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class RepositoryNotFoundError(ConfigurationError):
    """Raised when a path cannot be opened as a git repository."""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(
            f"Cannot open repository: {path}", details={"path": str(path), "reason": reason}
        )
        self.path = path
        self.reason = reason
