"""Shared CLI helpers."""

from enum import Enum
from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import ScanConfig, load_config
from ..logging_config import setup_logging

console = Console()
err_console = Console(stderr=True)


def split_extensions(raw: Optional[str]) -> Optional[list[str]]:
    """Parse ``--include-ext lua,.vim`` into ``["lua", "vim"]``."""
    if raw is None:
        return None
    return [part.strip().lstrip(".") for part in raw.split(",") if part.strip()]


def choice_value(option: Optional[Enum]) -> Optional[str]:
    """Plain value of an enum-typed option; None when the flag was not given."""
    return option.value if option is not None else None


def resolve_config(config: Optional[Path] = None, **options) -> ScanConfig:
    """Build a ScanConfig from CLI options and configure logging from it.

    Unset options are left to config files and ``OWNERSHIP_*`` variables,
    so ``verbosity`` may come from any of those sources.
    """
    settings = load_config(config_file=config, **options)
    setup_logging(settings.verbosity, log_file=settings.log_file)
    return settings
