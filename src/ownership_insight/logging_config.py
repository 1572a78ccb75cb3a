"""
Logging configuration for Ownership Insight.

Log records go to stderr through a rich handler so that stdout stays clean
for JSON output.  The level follows the ``verbosity`` setting of a
ScanConfig:

    quiet    errors only
    normal   warnings, e.g. the approximate directory fold
    verbose  scan summaries plus every skipped path and commit
"""

import logging
from typing import Literal, Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "ownership_insight"

Verbosity = Literal["quiet", "normal", "verbose"]

VERBOSITY_LEVELS: dict[str, int] = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(
    verbosity: Verbosity = "normal", log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route ownership_insight logs to a rich stderr handler.

    Args:
        verbosity: One of ``VERBOSITY_LEVELS``; normally ``ScanConfig.verbosity``
        log_file: Optional file that receives the same records, timestamped

    Returns:
        The ownership_insight root logger
    """
    level = VERBOSITY_LEVELS[verbosity]
    verbose = verbosity == "verbose"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger namespaced under ``ownership_insight``.

    ``get_logger(__name__)`` inside the package returns the module logger
    unchanged; any other name is prefixed.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
