"""Output formatters for ownership and churn reports."""

from typing import Union

from .base import BaseFormatter, OutputFormat
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter

FORMATTERS = {
    OutputFormat.RICH.value: RichFormatter,
    OutputFormat.JSON.value: JsonFormatter,
}


def get_formatter(name: Union[str, OutputFormat]) -> BaseFormatter:
    if isinstance(name, OutputFormat):
        name = name.value
    try:
        return FORMATTERS[name]()
    except KeyError:
        raise ValueError(f"Unknown format {name!r}; expected one of {', '.join(FORMATTERS)}")


__all__ = [
    "BaseFormatter",
    "OutputFormat",
    "JsonFormatter",
    "RichFormatter",
    "FORMATTERS",
    "get_formatter",
]
