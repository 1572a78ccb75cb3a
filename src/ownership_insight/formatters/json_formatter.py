"""JSON formatter for Ownership Insight."""

import json
from typing import Optional

from .base import BaseFormatter, Report


class JsonFormatter(BaseFormatter):
    """Render reports as JSON with mode and granularity labels."""

    def render(self, report: Report, limit: Optional[int] = None) -> None:
        print(self.format(report, limit))

    def format(self, report: Report, limit: Optional[int] = None) -> str:
        return json.dumps(report.to_dict(limit=limit), indent=2)
