"""Tests for the formatters package."""

import json

import pytest

from ownership_insight.formatters import (
    JsonFormatter,
    OutputFormat,
    RichFormatter,
    get_formatter,
)
from ownership_insight.ownership.models import (
    ChurnEntry,
    ChurnReport,
    DirectoryScore,
    Fidelity,
    Granularity,
    OwnershipReport,
    OwnershipScore,
    ScanMode,
)


def _ownership_report():
    scores = [
        OwnershipScore("a.py", "alice", 0.9, 100),
        OwnershipScore("b.py", "bob", 0.5, 40),
    ]
    return OwnershipReport(
        mode=ScanMode.EXACT,
        granularity=Granularity.FILE,
        threshold=0.75,
        matches=scores[:1],
        candidates=scores,
        files_scanned=2,
    )


def _directory_report():
    scores = [DirectoryScore("src", "alice", 0.8, 50)]
    return OwnershipReport(
        mode=ScanMode.HEURISTIC,
        granularity=Granularity.DIR,
        threshold=0.75,
        matches=scores,
        candidates=scores,
        fidelity=Fidelity.APPROXIMATE,
        depth=1,
        files_scanned=3,
    )


def _churn_report():
    return ChurnReport(
        granularity=Granularity.FILE,
        window_days=90,
        anchor="now",
        now=1_700_000_000.0,
        entries=[ChurnEntry("a.py", 12.5, 10, 4, 2), ChurnEntry("b.py", 1.0, 1, 0, 1)],
    )


class TestGetFormatter:
    def test_known(self):
        assert isinstance(get_formatter("json"), JsonFormatter)
        assert isinstance(get_formatter("rich"), RichFormatter)
        assert isinstance(get_formatter(OutputFormat.JSON), JsonFormatter)

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_formatter("csv")


class TestJsonFormatter:
    def test_ownership_labels(self):
        data = json.loads(JsonFormatter().format(_ownership_report()))
        assert data["mode"] == "exact"
        assert data["by"] == "file"
        assert data["fidelity"] == "exact"
        assert data["threshold"] == 0.75
        assert data["matches"] == [
            {"path": "a.py", "top_author": "alice", "ratio": 0.9, "total": 100}
        ]
        assert len(data["candidates"]) == 2

    def test_limit_applies_to_candidates(self):
        data = json.loads(JsonFormatter().format(_ownership_report(), limit=1))
        assert [c["path"] for c in data["candidates"]] == ["a.py"]

    def test_directory_fidelity_label(self):
        data = json.loads(JsonFormatter().format(_directory_report()))
        assert data["by"] == "dir"
        assert data["fidelity"] == "approximate"
        assert data["depth"] == 1

    def test_churn(self):
        data = json.loads(JsonFormatter().format(_churn_report()))
        assert data["window_days"] == 90
        assert data["rows"][0] == {
            "path": "a.py",
            "churn": 12.5,
            "adds": 10,
            "dels": 4,
            "touches": 2,
        }

    def test_render_prints(self, capsys):
        JsonFormatter().render(_churn_report(), limit=1)
        data = json.loads(capsys.readouterr().out)
        assert len(data["rows"]) == 1


class TestRichFormatter:
    def test_ownership_table(self, capsys):
        RichFormatter().render(_ownership_report())
        out = capsys.readouterr().out
        assert "a.py" in out
        assert "alice" in out
        assert "1 of 2 above 75% ownership" in out

    def test_directory_table(self, capsys):
        RichFormatter().render(_directory_report())
        out = capsys.readouterr().out
        assert "approximate" in out
        assert "Touches" in out

    def test_churn_table(self, capsys):
        RichFormatter().render(_churn_report())
        out = capsys.readouterr().out
        assert "last 90 days" in out
        assert "12.5" in out
