"""Tests for parallel exact-mode attribution."""

import threading

import pytest

from conftest import hunks
from ownership_insight.exceptions import InvalidConfigError
from ownership_insight.history import InMemoryHistoryProvider
from ownership_insight.ownership.parallel import (
    _DEFAULT_WORKERS,
    resolve_workers,
    run_exact_attribution,
)


class CountingFactory:
    """Hands out a fresh provider per call and records each handle."""

    def __init__(self, blame):
        self.blame = blame
        self.handles = []
        self._lock = threading.Lock()

    def __call__(self):
        provider = InMemoryHistoryProvider(blame=self.blame)
        with self._lock:
            self.handles.append(provider)
        return provider


def many_files(n):
    return {f"pkg/m{i:02d}.py": hunks(alice=i + 1, bob=1) for i in range(n)}


class TestResolveWorkers:
    def test_default(self):
        assert resolve_workers(None) == _DEFAULT_WORKERS
        assert resolve_workers(0) == _DEFAULT_WORKERS
        assert 1 <= _DEFAULT_WORKERS <= 8

    def test_explicit(self):
        assert resolve_workers(3) == 3

    def test_negative(self):
        with pytest.raises(InvalidConfigError):
            resolve_workers(-1)


class TestRunExactAttribution:
    @pytest.mark.parametrize("workers", [1, 4])
    def test_results_identical_across_worker_counts(self, workers):
        blame = many_files(25)
        result = run_exact_attribution(sorted(blame), CountingFactory(blame), workers=workers)
        assert list(result) == sorted(blame)
        assert result["pkg/m03.py"] == {"alice": 4, "bob": 1}

    def test_one_handle_per_file(self):
        blame = many_files(25)
        factory = CountingFactory(blame)
        run_exact_attribution(sorted(blame), factory, workers=4)
        assert len(factory.handles) == 25
        assert len({id(h) for h in factory.handles}) == 25

    def test_small_input_runs_inline(self):
        blame = many_files(3)
        result = run_exact_attribution(sorted(blame), CountingFactory(blame), workers=8)
        assert len(result) == 3

    def test_unattributable_files_skipped(self):
        blame = many_files(12)
        paths = sorted(blame) + ["assets/blob.py"]
        result = run_exact_attribution(paths, CountingFactory(blame), workers=4)
        assert "assets/blob.py" not in result
        assert len(result) == 12

    def test_unexpected_errors_propagate(self):
        def broken():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            run_exact_attribution([f"f{i}.py" for i in range(12)], broken, workers=2)
