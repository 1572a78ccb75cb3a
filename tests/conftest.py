"""Shared test fixtures for Ownership Insight."""

import os
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from ownership_insight.history import (  # noqa: E402
    BlameHunk,
    CommitRecord,
    FileDelta,
    InMemoryHistoryProvider,
)

DAY = 86400
NOW = 1_700_000_000  # fixed "scan time" for churn tests

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not found")


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


# ---------------------------------------------------------------------------
# In-memory history helpers
# ---------------------------------------------------------------------------


def make_commit(sha, author, timestamp, files=(), parents=("p",), deltas=None):
    """Build a CommitRecord.

    ``files`` is a list of paths (1 add, 0 dels each) or of
    ``(path, adds, dels)`` tuples.  Pass ``parents=()`` for a root commit and
    ``deltas=None`` together with ``files=None`` for a commit whose diff failed.
    """
    if files is None:
        return CommitRecord(sha, author, timestamp, tuple(parents), None)
    built = []
    for f in files:
        if isinstance(f, FileDelta):
            built.append(f)
        elif isinstance(f, tuple):
            built.append(FileDelta(*f))
        else:
            built.append(FileDelta(f, 1, 0))
    return CommitRecord(sha, author, timestamp, tuple(parents), tuple(built))


def hunks(**lines_by_author):
    """``hunks(x=10, y=2)`` -> blame hunks with those line counts."""
    return [BlameHunk(author, n) for author, n in lines_by_author.items()]


# ---------------------------------------------------------------------------
# Throw-away git repositories
# ---------------------------------------------------------------------------


class GitRepoBuilder:
    """Create commits with fixed authors and dates in a temp repository."""

    def __init__(self, root: Path):
        self.root = root
        self._tick = NOW - 400 * DAY
        self._git("init", "-q")
        self._git("config", "commit.gpgsign", "false")

    def _git(self, *args, env=None):
        return subprocess.run(
            ["git", "-C", str(self.root), *args],
            capture_output=True,
            text=True,
            check=True,
            env=env,
        )

    def write(self, path: str, content: str) -> Path:
        target = self.root / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        return target

    def write_lines(self, path: str, lines) -> Path:
        return self.write(path, "".join(f"{line}\n" for line in lines))

    def commit(self, author: str, message: str = "change", timestamp: int = None) -> str:
        if timestamp is None:
            self._tick += 60
            timestamp = self._tick
        name = author.split("@")[0]
        env = dict(os.environ)
        env.update(
            {
                "GIT_AUTHOR_NAME": name,
                "GIT_AUTHOR_EMAIL": author,
                "GIT_AUTHOR_DATE": f"@{timestamp} +0000",
                "GIT_COMMITTER_NAME": name,
                "GIT_COMMITTER_EMAIL": author,
                "GIT_COMMITTER_DATE": f"@{timestamp} +0000",
            }
        )
        self._git("add", "-A", env=env)
        self._git("commit", "-q", "--allow-empty", "-m", message, env=env)
        return self._git("rev-parse", "HEAD").stdout.strip()


@pytest.fixture
def git_repo(tmp_path):
    """Empty git repository builder (skips when git is unavailable)."""
    if shutil.which("git") is None:
        pytest.skip("git not found")
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    return GitRepoBuilder(repo_dir)


@pytest.fixture
def two_author_repo(git_repo):
    """X adds a 10-line f.txt, then Y rewrites its first 8 lines."""
    git_repo.write_lines("f.txt", [f"line {i}" for i in range(10)])
    git_repo.commit("x@example.com", "add f.txt")
    git_repo.write_lines(
        "f.txt", [f"rewritten {i}" for i in range(8)] + ["line 8", "line 9"]
    )
    git_repo.commit("y@example.com", "rewrite f.txt")
    return git_repo


@pytest.fixture
def memory_provider():
    """Factory for InMemoryHistoryProvider: ``memory_provider(blame=..., commits=...)``."""

    def build(blame=None, commits=(), files=None):
        return InMemoryHistoryProvider(blame=blame, commits=commits, files=files)

    return build
