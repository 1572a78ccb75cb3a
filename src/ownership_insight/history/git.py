"""Read repository history by shelling out to the ``git`` executable."""

from __future__ import annotations

import codecs
import re
import subprocess
from pathlib import Path
from typing import Iterator, Optional, Union

from ..exceptions import AttributionError, CommitDiffError, HistoryError, RepositoryNotFoundError
from ..logging_config import get_logger
from .base import HistoryProvider
from .models import BlameHunk, CommitRecord, FileDelta

logger = get_logger(__name__)

# Separators for the log header; neither can appear in a path or an email.
_RECORD_SEP = "\x1e"
_FIELD_SEP = "\x1f"
_LOG_FORMAT = "%x1e%H%x1f%P%x1f%ae%x1f%ct"

# Porcelain blame header: <sha> <orig-line> <final-line> [<lines-in-group>]
# SHA-1 and SHA-256 object names are both accepted.
_BLAME_HEADER_RE = re.compile(r"^([0-9a-f]{64}|[0-9a-f]{40}) \d+ \d+(?: (\d+))?$")

DEFAULT_TIMEOUT = 120


class GitHistoryProvider(HistoryProvider):
    """History provider backed by ``git`` subprocess calls.

    Each instance only holds the repository root, so opening one handle per
    worker costs nothing.  Use :meth:`open` to validate a user-supplied path;
    the constructor trusts that ``root`` is a repository top level.
    """

    def __init__(self, root: Union[str, Path], timeout: Optional[int] = DEFAULT_TIMEOUT):
        self.root = str(root)
        self.timeout = timeout

    @classmethod
    def open(
        cls, path: Union[str, Path], timeout: Optional[int] = DEFAULT_TIMEOUT
    ) -> "GitHistoryProvider":
        """Discover the repository containing ``path``.

        Raises:
            RepositoryNotFoundError: If the path is missing, is not inside a
                git repository, or git is not installed.
        """
        target = Path(path).expanduser().resolve()
        if not target.exists():
            raise RepositoryNotFoundError(path, "path does not exist")
        if target.is_file():
            target = target.parent

        try:
            result = subprocess.run(
                ["git", "-C", str(target), "rev-parse", "--show-toplevel"],
                capture_output=True,
                text=True,
                timeout=30,
            )
        except FileNotFoundError:
            raise RepositoryNotFoundError(path, "git executable not found") from None
        except subprocess.TimeoutExpired:
            raise RepositoryNotFoundError(path, "git rev-parse timed out") from None

        if result.returncode != 0:
            reason = result.stderr.strip() or "not a git repository"
            raise RepositoryNotFoundError(path, reason)

        root = result.stdout.strip()
        logger.debug("Opened repository at %s", root)
        return cls(root, timeout=timeout)

    def clone(self) -> "GitHistoryProvider":
        """Return an independent handle on the same repository."""
        return GitHistoryProvider(self.root, timeout=self.timeout)

    # ------------------------------------------------------------------
    # HistoryProvider
    # ------------------------------------------------------------------

    def list_files(self) -> list[str]:
        result = self._run(["ls-files", "-z"])
        if result.returncode != 0:
            raise HistoryError(
                "git ls-files failed", details={"root": self.root, "stderr": result.stderr.strip()}
            )
        return [p for p in result.stdout.split("\0") if p]

    def blame(self, path: str) -> list[BlameHunk]:
        try:
            result = self._run(["blame", "--porcelain", "HEAD", "--", path])
        except subprocess.TimeoutExpired:
            raise AttributionError(path, "git blame timed out") from None

        if result.returncode != 0:
            raise AttributionError(path, result.stderr.strip() or f"exit code {result.returncode}")
        return parse_porcelain_blame(result.stdout)

    def iter_commits(self, max_commits: Optional[int] = None) -> Iterator[CommitRecord]:
        if max_commits is not None and max_commits <= 0:
            return
        if not self._has_head():
            logger.info("Repository has no commits yet")
            return

        cmd = self._git_cmd(
            [
                "log",
                "--date-order",
                "--no-renames",
                "--diff-merges=first-parent",
                "--numstat",
                f"--format={_LOG_FORMAT}",
            ]
        )
        if max_commits is not None:
            cmd.append(f"-n{max_commits}")
        cmd.append("HEAD")

        proc = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        finished = False
        try:
            stdout = proc.stdout
            if stdout is None:
                return
            yield from parse_log_stream(stdout)
            finished = True
        finally:
            if not finished and proc.poll() is None:
                proc.kill()
            if proc.stdout:
                proc.stdout.close()
            stderr = proc.stderr.read() if proc.stderr else ""
            if proc.stderr:
                proc.stderr.close()
            proc.wait()

        if proc.returncode != 0:
            raise HistoryError(
                "git log failed", details={"root": self.root, "stderr": stderr.strip()}
            )

    def head_timestamp(self) -> Optional[int]:
        if not self._has_head():
            return None
        result = self._run(["log", "-1", "--format=%ct", "HEAD"])
        if result.returncode != 0 or not result.stdout.strip():
            return None
        return int(result.stdout.strip())

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _git_cmd(self, args: list[str]) -> list[str]:
        return ["git", "-C", self.root, "-c", "core.quotepath=off", *args]

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        return subprocess.run(
            self._git_cmd(args),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=self.timeout,
        )

    def _has_head(self) -> bool:
        return self._run(["rev-parse", "--verify", "--quiet", "HEAD"]).returncode == 0


def parse_porcelain_blame(raw: str) -> list[BlameHunk]:
    """Parse ``git blame --porcelain`` output into hunks.

    Commit headers (``author-mail`` and friends) are printed only the first
    time a commit appears, so authors are resolved after the whole output
    has been read.
    """
    groups: list[tuple[str, int]] = []
    emails: dict[str, str] = {}
    current_sha: Optional[str] = None

    for line in raw.split("\n"):
        if not line or line.startswith("\t"):
            continue
        match = _BLAME_HEADER_RE.match(line)
        if match:
            current_sha = match.group(1)
            if match.group(2) is not None:
                groups.append((current_sha, int(match.group(2))))
            continue
        if current_sha and line.startswith("author-mail "):
            emails[current_sha] = line[len("author-mail ") :].strip().strip("<>")

    return [BlameHunk(author=emails.get(sha) or "unknown", lines=n) for sha, n in groups]


def parse_log_stream(lines) -> Iterator[CommitRecord]:
    """Parse ``git log --numstat`` output produced with ``_LOG_FORMAT``.

    Root commits get an empty delta tuple; a commit whose numstat block
    cannot be parsed is yielded with ``deltas=None``.
    """
    header: Optional[tuple[str, tuple[str, ...], str, int]] = None
    deltas: Optional[list[FileDelta]] = []

    def flush() -> Optional[CommitRecord]:
        if header is None:
            return None
        sha, parents, author, ts = header
        if not parents:
            return CommitRecord(sha, author, ts, parents, ())
        return CommitRecord(sha, author, ts, parents, None if deltas is None else tuple(deltas))

    for raw_line in lines:
        line = raw_line.rstrip("\n")
        if line.startswith(_RECORD_SEP):
            record = flush()
            if record is not None:
                yield record
            header = _parse_header(line[1:])
            deltas = []
            continue
        if header is None or deltas is None or not line.strip():
            continue
        try:
            deltas.append(_parse_numstat(header[0], line))
        except CommitDiffError as e:
            logger.debug("Skipping diff: %s", e)
            deltas = None

    record = flush()
    if record is not None:
        yield record


def _parse_header(line: str) -> Optional[tuple[str, tuple[str, ...], str, int]]:
    parts = line.split(_FIELD_SEP)
    if len(parts) != 4:
        logger.debug("Skipping malformed commit header: %r", line)
        return None
    sha, parents, author, ts = parts
    try:
        timestamp = int(ts)
    except ValueError:
        logger.debug("Skipping commit %s with bad timestamp %r", sha, ts)
        return None
    return sha, tuple(parents.split()), author or "unknown", timestamp


def _parse_numstat(sha: str, line: str) -> FileDelta:
    parts = line.split("\t", 2)
    if len(parts) != 3:
        raise CommitDiffError(sha, f"malformed numstat line {line!r}")
    adds, dels, path = parts
    if adds == "-" and dels == "-":
        return FileDelta(_unquote(path), 0, 0, binary=True)
    try:
        return FileDelta(_unquote(path), int(adds), int(dels))
    except ValueError:
        raise CommitDiffError(sha, f"malformed numstat line {line!r}") from None


def _unquote(path: str) -> str:
    """Undo git's C-style quoting of unusual paths."""
    if len(path) >= 2 and path[0] == '"' and path[-1] == '"':
        raw = codecs.escape_decode(path[1:-1].encode("utf-8"))[0]
        return raw.decode("utf-8", errors="replace")
    return path
