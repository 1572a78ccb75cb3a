"""Tests for the git-backed history provider."""

import pytest

from conftest import DAY, NOW
from ownership_insight import blame_summary, scan_churn, scan_ownership
from ownership_insight.exceptions import AttributionError, RepositoryNotFoundError
from ownership_insight.history import (
    BlameHunk,
    FileDelta,
    GitHistoryProvider,
    parse_log_stream,
    parse_porcelain_blame,
)

SHA_X = "a" * 40
SHA_Y = "b" * 40

PORCELAIN = "\n".join(
    [
        f"{SHA_X} 1 1 2",
        "author X",
        "author-mail <x@example.com>",
        "author-time 1700000000",
        "summary add",
        "filename f.txt",
        "\tline 0",
        f"{SHA_X} 2 2",
        "\tline 1",
        f"{SHA_Y} 3 3 1",
        "author Y",
        "author-mail <y@example.com>",
        "filename f.txt",
        "\trewritten",
        f"{SHA_X} 4 4 1",
        "\tline 3",
        "",
    ]
)


def log_lines(*records):
    """Render ``(sha, parents, author, ts, numstat_lines)`` as git log output."""
    out = []
    for sha, parents, author, ts, numstat in records:
        out.append(f"\x1e{sha}\x1f{' '.join(parents)}\x1f{author}\x1f{ts}\n")
        out.append("\n")
        out.extend(f"{line}\n" for line in numstat)
    return out


class TestParsePorcelainBlame:
    def test_groups_resolved_to_emails(self):
        result = parse_porcelain_blame(PORCELAIN)
        assert result == [
            BlameHunk("x@example.com", 2),
            BlameHunk("y@example.com", 1),
            BlameHunk("x@example.com", 1),
        ]

    def test_content_lines_that_look_like_headers_are_ignored(self):
        raw = f"{SHA_X} 1 1 1\nauthor-mail <x@example.com>\n\tauthor-mail <evil@example.com>\n"
        assert parse_porcelain_blame(raw) == [BlameHunk("x@example.com", 1)]

    def test_empty(self):
        assert parse_porcelain_blame("") == []

    def test_sha256_object_names(self):
        sha = "c" * 64
        raw = f"{sha} 1 1 3\nauthor-mail <z@example.com>\n\tline\n"
        assert parse_porcelain_blame(raw) == [BlameHunk("z@example.com", 3)]


class TestParseLogStream:
    def test_commits_and_deltas(self):
        lines = log_lines(
            ("c2", ["c1"], "y@example.com", NOW, ["3\t1\tsrc/a.py", "-\t-\timg.png"]),
            ("c1", [], "x@example.com", NOW - DAY, ["10\t0\tsrc/a.py"]),
        )
        c2, c1 = parse_log_stream(lines)
        assert c2.sha == "c2"
        assert c2.parents == ("c1",)
        assert c2.timestamp == NOW
        assert c2.deltas == (
            FileDelta("src/a.py", 3, 1),
            FileDelta("img.png", 0, 0, binary=True),
        )
        assert c1.is_root
        assert c1.deltas == ()

    def test_malformed_numstat_marks_diff_unusable(self):
        lines = log_lines(("c2", ["c1"], "y@example.com", NOW, ["x\ty\tsrc/a.py"]))
        (commit,) = parse_log_stream(lines)
        assert commit.deltas is None

    def test_merge_commit_without_changes(self):
        lines = log_lines(("m", ["p1", "p2"], "y@example.com", NOW, []))
        (commit,) = parse_log_stream(lines)
        assert commit.parents == ("p1", "p2")
        assert commit.deltas == ()

    def test_quoted_path(self):
        lines = log_lines(("c2", ["c1"], "y@example.com", NOW, ['1\t0\t"caf\\303\\251.py"']))
        (commit,) = parse_log_stream(lines)
        assert commit.deltas[0].path == "café.py"

    def test_missing_author_falls_back(self):
        lines = log_lines(("c2", ["c1"], "", NOW, []))
        (commit,) = parse_log_stream(lines)
        assert commit.author == "unknown"


class TestOpen:
    def test_missing_path(self, tmp_path):
        with pytest.raises(RepositoryNotFoundError):
            GitHistoryProvider.open(tmp_path / "nope")

    def test_not_a_repository(self, tmp_path, git_repo):
        plain = tmp_path / "plain"
        plain.mkdir()
        with pytest.raises(RepositoryNotFoundError):
            GitHistoryProvider.open(plain)

    def test_subdirectory_resolves_to_root(self, git_repo):
        git_repo.write("pkg/mod.py", "x = 1\n")
        git_repo.commit("x@example.com")
        provider = GitHistoryProvider.open(git_repo.root / "pkg")
        assert provider.list_files() == ["pkg/mod.py"]

    def test_clone_is_independent_handle(self, git_repo):
        provider = GitHistoryProvider.open(git_repo.root)
        other = provider.clone()
        assert other is not provider
        assert other.root == provider.root


class TestRealRepository:
    def test_blame(self, two_author_repo):
        provider = GitHistoryProvider.open(two_author_repo.root)
        lines = {}
        for hunk in provider.blame("f.txt"):
            lines[hunk.author] = lines.get(hunk.author, 0) + hunk.lines
        assert lines == {"y@example.com": 8, "x@example.com": 2}

    def test_blame_missing_file(self, two_author_repo):
        provider = GitHistoryProvider.open(two_author_repo.root)
        with pytest.raises(AttributionError):
            provider.blame("missing.txt")

    def test_iter_commits(self, two_author_repo):
        provider = GitHistoryProvider.open(two_author_repo.root)
        newest, oldest = provider.iter_commits()
        assert newest.author == "y@example.com"
        assert newest.deltas == (FileDelta("f.txt", 8, 8),)
        assert oldest.is_root
        assert newest.timestamp > oldest.timestamp
        assert provider.head_timestamp() == newest.timestamp

    def test_iter_commits_capped(self, two_author_repo):
        provider = GitHistoryProvider.open(two_author_repo.root)
        assert len(list(provider.iter_commits(max_commits=1))) == 1

    def test_abandoned_walk_does_not_hang(self, two_author_repo):
        provider = GitHistoryProvider.open(two_author_repo.root)
        commits = provider.iter_commits()
        next(commits)
        commits.close()

    def test_empty_repository(self, git_repo):
        provider = GitHistoryProvider.open(git_repo.root)
        assert list(provider.iter_commits()) == []
        assert provider.head_timestamp() is None


class TestScansOnRealRepository:
    def test_exact_and_heuristic_disagree(self, two_author_repo):
        exact = scan_ownership(two_author_repo.root, mode="exact", min_total=1)
        (score,) = exact.candidates
        assert (score.path, score.top_author, score.total) == ("f.txt", "y@example.com", 10)
        assert score.ratio == pytest.approx(0.8)

        heuristic = scan_ownership(two_author_repo.root, mode="heuristic", min_total=1)
        (score,) = heuristic.candidates
        assert (score.top_author, score.total, score.ratio) == ("y@example.com", 1, 1.0)

    def test_directory_scan(self, two_author_repo):
        report = scan_ownership(two_author_repo.root, granularity="dir", min_total=1)
        (score,) = report.candidates
        assert score.path == "."

    def test_churn_anchored_at_head(self, two_author_repo):
        report = scan_churn(two_author_repo.root, churn_anchor="head", window_days=90)
        (entry,) = report.entries
        assert entry.path == "f.txt"
        assert (entry.adds, entry.dels, entry.touches) == (8, 8, 1)
        assert entry.churn == pytest.approx(16.0)

    def test_blame_summary(self, two_author_repo):
        assert blame_summary("f.txt", two_author_repo.root) == {
            "x@example.com": 2,
            "y@example.com": 8,
        }

    def test_not_a_repository(self, tmp_path):
        with pytest.raises(RepositoryNotFoundError):
            scan_ownership(tmp_path / "missing")

    @pytest.mark.slow
    def test_many_files_in_parallel(self, git_repo):
        for i in range(40):
            git_repo.write_lines(f"pkg/m{i:02d}.py", [f"v = {n}" for n in range(30)])
        git_repo.commit("x@example.com")
        for i in range(0, 40, 2):
            git_repo.write_lines(f"pkg/m{i:02d}.py", [f"w = {n}" for n in range(30)])
        git_repo.commit("y@example.com")

        serial = scan_ownership(git_repo.root, workers=1).to_dict()
        parallel = scan_ownership(git_repo.root, workers=4).to_dict()
        assert serial == parallel
        assert serial["files_scanned"] == 40
