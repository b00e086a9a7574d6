from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

import git_wrapped.analysis_repo as analysis_repo
from git_wrapped.analysis_periods import parse_period
from git_wrapped.analysis_repo import analyze_repo
from git_wrapped.cli import main
from git_wrapped.git import _window_args, discover_git_roots
from git_wrapped.identity import AuthorMatcher

FAKE_GIT_LOG = "\n".join(
    [
        "aaa111|2024-02-03T08:15:00+01:00|feat(api): add endpoint 🚀",
        "12\t3\tsrc/api.py",
        "4\t0\tREADME.md",
        "",
        "bbb222|2024-02-03T18:45:00+01:00|fix: handle | in names",
        "1\t1\tsrc/api.py",
    ]
)


def _write_fake_git(bin_dir: Path, *, log_output: str = FAKE_GIT_LOG, fail: bool = False) -> None:
    bin_dir.mkdir(parents=True, exist_ok=True)
    fake_git = bin_dir / "git"
    fake_git.write_text(
        "\n".join(
            [
                f"#!{sys.executable}",
                "import sys",
                "",
                f"LOG = {log_output!r}",
                "",
                "def main() -> int:",
                "    args = sys.argv[1:]",
                f"    if {fail!r}:",
                "        sys.stderr.write('fatal: not a git repository\\n')",
                "        return 128",
                "    if args and args[0] == 'log':",
                "        if '--numstat' in args:",
                "            sys.stdout.buffer.write(LOG.encode('utf-8') + b'\\n')",
                "        elif '--name-status' in args:",
                "            sys.stdout.write('A\\tsrc/api.py\\nM\\tREADME.md\\n')",
                "        else:",
                "            sys.stdout.write('Alice|alice@example.com\\nDana|dana@example.com\\nAlice|alice@example.com\\n')",
                "        return 0",
                "    if args and args[0] == 'branch':",
                "        sys.stdout.write('* main\\n  feature/x\\n  remotes/origin/main\\n')",
                "        return 0",
                "    if args and args[0] == 'config':",
                "        return 1",
                "    sys.stderr.write('unexpected args: ' + ' '.join(args) + '\\n')",
                "    return 2",
                "",
                "if __name__ == '__main__':",
                "    raise SystemExit(main())",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    fake_git.chmod(0o755)


def _make_repo(path: Path) -> Path:
    (path / ".git").mkdir(parents=True)
    return path


def test_discover_git_roots_skips_excluded_and_nested(tmp_path: Path) -> None:
    a = _make_repo(tmp_path / "a")
    _make_repo(tmp_path / "a" / "nested")
    b = _make_repo(tmp_path / "group" / "b")
    _make_repo(tmp_path / "node_modules" / "dep")
    _make_repo(tmp_path / ".hidden" / "c")

    assert discover_git_roots(tmp_path, {"node_modules"}) == [a, b]


def test_analyze_repo_with_fake_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    bin_dir = tmp_path / "bin"
    _write_fake_git(bin_dir)
    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))
    repo = _make_repo(tmp_path / "proj")

    result = analyze_repo(repo, "proj", parse_period("2024"), AuthorMatcher("alice"))

    assert result.errors == []
    assert result.path == str(repo)
    s = result.stats
    assert s is not None
    assert s.commits == 2
    assert s.insertions == 17
    assert s.deletions == 4
    assert s.hour_distribution[8] == 1
    assert s.hour_distribution[18] == 1
    assert s.longest_work_session["minutes"] == 630
    assert s.file_changes == {"added": 1, "deleted": 0, "net": 1}
    assert s.branch_count == 3
    assert s.collaborators == [{"name": "Dana", "email": "dana@example.com", "commits": 1}]
    assert s.commit_type_distribution == {"feat": 1, "fix": 1}


def test_analyze_repo_records_git_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    bin_dir = tmp_path / "bin"
    _write_fake_git(bin_dir, fail=True)
    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))
    repo = _make_repo(tmp_path / "broken")

    result = analyze_repo(repo, "broken", parse_period("2024"), AuthorMatcher("alice"))

    assert result.stats is None
    assert len(result.errors) == 1
    assert "128" in result.errors[0]


def test_analyze_repo_keeps_going_when_later_git_calls_fail(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    bin_dir = tmp_path / "bin"
    _write_fake_git(bin_dir)
    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))
    repo = _make_repo(tmp_path / "slow")

    def timed_out(*args: object, **kwargs: object) -> tuple[int, str, str]:
        raise subprocess.TimeoutExpired(cmd="git log", timeout=300)

    def no_git(*args: object, **kwargs: object) -> int:
        raise OSError("git vanished")

    monkeypatch.setattr(analysis_repo, "log_contributors", timed_out)
    monkeypatch.setattr(analysis_repo, "log_name_status", timed_out)
    monkeypatch.setattr(analysis_repo, "count_branches", no_git)

    result = analyze_repo(repo, "slow", parse_period("2024"), AuthorMatcher("alice"))

    assert len(result.errors) == 3
    assert "timed out" in result.errors[0]
    assert "git vanished" in result.errors[2]
    s = result.stats
    assert s is not None
    assert s.commits == 2
    assert s.collaborators == []
    assert s.file_changes == {"added": 0, "deleted": 0, "net": 0}
    assert s.branch_count == 0


def test_cli_writes_report(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    bin_dir = tmp_path / "bin"
    _write_fake_git(bin_dir)
    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))
    root = tmp_path / "code"
    _make_repo(root / "one")
    _make_repo(root / "two")
    out = tmp_path / "report.json"

    code = main(
        [
            "--author", "alice",
            "--root", str(root),
            "--year", "2024",
            "--output", str(out),
            "--config", str(tmp_path / "missing.json"),
            "--jobs", "2",
            "--no-input",
        ]
    )

    assert code == 0
    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["author"] == "alice"
    assert report["range"] == {"since": "2024-01-01", "until": "2024-12-31"}
    summary = report["summary"]
    assert summary["project_count"] == 2
    assert summary["total_commits"] == 4
    assert summary["all_projects"] == ["one", "two"]
    assert summary["top_collaborators"] == [{"name": "Dana", "email": "dana@example.com", "commits": 2}]
    assert "YEAR IN REVIEW" in capsys.readouterr().out


def test_cli_without_commits_exits_2(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    bin_dir = tmp_path / "bin"
    _write_fake_git(bin_dir, log_output="")
    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))
    root = tmp_path / "code"
    _make_repo(root / "quiet")
    out = tmp_path / "report.json"

    code = main(["--author", "alice", "--root", str(root), "--year", "2024", "--output", str(out), "--config", str(tmp_path / "missing.json"), "--no-input"])

    assert code == 2
    assert not out.exists()
    assert "nothing to report" in capsys.readouterr().err


def test_cli_rejects_bad_year(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--author", "alice", "--root", str(tmp_path), "--year", "twenty", "--config", str(tmp_path / "missing.json"), "--no-input"])
    assert code == 2
    assert "Invalid period" in capsys.readouterr().err


def test_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--help"]) == 0
    out = capsys.readouterr().out
    assert "git-wrapped" in out
    assert "Summarize a year of your git commits" in out
    assert "--no-input" in out


def test_log_window_uses_since_and_until() -> None:
    assert _window_args(parse_period("2024")) == ["--since=2024-01-01T00:00:00", "--until=2025-01-01T00:00:00"]
