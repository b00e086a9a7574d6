from __future__ import annotations

import os
import subprocess
from pathlib import Path

from .analysis_periods import Period

COMMIT_FORMAT = "%H|%aI|%s"
CONTRIBUTOR_FORMAT = "%an|%ae"


def run_git(args: list[str], cwd: Path, timeout_s: int = 300) -> tuple[int, str, str]:
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout_s,
    )
    return proc.returncode, proc.stdout, proc.stderr


def discover_git_roots(root: Path, exclude_dirnames: set[str]) -> list[Path]:
    """
    Walk `root` and return every directory holding a `.git` entry.

    A repository's own subdirectories are not searched further, so nested
    submodules are not reported twice. Hidden directories are skipped.
    """
    roots: list[Path] = []

    def onerror(err: OSError) -> None:
        _ = err

    for dirpath, dirnames, filenames in os.walk(root, onerror=onerror):
        if ".git" in dirnames or ".git" in filenames:
            roots.append(Path(dirpath))
            dirnames[:] = []
            continue
        dirnames[:] = sorted(d for d in dirnames if d not in exclude_dirnames and not d.startswith("."))
    return roots


def _window_args(period: Period) -> list[str]:
    return [f"--since={period.start_iso}T00:00:00", f"--until={period.end_iso}T00:00:00"]


def log_author_commits(repo: Path, period: Period, author: str) -> tuple[int, str, str]:
    return run_git(
        ["log", *_window_args(period), f"--author={author}", f"--pretty=format:{COMMIT_FORMAT}", "--numstat"],
        cwd=repo,
    )


def log_contributors(repo: Path, period: Period) -> tuple[int, str, str]:
    return run_git(["log", *_window_args(period), f"--pretty=format:{CONTRIBUTOR_FORMAT}"], cwd=repo)


def log_name_status(repo: Path, period: Period, author: str) -> tuple[int, str, str]:
    return run_git(
        ["log", *_window_args(period), f"--author={author}", "--pretty=format:", "--name-status"],
        cwd=repo,
    )


def count_branches(repo: Path) -> int:
    code, out, _ = run_git(["branch", "-a"], cwd=repo)
    if code != 0:
        return 0
    return sum(1 for line in out.splitlines() if line.strip())


def get_config_value(key: str, *, scope: str, cwd: Path) -> str:
    code, out, _ = run_git(["config", f"--{scope}", "--get", key], cwd=cwd)
    if code == 0:
        return out.strip()
    return ""
