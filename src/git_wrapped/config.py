from __future__ import annotations

import argparse
import dataclasses
import json
import os
import sys
from pathlib import Path

from .analysis_periods import Period, default_period, parse_date, parse_period, period_from_dates
from .git import get_config_value
from .identity import GitUser

DEFAULT_EXCLUDE_DIRNAMES = frozenset(
    {
        "node_modules",
        ".venv",
        "venv",
        "vendor",
        "dist",
        "build",
        "target",
        "__pycache__",
    }
)


@dataclasses.dataclass(frozen=True)
class Settings:
    author: str
    root: Path
    period: Period
    output: Path
    jobs: int
    exclude_dirnames: frozenset[str]
    report_url: str = ""


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    return json.loads(config_path.read_text(encoding="utf-8"))


def infer_git_users(cwd: Path | None = None) -> list[GitUser]:
    """Identities from global then local `git config`, deduplicated by name."""
    where = cwd or Path.cwd()
    users: list[GitUser] = []
    for scope in ("global", "local"):
        try:
            name = get_config_value("user.name", scope=scope, cwd=where)
            email = get_config_value("user.email", scope=scope, cwd=where)
        except OSError:
            continue
        if name and not any(u.name == name for u in users):
            users.append(GitUser(name=name, email=email))
    return users


def _prompt_str(prompt: str, *, default: str = "") -> str:
    suffix = f" [{default}]" if default else ""
    try:
        ans = input(f"{prompt}{suffix}: ").strip()
    except EOFError:
        return default
    return ans or default


def _prompt_choice(prompt: str, options: list[str]) -> int:
    print(prompt)
    for i, opt in enumerate(options, start=1):
        print(f"  {i}) {opt}")
    ans = _prompt_str("Choose", default="1")
    try:
        idx = int(ans)
    except ValueError:
        return 0
    if 1 <= idx <= len(options):
        return idx - 1
    return 0


def choose_author(users: list[GitUser], *, interactive: bool) -> str:
    if len(users) == 1 or (users and not interactive):
        print(f"Using git user: {users[0].label}")
        return users[0].name
    if users:
        idx = _prompt_choice("Several git identities were found:", [u.label for u in users])
        return users[idx].name
    if interactive:
        return _prompt_str("Git author name or email")
    return ""


def _resolve_period(args: argparse.Namespace, config: dict, *, interactive: bool) -> Period:
    if getattr(args, "year", None):
        return parse_period(str(args.year))

    since = str(args.since or config.get("since", "") or "").strip()
    until = str(args.until or config.get("until", "") or "").strip()
    fallback = default_period()
    if interactive and not (since and until):
        since = since or _prompt_str("Start date (YYYY-MM-DD)", default=fallback.start_iso)
        until = until or _prompt_str("End date (YYYY-MM-DD)", default=fallback.until_iso)
    if not since and not until:
        return fallback
    if since and not until:
        start = parse_date(since)
        return period_from_dates(since, f"{start.year}-12-31")
    if until and not since:
        last = parse_date(until)
        return period_from_dates(f"{last.year}-01-01", until)
    return period_from_dates(since, until)


def resolve_settings(args: argparse.Namespace, config: dict, *, interactive: bool | None = None) -> Settings:
    """
    Combine CLI flags, config.json and local git config into run settings.

    Precedence: flag, then config file, then inferred git identity, then an
    interactive prompt when stdin/stdout are a terminal.
    """
    if interactive is None:
        interactive = (not getattr(args, "no_input", False)) and sys.stdin.isatty() and sys.stdout.isatty()

    author = str(args.author or config.get("author", "") or "").strip()
    if not author:
        author = choose_author(infer_git_users(), interactive=interactive).strip()
    if not author:
        raise ValueError("no author identity: pass --author or set `author` in config.json")

    root_value = args.root or config.get("root", "")
    if not root_value:
        default_root = str(Path.cwd().parent)
        root_value = _prompt_str("Root directory to scan for git repos", default=default_root) if interactive else default_root
    root = Path(str(root_value)).expanduser()

    period = _resolve_period(args, config, interactive=interactive)

    output = Path(str(args.output or config.get("output", "") or "report.json"))
    jobs = int(args.jobs or config.get("jobs", 0) or max(1, min(8, (os.cpu_count() or 4))))
    exclude = config.get("exclude_dirnames")
    exclude_dirnames = frozenset(str(d) for d in exclude) if exclude else DEFAULT_EXCLUDE_DIRNAMES

    return Settings(
        author=author,
        root=root,
        period=period,
        output=output,
        jobs=max(1, jobs),
        exclude_dirnames=exclude_dirnames,
        report_url=str(config.get("report_url", "") or "").strip(),
    )
