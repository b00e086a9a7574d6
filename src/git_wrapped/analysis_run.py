from __future__ import annotations

import argparse
import sys
import webbrowser
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from .analysis_aggregate import NothingToSummarize, build_summary
from .analysis_periods import Period
from .analysis_render import render_summary
from .analysis_repo import analyze_repo
from .analysis_write import build_report, report_share_url, write_json
from .config import Settings, load_config, resolve_settings
from .git import discover_git_roots
from .identity import AuthorMatcher
from .models import RepoResult, RepoStats


def format_startup_header(*, author: str, root: Path, period: Period, output: Path, jobs: int, config_path: Path, config_missing: bool) -> str:
    config_line = f"{config_path} (not found, using flags and defaults)" if config_missing else str(config_path)
    lines = [
        "┌──────────────────────────────────────────────────────────────┐",
        "│                          git-wrapped                         │",
        "└──────────────────────────────────────────────────────────────┘",
        "",
        "Run plan:",
        f"1) Config: {config_line}",
        f"2) Discover repos under: {root}",
        f"3) Analyze commits by {author!r} from {period.start_iso} to {period.until_iso} (jobs: {jobs}; read-only git log)",
        f"4) Write report: {output}",
        "",
    ]
    return "\n".join(lines)


def repo_display_name(repo: Path, root: Path) -> str:
    try:
        rel = repo.relative_to(root)
    except ValueError:
        return repo.name
    return rel.as_posix() if rel.parts else repo.name


def analyze_all(repos: list[Path], *, root: Path, period: Period, author: AuthorMatcher, jobs: int) -> list[RepoResult]:
    """Analyze repositories in parallel; results come back in `repos` order."""
    order = {str(repo): i for i, repo in enumerate(repos)}
    results: list[RepoResult] = []
    with ThreadPoolExecutor(max_workers=jobs) as ex:
        futs = [ex.submit(analyze_repo, repo, repo_display_name(repo, root), period, author) for repo in repos]
        for i, fut in enumerate(as_completed(futs), start=1):
            results.append(fut.result())
            if i % 10 == 0 or i == len(futs):
                print(f"Analyzed {i}/{len(futs)} repos...")

    results.sort(key=lambda r: order[r.path])
    return results


def collect_stats(results: list[RepoResult]) -> list[RepoStats]:
    stats: list[RepoStats] = []
    for r in results:
        for e in r.errors:
            print(f"Warning: {r.name}: {e}", file=sys.stderr)
        if r.stats is not None:
            stats.append(r.stats)
    return stats


def run_analysis(*, args: argparse.Namespace) -> int:
    config_path = Path(args.config)
    config = load_config(config_path)

    try:
        settings: Settings = resolve_settings(args, config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    root = settings.root.resolve()
    print(
        format_startup_header(
            author=settings.author,
            root=root,
            period=settings.period,
            output=settings.output,
            jobs=settings.jobs,
            config_path=config_path,
            config_missing=not config_path.exists(),
        )
    )

    if not root.is_dir():
        print(f"Root directory does not exist: {root}", file=sys.stderr)
        return 2

    print(f"Scanning for git repos under: {root} (this can take a while)...")
    repos = discover_git_roots(root, set(settings.exclude_dirnames))
    if not repos:
        print(f"No git repositories found under: {root}", file=sys.stderr)
        return 2
    print(f"Found {len(repos)} repos.")

    results = analyze_all(repos, root=root, period=settings.period, author=AuthorMatcher(settings.author), jobs=settings.jobs)
    stats = collect_stats(results)

    try:
        summary = build_summary(stats)
    except NothingToSummarize:
        print(
            f"No commits by {settings.author!r} between {settings.period.start_iso} and {settings.period.until_iso}; nothing to report.",
            file=sys.stderr,
        )
        return 2

    report = build_report(summary, period=settings.period, author=settings.author)
    write_json(settings.output, report)
    print(render_summary(summary, period=settings.period, author=settings.author))
    print(f"Report written to: {settings.output}")

    if args.open:
        if not settings.report_url:
            print("Warning: --open needs `report_url` in config.json; skipping.", file=sys.stderr)
        else:
            webbrowser.open(report_share_url(report, settings.report_url))
    return 0
