from __future__ import annotations

import argparse
from pathlib import Path

from .analysis_run import run_analysis


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Summarize a year of your git commits across many repos.")
    parser.add_argument("--author", type=str, default="", help="Author name or email to report on (default: git config user.name).")
    parser.add_argument("--root", type=Path, default=None, help="Root directory to scan for git repos (default: parent of cwd).")
    parser.add_argument("--since", type=str, default="", help="First day to include (YYYY-MM-DD).")
    parser.add_argument("--until", type=str, default="", help="Last day to include (YYYY-MM-DD).")
    parser.add_argument("--year", type=str, default="", help="Whole period instead of --since/--until (YYYY, YYYYH1, YYYYH2).")
    parser.add_argument("--output", type=Path, default=None, help="Report JSON path (default: report.json).")
    parser.add_argument("--config", type=Path, default=Path("config.json"), help="Path to config.json.")
    parser.add_argument("--jobs", type=int, default=0, help="Parallel git jobs (default: up to 8).")
    parser.add_argument("--open", action="store_true", help="Open the report URL (config `report_url`) in a browser.")
    parser.add_argument("--no-input", action="store_true", help="Never prompt; fall back to defaults.")
    return parser


def main(argv: list[str]) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return run_analysis(args=args)
