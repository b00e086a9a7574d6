from __future__ import annotations

import base64
import datetime as dt
import json
from pathlib import Path
from urllib.parse import unquote

from git_wrapped.analysis_aggregate import build_summary
from git_wrapped.analysis_periods import parse_period
from git_wrapped.analysis_repo import build_repo_stats
from git_wrapped.analysis_write import build_report, report_share_url, write_json
from git_wrapped.identity import AuthorMatcher
from git_wrapped.models import CommitRecord


def _summary():
    commits = [
        CommitRecord(hash="a", timestamp=dt.datetime(2024, 5, 1, 9, tzinfo=dt.timezone.utc), message="feat: 🚀 launch", insertions=5),
        CommitRecord(hash="b", timestamp=dt.datetime(2024, 5, 2, 9, tzinfo=dt.timezone.utc), message="fix: typo", deletions=1),
    ]
    stats = build_repo_stats("site", commits, [], AuthorMatcher("me"))
    assert stats is not None
    return build_summary([stats])


def test_build_report_shape() -> None:
    generated = dt.datetime(2025, 1, 1, tzinfo=dt.timezone.utc)
    report = build_report(_summary(), period=parse_period("2024"), author="me", generated_at=generated)
    assert report["generated_at"] == "2025-01-01T00:00:00+00:00"
    assert report["range"] == {"since": "2024-01-01", "until": "2024-12-31"}
    assert report["author"] == "me"
    assert report["summary"]["total_commits"] == 2


def test_write_json_creates_parent_dirs(tmp_path: Path) -> None:
    out = tmp_path / "nested" / "report.json"
    report = build_report(_summary(), period=parse_period("2024"), author="me")
    write_json(out, report)

    text = out.read_text(encoding="utf-8")
    assert "🚀" in text
    assert json.loads(text)["summary"]["all_projects"] == ["site"]


def test_report_share_url_encodes_report() -> None:
    report = {"author": "me", "summary": {"total_commits": 2}}
    url = report_share_url(report, "https://example.com/view?data=")
    assert url.startswith("https://example.com/view?data=")

    payload = unquote(url[len("https://example.com/view?data=") :])
    assert json.loads(base64.b64decode(payload).decode("utf-8")) == report
