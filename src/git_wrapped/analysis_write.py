from __future__ import annotations

import base64
import datetime as dt
import json
from pathlib import Path
from urllib.parse import quote

from .analysis_periods import Period
from .models import GlobalSummary


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, data: object) -> None:
    ensure_dir(path.parent)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False, sort_keys=False) + "\n", encoding="utf-8")


def build_report(summary: GlobalSummary, *, period: Period, author: str, generated_at: dt.datetime | None = None) -> dict[str, object]:
    if generated_at is None:
        generated_at = dt.datetime.now(dt.timezone.utc)
    return {
        "generated_at": generated_at.isoformat(),
        "range": {"since": period.start_iso, "until": period.until_iso},
        "author": author,
        "summary": summary.to_dict(),
    }


def report_share_url(report: dict[str, object], base_url: str) -> str:
    """`base_url` followed by the URL-quoted base64 of the compact JSON report."""
    payload = json.dumps(report, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    encoded = base64.b64encode(payload).decode("ascii")
    return f"{base_url}{quote(encoded, safe='')}"
