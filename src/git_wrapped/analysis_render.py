from __future__ import annotations

from .analysis_periods import Period
from .models import GlobalSummary

YEAR_IN_REVIEW_BANNER = r"""
+------------------------------------------------------------------------+
|                              YEAR IN REVIEW                             |
+------------------------------------------------------------------------+
""".strip("\n")

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def fmt_int(n: int) -> str:
    return f"{int(n):,}"


def trunc(s: str, max_len: int) -> str:
    if len(s) <= max_len:
        return s
    if max_len <= 1:
        return s[:max_len]
    return s[: max_len - 1] + "…"


def bar(value: int, max_value: int, width: int = 22) -> str:
    if max_value <= 0:
        filled = 0
    else:
        filled = int(round((value / max_value) * width))
    filled = max(0, min(width, filled))
    return "[" + ("#" * filled) + ("-" * (width - filled)) + "]"


def render_summary(summary: GlobalSummary, *, period: Period, author: str, top_n: int = 5) -> str:
    lines: list[str] = []
    lines.append(YEAR_IN_REVIEW_BANNER)
    lines.append("")
    lines.append(f"Author: {author}")
    lines.append(f"Range:  {period.start_iso} -> {period.until_iso}")
    lines.append("")
    lines.append(f"Annual title: {summary.annual_title.title} ({summary.annual_title.desc})")
    if summary.badges:
        lines.append("Badges:       " + "  ".join(summary.badges))
    lines.append("")
    lines.append("Totals")
    lines.append("-" * 72)
    lines.append(f"Projects:       {fmt_int(summary.project_count):>12}")
    lines.append(f"Commits:        {fmt_int(summary.total_commits):>12}")
    lines.append(f"Insertions:     {fmt_int(summary.total_insertions):>12}")
    lines.append(f"Deletions:      {fmt_int(summary.total_deletions):>12}")
    lines.append(f"Net lines:      {fmt_int(summary.net_lines):>12}")
    lines.append(f"Active days:    {fmt_int(summary.active_days):>12}  (streak {summary.longest_streak}, longest gap {summary.longest_gap})")
    session = summary.longest_work_session
    if session:
        lines.append(f"Longest day:    {session['hours']:>11}h  ({session['day']}, {session['project']})")
    lines.append("")

    lines.append("Commits by hour")
    lines.append("-" * 72)
    hmax = max(summary.hour_distribution) if summary.hour_distribution else 0
    for hour, count in enumerate(summary.hour_distribution):
        lines.append(f"{hour:02d}:00 {bar(count, hmax)} {fmt_int(count)}")
    lines.append("")

    lines.append("Commits by weekday")
    lines.append("-" * 72)
    wmax = max(summary.week_distribution) if summary.week_distribution else 0
    for label, count in zip(WEEKDAY_LABELS, summary.week_distribution):
        lines.append(f"{label}   {bar(count, wmax)} {fmt_int(count)}")
    lines.append("")

    if summary.top_projects:
        lines.append("Top projects")
        lines.append("-" * 72)
        for p in summary.top_projects[:top_n]:
            lines.append(f"{trunc(str(p['name']), 40):<40} {fmt_int(int(p['commits'])):>8} commits  {float(p['commit_ratio']):.1%}")
        lines.append("")

    if summary.top_keywords:
        lines.append("Top keywords: " + ", ".join(f"{k['word']} ({k['count']})" for k in summary.top_keywords[:top_n]))
    if summary.top_file_types:
        lines.append("Top file types: " + ", ".join(f"{f['ext']} ({f['count']})" for f in summary.top_file_types[:top_n]))
    lines.append(summary.tips.get("coffee", ""))
    return "\n".join(lines).rstrip() + "\n"
