from __future__ import annotations

import dataclasses
import datetime as dt
from typing import Iterable, Sequence

from .analysis_badges import GLOBAL_BADGES, BadgeInputs, earned_badges, select_annual_title
from .analysis_parse import parse_commit_iso
from .analysis_paths import is_clean_file_type
from .analysis_repo import EARLY_BIRD_HOURS, LATE_NIGHT_HOURS, NIGHT_HOURS, QUARTERS, WEEKEND_DAYS, rank_counts, rate
from .analysis_text import STOP_WORDS
from .analysis_tips import build_tips
from .models import GlobalSummary, RepoStats

TOP_PROJECTS = 5
TOP_KEYWORDS = 20
TOP_N = 10
MAX_ACTIVE_DAYS = 365
COFFEE_PER_COMMIT = 0.5


class NothingToSummarize(ValueError):
    """Raised when no repository produced statistics."""


def merge_counts(dst: dict[str, int], src: dict[str, int]) -> None:
    for k, v in src.items():
        dst[k] = dst.get(k, 0) + int(v)


def merge_histogram(dst: list[int], src: Sequence[int]) -> None:
    for i, v in enumerate(src):
        dst[i] += int(v)


def merge_ranking(rankings: Iterable[list[dict[str, object]]], key_field: str, count_field: str = "count") -> dict[str, int]:
    """Sum already-truncated per-repository rankings into key -> count, in first-seen order."""
    out: dict[str, int] = {}
    for ranking in rankings:
        for entry in ranking:
            k = str(entry[key_field])
            out[k] = out.get(k, 0) + int(entry[count_field])
    return out


def _hours_total(hist: Sequence[int], hours: Iterable[int]) -> int:
    return sum(hist[h] for h in hours)


def _first_by(items: list[dict[str, object]], key, *, reverse: bool = False) -> dict[str, object]:
    # Stable sort: ties keep repository input order.
    return sorted(items, key=key, reverse=reverse)[0]


def _commit_time(entry: dict[str, object]) -> dt.datetime:
    ts = parse_commit_iso(str(entry.get("date", "")))
    if ts is None:
        return dt.datetime.min.replace(tzinfo=dt.timezone.utc)
    return ts


def with_commit_ratios(repos: Sequence[RepoStats], total_commits: int) -> list[RepoStats]:
    return [dataclasses.replace(r, commit_ratio=rate(r.commits, total_commits)) for r in repos]


def build_summary(repos: Sequence[RepoStats]) -> GlobalSummary:
    """
    Fold per-repository statistics into one summary.

    Rankings are merged from each repository's own top-N lists, so a term that
    never made a local top-N cannot surface globally. Inputs are not mutated.
    """
    if not repos:
        raise NothingToSummarize("no repositories with commits to summarize")

    total_commits = sum(r.commits for r in repos)
    total_insertions = sum(r.insertions for r in repos)
    total_deletions = sum(r.deletions for r in repos)
    total_files_changed = sum(r.files_changed for r in repos)

    ratioed = with_commit_ratios(repos, total_commits)
    top_projects = [
        {
            "name": r.name,
            "commits": r.commits,
            "insertions": r.insertions,
            "deletions": r.deletions,
            "badges": list(r.badges),
            "commit_ratio": r.commit_ratio,
        }
        for r in sorted(ratioed, key=lambda r: -r.commits)[:TOP_PROJECTS]
    ]

    hour_distribution = [0] * 24
    hour_lines = [0] * 24
    week_distribution = [0] * 7
    week_lines = [0] * 7
    monthly: dict[str, int] = {}
    monthly_lines: dict[str, int] = {}
    quarterly = {q: 0 for q in QUARTERS}
    quarterly_lines = {q: 0 for q in QUARTERS}
    commit_types: dict[str, int] = {}
    for r in repos:
        merge_histogram(hour_distribution, r.hour_distribution)
        merge_histogram(hour_lines, r.hour_lines)
        merge_histogram(week_distribution, r.week_distribution)
        merge_histogram(week_lines, r.week_lines)
        for m in r.monthly_trend:
            month = str(m["month"])
            monthly[month] = monthly.get(month, 0) + int(m["count"])
            monthly_lines[month] = monthly_lines.get(month, 0) + int(m.get("lines", 0) or 0)
        merge_counts(quarterly, r.quarterly_comparison)
        merge_counts(quarterly_lines, r.quarterly_lines)
        merge_counts(commit_types, r.commit_type_distribution)

    monthly_trend = [{"month": m, "count": monthly[m], "lines": monthly_lines[m]} for m in sorted(monthly)]
    most_productive_quarter = rank_counts(quarterly, 1)[0]

    daily = merge_ranking(([r.most_productive_day] if r.most_productive_day else [] for r in repos), "date", "commits")
    weekly = merge_ranking(([r.most_productive_week] if r.most_productive_week else [] for r in repos), "week", "commits")
    top_day = rank_counts(daily, 1)
    top_week = rank_counts(weekly, 1)

    active_days = min(sum(r.active_days for r in repos), MAX_ACTIVE_DAYS)
    longest_streak = max(r.longest_streak for r in repos)
    longest_gap = max(r.longest_gap for r in repos)

    keywords = merge_ranking(
        ([k for k in r.top_keywords if str(k["word"]) not in STOP_WORDS] for r in repos),
        "word",
    )
    emoji = merge_ranking((r.emoji_stats for r in repos), "emoji")
    file_types = merge_ranking(
        ([f for f in r.top_file_types if is_clean_file_type(str(f["ext"]))] for r in repos),
        "ext",
    )
    changed_files = merge_ranking((r.top_changed_files for r in repos), "file")

    collaborators: dict[tuple[str, str], int] = {}
    for r in repos:
        for c in r.collaborators:
            key = (str(c["name"]), str(c["email"]))
            collaborators[key] = collaborators.get(key, 0) + int(c["commits"])
    top_collaborators = [
        {"name": name, "email": email, "commits": n}
        for (name, email), n in sorted(collaborators.items(), key=lambda kv: -kv[1])[:TOP_N]
    ]

    files_added = sum(r.file_changes["added"] for r in repos)
    files_deleted = sum(r.file_changes["deleted"] for r in repos)
    merge_commits = sum(r.merge_commits for r in repos)
    revert_commits = sum(r.revert_commits for r in repos)
    hotfix_count = sum(r.hotfix_count for r in repos)
    big_refactor_count = sum(r.big_refactor_count for r in repos)
    branch_count = sum(r.branch_count for r in repos)

    # Derived once from merged histograms, never summed from per-repo counters.
    night = _hours_total(hour_distribution, NIGHT_HOURS)
    early_bird = _hours_total(hour_distribution, EARLY_BIRD_HOURS)
    late_night = _hours_total(hour_distribution, LATE_NIGHT_HOURS)
    weekend = sum(week_distribution[d] for d in WEEKEND_DAYS)

    earliest = _first_by([{**r.earliest_commit, "project": r.name} for r in repos], _commit_time)
    latest = _first_by([{**r.latest_commit, "project": r.name} for r in repos], _commit_time, reverse=True)
    shortest = _first_by([{**r.shortest_commit, "project": r.name} for r in repos], lambda e: int(e["length"]))
    longest = _first_by(
        [{**r.longest_commit, "project": r.name} for r in repos], lambda e: int(e["length"]), reverse=True
    )
    year_span_days = (_commit_time(latest) - _commit_time(earliest)).days

    sessions = [
        {**r.longest_work_session, "project": r.name}
        for r in repos
        if int(r.longest_work_session.get("minutes", 0) or 0) > 0
    ]
    longest_session = _first_by(sessions, lambda s: int(s["minutes"]), reverse=True) if sessions else None

    avg_lines_per_commit = round((total_insertions + total_deletions) / total_commits, 2)
    avg_interval = round(sum(r.avg_commit_interval * r.commits for r in repos) / total_commits, 2)

    inputs = BadgeInputs(
        commits=total_commits,
        early_bird=early_bird,
        night=night,
        weekend=weekend,
        late_night=late_night,
        longest_streak=longest_streak,
        longest_gap=longest_gap,
        big_refactors=big_refactor_count,
        merges=merge_commits,
        repos=len(repos),
        insertions=total_insertions,
    )

    coffee_count = int(total_commits * COFFEE_PER_COMMIT)
    net_lines = total_insertions - total_deletions
    tips = build_tips(
        project_count=len(repos),
        total_commits=total_commits,
        total_insertions=total_insertions,
        net_lines=net_lines,
        active_days=active_days,
        longest_streak=longest_streak,
        longest_gap=longest_gap,
        work_session_hours=float(longest_session["hours"]) if longest_session else 0.0,
        big_refactor_count=big_refactor_count,
        collaborator_count=len(top_collaborators),
        weekend_commits=weekend,
        night_commits=night,
        early_bird_commits=early_bird,
        coffee_count=coffee_count,
    )

    return GlobalSummary(
        project_count=len(repos),
        total_commits=total_commits,
        total_insertions=total_insertions,
        total_deletions=total_deletions,
        net_lines=net_lines,
        total_files_changed=total_files_changed,
        active_days=active_days,
        avg_lines_per_commit=avg_lines_per_commit,
        avg_commit_interval=avg_interval,
        earliest_commit=earliest,
        latest_commit=latest,
        year_span_days=year_span_days,
        hour_distribution=hour_distribution,
        hour_lines=hour_lines,
        week_distribution=week_distribution,
        week_lines=week_lines,
        monthly_trend=monthly_trend,
        quarterly_comparison=quarterly,
        quarterly_lines=quarterly_lines,
        most_productive_quarter=most_productive_quarter,
        most_productive_day={"date": top_day[0][0], "commits": top_day[0][1]} if top_day else None,
        most_productive_week={"week": top_week[0][0], "commits": top_week[0][1]} if top_week else None,
        longest_streak=longest_streak,
        longest_gap=longest_gap,
        longest_work_session=longest_session,
        weekend_vs_weekday={"weekend": weekend, "weekday": total_commits - weekend, "weekend_rate": rate(weekend, total_commits)},
        night_owl_rate=rate(night, total_commits),
        night_count=night,
        early_bird_count=early_bird,
        late_night_count=late_night,
        shortest_commit=shortest,
        longest_commit=longest,
        top_keywords=[{"word": w, "count": n} for w, n in rank_counts(keywords, TOP_KEYWORDS)],
        emoji_stats=[{"emoji": e, "count": n} for e, n in rank_counts(emoji, TOP_N)],
        emotion_index={
            "exclamation": sum(r.emotion_index["exclamation"] for r in repos),
            "question": sum(r.emotion_index["question"] for r in repos),
        },
        commit_type_distribution=commit_types,
        top_file_types=[{"ext": e, "count": n} for e, n in rank_counts(file_types, TOP_N)],
        top_changed_files=[{"file": f, "count": n} for f, n in rank_counts(changed_files, TOP_N)],
        file_changes={"added": files_added, "deleted": files_deleted, "net": files_added - files_deleted},
        top_collaborators=top_collaborators,
        merge_commits=merge_commits,
        revert_commits=revert_commits,
        hotfix_count=hotfix_count,
        hotfix_rate=rate(hotfix_count, total_commits),
        big_refactor_count=big_refactor_count,
        branch_count=branch_count,
        top_projects=top_projects,
        all_projects=[r.name for r in repos],
        badges=earned_badges(GLOBAL_BADGES, inputs),
        annual_title=select_annual_title(inputs),
        tips=tips,
        coffee_count=coffee_count,
    )
