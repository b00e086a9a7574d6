from __future__ import annotations

import datetime as dt
import subprocess
from collections import defaultdict
from pathlib import Path
from typing import Callable, Iterable, Sequence

from .analysis_badges import REPO_BADGES, BadgeInputs, earned_badges
from .analysis_parse import count_file_status, parse_commit_log, parse_contributors
from .analysis_paths import file_type_key
from .analysis_periods import Period, iso_week_key, month_key, quarter_key
from .analysis_text import commit_type, extract_emoji, extract_keywords, is_hotfix, is_merge, is_revert, punctuation_counts
from .git import count_branches, log_author_commits, log_contributors, log_name_status
from .identity import AuthorMatcher
from .models import CommitRecord, Contributor, RepoResult, RepoStats

NIGHT_HOURS = frozenset({22, 23, 0, 1, 2, 3, 4, 5, 6})
EARLY_BIRD_HOURS = frozenset({6, 7, 8})
LATE_NIGHT_HOURS = frozenset({2, 3, 4, 5})
WEEKEND_DAYS = frozenset({0, 6})  # Sunday, Saturday

BIG_REFACTOR_LINES = 500
REPO_TOP_N = 10
MAX_COLLABORATORS = 10
QUARTERS = ("Q1", "Q2", "Q3", "Q4")


def rank_counts(counts: dict[str, int], limit: int) -> list[tuple[str, int]]:
    # sorted() is stable, so equal counts keep first-seen order.
    return sorted(counts.items(), key=lambda kv: -kv[1])[:limit]


def rate(count: int, total: int) -> float:
    return round(count / total, 3)


def longest_streak(days: Iterable[dt.date]) -> int:
    best = 0
    streak = 0
    prev: dt.date | None = None
    for d in sorted(set(days)):
        if prev is not None and (d - prev).days == 1:
            streak += 1
        else:
            streak = 1
        best = max(best, streak)
        prev = d
    return best


def longest_gap(days: Iterable[dt.date]) -> int:
    ordered = sorted(set(days))
    if len(ordered) < 2:
        return 0
    return max((b - a).days - 1 for a, b in zip(ordered, ordered[1:]))


def longest_work_session(commits: Sequence[CommitRecord]) -> dict[str, object]:
    by_day: dict[dt.date, list[dt.datetime]] = defaultdict(list)
    for c in commits:
        by_day[c.local_day].append(c.timestamp)

    max_minutes = 0
    max_day: dt.date | None = None
    for day, times in by_day.items():
        if len(times) < 2:
            continue
        span = int((max(times) - min(times)).total_seconds() // 60)
        if span > max_minutes:
            max_minutes = span
            max_day = day
    return {
        "day": max_day.isoformat() if max_day is not None else None,
        "minutes": max_minutes,
        "hours": round(max_minutes / 60, 2),
    }


def avg_commit_interval(commits: Sequence[CommitRecord]) -> float:
    """Mean gap in whole hours between chronologically consecutive commits."""
    ordered = sorted(commits, key=lambda c: c.timestamp)
    if len(ordered) < 2:
        return 0.0
    total = sum(int((b.timestamp - a.timestamp).total_seconds() // 3600) for a, b in zip(ordered, ordered[1:]))
    return round(total / (len(ordered) - 1), 2)


def rank_collaborators(contributors: Sequence[Contributor], author: AuthorMatcher) -> list[dict[str, object]]:
    counts: dict[tuple[str, str], int] = {}
    for c in contributors:
        if author.matches(c.name, c.email):
            continue
        key = (c.name, c.email)
        counts[key] = counts.get(key, 0) + 1
    ranked = sorted(counts.items(), key=lambda kv: -kv[1])[:MAX_COLLABORATORS]
    return [{"name": name, "email": email, "commits": n} for (name, email), n in ranked]


def build_repo_stats(
    name: str,
    commits: Sequence[CommitRecord],
    contributors: Sequence[Contributor],
    author: AuthorMatcher,
    *,
    file_changes: tuple[int, int] = (0, 0),
    branch_count: int = 0,
) -> RepoStats | None:
    """
    Derive the statistics of one repository from the author's commits.

    Returns None when there are no commits; callers drop such repositories
    instead of treating them as zero.
    """
    if not commits:
        return None

    total = len(commits)
    insertions = sum(c.insertions for c in commits)
    deletions = sum(c.deletions for c in commits)

    hour_distribution = [0] * 24
    hour_lines = [0] * 24
    week_distribution = [0] * 7
    week_lines = [0] * 7
    daily: dict[str, int] = {}
    weekly: dict[str, int] = {}
    monthly: dict[str, int] = {}
    monthly_lines: dict[str, int] = {}
    quarterly = {q: 0 for q in QUARTERS}
    quarterly_lines = {q: 0 for q in QUARTERS}
    night = early_bird = late_night = weekend = 0
    exclamation = question = 0

    keyword_counts: dict[str, int] = {}
    emoji_counts: dict[str, int] = {}
    type_counts: dict[str, int] = {}
    merges = reverts = hotfixes = big_refactors = 0
    file_counts: dict[str, int] = {}
    ext_counts: dict[str, int] = {}

    for c in commits:
        day = c.local_day
        hour = c.hour
        wd = c.weekday_index
        lines = c.changed

        hour_distribution[hour] += 1
        hour_lines[hour] += lines
        week_distribution[wd] += 1
        week_lines[wd] += lines
        day_key = day.isoformat()
        daily[day_key] = daily.get(day_key, 0) + 1
        wk = iso_week_key(day)
        weekly[wk] = weekly.get(wk, 0) + 1
        mk = month_key(day)
        monthly[mk] = monthly.get(mk, 0) + 1
        monthly_lines[mk] = monthly_lines.get(mk, 0) + lines
        qk = quarter_key(day)
        quarterly[qk] += 1
        quarterly_lines[qk] += lines

        if hour in NIGHT_HOURS:
            night += 1
        if hour in EARLY_BIRD_HOURS:
            early_bird += 1
        if hour in LATE_NIGHT_HOURS:
            late_night += 1
        if wd in WEEKEND_DAYS:
            weekend += 1

        bangs, questions = punctuation_counts(c.message)
        exclamation += bangs
        question += questions

        for w in extract_keywords(c.message):
            keyword_counts[w] = keyword_counts.get(w, 0) + 1
        for e in extract_emoji(c.message):
            emoji_counts[e] = emoji_counts.get(e, 0) + 1
        ctype = commit_type(c.message)
        if ctype is not None:
            type_counts[ctype] = type_counts.get(ctype, 0) + 1
        if is_merge(c.message):
            merges += 1
        if is_revert(c.message):
            reverts += 1
        if is_hotfix(c.message):
            hotfixes += 1
        if lines > BIG_REFACTOR_LINES:
            big_refactors += 1

        for f in c.files:
            file_counts[f] = file_counts.get(f, 0) + 1
            ext = file_type_key(f)
            ext_counts[ext] = ext_counts.get(ext, 0) + 1

    days = [c.local_day for c in commits]
    streak = longest_streak(days)
    gap = longest_gap(days)

    by_date = sorted(commits, key=lambda c: c.timestamp)
    earliest, latest = by_date[0], by_date[-1]
    by_length = sorted(commits, key=lambda c: len(c.message))
    shortest, longest = by_length[0], by_length[-1]

    top_day = rank_counts(daily, 1)[0]
    top_week = rank_counts(weekly, 1)[0]
    top_quarter = rank_counts(quarterly, 1)[0]

    added, deleted = file_changes
    badges = earned_badges(
        REPO_BADGES,
        BadgeInputs(
            commits=total,
            early_bird=early_bird,
            night=night,
            weekend=weekend,
            late_night=late_night,
            longest_streak=streak,
            longest_gap=gap,
            big_refactors=big_refactors,
            merges=merges,
            insertions=insertions,
        ),
    )

    return RepoStats(
        name=name,
        commits=total,
        active_days=len(set(days)),
        insertions=insertions,
        deletions=deletions,
        net_lines=insertions - deletions,
        files_changed=len(file_counts),
        hour_distribution=hour_distribution,
        hour_lines=hour_lines,
        week_distribution=week_distribution,
        week_lines=week_lines,
        monthly_trend=[{"month": m, "count": monthly[m], "lines": monthly_lines[m]} for m in sorted(monthly)],
        quarterly_comparison=quarterly,
        quarterly_lines=quarterly_lines,
        most_productive_quarter=top_quarter,
        most_productive_day={"date": top_day[0], "commits": top_day[1]},
        most_productive_week={"week": top_week[0], "commits": top_week[1]},
        night_count=night,
        early_bird_count=early_bird,
        late_night_count=late_night,
        night_owl_rate=rate(night, total),
        weekend_vs_weekday={"weekend": weekend, "weekday": total - weekend, "weekend_rate": rate(weekend, total)},
        longest_streak=streak,
        longest_gap=gap,
        longest_work_session=longest_work_session(commits),
        avg_commit_interval=avg_commit_interval(commits),
        year_span_days=(latest.timestamp - earliest.timestamp).days,
        earliest_commit={"date": earliest.timestamp.isoformat(), "message": earliest.message},
        latest_commit={"date": latest.timestamp.isoformat(), "message": latest.message},
        shortest_commit={"message": shortest.message, "length": len(shortest.message)},
        longest_commit={"message": longest.message, "length": len(longest.message)},
        top_keywords=[{"word": w, "count": n} for w, n in rank_counts(keyword_counts, REPO_TOP_N)],
        emoji_stats=[{"emoji": e, "count": n} for e, n in rank_counts(emoji_counts, REPO_TOP_N)],
        emotion_index={"exclamation": exclamation, "question": question},
        commit_type_distribution=type_counts,
        merge_commits=merges,
        revert_commits=reverts,
        hotfix_count=hotfixes,
        hotfix_rate=rate(hotfixes, total),
        big_refactor_count=big_refactors,
        top_changed_files=[{"file": f, "count": n} for f, n in rank_counts(file_counts, REPO_TOP_N)],
        top_file_types=[{"ext": e, "count": n} for e, n in rank_counts(ext_counts, REPO_TOP_N)],
        file_changes={"added": added, "deleted": deleted, "net": added - deleted},
        avg_lines_per_commit=round((insertions + deletions) / total, 2),
        collaborators=rank_collaborators(contributors, author),
        badges=badges,
        branch_count=branch_count,
    )


GIT_FAILURES = (OSError, subprocess.TimeoutExpired)


def _git_output(errors: list[str], what: str, call: Callable[[], tuple[int, str, str]]) -> str | None:
    """stdout of one git call, or None with the failure appended to `errors`."""
    try:
        code, out, err = call()
    except GIT_FAILURES as e:
        errors.append(f"failed to run {what}: {e}")
        return None
    if code != 0:
        errors.append(f"{what} exited {code}: {err.strip()[:500]}")
        return None
    return out


def analyze_repo(repo: Path, name: str, period: Period, author: AuthorMatcher) -> RepoResult:
    errors: list[str] = []

    out = _git_output(errors, "git log", lambda: log_author_commits(repo, period, author.author))
    if out is None:
        return RepoResult(path=str(repo), name=name, stats=None, errors=errors)
    commits = parse_commit_log(out)
    if not commits:
        return RepoResult(path=str(repo), name=name, stats=None, errors=errors)

    out = _git_output(errors, "git log (contributors)", lambda: log_contributors(repo, period))
    contributors = parse_contributors(out) if out is not None else []

    out = _git_output(errors, "git log (name-status)", lambda: log_name_status(repo, period, author.author))
    file_changes = count_file_status(out) if out is not None else (0, 0)

    try:
        branch_count = count_branches(repo)
    except GIT_FAILURES as e:
        errors.append(f"failed to run git branch: {e}")
        branch_count = 0

    stats = build_repo_stats(
        name,
        commits,
        contributors,
        author,
        file_changes=file_changes,
        branch_count=branch_count,
    )
    return RepoResult(path=str(repo), name=name, stats=stats, errors=errors)
