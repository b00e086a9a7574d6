from __future__ import annotations

from typing import Sequence

Tier = tuple[float, str]

PROJECT_COUNT_TIERS: tuple[Tier, ...] = (
    (15, "🚀 A multithreaded human, juggling many projects at once"),
    (10, "💪 Project enthusiast with wide-ranging interests"),
    (5, "📦 Steady progress across several projects"),
)
TOTAL_COMMITS_TIERS: tuple[Tier, ...] = (
    (1000, "💎 A thousand commits, a true code maniac"),
    (500, "🔥 Remarkably prolific"),
    (200, "⚡ Steady output"),
)
TOTAL_INSERTIONS_TIERS: tuple[Tier, ...] = (
    (100_000, "📚 That is about {novels} novels' worth of text"),
    (50_000, "📝 Astonishing output"),
    (10_000, "✍️ Writing without pause"),
)
NET_LINES_TIERS: tuple[Tier, ...] = (
    (50_000, "📈 Impressive net growth"),
    (10_000, "📊 Growing steadily"),
)
ACTIVE_DAYS_TIERS: tuple[Tier, ...] = (
    (300, "🔥 No days off all year"),
    (200, "💪 A hard-working regular"),
    (100, "⏰ Showing up consistently"),
)
LONGEST_STREAK_TIERS: tuple[Tier, ...] = (
    (30, "🔥 A whole month in a row, remarkable willpower"),
    (14, "💪 Longer than most gym streaks"),
    (7, "⚡ A full-week combo"),
)
LONGEST_GAP_TIERS: tuple[Tier, ...] = (
    (60, "🏖️ An extra-long break, hopefully a vacation"),
    (30, "😴 Champion of slacking off"),
    (14, "🌴 A healthy rest"),
)
WORK_SESSION_TIERS: tuple[Tier, ...] = (
    (10, "⏰ Long enough to watch {movies} movies"),
    (6, "💪 Extended battery life"),
)
BIG_REFACTOR_TIERS: tuple[Tier, ...] = (
    (20, "🔨 God of refactoring, the code is reborn"),
    (10, "🛠️ Refactoring master"),
    (5, "🔧 Diligent optimizer"),
)
COLLABORATOR_TIERS: tuple[Tier, ...] = (
    (10, "🤝 Social butterfly, collaborating widely"),
    (5, "👥 Core of the team"),
)


def tiered(value: float, tiers: Sequence[Tier], default: str, **fmt: object) -> str:
    """Text of the first tier whose threshold `value` reaches, else `default`."""
    for threshold, text in tiers:
        if value >= threshold:
            return text.format(**fmt)
    return default


def build_tips(
    *,
    project_count: int,
    total_commits: int,
    total_insertions: int,
    net_lines: int,
    active_days: int,
    longest_streak: int,
    longest_gap: int,
    work_session_hours: float,
    big_refactor_count: int,
    collaborator_count: int,
    weekend_commits: int,
    night_commits: int,
    early_bird_commits: int,
    coffee_count: int,
) -> dict[str, str]:
    weekend_ratio = weekend_commits / total_commits
    night_ratio = night_commits / total_commits
    early_ratio = early_bird_commits / total_commits

    if weekend_ratio > 0.2:
        weekend_tip = "💪 Weekend warrior, fighting on rest days too"
    elif weekend_commits >= 20:
        weekend_tip = "⚡ The occasional weekend shift"
    else:
        weekend_tip = "🌴 Weekends are for resting"

    if night_ratio > 0.3:
        night_tip = "🦉 Night owl, the dark hours are your stage"
    elif night_ratio > 0.15:
        night_tip = "🌙 Up late now and then"
    else:
        night_tip = "😴 Regular sleep schedule"

    if early_ratio > 0.15:
        early_tip = "🌅 Early bird, up before the sun"
    elif early_bird_commits >= 10:
        early_tip = "☀️ An early start every so often"
    else:
        early_tip = "😴 Not a morning person"

    return {
        "project_count": tiered(project_count, PROJECT_COUNT_TIERS, "🎯 Deeply focused"),
        "total_commits": tiered(total_commits, TOTAL_COMMITS_TIERS, "🌱 Growing steadily"),
        "total_insertions": tiered(
            total_insertions, TOTAL_INSERTIONS_TIERS, "📖 Every line adds up", novels=total_insertions // 30_000
        ),
        "net_lines": tiered(net_lines, NET_LINES_TIERS, "🔄 Trimming and refining"),
        "active_days": tiered(active_days, ACTIVE_DAYS_TIERS, "🌴 Healthy work-life balance"),
        "longest_streak": tiered(longest_streak, LONGEST_STREAK_TIERS, "🎯 Living in the moment"),
        "longest_gap": tiered(longest_gap, LONGEST_GAP_TIERS, "🔥 Hardly ever stops"),
        "longest_work_session": tiered(
            work_session_hours, WORK_SESSION_TIERS, "⚡ Efficient bursts", movies=int(work_session_hours // 2)
        ),
        "big_refactor_count": tiered(big_refactor_count, BIG_REFACTOR_TIERS, "📦 Stability first"),
        "top_collaborators": tiered(collaborator_count, COLLABORATOR_TIERS, "🎯 Lone wolf"),
        "weekend": weekend_tip,
        "night_owl": night_tip,
        "early_bird": early_tip,
        "coffee": f"☕ At one cup per two commits, that is {coffee_count} cups of coffee",
    }
