from __future__ import annotations

import dataclasses
from typing import Callable

from .models import AnnualTitle


@dataclasses.dataclass(frozen=True)
class BadgeInputs:
    """Counts the badge and title rules are evaluated against."""

    commits: int
    early_bird: int = 0
    night: int = 0
    weekend: int = 0
    late_night: int = 0
    longest_streak: int = 0
    longest_gap: int = 0
    big_refactors: int = 0
    merges: int = 0
    repos: int = 1
    insertions: int = 0

    def ratio(self, count: int) -> float:
        # Every analysed repository has at least one commit.
        return count / self.commits

    @property
    def early_bird_ratio(self) -> float:
        return self.ratio(self.early_bird)

    @property
    def night_ratio(self) -> float:
        return self.ratio(self.night)

    @property
    def weekend_ratio(self) -> float:
        return self.ratio(self.weekend)

    @property
    def late_night_ratio(self) -> float:
        return self.ratio(self.late_night)


@dataclasses.dataclass(frozen=True)
class BadgeRule:
    label: str
    earned: Callable[[BadgeInputs], bool]


@dataclasses.dataclass(frozen=True)
class TitleCandidate:
    title: str
    desc: str
    score: Callable[[BadgeInputs], float]


EARLY_BIRD = "🌅 Early Bird"
NIGHT_OWL = "🦉 Night Owl"
WEEKEND_WARRIOR = "💪 Weekend Warrior"
STEADY_OUTPUT = "🔥 Steady Output"
IDLE_KING = "🏖️ Idle King"
MIDNIGHT_GRINDER = "🌙 Midnight Grinder"
REFACTOR_MASTER = "🔨 Refactor Master"
TEAM_PLAYER = "🤝 Team Player"
MULTI_PROJECT = "🚀 Multi-Project"
THOUSAND_COMMITS = "💎 Thousand Commits"
HUNDRED_K_LINES = "📝 100K+ Lines"


REPO_BADGES: tuple[BadgeRule, ...] = (
    BadgeRule(EARLY_BIRD, lambda m: m.early_bird_ratio > 0.2),
    BadgeRule(NIGHT_OWL, lambda m: m.night_ratio > 0.3),
    BadgeRule(WEEKEND_WARRIOR, lambda m: m.weekend_ratio > 0.3),
    BadgeRule(STEADY_OUTPUT, lambda m: m.longest_streak >= 7),
    BadgeRule(IDLE_KING, lambda m: m.longest_gap >= 14),
    BadgeRule(MIDNIGHT_GRINDER, lambda m: m.late_night > 10),
    BadgeRule(REFACTOR_MASTER, lambda m: m.big_refactors >= 3),
    BadgeRule(TEAM_PLAYER, lambda m: m.merges > 20),
)

GLOBAL_BADGES: tuple[BadgeRule, ...] = (
    BadgeRule(EARLY_BIRD, lambda m: m.early_bird_ratio > 0.1),
    BadgeRule(NIGHT_OWL, lambda m: m.night_ratio > 0.2),
    BadgeRule(WEEKEND_WARRIOR, lambda m: m.weekend_ratio > 0.15),
    BadgeRule(STEADY_OUTPUT, lambda m: m.longest_streak >= 7),
    BadgeRule(IDLE_KING, lambda m: m.longest_gap >= 14),
    BadgeRule(MIDNIGHT_GRINDER, lambda m: m.late_night > 10),
    BadgeRule(REFACTOR_MASTER, lambda m: m.big_refactors >= 10),
    BadgeRule(TEAM_PLAYER, lambda m: m.merges > 50),
    BadgeRule(MULTI_PROJECT, lambda m: m.repos >= 10),
    BadgeRule(THOUSAND_COMMITS, lambda m: m.commits >= 1000),
    BadgeRule(HUNDRED_K_LINES, lambda m: m.insertions >= 100_000),
)


def capped(value: float, *, cap: float, flat: float, scale: float) -> float:
    """`flat` once `value` reaches `cap`, otherwise `value * scale`."""
    return flat if value >= cap else value * scale


# Declaration order breaks ties.
TITLE_CANDIDATES: tuple[TitleCandidate, ...] = (
    TitleCandidate("💎 Code Maniac", "An astonishing number of commits", lambda m: capped(m.commits, cap=1000, flat=100, scale=0.1)),
    TitleCandidate("📝 King of Output", "Extremely high code output", lambda m: capped(m.insertions, cap=100_000, flat=90, scale=0.001)),
    TitleCandidate("🦉 Night Walker", "The night is your home turf", lambda m: m.night_ratio * 100),
    TitleCandidate("🌅 Dawn Pioneer", "The early bird gets the code", lambda m: m.early_bird_ratio * 100),
    TitleCandidate("💪 Weekend Warlord", "Still burning on weekends", lambda m: m.weekend_ratio * 80),
    TitleCandidate("🔥 Relentless", "An exceptionally long commit streak", lambda m: capped(m.longest_streak, cap=30, flat=85, scale=2)),
    TitleCandidate("🔨 God of Refactoring", "Bold, sweeping code changes", lambda m: capped(m.big_refactors, cap=20, flat=80, scale=4)),
    TitleCandidate("🚀 Full-Stack Ranger", "Many projects pushed forward at once", lambda m: capped(m.repos, cap=15, flat=75, scale=5)),
    TitleCandidate("🤝 Team Hub", "The most frequent merger", lambda m: capped(m.merges, cap=100, flat=70, scale=0.7)),
    TitleCandidate("🏖️ Zen Developer", "Knows when to rest", lambda m: capped(m.longest_gap, cap=30, flat=60, scale=2)),
    TitleCandidate("🌙 Midnight Grinder", "Still coding in the small hours", lambda m: m.late_night_ratio * 90),
)


def earned_badges(rules: tuple[BadgeRule, ...], inputs: BadgeInputs) -> list[str]:
    return [r.label for r in rules if r.earned(inputs)]


def select_annual_title(inputs: BadgeInputs, candidates: tuple[TitleCandidate, ...] = TITLE_CANDIDATES) -> AnnualTitle:
    if not candidates:
        raise ValueError("no title candidates")
    best: AnnualTitle | None = None
    for c in candidates:
        score = float(c.score(inputs))
        if best is None or score > best.score:
            best = AnnualTitle(title=c.title, desc=c.desc, score=score)
    assert best is not None
    return best
