from __future__ import annotations

import dataclasses
import datetime as dt


@dataclasses.dataclass(frozen=True)
class CommitRecord:
    hash: str
    timestamp: dt.datetime  # offset-aware, commit's own offset
    message: str
    insertions: int = 0
    deletions: int = 0
    files: tuple[str, ...] = ()

    @property
    def changed(self) -> int:
        return self.insertions + self.deletions

    @property
    def local_day(self) -> dt.date:
        return self.timestamp.date()

    @property
    def hour(self) -> int:
        return self.timestamp.hour

    @property
    def weekday_index(self) -> int:
        # 0 = Sunday .. 6 = Saturday
        return self.timestamp.isoweekday() % 7


@dataclasses.dataclass(frozen=True)
class Contributor:
    name: str = ""
    email: str = ""


@dataclasses.dataclass(frozen=True)
class RepoStats:
    name: str
    commits: int
    active_days: int
    insertions: int
    deletions: int
    net_lines: int
    files_changed: int
    hour_distribution: list[int]
    hour_lines: list[int]
    week_distribution: list[int]  # 0 = Sunday
    week_lines: list[int]
    monthly_trend: list[dict[str, object]]  # [{month,count,lines}] sorted by month
    quarterly_comparison: dict[str, int]
    quarterly_lines: dict[str, int]
    most_productive_quarter: tuple[str, int]
    most_productive_day: dict[str, object] | None
    most_productive_week: dict[str, object] | None
    night_count: int
    early_bird_count: int
    late_night_count: int
    night_owl_rate: float
    weekend_vs_weekday: dict[str, object]  # {weekend,weekday,weekend_rate}
    longest_streak: int
    longest_gap: int
    longest_work_session: dict[str, object]  # {day,minutes,hours}
    avg_commit_interval: float
    year_span_days: int
    earliest_commit: dict[str, str]  # {date,message}
    latest_commit: dict[str, str]
    shortest_commit: dict[str, object]  # {message,length}
    longest_commit: dict[str, object]
    top_keywords: list[dict[str, object]]  # [{word,count}]
    emoji_stats: list[dict[str, object]]  # [{emoji,count}]
    emotion_index: dict[str, int]  # {exclamation,question}
    commit_type_distribution: dict[str, int]
    merge_commits: int
    revert_commits: int
    hotfix_count: int
    hotfix_rate: float
    big_refactor_count: int
    top_changed_files: list[dict[str, object]]  # [{file,count}]
    top_file_types: list[dict[str, object]]  # [{ext,count}]
    file_changes: dict[str, int]  # {added,deleted,net}
    avg_lines_per_commit: float
    collaborators: list[dict[str, object]]  # [{name,email,commits}]
    badges: list[str]
    branch_count: int = 0
    commit_ratio: float = 0.0  # set by the aggregator on a copy

    def to_dict(self) -> dict[str, object]:
        return dataclasses.asdict(self)


@dataclasses.dataclass(frozen=True)
class AnnualTitle:
    title: str
    desc: str
    score: float = 0.0


@dataclasses.dataclass(frozen=True)
class GlobalSummary:
    project_count: int
    total_commits: int
    total_insertions: int
    total_deletions: int
    net_lines: int
    total_files_changed: int
    active_days: int
    avg_lines_per_commit: float
    avg_commit_interval: float

    earliest_commit: dict[str, object]  # {date,message,project}
    latest_commit: dict[str, object]
    year_span_days: int

    hour_distribution: list[int]
    hour_lines: list[int]
    week_distribution: list[int]
    week_lines: list[int]
    monthly_trend: list[dict[str, object]]
    quarterly_comparison: dict[str, int]
    quarterly_lines: dict[str, int]
    most_productive_quarter: tuple[str, int]
    most_productive_day: dict[str, object] | None
    most_productive_week: dict[str, object] | None

    longest_streak: int
    longest_gap: int
    longest_work_session: dict[str, object] | None  # {day,minutes,hours,project}

    weekend_vs_weekday: dict[str, object]
    night_owl_rate: float
    night_count: int
    early_bird_count: int
    late_night_count: int

    shortest_commit: dict[str, object]  # {message,length,project}
    longest_commit: dict[str, object]
    top_keywords: list[dict[str, object]]
    emoji_stats: list[dict[str, object]]
    emotion_index: dict[str, int]
    commit_type_distribution: dict[str, int]

    top_file_types: list[dict[str, object]]
    top_changed_files: list[dict[str, object]]
    file_changes: dict[str, int]

    top_collaborators: list[dict[str, object]]
    merge_commits: int
    revert_commits: int
    hotfix_count: int
    hotfix_rate: float
    big_refactor_count: int
    branch_count: int

    top_projects: list[dict[str, object]]
    all_projects: list[str]

    badges: list[str]
    annual_title: AnnualTitle
    tips: dict[str, str]
    coffee_count: int

    def to_dict(self) -> dict[str, object]:
        out = dataclasses.asdict(self)
        out["most_productive_quarter"] = list(self.most_productive_quarter)
        out["annual_title"] = {"title": self.annual_title.title, "desc": self.annual_title.desc}
        return out


@dataclasses.dataclass
class RepoResult:
    path: str
    name: str
    stats: RepoStats | None
    errors: list[str]
