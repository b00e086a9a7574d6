from __future__ import annotations

import datetime as dt

from .analysis_paths import normalize_numstat_path
from .models import CommitRecord, Contributor

FIELD_SEP = "|"
BINARY_PLACEHOLDER = "-"


def parse_commit_iso(value: str) -> dt.datetime | None:
    s = (value or "").strip()
    if not s:
        return None
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        d = dt.datetime.fromisoformat(s)
    except ValueError:
        return None
    if d.tzinfo is None:
        d = d.replace(tzinfo=dt.timezone.utc)
    return d


def _parse_count(value: str) -> int | None:
    if value == BINARY_PLACEHOLDER:
        return 0
    try:
        n = int(value)
    except ValueError:
        return None
    return n if n >= 0 else None


def parse_commit_log(text: str) -> list[CommitRecord]:
    """
    Parse `git log --pretty=format:%H|%aI|%s --numstat` output.

    Header lines carry the field separator; only the first two occurrences are
    boundaries, the rest of the line is the subject. Numstat lines are
    `insertions<TAB>deletions<TAB>path`. Malformed lines are skipped.
    """
    commits: list[CommitRecord] = []

    current_hash = ""
    current_ts: dt.datetime | None = None
    current_message = ""
    current_insertions = 0
    current_deletions = 0
    current_files: list[str] = []

    def apply_commit() -> None:
        if current_hash and current_ts is not None:
            commits.append(
                CommitRecord(
                    hash=current_hash,
                    timestamp=current_ts,
                    message=current_message,
                    insertions=current_insertions,
                    deletions=current_deletions,
                    files=tuple(current_files),
                )
            )

    for raw_line in (text or "").splitlines():
        line = raw_line.rstrip("\r")
        if not line.strip():
            continue

        if "\t" not in line and FIELD_SEP in line:
            parts = line.split(FIELD_SEP, 2)
            if len(parts) < 3:
                continue
            apply_commit()
            current_hash = parts[0].strip()
            current_ts = parse_commit_iso(parts[1])
            current_message = parts[2]
            current_insertions = 0
            current_deletions = 0
            current_files = []
            continue

        if not current_hash or current_ts is None:
            continue
        parts = line.split("\t")
        if len(parts) != 3:
            continue
        added = _parse_count(parts[0].strip())
        deleted = _parse_count(parts[1].strip())
        file_path = normalize_numstat_path(parts[2])
        if added is None or deleted is None or not file_path:
            continue
        current_insertions += added
        current_deletions += deleted
        current_files.append(file_path)

    apply_commit()
    return commits


def parse_contributors(text: str) -> list[Contributor]:
    out: list[Contributor] = []
    for line in (text or "").splitlines():
        line = line.strip()
        if not line or FIELD_SEP not in line:
            continue
        name, email = line.split(FIELD_SEP, 1)
        out.append(Contributor(name=name.strip(), email=email.strip()))
    return out


def count_file_status(text: str) -> tuple[int, int]:
    """Count added/deleted files in `git log --name-status` output."""
    added = 0
    deleted = 0
    for line in (text or "").splitlines():
        if line.startswith("A\t"):
            added += 1
        elif line.startswith("D\t"):
            deleted += 1
    return added, deleted
