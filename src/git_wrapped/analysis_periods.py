from __future__ import annotations

import dataclasses
import datetime as dt


@dataclasses.dataclass(frozen=True)
class Period:
    label: str
    start: dt.date  # inclusive
    end: dt.date  # exclusive

    @property
    def start_iso(self) -> str:
        return self.start.isoformat()

    @property
    def end_iso(self) -> str:
        return self.end.isoformat()

    @property
    def until_iso(self) -> str:
        """Last included day, as shown in reports."""
        return (self.end - dt.timedelta(days=1)).isoformat()


def parse_period(value: str) -> Period:
    s = (value or "").strip()
    if len(s) == 4 and s.isdigit():
        year = int(s)
        return Period(label=s, start=dt.date(year, 1, 1), end=dt.date(year + 1, 1, 1))
    if len(s) == 6 and s[:4].isdigit() and s[4:].upper() in ("H1", "H2"):
        year = int(s[:4])
        half = s[4:].upper()
        if half == "H1":
            return Period(label=f"{year}H1", start=dt.date(year, 1, 1), end=dt.date(year, 7, 1))
        return Period(label=f"{year}H2", start=dt.date(year, 7, 1), end=dt.date(year + 1, 1, 1))
    raise ValueError(f"Invalid period: {value!r} (expected YYYY, YYYYH1, or YYYYH2)")


def parse_date(value: str) -> dt.date:
    s = (value or "").strip()
    try:
        return dt.date.fromisoformat(s)
    except ValueError:
        raise ValueError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from None


def period_from_dates(since: str, until: str) -> Period:
    """Build a period from an inclusive `since`..`until` date pair."""
    start = parse_date(since)
    last = parse_date(until)
    if last < start:
        raise ValueError(f"until ({last.isoformat()}) is before since ({start.isoformat()})")
    return Period(label=f"{start.isoformat()}_{last.isoformat()}", start=start, end=last + dt.timedelta(days=1))


def default_period(today: dt.date | None = None) -> Period:
    if today is None:
        today = dt.date.today()
    return parse_period(str(today.year))


def iso_week_key(d: dt.date) -> str:
    year, week, _ = d.isocalendar()
    return f"{year:04d}-W{week:02d}"


def month_key(d: dt.date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def quarter_key(d: dt.date) -> str:
    return f"Q{(d.month - 1) // 3 + 1}"
