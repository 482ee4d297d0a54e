"""Calendar windows used to scope leaderboards to a month, a year or all time."""

from __future__ import annotations

import calendar
import datetime
from dataclasses import dataclass
from typing import List, Literal, Optional


Period = Literal["all", "month", "year"]


@dataclass(frozen=True)
class DateWindow:
    """Inclusive date range; ``None`` bounds are open."""

    start: Optional[datetime.date] = None
    end: Optional[datetime.date] = None
    label: str = "all-time"

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, day: datetime.date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


def month_window(year: int, month: int) -> DateWindow:
    last_day = calendar.monthrange(year, month)[1]
    return DateWindow(
        start=datetime.date(year, month, 1),
        end=datetime.date(year, month, last_day),
        label=f"{year:04d}-{month:02d}",
    )


def year_window(year: int) -> DateWindow:
    return DateWindow(
        start=datetime.date(year, 1, 1),
        end=datetime.date(year, 12, 31),
        label=f"{year:04d}",
    )


def all_time_window() -> DateWindow:
    return DateWindow()


def resolve_window(
    period: Period,
    *,
    today: datetime.date,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> DateWindow:
    """Map a leaderboard period selector to a window, defaulting to ``today``'s month or year."""

    if period == "all":
        return all_time_window()
    if period == "year":
        return year_window(year or today.year)
    if period == "month":
        return month_window(year or today.year, month or today.month)
    raise ValueError(f"Unsupported period {period!r}")


def recent_months(today: datetime.date, count: int = 12) -> List[DateWindow]:
    """The ``count`` most recent month windows, newest first."""

    windows: List[DateWindow] = []
    year, month = today.year, today.month
    for _ in range(count):
        windows.append(month_window(year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return windows


def recent_years(today: datetime.date, count: int = 5) -> List[DateWindow]:
    return [year_window(today.year - offset) for offset in range(count)]


__all__ = [
    "DateWindow",
    "Period",
    "all_time_window",
    "month_window",
    "recent_months",
    "recent_years",
    "resolve_window",
    "year_window",
]
