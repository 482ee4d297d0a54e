"""Leaderboard aggregation and date windows."""

from .aggregator import aggregate, by_date_window, leaderboard, weight_for
from .windows import (
    DateWindow,
    all_time_window,
    month_window,
    recent_months,
    recent_years,
    resolve_window,
    year_window,
)

__all__ = [
    "aggregate",
    "by_date_window",
    "leaderboard",
    "weight_for",
    "DateWindow",
    "all_time_window",
    "month_window",
    "recent_months",
    "recent_years",
    "resolve_window",
    "year_window",
]
