"""Team balancing for game sessions."""

from .service import BalanceReport, balance, balance_with_report, team_ratings

__all__ = ["BalanceReport", "balance", "balance_with_report", "team_ratings"]
