"""SQLAlchemy-backed repository implementations."""

from .wallet_stats_repository import SqlWalletStatsRepository

__all__ = [
    "SqlWalletStatsRepository",
]
