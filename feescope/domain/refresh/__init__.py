"""Scheduled refresh of cached wallets."""

from .service import RefreshService

__all__ = ["RefreshService"]
