"""Reusable FastAPI dependencies."""

from .services import get_container, get_fee_report_service, get_refresh_service

__all__ = [
    "get_container",
    "get_fee_report_service",
    "get_refresh_service",
]
