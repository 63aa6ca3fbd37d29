"""Covalent indexing API client."""

from .client import CovalentClient

__all__ = ["CovalentClient"]
