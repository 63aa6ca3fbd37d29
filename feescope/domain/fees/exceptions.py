"""Fee pipeline specific exceptions."""

from __future__ import annotations

from typing import Optional


class FeeScopeError(Exception):
    """Base class for fee pipeline errors."""


class ConfigurationError(FeeScopeError):
    """Raised when a required setting (e.g. the upstream API key) is missing."""


class UpstreamFetchError(FeeScopeError):
    """Raised when the indexing API cannot deliver a chain's transactions."""

    def __init__(self, chain: str, status: Optional[int], message: str) -> None:
        self.chain = chain
        self.status = status
        self.message = message
        super().__init__(f"Covalent API Error (Chain: {chain}): {message}")


class ChainTimeoutError(UpstreamFetchError):
    """Raised when a chain fetch does not finish within the configured timeout."""

    def __init__(self, chain: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(chain, None, f"timed out after {timeout:g}s")


class AggregateFailureError(FeeScopeError):
    """Raised when no configured chain produced a report."""

    def __init__(self, failed_chains: list[str], first_error: str) -> None:
        self.failed_chains = failed_chains
        self.first_error = first_error
        super().__init__(f"All chains failed to fetch. First error: {first_error}")


class StoreError(FeeScopeError):
    """Base class for report store failures."""


class StoreReadError(StoreError):
    """Raised when cached reports cannot be read."""


class StoreWriteError(StoreError):
    """Raised when a report cannot be persisted."""
