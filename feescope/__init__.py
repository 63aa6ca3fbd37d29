"""Multi-chain wallet fee aggregation service."""

__version__ = "0.3.0"
