"""Wallet fee aggregation domain exports"""

from .classifier import classify
from .exceptions import (
    AggregateFailureError,
    ChainTimeoutError,
    ConfigurationError,
    FeeScopeError,
    StoreError,
    StoreReadError,
    StoreWriteError,
    UpstreamFetchError,
)
from .models import (
    CategorizedFee,
    CategoryAggregate,
    ChainConfig,
    ChainReport,
    ChainSummary,
    FeeReportResult,
    LogEvent,
    PipelineConfig,
    RawTransaction,
    ReportSource,
    WalletReport,
    WalletSummary,
)
from .orchestrator import MultiChainOrchestrator, OrchestrationResult
from .processor import process_transactions
from .service import FeeReportService

__all__ = [
    "AggregateFailureError",
    "CategorizedFee",
    "CategoryAggregate",
    "ChainConfig",
    "ChainReport",
    "ChainSummary",
    "ChainTimeoutError",
    "ConfigurationError",
    "FeeReportResult",
    "FeeReportService",
    "FeeScopeError",
    "LogEvent",
    "MultiChainOrchestrator",
    "OrchestrationResult",
    "PipelineConfig",
    "RawTransaction",
    "ReportSource",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
    "UpstreamFetchError",
    "WalletReport",
    "WalletSummary",
    "classify",
    "process_transactions",
]
