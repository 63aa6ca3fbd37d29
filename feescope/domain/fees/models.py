"""Domain models for wallet fee reports."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (``Z`` suffix allowed) into an aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def isoformat(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(slots=True, frozen=True)
class LogEvent:
    decoded_name: Optional[str]
    sender_contract_decimals: Optional[int]

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "LogEvent":
        decoded = item.get("decoded") or {}
        return cls(
            decoded_name=decoded.get("name"),
            sender_contract_decimals=item.get("sender_contract_decimals"),
        )


@dataclass(slots=True, frozen=True)
class RawTransaction:
    """One transaction as returned by the indexing API."""

    tx_hash: str
    from_address: Optional[str]
    fees_paid: Any
    gas_quote_rate: Any
    decoded_name: Optional[str] = None
    log_events: tuple[LogEvent, ...] = ()
    block_signed_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "RawTransaction":
        decoded = item.get("decoded") or {}
        return cls(
            tx_hash=item.get("tx_hash") or "",
            from_address=item.get("from_address"),
            fees_paid=item.get("fees_paid"),
            gas_quote_rate=item.get("gas_quote_rate"),
            decoded_name=decoded.get("name"),
            log_events=tuple(LogEvent.from_api(log) for log in item.get("log_events") or ()),
            block_signed_at=parse_timestamp(item.get("block_signed_at")),
        )


@dataclass(slots=True)
class CategorizedFee:
    fee_usd: float
    fee_native: float
    tx_hash: str
    timestamp_iso: Optional[str]
    category: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "feeUSD": self.fee_usd,
            "feeNative": self.fee_native,
            "txHash": self.tx_hash,
            "timestampISO": self.timestamp_iso,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CategorizedFee":
        return cls(
            fee_usd=float(data.get("feeUSD", 0.0)),
            fee_native=float(data.get("feeNative", 0.0)),
            tx_hash=data.get("txHash", ""),
            timestamp_iso=data.get("timestampISO"),
            category=data.get("category", "Other"),
        )


@dataclass(slots=True)
class CategoryAggregate:
    total_fee_usd: float = 0.0
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"totalFeeUSD": self.total_fee_usd, "count": self.count}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CategoryAggregate":
        return cls(total_fee_usd=float(data.get("totalFeeUSD", 0.0)), count=int(data.get("count", 0)))


@dataclass(slots=True)
class ChainSummary:
    """Per-chain aggregate before it is labelled with the chain name."""

    total_fee_usd: float
    total_fee_native: float
    transaction_count: int
    payer_transaction_count: int
    categories: dict[str, CategoryAggregate]
    top_transactions: list[CategorizedFee]


@dataclass(slots=True)
class ChainReport(ChainSummary):
    chain_name: str = ""

    @classmethod
    def from_summary(cls, chain_name: str, summary: ChainSummary) -> "ChainReport":
        return cls(
            chain_name=chain_name,
            total_fee_usd=summary.total_fee_usd,
            total_fee_native=summary.total_fee_native,
            transaction_count=summary.transaction_count,
            payer_transaction_count=summary.payer_transaction_count,
            categories=summary.categories,
            top_transactions=summary.top_transactions,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "chainName": self.chain_name,
            "totalFeeUSD": self.total_fee_usd,
            "totalFeeNative": self.total_fee_native,
            "transactionCount": self.transaction_count,
            "payerTransactionCount": self.payer_transaction_count,
            "categories": {name: agg.to_dict() for name, agg in self.categories.items()},
            "topTransactions": [fee.to_dict() for fee in self.top_transactions],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChainReport":
        return cls(
            chain_name=data.get("chainName", ""),
            total_fee_usd=float(data.get("totalFeeUSD", 0.0)),
            total_fee_native=float(data.get("totalFeeNative", 0.0)),
            transaction_count=int(data.get("transactionCount", 0)),
            payer_transaction_count=int(data.get("payerTransactionCount", 0)),
            categories={
                name: CategoryAggregate.from_dict(agg) for name, agg in (data.get("categories") or {}).items()
            },
            top_transactions=[CategorizedFee.from_dict(item) for item in data.get("topTransactions") or ()],
        )


DEFAULT_TOP_CATEGORY = "Transfer"


@dataclass(slots=True)
class WalletReport:
    wallet_address: str
    chain_reports: list[ChainReport]
    failed_chains: list[str]
    top_category_overall: str
    total_fee_usd_all_chains: float
    last_updated: datetime

    @classmethod
    def build(
        cls,
        wallet_address: str,
        chain_reports: list[ChainReport],
        failed_chains: list[str],
        last_updated: datetime,
    ) -> "WalletReport":
        return cls(
            wallet_address=wallet_address,
            chain_reports=chain_reports,
            failed_chains=failed_chains,
            top_category_overall=top_category(chain_reports),
            total_fee_usd_all_chains=sum(report.total_fee_usd for report in chain_reports),
            last_updated=last_updated,
        )

    def is_fresh(self, now: datetime, window: timedelta) -> bool:
        return now - self.last_updated < window

    def to_dict(self) -> dict[str, Any]:
        return {
            "walletAddress": self.wallet_address,
            "chainStats": [report.to_dict() for report in self.chain_reports],
            "failedChains": list(self.failed_chains),
            "totalFeeUSDAllChains": self.total_fee_usd_all_chains,
            "topCategoryOverall": self.top_category_overall,
            "lastUpdated": isoformat(self.last_updated),
        }


def top_category(chain_reports: list[ChainReport]) -> str:
    """Category with the largest fee summed across chains; first seen wins ties."""
    totals: dict[str, float] = {}
    for report in chain_reports:
        for name, aggregate in report.categories.items():
            totals[name] = totals.get(name, 0.0) + aggregate.total_fee_usd
    if not totals:
        return DEFAULT_TOP_CATEGORY
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)[0][0]


class ReportSource(str, Enum):
    CACHE = "cache"
    API = "api"
    API_PARTIAL = "api-partial"


@dataclass(slots=True)
class FeeReportResult:
    report: WalletReport
    source: ReportSource


@dataclass(slots=True)
class WalletSummary:
    """Stored headline figures for a wallet."""

    wallet_address: str
    total_fee: float
    top_category: str
    updated_at: Optional[datetime]


@dataclass(slots=True)
class ChainConfig:
    name: str
    slug: str


@dataclass(slots=True)
class PipelineConfig:
    """Everything the orchestrator needs, passed in explicitly."""

    chains: list[ChainConfig]
    api_key: Optional[str]
    chain_timeout_seconds: float = 120.0
    top_transactions: int = 10
