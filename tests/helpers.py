"""Test doubles and builders shared across the test suite."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Sequence

from feescope.domain.fees import (
    ChainConfig,
    LogEvent,
    PipelineConfig,
    RawTransaction,
    StoreReadError,
    StoreWriteError,
    WalletReport,
    WalletSummary,
)

NOW = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)
WALLET = "0xAbC0000000000000000000000000000000000001"
OTHER_WALLET = "0x9999999999999999999999999999999999999999"

FIVE_CHAINS = [
    ChainConfig(name="Ethereum", slug="eth-mainnet"),
    ChainConfig(name="Polygon", slug="matic-mainnet"),
    ChainConfig(name="Optimism", slug="optimism-mainnet"),
    ChainConfig(name="Arbitrum", slug="arbitrum-mainnet"),
    ChainConfig(name="Base", slug="base-mainnet"),
]


def make_tx(
    *,
    tx_hash: str = "0xhash",
    sender: Optional[str] = WALLET,
    fees_paid: Any = 1_000_000_000_000_000,
    rate: Any = 2000.0,
    name: Optional[str] = None,
    logs: Sequence[LogEvent] = (),
    age: Optional[timedelta] = timedelta(days=1),
) -> RawTransaction:
    return RawTransaction(
        tx_hash=tx_hash,
        from_address=sender,
        fees_paid=fees_paid,
        gas_quote_rate=rate,
        decoded_name=name,
        log_events=tuple(logs),
        block_signed_at=NOW - age if age is not None else None,
    )


def pipeline_config(chains=None, *, api_key: Optional[str] = "test-key", timeout: float = 5.0) -> PipelineConfig:
    return PipelineConfig(
        chains=list(chains if chains is not None else FIVE_CHAINS),
        api_key=api_key,
        chain_timeout_seconds=timeout,
    )


class Clock:
    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeFetcher:
    """Returns canned transactions (or raises canned errors) per chain slug."""

    def __init__(self, outcomes: Optional[dict[str, Any]] = None, default: Any = ()) -> None:
        self.outcomes = outcomes or {}
        self.default = default
        self.calls: list[tuple[str, str]] = []

    async def fetch_chain_transactions(self, address: str, chain_slug: str):
        self.calls.append((address, chain_slug))
        outcome = self.outcomes.get(chain_slug, self.default)
        if callable(outcome):
            outcome = await outcome()
        if isinstance(outcome, BaseException):
            raise outcome
        return list(outcome)


class InMemoryReportStore:
    def __init__(self) -> None:
        self.reports: dict[str, WalletReport] = {}
        self.reads = 0
        self.writes = 0
        self.fail_reads = False
        self.fail_writes = False
        self.fail_listing = False

    async def get_report(self, wallet_address: str) -> WalletReport | None:
        self.reads += 1
        if self.fail_reads:
            raise StoreReadError("store offline")
        return self.reports.get(wallet_address)

    async def upsert_report(self, report: WalletReport) -> None:
        await asyncio.sleep(0)
        self.writes += 1
        if self.fail_writes:
            raise StoreWriteError("disk full")
        self.reports[report.wallet_address] = report

    async def list_addresses(self) -> list[str]:
        if self.fail_listing:
            raise StoreReadError("store offline")
        return sorted(self.reports)

    async def get_summary(self, wallet_address: str) -> WalletSummary | None:
        report = self.reports.get(wallet_address)
        if report is None:
            return None
        return WalletSummary(
            wallet_address=report.wallet_address,
            total_fee=report.total_fee_usd_all_chains,
            top_category=report.top_category_overall,
            updated_at=report.last_updated,
        )
