"""Protocols for the fee pipeline's collaborators."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import RawTransaction, WalletReport, WalletSummary


class TransactionFetcher(Protocol):
    async def fetch_chain_transactions(self, address: str, chain_slug: str) -> Sequence[RawTransaction]:
        ...


class ReportStore(Protocol):
    async def get_report(self, wallet_address: str) -> WalletReport | None:
        ...

    async def upsert_report(self, report: WalletReport) -> None:
        ...

    async def list_addresses(self) -> list[str]:
        ...

    async def get_summary(self, wallet_address: str) -> WalletSummary | None:
        ...
