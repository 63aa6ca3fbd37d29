"""Report store backed by the ``wallet_stats`` table."""

from __future__ import annotations

import json

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from feescope.db.models import WalletStats
from feescope.domain.fees.exceptions import StoreReadError, StoreWriteError
from feescope.domain.fees.models import ChainReport, WalletReport, WalletSummary, parse_timestamp
from feescope.infrastructure.database.repositories import SqlWalletStatsRepository


class SqlReportStore:
    """Opens a session per operation, so detached writes never share a request session."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_report(self, wallet_address: str) -> WalletReport | None:
        try:
            async with self._session_factory() as session:
                row = await SqlWalletStatsRepository(session).get(wallet_address)
        except SQLAlchemyError as exc:
            raise StoreReadError(str(exc)) from exc
        if row is None:
            return None
        try:
            return self._to_report(row)
        except (TypeError, ValueError, AttributeError) as exc:
            raise StoreReadError(f"Corrupt cached report for {wallet_address}: {exc}") from exc

    async def get_summary(self, wallet_address: str) -> WalletSummary | None:
        try:
            async with self._session_factory() as session:
                row = await SqlWalletStatsRepository(session).get(wallet_address)
        except SQLAlchemyError as exc:
            raise StoreReadError(str(exc)) from exc
        if row is None:
            return None
        return WalletSummary(
            wallet_address=row.wallet_address,
            total_fee=row.total_fee or 0.0,
            top_category=row.top_category,
            updated_at=parse_timestamp(row.updated_at),
        )

    async def upsert_report(self, report: WalletReport) -> None:
        row = WalletStats(
            wallet_address=report.wallet_address,
            chain_stats_all_time=json.dumps([chain.to_dict() for chain in report.chain_reports]),
            failed_chains=json.dumps(report.failed_chains),
            total_fee=report.total_fee_usd_all_chains,
            top_category=report.top_category_overall,
            updated_at=report.last_updated,
        )
        try:
            async with self._session_factory() as session:
                await SqlWalletStatsRepository(session).upsert(row)
                await session.commit()
        except SQLAlchemyError as exc:
            raise StoreWriteError(str(exc)) from exc

    async def list_addresses(self) -> list[str]:
        try:
            async with self._session_factory() as session:
                return await SqlWalletStatsRepository(session).list_addresses()
        except SQLAlchemyError as exc:
            raise StoreReadError(str(exc)) from exc

    @staticmethod
    def _to_report(row: WalletStats) -> WalletReport:
        last_updated = parse_timestamp(row.updated_at)
        if last_updated is None:
            raise ValueError("missing updated_at")
        return WalletReport(
            wallet_address=row.wallet_address,
            chain_reports=[ChainReport.from_dict(item) for item in json.loads(row.chain_stats_all_time or "[]")],
            failed_chains=list(json.loads(row.failed_chains or "[]")),
            top_category_overall=row.top_category,
            total_fee_usd_all_chains=row.total_fee or 0.0,
            last_updated=last_updated,
        )
