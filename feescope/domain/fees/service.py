"""Cached wallet fee reports."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from .exceptions import StoreReadError
from .models import FeeReportResult, ReportSource, WalletReport, WalletSummary, utcnow
from .orchestrator import MultiChainOrchestrator
from .repository import ReportStore

logger = logging.getLogger(__name__)

DEFAULT_FRESHNESS = timedelta(hours=1)


def normalize_address(wallet_address: str) -> str:
    return wallet_address.strip().lower()


class FeeReportService:
    """Serves all-time reports from the store while fresh, otherwise runs the pipeline.

    Day-bounded requests always run live and are never persisted. Write-back is
    a detached task; ``drain()`` waits for the ones still pending.
    """

    def __init__(
        self,
        orchestrator: MultiChainOrchestrator,
        store: ReportStore,
        *,
        freshness: timedelta = DEFAULT_FRESHNESS,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._orchestrator = orchestrator
        self._store = store
        self._freshness = freshness
        self._clock = clock
        self._pending_writes: set[asyncio.Task[None]] = set()

    @property
    def pending_writes(self) -> int:
        return len(self._pending_writes)

    async def get_or_refresh(self, wallet_address: str, days: Optional[int] = None) -> FeeReportResult:
        address = normalize_address(wallet_address)
        use_cache = days is None

        if use_cache:
            cached = await self._read_cached(address)
            if cached is not None and cached.is_fresh(self._clock(), self._freshness):
                logger.info("Using cached report for %s", address)
                return FeeReportResult(report=cached, source=ReportSource.CACHE)

        logger.info("Cache bypassed or stale for %s (days=%s), calling upstream", address, days)
        outcome = await self._orchestrator.orchestrate(address, days)
        report = WalletReport.build(
            address,
            outcome.chain_reports,
            outcome.failed_chains,
            last_updated=self._clock(),
        )
        if use_cache:
            self._schedule_write(report)

        source = ReportSource.API_PARTIAL if report.failed_chains else ReportSource.API
        return FeeReportResult(report=report, source=source)

    async def list_cached_addresses(self) -> list[str]:
        return await self._store.list_addresses()

    async def get_cached_summary(self, wallet_address: str) -> WalletSummary | None:
        return await self._store.get_summary(normalize_address(wallet_address))

    async def drain(self) -> None:
        while self._pending_writes:
            await asyncio.gather(*list(self._pending_writes), return_exceptions=True)

    async def _read_cached(self, address: str) -> WalletReport | None:
        try:
            return await self._store.get_report(address)
        except StoreReadError as exc:
            logger.error("Report store read failed for %s: %s", address, exc)
            return None

    def _schedule_write(self, report: WalletReport) -> None:
        task = asyncio.create_task(self._write(report))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _write(self, report: WalletReport) -> None:
        try:
            await self._store.upsert_report(report)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Report store upsert failed for %s: %s", report.wallet_address, exc)
            return
        logger.info("Cached report updated for %s", report.wallet_address)
