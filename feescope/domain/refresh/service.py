"""Re-runs the fee pipeline for every cached wallet with bounded concurrency."""

from __future__ import annotations

import asyncio
import logging

from feescope.domain.fees.service import FeeReportService

logger = logging.getLogger(__name__)


class RefreshService:
    def __init__(self, report_service: FeeReportService, *, concurrency: int = 5) -> None:
        self._report_service = report_service
        self._semaphore = asyncio.Semaphore(concurrency)
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def trigger_all(self) -> int:
        """Schedule a refresh for every cached address and return how many were scheduled."""
        addresses = await self._report_service.list_cached_addresses()
        for address in addresses:
            task = asyncio.create_task(self._refresh(address))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        logger.info("Refresh triggered for %d wallets", len(addresses))
        return len(addresses)

    async def drain(self) -> None:
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _refresh(self, address: str) -> None:
        async with self._semaphore:
            try:
                result = await self._report_service.get_or_refresh(address)
            except Exception as exc:  # pylint: disable=broad-except
                logger.error("Refresh failed for %s: %s", address, exc)
                return
        logger.info("Refresh finished for %s (source: %s)", address, result.source.value)
