"""Concurrent per-chain fetch and aggregation for one wallet."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Optional

from .exceptions import AggregateFailureError, ChainTimeoutError, ConfigurationError
from .models import ChainConfig, ChainReport, PipelineConfig, utcnow
from .processor import process_transactions
from .repository import TransactionFetcher

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OrchestrationResult:
    chain_reports: list[ChainReport] = field(default_factory=list)
    failed_chains: list[str] = field(default_factory=list)


class MultiChainOrchestrator:
    """Fans a wallet out over every configured chain and merges what succeeds."""

    def __init__(
        self,
        fetcher: TransactionFetcher,
        config: PipelineConfig,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._fetcher = fetcher
        self._config = config
        self._clock = clock

    @property
    def config(self) -> PipelineConfig:
        return self._config

    async def orchestrate(self, wallet_address: str, days: Optional[int] = None) -> OrchestrationResult:
        if not self._config.api_key:
            raise ConfigurationError("COVALENT_API_KEY is not set on the server.")

        date_limit = self._date_limit(days)
        chains = self._config.chains
        outcomes = await asyncio.gather(
            *(self._run_chain(wallet_address, chain, date_limit) for chain in chains),
            return_exceptions=True,
        )

        result = OrchestrationResult()
        first_error: Optional[BaseException] = None
        for chain, outcome in zip(chains, outcomes):
            if isinstance(outcome, ConfigurationError):
                raise outcome
            if isinstance(outcome, BaseException):
                logger.warning("Chain %s failed for %s: %s", chain.name, wallet_address, outcome)
                result.failed_chains.append(chain.name)
                if first_error is None:
                    first_error = outcome
                continue
            result.chain_reports.append(outcome)

        if not result.chain_reports:
            message = str(first_error) if first_error is not None and str(first_error) else "Unknown error"
            raise AggregateFailureError(result.failed_chains, message)
        return result

    def _date_limit(self, days: Optional[int]) -> Optional[datetime]:
        if days is None:
            return None
        try:
            return self._clock() - timedelta(days=days)
        except OverflowError:
            # Windows reaching before year 1 cover the whole history.
            return None

    async def _run_chain(
        self,
        wallet_address: str,
        chain: ChainConfig,
        date_limit: Optional[datetime],
    ) -> ChainReport:
        timeout = self._config.chain_timeout_seconds
        try:
            items = await asyncio.wait_for(
                self._fetcher.fetch_chain_transactions(wallet_address, chain.slug),
                timeout=timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ChainTimeoutError(chain.slug, timeout) from exc

        summary = process_transactions(
            items,
            wallet_address,
            date_limit,
            top_n=self._config.top_transactions,
        )
        logger.debug(
            "Chain %s processed for %s: %d transactions, %.6f USD",
            chain.name,
            wallet_address,
            summary.transaction_count,
            summary.total_fee_usd,
        )
        return ChainReport.from_summary(chain.name, summary)
