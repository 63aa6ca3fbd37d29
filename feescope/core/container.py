"""Simple dependency container for wiring core services."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine

from feescope.core.config import Settings, get_settings
from feescope.domain.fees import FeeReportService, MultiChainOrchestrator
from feescope.domain.fees.models import ChainConfig, PipelineConfig
from feescope.domain.refresh import RefreshService
from feescope.infrastructure.covalent import CovalentClient
from feescope.infrastructure.database.report_store import SqlReportStore
from feescope.infrastructure.database.session import build_engine, build_session_factory, init_db

logger = logging.getLogger(__name__)


def build_pipeline_config(settings: Settings) -> PipelineConfig:
    return PipelineConfig(
        chains=[ChainConfig(name=chain.name, slug=chain.slug) for chain in settings.pipeline.chains],
        api_key=settings.api_key,
        chain_timeout_seconds=settings.pipeline.chain_timeout_seconds,
        top_transactions=settings.pipeline.top_transactions,
    )


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    report_service: FeeReportService
    refresh_service: RefreshService
    http_client: Optional[httpx.AsyncClient] = None
    engine: Optional[AsyncEngine] = None

    async def startup(self) -> None:
        """Ensure infrastructure (database tables, etc.) is initialised."""
        if self.engine is not None and self.settings.database.create_tables:
            await init_db(self.engine)

    async def aclose(self) -> None:
        await self.refresh_service.drain()
        await self.report_service.drain()
        if self.http_client is not None:
            await self.http_client.aclose()
        if self.engine is not None:
            await self.engine.dispose()
        logger.debug("Application container closed")


def build_container(settings: Settings | None = None) -> ApplicationContainer:
    settings = settings or get_settings()
    http_client = httpx.AsyncClient(timeout=settings.covalent.request_timeout)
    engine = build_engine(settings)

    fetcher = CovalentClient(
        http_client,
        api_key=settings.api_key,
        base_url=settings.covalent.base_url,
        page_size=settings.covalent.page_size,
    )
    orchestrator = MultiChainOrchestrator(fetcher, build_pipeline_config(settings))
    report_service = FeeReportService(
        orchestrator,
        SqlReportStore(build_session_factory(engine)),
        freshness=timedelta(minutes=settings.freshness_minutes),
    )
    refresh_service = RefreshService(report_service, concurrency=settings.refresh.concurrency)
    return ApplicationContainer(
        settings=settings,
        report_service=report_service,
        refresh_service=refresh_service,
        http_client=http_client,
        engine=engine,
    )


__all__ = ["ApplicationContainer", "build_container", "build_pipeline_config"]
