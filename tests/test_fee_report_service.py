"""Cache policy of the fee report service."""

from __future__ import annotations

import logging
from datetime import timedelta

import pytest

from feescope.domain.fees import (
    AggregateFailureError,
    CategoryAggregate,
    ChainReport,
    FeeReportService,
    MultiChainOrchestrator,
    ReportSource,
    UpstreamFetchError,
    WalletReport,
)

from helpers import FIVE_CHAINS, NOW, WALLET, FakeFetcher, make_tx, pipeline_config

ADDRESS = WALLET.lower()


def cached_report(age: timedelta) -> WalletReport:
    chain = ChainReport(
        chain_name="Ethereum",
        total_fee_usd=42.0,
        total_fee_native=0.021,
        transaction_count=3,
        payer_transaction_count=3,
        categories={"Swap": CategoryAggregate(total_fee_usd=42.0, count=3)},
        top_transactions=[],
    )
    return WalletReport.build(ADDRESS, [chain], [], last_updated=NOW - age)


async def test_fresh_cache_is_served_without_fetching(report_service, store, fetcher):
    store.reports[ADDRESS] = cached_report(timedelta(minutes=59))

    result = await report_service.get_or_refresh(WALLET)

    assert result.source is ReportSource.CACHE
    assert result.report.total_fee_usd_all_chains == 42.0
    assert fetcher.calls == []


async def test_stale_cache_triggers_live_fetch_and_write_back(report_service, store, fetcher):
    store.reports[ADDRESS] = cached_report(timedelta(minutes=61))
    fetcher.default = [make_tx()]

    result = await report_service.get_or_refresh(WALLET)
    await report_service.drain()

    assert result.source is ReportSource.API
    assert len(fetcher.calls) == 5
    assert result.report.total_fee_usd_all_chains == pytest.approx(10.0)
    assert store.writes == 1
    assert store.reports[ADDRESS].last_updated == NOW
    assert store.reports[ADDRESS].total_fee_usd_all_chains == pytest.approx(10.0)


async def test_missing_cache_entry_fetches_live(report_service, store, fetcher):
    result = await report_service.get_or_refresh(WALLET)
    await report_service.drain()

    assert result.source is ReportSource.API
    assert store.reads == 1
    assert store.writes == 1


async def test_day_filter_bypasses_cache_entirely(report_service, store, fetcher):
    store.reports[ADDRESS] = cached_report(timedelta(minutes=1))
    fetcher.default = [
        make_tx(tx_hash="0x1", fees_paid=1_000_000_000_000_000, rate=2000, age=timedelta(days=2)),
        make_tx(tx_hash="0x2", fees_paid=500_000_000_000_000, rate=2000, age=timedelta(days=5)),
        make_tx(tx_hash="0x3", fees_paid=1_000_000_000_000_000, rate=2000, age=timedelta(days=10)),
    ]

    result = await report_service.get_or_refresh("0xABC0000000000000000000000000000000000001", days=7)
    await report_service.drain()

    assert store.reads == 0
    assert store.writes == 0
    assert report_service.pending_writes == 0
    for chain in result.report.chain_reports:
        assert chain.total_fee_usd == pytest.approx(3.00)
        assert chain.transaction_count == 2


async def test_read_error_falls_through_to_live_fetch(report_service, store, fetcher, caplog):
    store.fail_reads = True

    with caplog.at_level(logging.ERROR):
        result = await report_service.get_or_refresh(WALLET)

    assert result.source is ReportSource.API
    assert len(fetcher.calls) == 5
    assert "read failed" in caplog.text


async def test_write_failure_is_logged_not_raised(report_service, store, fetcher, caplog):
    store.fail_writes = True
    fetcher.default = [make_tx()]

    with caplog.at_level(logging.ERROR):
        result = await report_service.get_or_refresh(WALLET)
        await report_service.drain()

    assert result.report.total_fee_usd_all_chains == pytest.approx(10.0)
    assert store.writes == 1
    assert ADDRESS not in store.reports
    assert "upsert failed" in caplog.text


async def test_partial_failure_is_flagged_and_cached(store, clock):
    fetcher = FakeFetcher({"base-mainnet": UpstreamFetchError("base-mainnet", 500, "boom")}, default=[make_tx()])
    service = FeeReportService(MultiChainOrchestrator(fetcher, pipeline_config(), clock=clock), store, clock=clock)

    result = await service.get_or_refresh(WALLET)
    await service.drain()

    assert result.source is ReportSource.API_PARTIAL
    assert result.report.failed_chains == ["Base"]
    assert len(result.report.chain_reports) == 4
    assert store.reports[ADDRESS].failed_chains == ["Base"]


async def test_total_failure_propagates_without_write(store, clock):
    fetcher = FakeFetcher({chain.slug: UpstreamFetchError(chain.slug, 500, "down") for chain in FIVE_CHAINS})
    service = FeeReportService(MultiChainOrchestrator(fetcher, pipeline_config(), clock=clock), store, clock=clock)

    with pytest.raises(AggregateFailureError):
        await service.get_or_refresh(WALLET)
    await service.drain()

    assert store.writes == 0


async def test_address_is_normalised_for_cache_lookup(report_service, store, fetcher):
    store.reports[ADDRESS] = cached_report(timedelta(minutes=5))

    result = await report_service.get_or_refresh(f"  {WALLET.upper()}  ")

    assert result.source is ReportSource.CACHE
    assert fetcher.calls == []


async def test_top_category_uses_cross_chain_fee_totals(report_service, store, fetcher):
    fetcher.outcomes = {
        "eth-mainnet": [make_tx(name="swap", fees_paid=10**15), make_tx(name="approve", fees_paid=10**15)],
        "matic-mainnet": [make_tx(name="approve", fees_paid=2 * 10**15)],
    }

    result = await report_service.get_or_refresh(WALLET)
    await report_service.drain()

    assert result.report.top_category_overall == "Approve"
    assert store.reports[ADDRESS].top_category_overall == "Approve"


async def test_top_category_defaults_to_transfer(report_service, store, fetcher):
    result = await report_service.get_or_refresh(WALLET)
    await report_service.drain()

    assert result.report.top_category_overall == "Transfer"
    assert result.report.total_fee_usd_all_chains == 0
    assert report_service.pending_writes == 0
    assert store.writes == 1


async def test_freshness_window_is_configurable(orchestrator, store, fetcher, clock):
    service = FeeReportService(orchestrator, store, freshness=timedelta(minutes=10), clock=clock)
    store.reports[ADDRESS] = cached_report(timedelta(minutes=11))

    result = await service.get_or_refresh(WALLET)

    assert result.source is ReportSource.API


async def test_cached_summary_and_listing(report_service, store):
    store.reports[ADDRESS] = cached_report(timedelta(minutes=5))

    summary = await report_service.get_cached_summary(WALLET.upper())

    assert summary.total_fee == 42.0
    assert summary.top_category == "Swap"
    assert await report_service.list_cached_addresses() == [ADDRESS]
