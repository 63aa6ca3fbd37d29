"""
Pytest fixtures for FeeScope tests. Upstream and store are replaced by in-memory fakes.
"""

from __future__ import annotations

import pytest

from feescope.domain.fees import FeeReportService, MultiChainOrchestrator

from helpers import Clock, FakeFetcher, InMemoryReportStore, pipeline_config


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def store():
    return InMemoryReportStore()


@pytest.fixture
def orchestrator(fetcher, clock):
    return MultiChainOrchestrator(fetcher, pipeline_config(), clock=clock)


@pytest.fixture
def report_service(orchestrator, store, clock):
    return FeeReportService(orchestrator, store, clock=clock)
