"""Service providers backed by the application container."""

from fastapi import Depends, Request

from feescope.core.container import ApplicationContainer
from feescope.domain.fees import FeeReportService
from feescope.domain.refresh import RefreshService


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_fee_report_service(container: ApplicationContainer = Depends(get_container)) -> FeeReportService:
    return container.report_service


def get_refresh_service(container: ApplicationContainer = Depends(get_container)) -> RefreshService:
    return container.refresh_service


__all__ = [
    "get_container",
    "get_fee_report_service",
    "get_refresh_service",
]
