"""Wallet fee report endpoints."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from feescope.domain.fees import AggregateFailureError, ConfigurationError, FeeReportService, StoreReadError
from feescope.interfaces.http.deps import get_fee_report_service
from feescope.schemas import WalletReportResponse, WalletSummaryResponse

logger = logging.getLogger(__name__)

router = APIRouter()

ALL_TIME = "all"


def parse_days(days: Optional[str]) -> Optional[int]:
    """``None``/``"all"`` select the cached all-time window, otherwise a positive day count."""
    if days is None or days.strip() == "" or days.strip().lower() == ALL_TIME:
        return None
    try:
        value = int(days)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="days must be a positive integer or 'all'",
        ) from exc
    if value <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="days must be a positive integer or 'all'",
        )
    return value


@router.get("/process-wallet", response_model=WalletReportResponse, summary="Aggregate wallet fees across chains")
async def process_wallet(
    address: Optional[str] = Query(None, description="Wallet address"),
    days: Optional[str] = Query(None, description="Day window or 'all'"),
    service: FeeReportService = Depends(get_fee_report_service),
):
    if not address or not address.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Wallet address is required")
    window = parse_days(days)

    try:
        result = await service.get_or_refresh(address, window)
    except AggregateFailureError as exc:
        logger.error("Error processing wallet data for %s: %s", address, exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    except ConfigurationError as exc:
        logger.error("Server misconfiguration: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server is not configured for upstream access"
        ) from exc
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Error processing wallet data for %s", address)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unknown server error occurred"
        ) from exc

    return WalletReportResponse.model_validate({**result.report.to_dict(), "source": result.source.value})


@router.get("/wallet-summary", response_model=WalletSummaryResponse, summary="Stored headline figures for a wallet")
async def wallet_summary(
    wallet: Optional[str] = Query(None, description="Wallet address"),
    service: FeeReportService = Depends(get_fee_report_service),
):
    if not wallet or not wallet.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Wallet address required")
    try:
        summary = await service.get_cached_summary(wallet)
    except StoreReadError as exc:
        logger.error("Report store read failed for %s: %s", wallet, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to read stored wallet data"
        ) from exc
    if summary is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No data for this wallet yet")
    return WalletSummaryResponse(
        wallet_address=summary.wallet_address,
        total_fee=summary.total_fee,
        top_category=summary.top_category,
        updated_at=summary.updated_at,
    )
