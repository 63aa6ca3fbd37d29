"""Scheduled refresh trigger."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from feescope.core.security import verify_cron_secret
from feescope.domain.fees import StoreError
from feescope.domain.refresh import RefreshService
from feescope.interfaces.http.deps import get_refresh_service
from feescope.schemas import RefreshTriggerResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/cron",
    response_model=RefreshTriggerResponse,
    summary="Refresh every cached wallet",
    dependencies=[Depends(verify_cron_secret)],
)
async def trigger_refresh(service: RefreshService = Depends(get_refresh_service)):
    logger.info("Cron job started: refreshing all wallets")
    try:
        count = await service.trigger_all()
    except StoreError as exc:
        logger.error("Cron job failed to list wallets: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to list wallets: {exc}"
        ) from exc

    if count == 0:
        return RefreshTriggerResponse(message="No wallets to refresh.", count=0)
    return RefreshTriggerResponse(message=f"Refresh triggered for {count} wallets.", count=count)
