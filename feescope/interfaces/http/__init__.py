from fastapi import APIRouter

from feescope.interfaces.http.routers import cron, wallets


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(wallets.router, tags=["wallets"])
    router.include_router(cron.router, tags=["refresh"])
    return router


__all__ = [
    "create_api_router",
]
