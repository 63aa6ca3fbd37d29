"""SQLAlchemy implementation for cached wallet fee reports"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feescope.db.models import WalletStats


class SqlWalletStatsRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, wallet_address: str) -> WalletStats | None:
        stmt = select(WalletStats).where(WalletStats.wallet_address == wallet_address)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def upsert(self, row: WalletStats) -> WalletStats:
        merged = await self.session.merge(row)
        try:
            await self.session.flush()
        except IntegrityError:
            # A concurrent writer inserted the same address first; last write wins.
            await self.session.rollback()
            merged = await self.session.merge(row)
            await self.session.flush()
        return merged

    async def list_addresses(self) -> list[str]:
        stmt = select(WalletStats.wallet_address).order_by(WalletStats.wallet_address)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
