"""SQLAlchemy ORM models."""
from sqlalchemy import Column, DateTime, Float, String, Text
from sqlalchemy.sql import func

from feescope.infrastructure.database.base import Base


class WalletStats(Base):
    __tablename__ = "wallet_stats"

    wallet_address = Column(String(128), primary_key=True)
    chain_stats_all_time = Column(Text, nullable=False, default="[]")
    failed_chains = Column(Text, nullable=False, default="[]")
    total_fee = Column(Float, nullable=False, default=0.0)
    top_category = Column(String(50), nullable=False, default="Transfer")
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)
