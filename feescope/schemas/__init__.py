"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CategorizedFeeResponse(_WireModel):
    fee_usd: float = Field(..., alias="feeUSD")
    fee_native: float = Field(..., alias="feeNative")
    tx_hash: str = Field(..., alias="txHash")
    timestamp_iso: Optional[str] = Field(None, alias="timestampISO")
    category: str


class CategoryAggregateResponse(_WireModel):
    total_fee_usd: float = Field(..., alias="totalFeeUSD")
    count: int


class ChainReportResponse(_WireModel):
    chain_name: str = Field(..., alias="chainName")
    total_fee_usd: float = Field(..., alias="totalFeeUSD")
    total_fee_native: float = Field(..., alias="totalFeeNative")
    transaction_count: int = Field(..., alias="transactionCount")
    payer_transaction_count: int = Field(0, alias="payerTransactionCount")
    categories: dict[str, CategoryAggregateResponse] = Field(default_factory=dict)
    top_transactions: list[CategorizedFeeResponse] = Field(default_factory=list, alias="topTransactions")


class WalletReportResponse(_WireModel):
    wallet_address: str = Field(..., alias="walletAddress")
    chain_stats: list[ChainReportResponse] = Field(default_factory=list, alias="chainStats")
    failed_chains: list[str] = Field(default_factory=list, alias="failedChains")
    source: Literal["cache", "api", "api-partial"]
    total_fee_usd_all_chains: float = Field(..., alias="totalFeeUSDAllChains")
    top_category_overall: str = Field(..., alias="topCategoryOverall")
    last_updated: datetime = Field(..., alias="lastUpdated")


class WalletSummaryResponse(_WireModel):
    wallet_address: str = Field(..., alias="walletAddress")
    total_fee: float = Field(..., alias="totalFee")
    top_category: str = Field(..., alias="topCategory")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class RefreshTriggerResponse(BaseModel):
    message: str
    count: int
