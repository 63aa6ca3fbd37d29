"""Turns one chain's raw transactions into fee totals, categories and a top list."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Iterable, Optional

from .classifier import classify
from .models import CategorizedFee, CategoryAggregate, ChainSummary, RawTransaction, isoformat

WEI_PER_NATIVE = 10**18
DEFAULT_TOP_N = 10


def _to_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def is_sender(tx: RawTransaction, wallet_address: str) -> bool:
    if not tx.from_address or not wallet_address:
        return False
    return tx.from_address.lower() == wallet_address.lower()


def compute_fee(tx: RawTransaction) -> tuple[float, float]:
    """Return ``(fee_native, fee_usd)`` for a transaction paid by the wallet."""
    fee_native = _to_float(tx.fees_paid) / WEI_PER_NATIVE
    fee_usd = fee_native * _to_float(tx.gas_quote_rate)
    return fee_native, fee_usd


def within_window(tx: RawTransaction, date_limit: Optional[datetime]) -> bool:
    if date_limit is None:
        return True
    if tx.block_signed_at is None:
        return False
    return tx.block_signed_at > date_limit


def process_transactions(
    items: Iterable[RawTransaction],
    wallet_address: str,
    date_limit: Optional[datetime] = None,
    *,
    top_n: int = DEFAULT_TOP_N,
) -> ChainSummary:
    """Aggregate fees for ``wallet_address`` over ``items``.

    Every transaction inside the window is classified and counted. Fees are only
    attributed when the wallet is the sender; other transactions add zero to the
    totals and never enter the top list.
    """
    categories: dict[str, CategoryAggregate] = {}
    candidates: list[CategorizedFee] = []
    total_fee_usd = 0.0
    total_fee_native = 0.0
    transaction_count = 0
    payer_count = 0

    for tx in items:
        if not within_window(tx, date_limit):
            continue
        transaction_count += 1

        fee_native, fee_usd = 0.0, 0.0
        if is_sender(tx, wallet_address):
            payer_count += 1
            fee_native, fee_usd = compute_fee(tx)
            total_fee_native += fee_native
            total_fee_usd += fee_usd

        category = classify(tx)
        aggregate = categories.setdefault(category, CategoryAggregate())
        aggregate.count += 1
        aggregate.total_fee_usd += fee_usd

        if fee_usd > 0:
            candidates.append(
                CategorizedFee(
                    fee_usd=fee_usd,
                    fee_native=fee_native,
                    tx_hash=tx.tx_hash,
                    timestamp_iso=isoformat(tx.block_signed_at),
                    category=category,
                )
            )

    top_transactions = sorted(candidates, key=lambda fee: fee.fee_usd, reverse=True)[:top_n]
    return ChainSummary(
        total_fee_usd=total_fee_usd,
        total_fee_native=total_fee_native,
        transaction_count=transaction_count,
        payer_transaction_count=payer_count,
        categories=categories,
        top_transactions=top_transactions,
    )
