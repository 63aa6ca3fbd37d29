"""Heuristic spend categories derived from decoded call data."""

from __future__ import annotations

from .models import RawTransaction

SWAP = "Swap"
APPROVE = "Approve"
MINT = "Mint"
LIQUIDITY_ADD = "Liquidity (Add)"
LIQUIDITY_REMOVE = "Liquidity (Remove)"
BRIDGE = "Bridge"
NFT = "NFT Trade/Transfer"
TRANSFER = "Transfer"
OTHER = "Other"

# Checked in order against the lowercased decoded call name; first match wins.
_CALL_NAME_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("swap",), SWAP),
    (("approve",), APPROVE),
    (("mint",), MINT),
    (("addliquidity",), LIQUIDITY_ADD),
    (("removeliquidity",), LIQUIDITY_REMOVE),
    (("bridge", "depositether"), BRIDGE),
)


def _has_nft_transfer(tx: RawTransaction) -> bool:
    return any(
        log.decoded_name is not None
        and "Transfer" in log.decoded_name
        and log.sender_contract_decimals == 0
        for log in tx.log_events
    )


def classify(tx: RawTransaction) -> str:
    decoded_name = tx.decoded_name.lower() if tx.decoded_name else None
    if decoded_name:
        for needles, category in _CALL_NAME_RULES:
            if any(needle in decoded_name for needle in needles):
                return category
    if _has_nft_transfer(tx):
        return NFT
    if decoded_name and "transfer" in decoded_name:
        return TRANSFER
    return OTHER
