"""Ledger interfaces and in-memory reference implementations."""

from exchange.ledgers.base import AssetLedger, NativeLedger, ShareLedger, Snapshottable
from exchange.ledgers.memory import (
    InMemoryNativeLedger,
    InMemoryShareLedger,
    InMemoryTokenLedger,
    ReceiveHook,
)

__all__ = [
    # Interfaces
    "AssetLedger",
    "ShareLedger",
    "NativeLedger",
    "Snapshottable",
    # In-memory implementations
    "InMemoryTokenLedger",
    "InMemoryShareLedger",
    "InMemoryNativeLedger",
    "ReceiveHook",
]
