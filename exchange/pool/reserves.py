"""Reserve accounting for the exchange pool.

Reserves are never stored. They are read from the ledgers on every call,
so whatever the ledgers hold for the pool account is the reserve.
"""

from __future__ import annotations

from dataclasses import dataclass

from exchange.ledgers.base import AssetLedger, NativeLedger
from exchange.safe_int import S


@dataclass(frozen=True)
class PoolState:
    """Point-in-time view of a pool."""

    pool_address: str
    token_address: str
    native_reserve: int
    token_reserve: int
    total_shares: int


class ReserveAccounting:
    """Reads the pool's reserves from its ledgers."""

    def __init__(self, pool_address: str, asset: AssetLedger, native: NativeLedger) -> None:
        self.pool_address = pool_address
        self._asset = asset
        self._native = native

    def token_reserve(self) -> int:
        """Traded-token balance currently held by the pool."""
        return self._asset.balance_of(self.pool_address)

    def native_reserve(self) -> int:
        """Native balance currently held by the pool."""
        return self._native.balance_of(self.pool_address)

    def native_reserve_before(self, attached_value: int) -> int:
        """Native reserve as it was before the current call's value was credited.

        The host credits attached value before the call body runs, so the
        reserve the formulas must price against is the balance minus that value.
        """
        return (S(self.native_reserve()) - attached_value).value
