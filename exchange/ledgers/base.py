"""Ledger interfaces consumed by the exchange pool.

The pool never depends on a concrete ledger. Any object satisfying these
protocols can hold the traded token, the pool shares or the native value.

Ledger methods take the acting account explicitly as `caller`; it plays the
role of the message sender on a real host.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class AssetLedger(Protocol):
    """Fungible ledger of the traded token."""

    def balance_of(self, account: str) -> int:
        """Token balance held by account."""
        ...

    def transfer(self, caller: str, to: str, amount: int) -> bool:
        """Move amount from caller to `to`.

        Returns:
            True on success. Implementations may raise LedgerFailure
            instead of returning False.
        """
        ...

    def transfer_from(self, caller: str, owner: str, to: str, amount: int) -> bool:
        """Move amount from owner to `to`, spending caller's allowance."""
        ...


@runtime_checkable
class ShareLedger(Protocol):
    """Fungible ledger of the pool-share token."""

    def balance_of(self, account: str) -> int:
        """Share balance held by account."""
        ...

    def total_supply(self) -> int:
        """Outstanding shares."""
        ...

    def transfer(self, caller: str, to: str, amount: int) -> bool:
        """Move shares between holders (secondary trading)."""
        ...

    def mint(self, caller: str, to: str, amount: int) -> None:
        """Create shares for `to`. Only the pool may mint."""
        ...

    def burn(self, caller: str, owner: str, amount: int) -> None:
        """Destroy shares held by owner. Fails if owner holds fewer than amount."""
        ...


@runtime_checkable
class NativeLedger(Protocol):
    """Balances of the host's native value asset."""

    def balance_of(self, account: str) -> int:
        """Native balance held by account."""
        ...

    def transfer(self, caller: str, to: str, amount: int) -> None:
        """Push value to `to`.

        Fails if caller's balance is insufficient or the recipient rejects
        the value. The recipient may run its own code while receiving.
        """
        ...


@runtime_checkable
class Snapshottable(Protocol):
    """Ledger whose full state can be captured and rolled back by the Host."""

    def snapshot(self) -> Any:
        """Return an opaque copy of the ledger state."""
        ...

    def restore(self, state: Any) -> None:
        """Replace the ledger state with a previously captured snapshot."""
        ...
