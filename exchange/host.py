"""Execution host for pool calls.

The Host plays the part of the chain: it runs one call at a time, credits
the attached native value to the pool before the call body starts, and
makes every call all-or-nothing. Before a call it snapshots every
registered ledger; if the call raises, every ledger is restored and the
error propagates unchanged.

Calls may nest. A receive hook triggered by a native payout can call back
into the pool through the same Host; the nested call takes its own
snapshot, and its failure aborts the outer call too unless the hook
catches it.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import structlog

from exchange.abi import decode_call
from exchange.context import CallContext
from exchange.errors import InvalidAmount, LedgerFailure, PoolError
from exchange.models.types import normalize_address

if TYPE_CHECKING:
    from exchange.ledgers.base import NativeLedger, Snapshottable
    from exchange.pool.exchange import Exchange

logger = structlog.get_logger()

# Pool operations the Host will run, and whether each accepts native value
CALLABLE_METHODS: dict[str, bool] = {
    "add_liquidity": True,
    "remove_liquidity": False,
    "native_to_token_swap": True,
    "token_to_native_swap": False,
}


class Host:
    """Serializing, rolling-back executor for pool calls.

    Args:
        native: Native value ledger; attached value is moved on it
        ledgers: Every other ledger that must roll back on failure
    """

    def __init__(self, native: NativeLedger, ledgers: Iterable[Snapshottable] = ()) -> None:
        self.native = native
        self._ledgers: list[Any] = [native, *ledgers]
        self._lock = threading.RLock()
        self._depth = 0

    def call(
        self,
        target: Exchange,
        sender: str,
        method: str,
        *args: int,
        value: int = 0,
    ) -> Any:
        """Run target.method(ctx, *args) atomically on behalf of sender.

        Args:
            target: Pool to call
            sender: Calling account
            method: Name of a pool operation in CALLABLE_METHODS
            *args: Operation arguments after the context
            value: Native value attached to the call

        Returns:
            Whatever the operation returns

        Raises:
            ValueError: If method is not a callable pool operation
            LedgerFailure: If sender is the pool or one of the ledger contracts
            PoolError: If the operation fails (all ledgers rolled back)
        """
        if method not in CALLABLE_METHODS:
            raise ValueError(f"Unknown pool method: {method}")
        if value < 0:
            raise InvalidAmount(f"Attached value cannot be negative: {value}")
        if normalize_address(sender) in self._contract_accounts(target):
            raise LedgerFailure(f"{sender} is a contract account and cannot send pool calls")

        ctx = CallContext(sender=sender, value=value)
        operation = getattr(target, method)

        with self._lock:
            snapshots = [ledger.snapshot() for ledger in self._ledgers]
            self._depth += 1
            try:
                if value > 0:
                    if not CALLABLE_METHODS[method]:
                        raise InvalidAmount(f"{method} does not accept native value")
                    self.native.transfer(ctx.sender, target.address, value)
                result = operation(ctx, *args)
            except PoolError as err:
                self._rollback(snapshots)
                logger.info(
                    "call_reverted",
                    method=method,
                    sender=ctx.sender,
                    depth=self._depth,
                    kind=err.kind.value,
                    reason=err.reason,
                )
                raise
            except Exception:
                self._rollback(snapshots)
                logger.exception("call_failed", method=method, sender=ctx.sender, depth=self._depth)
                raise
            finally:
                self._depth -= 1

        return result

    def dispatch(self, target: Exchange, sender: str, calldata: str, value: int = 0) -> Any:
        """Decode ABI calldata and run the call it names."""
        method, args = decode_call(calldata)
        return self.call(target, sender, method, *args, value=value)

    def _contract_accounts(self, target: Exchange) -> set[str]:
        accounts = {target.address, target.token_address}
        for ledger in self._ledgers:
            address = getattr(ledger, "address", None)
            if address is not None:
                accounts.add(normalize_address(address))
        return accounts

    def _rollback(self, snapshots: list[Any]) -> None:
        for ledger, state in zip(self._ledgers, snapshots, strict=True):
            ledger.restore(state)
