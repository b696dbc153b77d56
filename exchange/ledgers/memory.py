"""In-memory reference ledgers.

These back the devnet service and the test suite. They behave like a
standard fungible-token contract and a host's native balance table, and
can be snapshotted and restored so the Host can roll a failed call back.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from exchange.errors import LedgerFailure, PoolError
from exchange.models.types import normalize_address
from exchange.safe_int import S, Uint256Overflow

logger = structlog.get_logger()

# Called as hook(sender, amount) after value has been credited to the hook's owner
ReceiveHook = Callable[[str, int], None]


def _check_amount(amount: int) -> None:
    if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
        raise LedgerFailure(f"Invalid ledger amount: {amount!r}")


def _checked_add(symbol: str, balance: int, amount: int) -> int:
    try:
        return (S(balance) + amount).to_uint256()
    except Uint256Overflow as err:
        raise LedgerFailure(f"{symbol}: balance overflow ({balance} + {amount})") from err


@dataclass
class _TokenState:
    balances: dict[str, int] = field(default_factory=dict)
    allowances: dict[tuple[str, str], int] = field(default_factory=dict)
    supply: int = 0

    def copy(self) -> _TokenState:
        return _TokenState(dict(self.balances), dict(self.allowances), self.supply)


class InMemoryTokenLedger:
    """Fungible token ledger with balances and allowances.

    Satisfies the AssetLedger protocol. Failures raise LedgerFailure rather
    than returning False.
    """

    def __init__(self, address: str, symbol: str = "TKN") -> None:
        self.address = normalize_address(address)
        self.symbol = symbol
        self._state = _TokenState()

    def balance_of(self, account: str) -> int:
        return self._state.balances.get(normalize_address(account), 0)

    def total_supply(self) -> int:
        return self._state.supply

    def allowance(self, owner: str, spender: str) -> int:
        return self._state.allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def approve(self, caller: str, spender: str, amount: int) -> bool:
        """Allow spender to move up to amount of caller's tokens."""
        _check_amount(amount)
        self._state.allowances[(normalize_address(caller), normalize_address(spender))] = amount
        return True

    def transfer(self, caller: str, to: str, amount: int) -> bool:
        _check_amount(amount)
        self._move(normalize_address(caller), normalize_address(to), amount)
        return True

    def transfer_from(self, caller: str, owner: str, to: str, amount: int) -> bool:
        _check_amount(amount)
        key = (normalize_address(owner), normalize_address(caller))
        allowed = self._state.allowances.get(key, 0)
        if allowed < amount:
            raise LedgerFailure(
                f"{self.symbol}: insufficient allowance ({allowed} < {amount}) "
                f"for {key[1]} on {key[0]}"
            )
        self._move(key[0], normalize_address(to), amount)
        self._state.allowances[key] = allowed - amount
        return True

    def credit(self, account: str, amount: int) -> None:
        """Create tokens out of thin air (devnet faucet)."""
        self._credit(account, amount)

    def _credit(self, account: str, amount: int) -> None:
        _check_amount(amount)
        account = normalize_address(account)
        balance = _checked_add(self.symbol, self._state.balances.get(account, 0), amount)
        self._state.supply = _checked_add(self.symbol, self._state.supply, amount)
        self._state.balances[account] = balance

    def _move(self, source: str, dest: str, amount: int) -> None:
        balance = self._state.balances.get(source, 0)
        if balance < amount:
            raise LedgerFailure(
                f"{self.symbol}: insufficient balance ({balance} < {amount}) for {source}"
            )
        if source == dest:
            return
        credited = _checked_add(self.symbol, self._state.balances.get(dest, 0), amount)
        self._state.balances[source] = balance - amount
        self._state.balances[dest] = credited

    def snapshot(self) -> _TokenState:
        return self._state.copy()

    def restore(self, state: _TokenState) -> None:
        self._state = state.copy()


class InMemoryShareLedger(InMemoryTokenLedger):
    """Pool-share ledger. Only the configured minter may mint or burn.

    Satisfies the ShareLedger protocol.
    """

    def __init__(self, address: str, minter: str, symbol: str = "SHARE") -> None:
        super().__init__(address, symbol)
        self.minter = normalize_address(minter)

    def credit(self, account: str, amount: int) -> None:
        """Shares only come into existence through mint()."""
        raise LedgerFailure(f"{self.symbol}: shares can only be minted by {self.minter}")

    def mint(self, caller: str, to: str, amount: int) -> None:
        self._require_minter(caller)
        self._credit(to, amount)

    def burn(self, caller: str, owner: str, amount: int) -> None:
        self._require_minter(caller)
        _check_amount(amount)
        owner = normalize_address(owner)
        balance = self._state.balances.get(owner, 0)
        if balance < amount:
            raise LedgerFailure(f"{self.symbol}: burn amount {amount} exceeds balance {balance}")
        self._state.balances[owner] = balance - amount
        self._state.supply -= amount

    def _require_minter(self, caller: str) -> None:
        if normalize_address(caller) != self.minter:
            raise LedgerFailure(f"{self.symbol}: {caller} is not the minter")


class InMemoryNativeLedger:
    """Native value balances with optional per-account receive hooks.

    A receive hook stands in for code at the recipient address: it runs
    after the value is credited and may call back into the pool. A hook
    that raises rejects the transfer.
    """

    def __init__(self) -> None:
        self._balances: dict[str, int] = {}
        self._hooks: dict[str, ReceiveHook] = {}

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalize_address(account), 0)

    def credit(self, account: str, amount: int) -> None:
        """Mint native value (devnet faucet)."""
        _check_amount(amount)
        account = normalize_address(account)
        self._balances[account] = _checked_add("native", self._balances.get(account, 0), amount)

    def set_receive_hook(self, account: str, hook: ReceiveHook | None) -> None:
        account = normalize_address(account)
        if hook is None:
            self._hooks.pop(account, None)
        else:
            self._hooks[account] = hook

    def transfer(self, caller: str, to: str, amount: int) -> None:
        _check_amount(amount)
        source, dest = normalize_address(caller), normalize_address(to)
        balance = self._balances.get(source, 0)
        if balance < amount:
            raise LedgerFailure(f"native: insufficient balance ({balance} < {amount}) for {source}")
        if source != dest:
            credited = _checked_add("native", self._balances.get(dest, 0), amount)
            self._balances[source] = balance - amount
            self._balances[dest] = credited

        hook = self._hooks.get(dest)
        if hook is None:
            return
        try:
            hook(source, amount)
        except PoolError:
            raise
        except Exception as err:
            logger.warning("native_transfer_rejected", recipient=dest, amount=amount, error=str(err))
            raise LedgerFailure(f"native: recipient {dest} rejected transfer: {err}") from err

    def snapshot(self) -> dict[str, int]:
        return dict(self._balances)

    def restore(self, state: dict[str, int]) -> None:
        self._balances = dict(state)
