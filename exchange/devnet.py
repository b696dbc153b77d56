"""Local devnet: one pool wired to in-memory ledgers and a Host."""

from __future__ import annotations

from typing import Any

import structlog

from exchange.config import ServiceConfig
from exchange.constants import DEFAULT_POOL_ADDRESS, DEFAULT_TOKEN_ADDRESS
from exchange.errors import InvalidConfiguration, PoolError
from exchange.host import Host
from exchange.ledgers.memory import InMemoryNativeLedger, InMemoryShareLedger, InMemoryTokenLedger
from exchange.models.types import is_valid_address, normalize_address
from exchange.pool.exchange import Exchange

logger = structlog.get_logger()


def _share_token_address(pool_address: str) -> str:
    # Share token lives at the pool address with the last byte flipped
    raw = bytearray(bytes.fromhex(pool_address[2:]))
    raw[-1] ^= 0xFF
    return "0x" + raw.hex()


class Devnet:
    """A ready-to-use pool with faucet and approval helpers.

    Args:
        pool_address: Account of the pool
        token_address: Identity of the traded token

    Raises:
        InvalidConfiguration: If either address is malformed
    """

    def __init__(
        self,
        pool_address: str = DEFAULT_POOL_ADDRESS,
        token_address: str = DEFAULT_TOKEN_ADDRESS,
    ) -> None:
        if not is_valid_address(pool_address):
            raise InvalidConfiguration(f"Invalid pool address: {pool_address!r}")
        if not is_valid_address(token_address):
            raise InvalidConfiguration(f"Invalid traded token address: {token_address!r}")
        pool_address = normalize_address(pool_address)
        self.native = InMemoryNativeLedger()
        self.token = InMemoryTokenLedger(token_address, symbol="TKN")
        self.shares = InMemoryShareLedger(
            _share_token_address(pool_address), minter=pool_address, symbol="LP"
        )
        self.exchange = Exchange(pool_address, token_address, self.token, self.shares, self.native)
        self.host = Host(self.native, [self.token, self.shares])

    def fund(self, account: str, native: int = 0, tokens: int = 0) -> None:
        """Credit an account with native value and traded tokens.

        Both credits apply or neither does.
        """
        snapshots = (self.native.snapshot(), self.token.snapshot())
        try:
            self.native.credit(account, native)
            self.token.credit(account, tokens)
        except PoolError:
            self.native.restore(snapshots[0])
            self.token.restore(snapshots[1])
            raise
        logger.info("account_funded", account=normalize_address(account), native=native, tokens=tokens)

    def approve(self, owner: str, amount: int) -> None:
        """Let the pool pull up to amount tokens from owner."""
        self.token.approve(owner, self.exchange.address, amount)

    def call(self, sender: str, method: str, *args: int, value: int = 0) -> Any:
        return self.host.call(self.exchange, sender, method, *args, value=value)

    def balances(self, account: str) -> dict[str, int]:
        return {
            "native": self.native.balance_of(account),
            "tokens": self.token.balance_of(account),
            "shares": self.shares.balance_of(account),
            "allowance": self.token.allowance(account, self.exchange.address),
        }


_default_devnet: Devnet | None = None


def get_default_devnet() -> Devnet:
    """Return the process-wide devnet, creating it from ServiceConfig on first use."""
    global _default_devnet
    if _default_devnet is None:
        config = ServiceConfig.from_env()
        _default_devnet = Devnet(config.pool_address, config.token_address)
        logger.info(
            "devnet_created",
            pool_address=_default_devnet.exchange.address,
            token_address=_default_devnet.exchange.token_address,
        )
    return _default_devnet
