"""Constant-product exchange pool between native value and a traded token."""

from exchange.context import CallContext
from exchange.devnet import Devnet
from exchange.host import Host
from exchange.pool import Exchange, PoolState, Withdrawal, get_amount_of_tokens

__version__ = "0.1.0"
__all__ = [
    "CallContext",
    "Devnet",
    "Exchange",
    "Host",
    "PoolState",
    "Withdrawal",
    "get_amount_of_tokens",
    "__version__",
]
