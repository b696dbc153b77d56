"""Pool accounting, pricing and operations."""

from exchange.pool.exchange import Exchange, Withdrawal
from exchange.pool.pricing import get_amount_of_tokens
from exchange.pool.reserves import PoolState, ReserveAccounting

__all__ = [
    "Exchange",
    "Withdrawal",
    "PoolState",
    "ReserveAccounting",
    "get_amount_of_tokens",
]
