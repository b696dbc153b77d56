"""Test helpers module for shared test utilities.

- constants: Account addresses and starting balances
- factories: Devnet factory functions
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    CAROL,
    MALLORY,
    POOL,
    STARTING_NATIVE,
    STARTING_TOKENS,
    TOKEN,
)
from tests.helpers.factories import ledger_view, make_devnet, make_seeded_devnet

__all__ = [
    # Constants
    "ALICE",
    "BOB",
    "CAROL",
    "MALLORY",
    "POOL",
    "TOKEN",
    "STARTING_NATIVE",
    "STARTING_TOKENS",
    # Factories
    "make_devnet",
    "make_seeded_devnet",
    "ledger_view",
]
