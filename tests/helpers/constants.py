"""Shared account constants for tests.

All addresses are lowercase for consistency with normalize_address().

Usage:
    from tests.helpers import ALICE, BOB
"""

ALICE = "0x" + "a1" * 20  # Bootstraps most pools
BOB = "0x" + "b0" * 20  # Second liquidity provider / trader
CAROL = "0x" + "c0" * 20  # Funded but never approves the pool
MALLORY = "0x" + "e0" * 20  # Reentrant receiver

POOL = "0x" + "50" * 20
TOKEN = "0x" + "70" * 20

# Starting balances given to funded accounts
STARTING_NATIVE = 1_000_000
STARTING_TOKENS = 1_000_000
