"""Protocol constants for the exchange pool.

Centralizes the fee parameters and well-known addresses.
"""

# Fixed 1% protocol fee, applied as input * 99 / 100 inside the pricing
# formula (the division is deferred into the denominator)
FEE_NUMERATOR = 99
FEE_DENOMINATOR = 100

# Ledger amounts are bounded like EVM balances
UINT256_MAX = 2**256 - 1

ZERO_ADDRESS = "0x" + "00" * 20

# Default devnet identities used by the HTTP service
DEFAULT_POOL_ADDRESS = "0x00000000000000000000000000000000000a11ce"
DEFAULT_TOKEN_ADDRESS = "0x0000000000000000000000000000000000007070"
