"""Exchange pool error classes.

Every failure of a pool call is one of these kinds. Raising aborts the
whole call; the Host rolls every ledger back before the error reaches the
caller.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Error taxonomy carried by every PoolError."""

    INVALID_CONFIGURATION = "invalid_configuration"
    INVALID_RESERVE = "invalid_reserve"
    INSUFFICIENT_INPUT = "insufficient_input"
    INSUFFICIENT_OUTPUT = "insufficient_output"
    INVALID_AMOUNT = "invalid_amount"
    LEDGER_FAILURE = "ledger_failure"


class PoolError(Exception):
    """Base error for pool operations.

    Attributes:
        kind: Taxonomy kind of the failure
        reason: Human-readable explanation
    """

    kind: ErrorKind

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    def to_dict(self) -> dict[str, str]:
        """Serialize as the {kind, reason} body returned to API clients."""
        return {"kind": self.kind.value, "reason": self.reason}


class InvalidConfiguration(PoolError):
    """Pool constructed with a null, zero or malformed asset identity."""

    kind = ErrorKind.INVALID_CONFIGURATION


class InvalidReserve(PoolError):
    """Pricing or withdrawal requested against an empty reserve."""

    kind = ErrorKind.INVALID_RESERVE


class InsufficientInput(PoolError):
    """Offered token amount is below the required deposit contribution."""

    kind = ErrorKind.INSUFFICIENT_INPUT


class InsufficientOutput(PoolError):
    """Computed swap output is below the caller's minimum."""

    kind = ErrorKind.INSUFFICIENT_OUTPUT


class InvalidAmount(PoolError):
    """Non-positive amount where a positive one is required."""

    kind = ErrorKind.INVALID_AMOUNT


class LedgerFailure(PoolError):
    """A ledger transfer, transfer-from, mint, burn or native push failed."""

    kind = ErrorKind.LEDGER_FAILURE
