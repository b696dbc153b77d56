"""Call context passed to every state-mutating pool operation."""

from dataclasses import dataclass

from exchange.models.types import normalize_address


@dataclass(frozen=True)
class CallContext:
    """Who is calling and how much native value is attached.

    By the time a pool operation sees the context, the Host has already
    credited `value` to the pool's native balance.
    """

    sender: str
    value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "sender", normalize_address(self.sender))
