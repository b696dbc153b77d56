"""Pydantic models and shared types for the exchange."""

from exchange.models.types import (
    Address,
    Bytes,
    Uint256,
    is_valid_address,
    is_zero_address,
    normalize_address,
)

__all__ = [
    "Address",
    "Bytes",
    "Uint256",
    "is_valid_address",
    "is_zero_address",
    "normalize_address",
]
