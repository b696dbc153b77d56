"""ABI calldata for pool calls.

Lets a pool call travel as raw calldata (4-byte selector followed by the
ABI-encoded arguments), the same shape a wallet would submit to an
on-chain exchange contract.
"""

from __future__ import annotations

from eth_abi import decode, encode  # type: ignore[attr-defined]
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector

# Pool method -> on-chain function signature
SIGNATURES: dict[str, str] = {
    "add_liquidity": "addLiquidity(uint256)",
    "remove_liquidity": "removeLiquidity(uint256)",
    "native_to_token_swap": "ethToTokenSwap(uint256)",
    "token_to_native_swap": "tokenToEthSwap(uint256,uint256)",
}


def _arg_types(signature: str) -> list[str]:
    inner = signature[signature.index("(") + 1 : -1]
    return inner.split(",") if inner else []


SELECTORS: dict[bytes, str] = {
    function_signature_to_4byte_selector(sig): method for method, sig in SIGNATURES.items()
}


def encode_call(method: str, *args: int) -> str:
    """Encode a pool call as 0x-prefixed calldata.

    Args:
        method: Pool method name (a key of SIGNATURES)
        *args: Integer arguments in signature order

    Returns:
        Hex calldata

    Raises:
        ValueError: If the method is unknown or the argument count is wrong
    """
    if method not in SIGNATURES:
        raise ValueError(f"Unknown pool method: {method}")
    signature = SIGNATURES[method]
    types = _arg_types(signature)
    if len(args) != len(types):
        raise ValueError(f"{signature} takes {len(types)} arguments, got {len(args)}")

    selector = function_signature_to_4byte_selector(signature)
    return "0x" + (selector + encode(types, list(args))).hex()


def decode_call(calldata: str) -> tuple[str, tuple[int, ...]]:
    """Decode calldata produced by encode_call.

    Returns:
        Tuple of (method name, arguments)

    Raises:
        ValueError: If the calldata is not hex, too short, has an unknown
            selector or malformed arguments
    """
    raw = bytes.fromhex(calldata[2:] if calldata.startswith("0x") else calldata)
    if len(raw) < 4:
        raise ValueError(f"Calldata too short: {calldata}")

    method = SELECTORS.get(raw[:4])
    if method is None:
        raise ValueError(f"Unknown selector: 0x{raw[:4].hex()}")

    try:
        args = decode(_arg_types(SIGNATURES[method]), raw[4:])
    except DecodingError as err:
        raise ValueError(f"Malformed arguments for {SIGNATURES[method]}: {err}") from err
    return method, tuple(args)


__all__ = ["SIGNATURES", "SELECTORS", "encode_call", "decode_call"]
