"""Constant-product pricing.

The pool prices every swap with the constant product formula x * y = k,
charging a fixed 1% fee on the input amount. The fee stays in the pool.
"""

from exchange.constants import FEE_DENOMINATOR, FEE_NUMERATOR
from exchange.errors import InvalidAmount, InvalidReserve
from exchange.safe_int import S


def get_amount_of_tokens(input_amount: int, input_reserve: int, output_reserve: int) -> int:
    """Calculate output amount for an exact input using the constant product formula.

    Formula: out = (in * 99 * res_out) / (res_in * 100 + in * 99)

    The fee factor is applied to the numerator and the scale of 100 is
    folded into the denominator, so there is a single floor division.
    The result is always strictly below output_reserve.

    Args:
        input_amount: Amount of the asset being sold
        input_reserve: Pool reserve of the asset being sold
        output_reserve: Pool reserve of the asset being bought

    Returns:
        Output amount, rounded down

    Raises:
        InvalidReserve: If either reserve is not positive
        InvalidAmount: If input_amount is negative
    """
    if input_reserve <= 0 or output_reserve <= 0:
        raise InvalidReserve(
            f"Reserves must be positive (input={input_reserve}, output={output_reserve})"
        )
    if input_amount < 0:
        raise InvalidAmount(f"Input amount cannot be negative: {input_amount}")

    input_with_fee = S(input_amount) * FEE_NUMERATOR
    numerator = input_with_fee * output_reserve
    denominator = S(input_reserve) * FEE_DENOMINATOR + input_with_fee

    return (numerator // denominator).value


__all__ = ["get_amount_of_tokens"]
