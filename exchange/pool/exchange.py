"""Exchange pool operations.

One pool trades the host's native value against a single traded token.
Liquidity providers deposit both assets for pool shares; traders swap in
either direction at the constant-product price with a 1% fee.

Every operation follows the same order: compute all amounts from the
current reserves, commit internal bookkeeping (share mint/burn, token
pulls), pay out tokens, and push native value last. The native push is the
only step that can hand control to code at the recipient address.
"""

from __future__ import annotations

from typing import NamedTuple

import structlog

from exchange.context import CallContext
from exchange.errors import (
    InsufficientInput,
    InsufficientOutput,
    InvalidAmount,
    InvalidConfiguration,
    InvalidReserve,
    LedgerFailure,
)
from exchange.ledgers.base import AssetLedger, NativeLedger, ShareLedger
from exchange.models.types import is_valid_address, is_zero_address, normalize_address
from exchange.pool.pricing import get_amount_of_tokens
from exchange.pool.reserves import PoolState, ReserveAccounting
from exchange.safe_int import S

logger = structlog.get_logger()


class Withdrawal(NamedTuple):
    """Assets paid out by remove_liquidity."""

    native_out: int
    token_out: int


class Exchange:
    """Constant-product pool between native value and one traded token.

    Args:
        address: The pool's own account on every ledger
        token_address: Identity of the traded token (non-zero)
        asset: Ledger of the traded token
        shares: Ledger of the pool-share token; the pool must be its minter
        native: Native value ledger

    Raises:
        InvalidConfiguration: If an address is malformed or the token is the zero address
    """

    def __init__(
        self,
        address: str,
        token_address: str,
        asset: AssetLedger,
        shares: ShareLedger,
        native: NativeLedger,
    ) -> None:
        if not is_valid_address(token_address) or is_zero_address(token_address):
            raise InvalidConfiguration(f"Invalid traded token address: {token_address!r}")
        if not is_valid_address(address) or is_zero_address(address):
            raise InvalidConfiguration(f"Invalid pool address: {address!r}")

        self.address = normalize_address(address)
        self.token_address = normalize_address(token_address)
        self._asset = asset
        self._shares = shares
        self._native = native
        self.reserves = ReserveAccounting(self.address, asset, native)

    # --- Read-only views ---

    def total_shares(self) -> int:
        return self._shares.total_supply()

    def share_balance_of(self, account: str) -> int:
        return self._shares.balance_of(account)

    def state(self) -> PoolState:
        return PoolState(
            pool_address=self.address,
            token_address=self.token_address,
            native_reserve=self.reserves.native_reserve(),
            token_reserve=self.reserves.token_reserve(),
            total_shares=self.total_shares(),
        )

    def get_token_amount(self, native_sold: int) -> int:
        """Quote the tokens bought by selling native_sold native value."""
        if native_sold <= 0:
            raise InvalidAmount(f"Sold amount must be positive: {native_sold}")
        return get_amount_of_tokens(
            native_sold, self.reserves.native_reserve(), self.reserves.token_reserve()
        )

    def get_native_amount(self, tokens_sold: int) -> int:
        """Quote the native value bought by selling tokens_sold tokens."""
        if tokens_sold <= 0:
            raise InvalidAmount(f"Sold amount must be positive: {tokens_sold}")
        return get_amount_of_tokens(
            tokens_sold, self.reserves.token_reserve(), self.reserves.native_reserve()
        )

    # --- Liquidity ---

    def add_liquidity(self, ctx: CallContext, amount: int) -> int:
        """Deposit native value (attached) and up to `amount` tokens for shares.

        The first deposit sets the price: the caller's full `amount` is pulled
        and the minted shares equal the native value. Later deposits must
        match the current ratio; only the required token amount is pulled.

        Args:
            ctx: Caller and attached native value
            amount: Maximum tokens the caller is willing to supply

        Returns:
            Number of shares minted to the caller

        Raises:
            InvalidAmount: No native value attached, or zero tokens on the first deposit
            InsufficientInput: amount is below the required token contribution
            LedgerFailure: The token pull fails
        """
        self._require_external_sender(ctx)
        value = ctx.value
        if value <= 0:
            raise InvalidAmount("Deposit requires attached native value")
        if amount < 0:
            raise InvalidAmount(f"Token amount cannot be negative: {amount}")

        total_shares = self._shares.total_supply()

        if total_shares == 0:
            if amount == 0:
                raise InvalidAmount("Initial deposit requires a positive token amount")
            token_in = amount
            minted = value
        else:
            prior_native = self.reserves.native_reserve_before(value)
            if prior_native == 0:
                raise InvalidReserve("Pool has shares outstanding but no native reserve")
            token_in = S(value).mul_div(self.reserves.token_reserve(), prior_native).value
            if amount < token_in:
                raise InsufficientInput(
                    f"Insufficient token amount: offered {amount}, required {token_in}"
                )
            minted = S(total_shares).mul_div(value, prior_native).value

        self._pull_tokens(ctx.sender, token_in)

        if minted == 0:
            logger.warning("deposit_minted_zero_shares", sender=ctx.sender, value=value)
        self._shares.mint(self.address, ctx.sender, minted)

        logger.info(
            "liquidity_added",
            sender=ctx.sender,
            native_in=value,
            token_in=token_in,
            shares_minted=minted,
            bootstrap=total_shares == 0,
        )
        return minted

    def remove_liquidity(self, ctx: CallContext, share_amount: int) -> Withdrawal:
        """Burn shares for a proportional cut of both reserves.

        Shares are burned before anything leaves the pool.

        Raises:
            InvalidAmount: share_amount is not positive, or native value was attached
            InvalidReserve: The pool has no outstanding shares
            LedgerFailure: The caller holds fewer than share_amount shares
        """
        self._require_external_sender(ctx)
        self._require_no_value(ctx, "remove_liquidity")
        if share_amount <= 0:
            raise InvalidAmount(f"Share amount must be positive: {share_amount}")

        total_shares = self._shares.total_supply()
        if total_shares == 0:
            raise InvalidReserve("Pool has no liquidity")

        native_out = S(self.reserves.native_reserve()).mul_div(share_amount, total_shares).value
        token_out = S(self.reserves.token_reserve()).mul_div(share_amount, total_shares).value

        self._shares.burn(self.address, ctx.sender, share_amount)

        if native_out == 0 or token_out == 0:
            logger.warning(
                "withdrawal_rounded_to_zero",
                sender=ctx.sender,
                shares=share_amount,
                native_out=native_out,
                token_out=token_out,
            )

        self._send_tokens(ctx.sender, token_out)
        self._native.transfer(self.address, ctx.sender, native_out)

        logger.info(
            "liquidity_removed",
            sender=ctx.sender,
            shares_burned=share_amount,
            native_out=native_out,
            token_out=token_out,
        )
        return Withdrawal(native_out=native_out, token_out=token_out)

    # --- Swaps ---

    def native_to_token_swap(self, ctx: CallContext, min_tokens_out: int) -> int:
        """Sell the attached native value for tokens.

        Priced against the native reserve as it was before the attached value
        arrived.

        Raises:
            InvalidAmount: No native value attached
            InsufficientOutput: Output does not exceed min_tokens_out
        """
        self._require_external_sender(ctx)
        if ctx.value <= 0:
            raise InvalidAmount("Swap requires attached native value")

        token_out = get_amount_of_tokens(
            ctx.value,
            self.reserves.native_reserve_before(ctx.value),
            self.reserves.token_reserve(),
        )
        if token_out <= min_tokens_out:
            raise InsufficientOutput(
                f"Insufficient output amount: {token_out} <= minimum {min_tokens_out}"
            )

        self._send_tokens(ctx.sender, token_out)

        logger.info(
            "swap_native_to_token",
            sender=ctx.sender,
            native_in=ctx.value,
            token_out=token_out,
        )
        return token_out

    def token_to_native_swap(self, ctx: CallContext, tokens_in: int, min_native_out: int) -> int:
        """Sell tokens_in tokens for native value.

        Raises:
            InvalidAmount: tokens_in is not positive, or native value was attached
            InsufficientOutput: Output is below min_native_out
            LedgerFailure: The token pull or the native push fails
        """
        self._require_external_sender(ctx)
        self._require_no_value(ctx, "token_to_native_swap")
        if tokens_in <= 0:
            raise InvalidAmount(f"Token amount must be positive: {tokens_in}")

        native_out = get_amount_of_tokens(
            tokens_in, self.reserves.token_reserve(), self.reserves.native_reserve()
        )
        if native_out < min_native_out:
            raise InsufficientOutput(
                f"Insufficient output amount: {native_out} < minimum {min_native_out}"
            )

        self._pull_tokens(ctx.sender, tokens_in)
        self._native.transfer(self.address, ctx.sender, native_out)

        logger.info(
            "swap_token_to_native",
            sender=ctx.sender,
            token_in=tokens_in,
            native_out=native_out,
        )
        return native_out

    # --- Ledger helpers ---

    def _pull_tokens(self, owner: str, amount: int) -> None:
        if not self._asset.transfer_from(self.address, owner, self.address, amount):
            raise LedgerFailure(f"Token transfer of {amount} from {owner} failed")

    def _send_tokens(self, to: str, amount: int) -> None:
        if not self._asset.transfer(self.address, to, amount):
            raise LedgerFailure(f"Token transfer of {amount} to {to} failed")

    def _require_external_sender(self, ctx: CallContext) -> None:
        # The pool and its token cannot act on their own reserves
        if ctx.sender in (self.address, self.token_address):
            raise LedgerFailure(f"{ctx.sender} cannot trade against its own pool")

    @staticmethod
    def _require_no_value(ctx: CallContext, operation: str) -> None:
        if ctx.value != 0:
            raise InvalidAmount(f"{operation} does not accept native value")


__all__ = ["Exchange", "Withdrawal"]
