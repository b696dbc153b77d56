"""Tests for the Host: atomicity, value handling and reentrancy."""

import pytest

from exchange.abi import encode_call
from exchange.context import CallContext
from exchange.errors import InvalidAmount, LedgerFailure
from tests.helpers import ALICE, BOB, MALLORY, POOL, TOKEN, ledger_view, make_seeded_devnet


@pytest.fixture
def devnet_with_mallory():
    """Pool (1500, 1500) with 1500 shares: ALICE 1000, MALLORY 500."""
    devnet = make_seeded_devnet(1000, 1000, ALICE, MALLORY)
    devnet.call(MALLORY, "add_liquidity", 500, value=500)
    return devnet


class TestCallValidation:
    """Arguments the Host checks before running anything."""

    def test_unknown_method(self, seeded_devnet):
        with pytest.raises(ValueError, match="Unknown pool method"):
            seeded_devnet.call(ALICE, "state")

    def test_negative_value(self, seeded_devnet):
        with pytest.raises(InvalidAmount):
            seeded_devnet.call(ALICE, "add_liquidity", 10, value=-1)


POOL_CALLS = [
    ("add_liquidity", (10**9,), 100),
    ("remove_liquidity", (1,), 0),
    ("native_to_token_swap", (0,), 100),
    ("token_to_native_swap", (10, 0), 0),
]


class TestContractSenders:
    """The pool and its ledgers can never be the caller of a pool operation."""

    def test_pool_cannot_mint_itself_shares(self, seeded_devnet):
        """With an allowance on itself, the pool would mint shares backed by nothing."""
        seeded_devnet.token.approve(POOL, POOL, 10**9)
        before = ledger_view(seeded_devnet, POOL)

        with pytest.raises(LedgerFailure, match="contract account"):
            seeded_devnet.call(POOL, "add_liquidity", 10**9, value=100)

        assert ledger_view(seeded_devnet, POOL) == before
        assert seeded_devnet.exchange.total_shares() == 1000

    @pytest.mark.parametrize(("method", "args", "value"), POOL_CALLS)
    def test_pool_sender_rejected(self, seeded_devnet, method, args, value):
        before = ledger_view(seeded_devnet, ALICE, POOL)

        with pytest.raises(LedgerFailure):
            seeded_devnet.call(POOL, method, *args, value=value)

        assert ledger_view(seeded_devnet, ALICE, POOL) == before

    def test_ledger_contract_senders_rejected(self, seeded_devnet):
        for sender in (TOKEN, seeded_devnet.shares.address):
            with pytest.raises(LedgerFailure, match="contract account"):
                seeded_devnet.call(sender, "native_to_token_swap", 0, value=1)

    def test_pool_sender_rejected_without_host(self, seeded_devnet):
        exchange = seeded_devnet.exchange

        with pytest.raises(LedgerFailure, match="its own pool"):
            exchange.add_liquidity(CallContext(sender=POOL, value=100), 10**9)
        with pytest.raises(LedgerFailure, match="its own pool"):
            exchange.token_to_native_swap(CallContext(sender=TOKEN), 10, 0)


class TestAtomicity:
    """A failed call leaves no trace on any ledger."""

    def test_attached_value_refunded_on_failure(self, seeded_devnet):
        before = ledger_view(seeded_devnet, BOB)

        with pytest.raises(InvalidAmount):
            seeded_devnet.call(BOB, "remove_liquidity", 0, value=10)

        assert ledger_view(seeded_devnet, BOB) == before

    def test_unexpected_error_rolls_back(self, seeded_devnet, monkeypatch):
        """Non-pool exceptions also restore every ledger and propagate."""
        before = ledger_view(seeded_devnet, BOB)

        def explode(_ctx, _min_tokens):
            raise RuntimeError("boom")

        monkeypatch.setattr(seeded_devnet.exchange, "native_to_token_swap", explode)

        with pytest.raises(RuntimeError, match="boom"):
            seeded_devnet.call(BOB, "native_to_token_swap", 0, value=100)

        assert ledger_view(seeded_devnet, BOB) == before

    def test_failure_after_partial_effects(self, devnet_with_mallory):
        """Shares are burned and tokens sent before the native push is rejected;
        all of it is undone."""
        devnet = devnet_with_mallory
        before = ledger_view(devnet, MALLORY)

        def reject(_sender, _amount):
            raise RuntimeError("no thanks")

        devnet.native.set_receive_hook(MALLORY, reject)

        with pytest.raises(LedgerFailure, match="rejected"):
            devnet.call(MALLORY, "remove_liquidity", 100)

        assert ledger_view(devnet, MALLORY) == before


class TestReentrancy:
    """Receive hooks calling back into the pool during a withdrawal."""

    def test_cannot_reuse_burned_shares(self, devnet_with_mallory):
        devnet = devnet_with_mallory
        before = ledger_view(devnet, MALLORY)
        reentered = []

        def reenter(_sender, _amount):
            if not reentered:
                reentered.append(True)
                devnet.call(MALLORY, "remove_liquidity", 500)

        devnet.native.set_receive_hook(MALLORY, reenter)

        with pytest.raises(LedgerFailure):
            devnet.call(MALLORY, "remove_liquidity", 500)

        assert reentered == [True]
        assert ledger_view(devnet, MALLORY) == before

    def test_reentrant_withdrawal_sees_settled_reserves(self, devnet_with_mallory):
        """Two nested withdrawals of 250 pay exactly what two sequential ones would.

        The token payout of the outer call is already out of the pool when the
        native push hands control to the hook.
        """
        devnet = devnet_with_mallory
        results = []
        reentered = []

        def reenter(_sender, _amount):
            if not reentered:
                reentered.append(True)
                results.append(devnet.call(MALLORY, "remove_liquidity", 250))

        devnet.native.set_receive_hook(MALLORY, reenter)

        outer = devnet.call(MALLORY, "remove_liquidity", 250)

        assert outer == (250, 250)
        assert results == [(250, 250)]
        state = devnet.exchange.state()
        assert (state.native_reserve, state.token_reserve, state.total_shares) == (1000, 1000, 1000)
        assert devnet.exchange.share_balance_of(MALLORY) == 0


class TestDispatch:
    """Calls submitted as ABI calldata."""

    def test_dispatch_matches_direct_call(self, empty_devnet):
        calldata = encode_call("add_liquidity", 200)

        minted = empty_devnet.host.dispatch(empty_devnet.exchange, ALICE, calldata, value=500)

        assert minted == 500
        state = empty_devnet.exchange.state()
        assert (state.native_reserve, state.token_reserve) == (500, 200)

    def test_dispatch_two_argument_call(self, seeded_devnet):
        calldata = encode_call("token_to_native_swap", 100, 90)

        assert seeded_devnet.host.dispatch(seeded_devnet.exchange, BOB, calldata) == 90
