"""Integration tests for the devnet API."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from exchange.abi import encode_call
from exchange.api.endpoints import get_devnet
from exchange.api.main import app
from exchange.devnet import Devnet
from tests.helpers import ALICE, BOB, POOL, TOKEN


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Create a test client bound to a fresh, unfunded devnet."""
    devnet = Devnet(POOL, TOKEN)
    app.dependency_overrides[get_devnet] = lambda: devnet
    yield TestClient(app)
    app.dependency_overrides.clear()


def _fund_and_approve(client: TestClient, account: str, amount: int) -> None:
    response = client.post(
        "/faucet", json={"account": account, "native": str(amount), "tokens": str(amount)}
    )
    assert response.status_code == 200
    response = client.post("/approve", json={"owner": account, "amount": str(amount)})
    assert response.status_code == 200


class TestPoolLifecycle:
    """Drive one pool from bootstrap to full withdrawal over HTTP."""

    def test_round_trip_accrues_fees_to_provider(self, client):
        _fund_and_approve(client, ALICE, 10_000)
        _fund_and_approve(client, BOB, 10_000)

        response = client.post(
            "/liquidity/add", json={"sender": ALICE, "value": "1000", "maxTokens": "1000"}
        )
        assert response.json() == {"sharesMinted": "1000"}

        response = client.post(
            "/swap/native-to-token",
            json={"sender": BOB, "value": "100", "minTokensOut": "0"},
        )
        assert response.json() == {"amountOut": "90"}

        # 90 * 99 * 1100 // (910 * 100 + 90 * 99)
        quote = client.get("/quote/token-to-native", params={"amountIn": "90"}).json()
        assert quote["amountOut"] == "98"

        response = client.post(
            "/swap/token-to-native",
            json={"sender": BOB, "tokensIn": "90", "minNativeOut": "98"},
        )
        assert response.json() == {"amountOut": "98"}

        pool = client.get("/pool").json()
        assert (pool["nativeReserve"], pool["tokenReserve"]) == ("1002", "1000")

        response = client.post("/liquidity/remove", json={"sender": ALICE, "shares": "1000"})
        assert response.json() == {"nativeOut": "1002", "tokenOut": "1000"}

        alice = client.get(f"/accounts/{ALICE}").json()
        bob = client.get(f"/accounts/{BOB}").json()
        assert (alice["native"], alice["tokens"], alice["shares"]) == ("10002", "10000", "0")
        assert (bob["native"], bob["tokens"]) == ("9998", "10000")

        pool = client.get("/pool").json()
        assert (pool["nativeReserve"], pool["tokenReserve"], pool["totalShares"]) == (
            "0",
            "0",
            "0",
        )

    def test_pool_can_be_bootstrapped_again_after_draining(self, client):
        _fund_and_approve(client, ALICE, 10_000)
        client.post("/liquidity/add", json={"sender": ALICE, "value": "500", "maxTokens": "200"})
        client.post("/liquidity/remove", json={"sender": ALICE, "shares": "500"})

        response = client.post(
            "/liquidity/add", json={"sender": ALICE, "value": "300", "maxTokens": "600"}
        )

        assert response.json() == {"sharesMinted": "300"}
        pool = client.get("/pool").json()
        assert (pool["nativeReserve"], pool["tokenReserve"]) == ("300", "600")

    def test_calldata_and_typed_routes_share_state(self, client):
        _fund_and_approve(client, ALICE, 10_000)

        response = client.post(
            "/call",
            json={
                "sender": ALICE,
                "value": "1000",
                "data": encode_call("add_liquidity", 1000),
            },
        )
        assert response.json() == {"method": "add_liquidity", "result": ["1000"]}

        pool = client.get("/pool").json()
        assert pool["totalShares"] == "1000"

        response = client.post(
            "/call",
            json={"sender": ALICE, "data": encode_call("token_to_native_swap", 100, 91)},
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "insufficient_output"
        assert client.get("/pool").json() == pool
