"""API endpoints for the exchange devnet."""

import structlog
from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import JSONResponse

from exchange.abi import decode_call
from exchange.devnet import Devnet, get_default_devnet
from exchange.models.api import (
    AccountResponse,
    AddLiquidityRequest,
    AddLiquidityResponse,
    ApproveRequest,
    ErrorResponse,
    FaucetRequest,
    NativeToTokenRequest,
    PoolStateResponse,
    QuoteResponse,
    RawCallRequest,
    RawCallResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    SwapResponse,
    TokenToNativeRequest,
)
from exchange.models.types import normalize_address

logger = structlog.get_logger()

router = APIRouter(responses={400: {"model": ErrorResponse}})


def get_devnet() -> Devnet:
    """Dependency provider for the devnet instance.

    Override this in tests to inject a fresh devnet:
        app.dependency_overrides[get_devnet] = lambda: devnet
    """
    return get_default_devnet()


@router.get("/pool")
def pool_state(devnet: Devnet = Depends(get_devnet)) -> PoolStateResponse:
    state = devnet.exchange.state()
    return PoolStateResponse(
        pool_address=state.pool_address,
        token_address=state.token_address,
        native_reserve=state.native_reserve,
        token_reserve=state.token_reserve,
        total_shares=state.total_shares,
    )


@router.get("/quote/native-to-token")
def quote_native_to_token(
    amount_in: int = Query(alias="amountIn", gt=0),
    devnet: Devnet = Depends(get_devnet),
) -> QuoteResponse:
    """Tokens bought by selling amountIn native value at current reserves."""
    amount_out = devnet.exchange.get_token_amount(amount_in)
    return QuoteResponse(amount_in=amount_in, amount_out=amount_out)


@router.get("/quote/token-to-native")
def quote_token_to_native(
    amount_in: int = Query(alias="amountIn", gt=0),
    devnet: Devnet = Depends(get_devnet),
) -> QuoteResponse:
    """Native value bought by selling amountIn tokens at current reserves."""
    amount_out = devnet.exchange.get_native_amount(amount_in)
    return QuoteResponse(amount_in=amount_in, amount_out=amount_out)


@router.get("/accounts/{address}")
def account(
    address: str = Path(pattern=r"^0x[a-fA-F0-9]{40}$"),
    devnet: Devnet = Depends(get_devnet),
) -> AccountResponse:
    return AccountResponse(address=normalize_address(address), **devnet.balances(address))


@router.post("/faucet")
def faucet(request: FaucetRequest, devnet: Devnet = Depends(get_devnet)) -> AccountResponse:
    devnet.fund(request.account, native=int(request.native), tokens=int(request.tokens))
    return AccountResponse(
        address=normalize_address(request.account), **devnet.balances(request.account)
    )


@router.post("/approve")
def approve(request: ApproveRequest, devnet: Devnet = Depends(get_devnet)) -> AccountResponse:
    devnet.approve(request.owner, int(request.amount))
    return AccountResponse(address=normalize_address(request.owner), **devnet.balances(request.owner))


@router.post("/liquidity/add")
def add_liquidity(
    request: AddLiquidityRequest, devnet: Devnet = Depends(get_devnet)
) -> AddLiquidityResponse:
    minted = devnet.call(
        request.sender, "add_liquidity", int(request.max_tokens), value=int(request.value)
    )
    return AddLiquidityResponse(shares_minted=minted)


@router.post("/liquidity/remove")
def remove_liquidity(
    request: RemoveLiquidityRequest, devnet: Devnet = Depends(get_devnet)
) -> RemoveLiquidityResponse:
    withdrawal = devnet.call(request.sender, "remove_liquidity", int(request.shares))
    return RemoveLiquidityResponse(native_out=withdrawal.native_out, token_out=withdrawal.token_out)


@router.post("/swap/native-to-token")
def swap_native_to_token(
    request: NativeToTokenRequest, devnet: Devnet = Depends(get_devnet)
) -> SwapResponse:
    token_out = devnet.call(
        request.sender,
        "native_to_token_swap",
        int(request.min_tokens_out),
        value=int(request.value),
    )
    return SwapResponse(amount_out=token_out)


@router.post("/swap/token-to-native")
def swap_token_to_native(
    request: TokenToNativeRequest, devnet: Devnet = Depends(get_devnet)
) -> SwapResponse:
    native_out = devnet.call(
        request.sender,
        "token_to_native_swap",
        int(request.tokens_in),
        int(request.min_native_out),
    )
    return SwapResponse(amount_out=native_out)


@router.post("/call", response_model=RawCallResponse)
def raw_call(request: RawCallRequest, devnet: Devnet = Depends(get_devnet)):  # type: ignore[no-untyped-def]
    """Run a pool call submitted as ABI calldata.

    Error Handling:
        - Undecodable calldata: 400 with kind "invalid_calldata"
        - Pool failure: 400 with the PoolError kind (app-level handler)
    """
    try:
        method, _ = decode_call(request.data)
    except ValueError as err:
        logger.warning("invalid_calldata", sender=request.sender, error=str(err))
        return JSONResponse(status_code=400, content={"kind": "invalid_calldata", "reason": str(err)})

    result = devnet.host.dispatch(
        devnet.exchange, request.sender, request.data, value=int(request.value)
    )
    values = list(result) if isinstance(result, tuple) else [result]
    return RawCallResponse(method=method, result=values)
