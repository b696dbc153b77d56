"""Pydantic models for the devnet HTTP API.

Amounts travel as uint256 decimal strings, like token amounts in any
JSON-RPC style API.
"""

from pydantic import BaseModel, Field

from exchange.models.types import Address, Bytes, Uint256


class PoolStateResponse(BaseModel):
    """Current reserves and share supply."""

    pool_address: Address = Field(alias="poolAddress")
    token_address: Address = Field(alias="tokenAddress")
    native_reserve: Uint256 = Field(alias="nativeReserve")
    token_reserve: Uint256 = Field(alias="tokenReserve")
    total_shares: Uint256 = Field(alias="totalShares")

    model_config = {"populate_by_name": True}


class QuoteResponse(BaseModel):
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class AccountResponse(BaseModel):
    """Balances of one account across all devnet ledgers."""

    address: Address
    native: Uint256
    tokens: Uint256
    shares: Uint256
    allowance: Uint256 = Field(description="Tokens the pool may pull from this account")


class FaucetRequest(BaseModel):
    account: Address
    native: Uint256 = "0"
    tokens: Uint256 = "0"


class ApproveRequest(BaseModel):
    owner: Address
    amount: Uint256


class AddLiquidityRequest(BaseModel):
    sender: Address
    value: Uint256 = Field(description="Native value attached to the deposit")
    max_tokens: Uint256 = Field(alias="maxTokens")

    model_config = {"populate_by_name": True}


class AddLiquidityResponse(BaseModel):
    shares_minted: Uint256 = Field(alias="sharesMinted")

    model_config = {"populate_by_name": True}


class RemoveLiquidityRequest(BaseModel):
    sender: Address
    shares: Uint256


class RemoveLiquidityResponse(BaseModel):
    native_out: Uint256 = Field(alias="nativeOut")
    token_out: Uint256 = Field(alias="tokenOut")

    model_config = {"populate_by_name": True}


class NativeToTokenRequest(BaseModel):
    sender: Address
    value: Uint256 = Field(description="Native value sold")
    min_tokens_out: Uint256 = Field(alias="minTokensOut")

    model_config = {"populate_by_name": True}


class TokenToNativeRequest(BaseModel):
    sender: Address
    tokens_in: Uint256 = Field(alias="tokensIn")
    min_native_out: Uint256 = Field(alias="minNativeOut")

    model_config = {"populate_by_name": True}


class SwapResponse(BaseModel):
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class RawCallRequest(BaseModel):
    """A pool call submitted as ABI calldata."""

    sender: Address
    value: Uint256 = "0"
    data: Bytes


class RawCallResponse(BaseModel):
    method: str
    result: list[Uint256] = Field(description="Return values of the call")


class ErrorResponse(BaseModel):
    kind: str
    reason: str
