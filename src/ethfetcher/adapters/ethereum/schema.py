"""Ethereum JSON-RPC response schemas for transaction lookups."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _parse_quantity(value: object) -> object:
    # JSON-RPC encodes integers as 0x-prefixed hex quantities.
    if isinstance(value, str) and value[:2] in {"0x", "0X"}:
        return int(value, 16) if len(value) > 2 else 0
    return value


HexQuantity = Annotated[int, BeforeValidator(_parse_quantity)]


class EthereumBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RpcTransaction(EthereumBaseModel):
    hash: str
    block_hash: str | None = Field(default=None, alias="blockHash")
    block_number: HexQuantity | None = Field(default=None, alias="blockNumber")
    sender: str = Field(alias="from")
    to: str | None = None
    value: HexQuantity = 0
    input: str = "0x"


class RpcReceipt(EthereumBaseModel):
    transaction_hash: str = Field(alias="transactionHash")
    block_hash: str = Field(alias="blockHash")
    block_number: HexQuantity = Field(alias="blockNumber")
    status: HexQuantity | None = None
    contract_address: str | None = Field(default=None, alias="contractAddress")
    logs: list[dict[str, object]] = Field(default_factory=list)


class RpcErrorPayload(EthereumBaseModel):
    code: int
    message: str
    data: object | None = None


class RpcResponse(EthereumBaseModel):
    jsonrpc: str = "2.0"
    id: int | str | None = None
    result: object | None = None
    error: RpcErrorPayload | None = None
