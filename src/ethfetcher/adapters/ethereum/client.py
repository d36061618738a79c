"""Ethereum JSON-RPC client."""

from __future__ import annotations

from itertools import count
from logging import getLogger
from typing import TYPE_CHECKING

from .schema import RpcReceipt, RpcResponse, RpcTransaction

if TYPE_CHECKING:
    from ethfetcher.adapters.http_resilience import ResilientClient

log = getLogger(__name__)


class EthereumRPCError(RuntimeError):
    """Raised when the node answers with a JSON-RPC error object."""

    def __init__(self, method: str, code: int, message: str) -> None:
        super().__init__(f"{method} failed with JSON-RPC error {code}: {message}")
        self.method = method
        self.code = code


class EthereumRpcClient:
    """Low-level JSON-RPC calls against one node over an open ``ResilientClient``."""

    def __init__(self, *, client: ResilientClient, node_url: str) -> None:
        self._client = client
        self._node_url = node_url
        self._request_ids = count(1)

    async def chain_id(self) -> int:
        result = await self._call("eth_chainId", [])
        if not isinstance(result, str):
            raise EthereumRPCError("eth_chainId", -32603, f"unexpected result {result!r}")
        return int(result, 16)

    async def get_transaction(self, transaction_hash: str) -> RpcTransaction | None:
        result = await self._call("eth_getTransactionByHash", [transaction_hash])
        if result is None:
            return None
        return RpcTransaction.model_validate(result)

    async def get_receipt(self, transaction_hash: str) -> RpcReceipt | None:
        result = await self._call("eth_getTransactionReceipt", [transaction_hash])
        if result is None:
            return None
        return RpcReceipt.model_validate(result)

    async def _call(self, method: str, params: list[object]) -> object | None:
        request_id = next(self._request_ids)
        response = await self._client.post(
            self._node_url,
            json={"jsonrpc": "2.0", "id": request_id, "method": method, "params": params},
        )
        response.raise_for_status()

        payload = RpcResponse.model_validate(response.json())
        if payload.error is not None:
            raise EthereumRPCError(method, payload.error.code, payload.error.message)
        log.debug("%s(%s) -> %s", method, params, "null" if payload.result is None else "result")
        return payload.result
