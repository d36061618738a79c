"""Remote source adapter backed by an Ethereum JSON-RPC node."""

from __future__ import annotations

from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from ethfetcher.adapters.http_resilience import ResilientClient
from ethfetcher.config.errors import MissingConfigurationError
from ethfetcher.config.ledger import get_ledger_config
from ethfetcher.domain.errors import (
    InvalidIdentifierError,
    RecordNotFoundError,
    TransientFetchError,
    UpstreamUnavailableError,
)

from .client import EthereumRpcClient, EthereumRPCError
from .translator import translate_transaction

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from ethfetcher.config.http_resilience import ResilienceConfig
    from ethfetcher.config.ledger import LedgerConfig
    from ethfetcher.domain.model import TransactionHash, TransactionRecord

log = getLogger(__name__)

# ValueError covers undecodable JSON bodies and pydantic validation failures.
_REMOTE_ERRORS = (httpx.HTTPError, EthereumRPCError, InvalidIdentifierError, ValueError)


class EthereumRemoteSession:
    """Per-call session resolving one hash at a time over a shared HTTP client."""

    def __init__(self, rpc: EthereumRpcClient) -> None:
        self._rpc = rpc

    async def fetch(self, transaction_hash: TransactionHash) -> TransactionRecord:
        try:
            transaction = await self._rpc.get_transaction(transaction_hash.hex)
            if transaction is None:
                raise RecordNotFoundError(transaction_hash, "unknown to the node")
            receipt = await self._rpc.get_receipt(transaction_hash.hex)
            if receipt is None:
                raise TransientFetchError(transaction_hash, "receipt not available yet")
            record = translate_transaction(transaction, receipt)
        except _REMOTE_ERRORS as exc:
            raise TransientFetchError(transaction_hash, str(exc)) from exc

        if record.transaction_hash != transaction_hash:
            raise TransientFetchError(
                transaction_hash,
                f"node answered with transaction {record.transaction_hash}",
            )
        return record


class EthereumRemoteSource:
    """Open JSON-RPC sessions against the configured node.

    Without an explicit ``config`` the node settings are read from the
    environment on the first ``connect()``, so a source that is never needed
    never requires them.
    """

    def __init__(
        self,
        *,
        config: LedgerConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient

    def _resolve_config(self) -> LedgerConfig:
        if self._config is None:
            try:
                self._config = get_ledger_config()
            except MissingConfigurationError as exc:
                raise UpstreamUnavailableError(f"Ethereum node is not configured: {exc}") from exc
        return self._config

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[EthereumRemoteSession]:
        config = self._resolve_config()
        async with self._client_factory(config.resilience) as client:
            rpc = EthereumRpcClient(client=client, node_url=config.node_url)
            try:
                chain_id = await rpc.chain_id()
            except _REMOTE_ERRORS as exc:
                raise UpstreamUnavailableError(
                    f"Ethereum node at {config.node_url} is unavailable: {exc}"
                ) from exc
            log.debug("Connected to Ethereum node (chain id %s)", chain_id)
            yield EthereumRemoteSession(rpc)
