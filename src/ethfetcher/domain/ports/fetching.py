"""Ports for resolving transactions against the authoritative remote source."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from contextlib import AbstractAsyncContextManager

    from ethfetcher.domain.model import TransactionHash, TransactionRecord


@runtime_checkable
class RemoteSession(Protocol):
    """An open connection to the remote source."""

    async def fetch(self, transaction_hash: TransactionHash) -> TransactionRecord:
        """Return the canonical record or raise a ``RemoteFetchError`` subclass.

        ``RecordNotFoundError`` marks a hash unknown upstream; ``TransientFetchError``
        covers network, timeout and payload failures.
        """
        ...


@runtime_checkable
class RemoteSource(Protocol):
    """Factory for remote sessions.

    Entering the returned context raises ``UpstreamUnavailableError`` when the
    remote cannot be reached at all.
    """

    def connect(self) -> AbstractAsyncContextManager[RemoteSession]: ...


__all__ = ["RemoteSession", "RemoteSource"]
