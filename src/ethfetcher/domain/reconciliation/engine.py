"""Store-first, remote-on-miss reconciliation of transaction hash batches.

Known hashes are served from the record store. Missing hashes are fetched
from the remote source with bounded concurrency; each success is persisted in
its own store transaction before it joins the result. A hash that cannot be
fetched or persisted is dropped from the result without failing the batch.
Only validation problems, total upstream unavailability and an exceeded
deadline fail the call as a whole.

Store calls are synchronous. By default they run on the event loop, which
suits in-process stores such as SQLite. With ``offload_store=True`` the batch
lookup and every insert run in a worker thread instead, so a networked
database does not stall concurrent fetches. A thread cannot be cancelled: an
insert already handed to a worker when the deadline expires still completes
and stays persisted.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from ethfetcher.domain.errors import (
    AlreadyExistsError,
    DeadlineExceededError,
    EmptyBatchError,
    RecordNotFoundError,
    RecordStoreError,
    TransientFetchError,
)
from ethfetcher.domain.reconciliation.tracker import AssociationTracker

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ethfetcher.domain.model import TransactionHash, TransactionRecord, User
    from ethfetcher.domain.ports.fetching import RemoteSession, RemoteSource
    from ethfetcher.domain.ports.persistence import RecordStore

log = getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 8


@dataclass(slots=True)
class ReconciliationResult:
    """Records resolved for one batch plus counters for reporting.

    ``records`` carries no ordering guarantee relative to the request.
    """

    records: list[TransactionRecord] = field(default_factory=list["TransactionRecord"])
    known: int = 0
    resolved: int = 0
    dropped: int = 0
    linked: int = 0


class ReconciliationEngine:
    """Resolve a validated batch against the store and the remote source.

    The engine keeps no state between calls; build one per request.
    """

    def __init__(
        self,
        *,
        store: RecordStore,
        source: RemoteSource,
        tracker: AssociationTracker | None = None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        offload_store: bool = False,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._store = store
        self._source = source
        self._tracker = tracker or AssociationTracker(store)
        self._max_concurrency = max_concurrency
        self._offload_store = offload_store

    async def reconcile(
        self,
        hashes: Sequence[TransactionHash],
        principal: User | None = None,
        *,
        timeout: float | None = None,
    ) -> ReconciliationResult:
        """Return every record that could be resolved for ``hashes``.

        ``timeout`` bounds the store lookup and the remote fan-out. When it
        expires, in-flight fetches are cancelled and ``DeadlineExceededError``
        is raised; records persisted before that point stay persisted.
        """

        if not hashes:
            raise EmptyBatchError
        requested = tuple(dict.fromkeys(hashes))

        try:
            async with asyncio.timeout(timeout) as deadline:
                result = await self._resolve(requested)
        except TimeoutError as exc:
            if not deadline.expired():
                raise
            raise DeadlineExceededError(
                f"reconciliation of {len(requested)} hashes exceeded {timeout}s"
            ) from exc

        if principal is not None and result.records:
            result.linked = self._link(principal, result.records)

        log.info(
            "Reconciled %s hashes: known=%s, resolved=%s, dropped=%s, linked=%s",
            len(requested),
            result.known,
            result.resolved,
            result.dropped,
            result.linked,
        )
        return result

    async def _resolve(self, requested: tuple[TransactionHash, ...]) -> ReconciliationResult:
        wanted = set(requested)
        if self._offload_store:
            stored = await asyncio.to_thread(self._store.find_by_identifiers, requested)
        else:
            stored = self._store.find_by_identifiers(requested)
        found: dict[TransactionHash, TransactionRecord] = {
            record.transaction_hash: record for record in stored if record.transaction_hash in wanted
        }
        result = ReconciliationResult(known=len(found))

        missing = [candidate for candidate in requested if candidate not in found]
        if missing:
            resolved = await self._fetch_missing(missing)
            for record in resolved:
                found[record.transaction_hash] = record
            result.resolved = len(resolved)
            result.dropped = len(missing) - len(resolved)

        result.records = list(found.values())
        return result

    async def _fetch_missing(self, missing: list[TransactionHash]) -> list[TransactionRecord]:
        semaphore = asyncio.Semaphore(self._max_concurrency)
        async with self._source.connect() as session, asyncio.TaskGroup() as group:
            tasks = [
                group.create_task(self._resolve_one(session, semaphore, transaction_hash))
                for transaction_hash in missing
            ]
        return [record for task in tasks if (record := task.result()) is not None]

    async def _resolve_one(
        self,
        session: RemoteSession,
        semaphore: asyncio.Semaphore,
        transaction_hash: TransactionHash,
    ) -> TransactionRecord | None:
        async with semaphore:
            try:
                record = await session.fetch(transaction_hash)
            except RecordNotFoundError:
                log.info("Transaction %s not found upstream; dropping", transaction_hash)
                return None
            except TransientFetchError as exc:
                log.warning("Failed to fetch transaction %s: %s", transaction_hash, exc.reason)
                return None
        return await self._persist(record)

    async def _persist(self, record: TransactionRecord) -> TransactionRecord | None:
        try:
            if self._offload_store:
                await asyncio.to_thread(self._store.insert, record)
            else:
                self._store.insert(record)
        except AlreadyExistsError:
            log.debug("Transaction %s stored concurrently; keeping it", record.transaction_hash)
            return record
        except RecordStoreError as exc:
            log.warning("Failed to save transaction %s: %s", record.transaction_hash, exc)
            return None
        return record

    def _link(self, principal: User, records: list[TransactionRecord]) -> int:
        try:
            links = self._tracker.link_missing(
                principal.id,
                (record.transaction_hash for record in records),
            )
        except RecordStoreError as exc:
            log.warning("Failed to link transactions to user %s: %s", principal.id, exc)
            return 0
        return len(links)
