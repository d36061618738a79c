"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from ethfetcher.adapters.ethereum import EthereumRemoteSource
from ethfetcher.adapters.sqlalchemy import (
    SqlAlchemyRecordStore,
    configured_engine,
    is_started,
    startup,
)
from ethfetcher.adapters.sqlalchemy import database_health as _database_health
from ethfetcher.config.ledger import get_reconcile_config
from ethfetcher.domain.model import User
from ethfetcher.domain.reconciliation import (
    AssociationTracker,
    ReconciliationEngine,
    ReconciliationResult,
)
from ethfetcher.domain.validation import validate_batch, validate_encoded_batch

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from ethfetcher.config.ledger import LedgerConfig
    from ethfetcher.domain.model import TransactionHash, TransactionRecord
    from ethfetcher.domain.ports.fetching import RemoteSource
    from ethfetcher.domain.ports.persistence import RecordStore


log = getLogger(__name__)


def fetch_transactions(
    raw_hashes: Sequence[str],
    *,
    user_id: UUID | None = None,
    store: RecordStore | None = None,
    source: RemoteSource | None = None,
    config: LedgerConfig | None = None,
) -> ReconciliationResult:
    """Resolve plain ``0x`` hex hashes, linking them to ``user_id`` when given."""

    hashes = validate_batch(raw_hashes)
    return _reconcile(hashes, user_id=user_id, store=store, source=source, config=config)


def fetch_encoded_transactions(
    encoded: str,
    *,
    user_id: UUID | None = None,
    store: RecordStore | None = None,
    source: RemoteSource | None = None,
    config: LedgerConfig | None = None,
) -> ReconciliationResult:
    """Resolve hashes supplied as one hex-encoded RLP list."""

    hashes = validate_encoded_batch(encoded)
    return _reconcile(hashes, user_id=user_id, store=store, source=source, config=config)


def list_transactions(*, store: RecordStore | None = None) -> list[TransactionRecord]:
    """Return every stored transaction record."""

    return (store or _default_store()).list_records()


def list_user_transactions(
    user_id: UUID,
    *,
    store: RecordStore | None = None,
) -> list[TransactionRecord]:
    """Return the stored records previously resolved on behalf of ``user_id``."""

    effective_store = store or _default_store()
    hashes = AssociationTracker(effective_store).list_by_principal(user_id)
    if not hashes:
        return []
    return effective_store.find_by_identifiers(hashes)


def create_user(
    display_name: str,
    *,
    credential: str | None = None,
    store: RecordStore | None = None,
) -> User:
    """Register a principal; raises ``AlreadyExistsError`` for a taken display name."""

    name = display_name.strip()
    if not name:
        raise ValueError("Display name must not be blank")
    user = User(display_name=name, credential=credential)
    (store or _default_store()).add_user(user)
    log.info("Created user %s (%s)", user.id, user.display_name)
    return user


def database_health() -> dict[str, str]:
    if not is_started():
        startup()
    return _database_health()


def _reconcile(
    hashes: tuple[TransactionHash, ...],
    *,
    user_id: UUID | None,
    store: RecordStore | None,
    source: RemoteSource | None,
    config: LedgerConfig | None,
) -> ReconciliationResult:
    # Node settings are only read once a hash actually misses the store.
    settings = config.reconcile if config is not None else get_reconcile_config()
    effective_store = store or _default_store()
    effective_source = source or EthereumRemoteSource(config=config)
    principal = _resolve_principal(effective_store, user_id)

    log.info(
        "Starting reconciliation: hashes=%s, user=%s, max_concurrency=%s",
        len(hashes),
        principal.id if principal else None,
        settings.max_concurrency,
    )
    engine = ReconciliationEngine(
        store=effective_store,
        source=effective_source,
        max_concurrency=settings.max_concurrency,
        offload_store=store is None and _offloads_store_calls(),
    )
    return asyncio.run(engine.reconcile(hashes, principal, timeout=settings.timeout_seconds))


def _resolve_principal(store: RecordStore, user_id: UUID | None) -> User | None:
    if user_id is None:
        return None
    user = store.get_user(user_id)
    if user is None:
        log.warning("Unknown user %s; transactions will not be linked", user_id)
    return user


def _offloads_store_calls() -> bool:
    """SQLite runs in-process; any other backend waits on the network."""

    engine = configured_engine()
    return engine is not None and engine.dialect.name != "sqlite"


def _default_store() -> SqlAlchemyRecordStore:
    if not is_started():
        startup()
    return SqlAlchemyRecordStore()
