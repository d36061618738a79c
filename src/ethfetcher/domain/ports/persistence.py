"""Ports for persisting transaction records and principal links."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ethfetcher.domain.model import TransactionRecord, User, UserTransaction

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from uuid import UUID

    from ethfetcher.domain.model import TransactionHash


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class TransactionRepository(Repository[TransactionRecord], Protocol):
    """Session-scoped access to transaction records."""

    def get_by_hashes(self, hashes: Iterable[TransactionHash]) -> list[TransactionRecord]: ...

    def list_all(self) -> list[TransactionRecord]: ...


@runtime_checkable
class UserTransactionRepository(Repository[UserTransaction], Protocol):
    """Session-scoped access to principal/transaction links."""

    def list_by_user(self, user_id: UUID) -> list[UserTransaction]: ...


@runtime_checkable
class UserRepository(Repository[User], Protocol):
    """Session-scoped access to principals."""

    def get(self, user_id: UUID) -> User | None: ...

    def get_by_display_name(self, display_name: str) -> User | None: ...


@runtime_checkable
class RecordStore(Protocol):
    """Transactional store consumed by the reconciliation engine.

    Every call is its own unit of work. ``insert`` and ``insert_link`` never
    overwrite: a uniqueness conflict raises ``AlreadyExistsError``. Any other
    persistence failure raises ``RecordStoreError``.
    """

    def find_by_identifiers(self, hashes: Sequence[TransactionHash]) -> list[TransactionRecord]: ...

    def find_links_by_principal(self, user_id: UUID) -> list[UserTransaction]: ...

    def insert(self, record: TransactionRecord) -> None: ...

    def insert_link(self, link: UserTransaction) -> None: ...

    def list_records(self) -> list[TransactionRecord]: ...

    def get_user(self, user_id: UUID) -> User | None: ...

    def get_user_by_display_name(self, display_name: str) -> User | None: ...

    def add_user(self, user: User) -> None: ...
