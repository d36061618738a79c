"""Record store facade translating SQLAlchemy failures into domain errors.

Each operation runs in its own unit of work, so one failed insert never rolls
back another. Uniqueness conflicts are confirmed with a follow-up read before
they are reported as ``AlreadyExistsError``; any other integrity failure (for
example a foreign key violation) is a plain ``RecordStoreError``.
"""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ethfetcher.adapters.sqlalchemy.unit_of_work import SqlAlchemyLedgerUnitOfWork
from ethfetcher.domain.errors import AlreadyExistsError, RecordStoreError
from ethfetcher.domain.ports.unit_of_work import LedgerUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from ethfetcher.domain.model import TransactionHash, TransactionRecord, User, UserTransaction

UnitOfWorkFactory = Callable[[], LedgerUnitOfWork]

log = getLogger(__name__)


class SqlAlchemyRecordStore:
    def __init__(self, unit_of_work_factory: UnitOfWorkFactory | None = None) -> None:
        self._uow_factory = unit_of_work_factory or SqlAlchemyLedgerUnitOfWork

    def find_by_identifiers(self, hashes: Sequence[TransactionHash]) -> list[TransactionRecord]:
        try:
            with self._uow_factory() as uow:
                return uow.repositories.transactions.get_by_hashes(hashes)
        except SQLAlchemyError as exc:
            raise RecordStoreError(f"failed to look up {len(hashes)} transactions") from exc

    def find_links_by_principal(self, user_id: UUID) -> list[UserTransaction]:
        try:
            with self._uow_factory() as uow:
                return uow.repositories.user_transactions.list_by_user(user_id)
        except SQLAlchemyError as exc:
            raise RecordStoreError(f"failed to list links for user {user_id}") from exc

    def insert(self, record: TransactionRecord) -> None:
        try:
            with self._uow_factory() as uow:
                uow.repositories.transactions.add(record)
                uow.commit()
        except IntegrityError as exc:
            if self.find_by_identifiers([record.transaction_hash]):
                raise AlreadyExistsError(
                    f"transaction {record.transaction_hash} already stored"
                ) from exc
            raise RecordStoreError(f"failed to store {record.transaction_hash}") from exc
        except SQLAlchemyError as exc:
            raise RecordStoreError(f"failed to store {record.transaction_hash}") from exc
        log.debug("Stored transaction %s", record.transaction_hash)

    def insert_link(self, link: UserTransaction) -> None:
        try:
            with self._uow_factory() as uow:
                uow.repositories.user_transactions.add(link)
                uow.commit()
        except IntegrityError as exc:
            linked = {
                existing.transaction_hash
                for existing in self.find_links_by_principal(link.user_id)
            }
            if link.transaction_hash in linked:
                raise AlreadyExistsError(
                    f"user {link.user_id} already linked to {link.transaction_hash}"
                ) from exc
            raise RecordStoreError(
                f"failed to link {link.transaction_hash} to user {link.user_id}"
            ) from exc
        except SQLAlchemyError as exc:
            raise RecordStoreError(
                f"failed to link {link.transaction_hash} to user {link.user_id}"
            ) from exc

    def list_records(self) -> list[TransactionRecord]:
        try:
            with self._uow_factory() as uow:
                return uow.repositories.transactions.list_all()
        except SQLAlchemyError as exc:
            raise RecordStoreError("failed to list transactions") from exc

    def get_user(self, user_id: UUID) -> User | None:
        try:
            with self._uow_factory() as uow:
                return uow.repositories.users.get(user_id)
        except SQLAlchemyError as exc:
            raise RecordStoreError(f"failed to load user {user_id}") from exc

    def get_user_by_display_name(self, display_name: str) -> User | None:
        try:
            with self._uow_factory() as uow:
                return uow.repositories.users.get_by_display_name(display_name)
        except SQLAlchemyError as exc:
            raise RecordStoreError(f"failed to load user {display_name!r}") from exc

    def add_user(self, user: User) -> None:
        try:
            with self._uow_factory() as uow:
                uow.repositories.users.add(user)
                uow.commit()
        except IntegrityError as exc:
            if self.get_user_by_display_name(user.display_name) is not None:
                raise AlreadyExistsError(f"user {user.display_name!r} already exists") from exc
            raise RecordStoreError(f"failed to create user {user.display_name!r}") from exc
        except SQLAlchemyError as exc:
            raise RecordStoreError(f"failed to create user {user.display_name!r}") from exc


if TYPE_CHECKING:
    from ethfetcher.domain.ports.persistence import RecordStore

    _store_check: RecordStore = SqlAlchemyRecordStore()
