"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import select

from ethfetcher.adapters.sqlalchemy.mappings import (
    transaction_table,
    user_table,
    user_transaction_table,
)
from ethfetcher.domain.model import TransactionRecord, User, UserTransaction

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from sqlalchemy.orm import Session

    from ethfetcher.domain.model import TransactionHash


class SqlAlchemyTransactionRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: TransactionRecord) -> None:
        self.session.add(entity)

    def get_by_hashes(self, hashes: Iterable[TransactionHash]) -> list[TransactionRecord]:
        wanted = list(hashes)
        if not wanted:
            return []
        stmt = select(TransactionRecord).where(transaction_table.c.transaction_hash.in_(wanted))
        return list(self.session.execute(stmt).scalars())

    def list_all(self) -> list[TransactionRecord]:
        stmt = select(TransactionRecord).order_by(transaction_table.c.block_number)
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyUserTransactionRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: UserTransaction) -> None:
        self.session.add(entity)

    def list_by_user(self, user_id: UUID) -> list[UserTransaction]:
        stmt = select(UserTransaction).where(user_transaction_table.c.user_id == user_id)
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyUserRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: User) -> None:
        self.session.add(entity)

    def get(self, user_id: UUID) -> User | None:
        return self.session.get(User, user_id)

    def get_by_display_name(self, display_name: str) -> User | None:
        stmt = select(User).where(user_table.c.display_name == display_name)
        return self.session.execute(stmt).scalar_one_or_none()


if TYPE_CHECKING:
    from ethfetcher.domain.ports.persistence import (
        TransactionRepository,
        UserRepository,
        UserTransactionRepository,
    )

    _session_stub = cast("Session", object())
    _transaction_repo: TransactionRepository = SqlAlchemyTransactionRepository(_session_stub)
    _link_repo: UserTransactionRepository = SqlAlchemyUserTransactionRepository(_session_stub)
    _user_repo: UserRepository = SqlAlchemyUserRepository(_session_stub)
