"""SQLAlchemy mapping metadata for the ethfetcher domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from ethfetcher.domain.model import (
    HASH_LENGTH,
    HASH_PREFIX,
    TransactionHash,
    TransactionRecord,
    TransactionStatus,
    User,
    UserTransaction,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]

# Largest uint256 has 78 decimal digits.
WEI_DIGITS = 78


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class TransactionHashType(TypeDecorator[TransactionHash]):
    """Store hashes in their canonical ``0x`` lowercase hex form."""

    impl = String(HASH_LENGTH)
    cache_ok = True

    def process_bind_param(self, value: TransactionHash | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return value.hex

    def process_result_value(self, value: str | None, dialect: Dialect) -> TransactionHash | None:
        _ = dialect
        if value is None:
            return None
        return TransactionHash(bytes.fromhex(value.removeprefix(HASH_PREFIX)))


class WeiAmount(TypeDecorator[int]):
    """Arbitrary-precision integer amounts stored as decimal strings."""

    impl = String(WEI_DIGITS)
    cache_ok = True

    def process_bind_param(self, value: int | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return str(value)

    def process_result_value(self, value: str | None, dialect: Dialect) -> int | None:
        _ = dialect
        if value is None:
            return None
        return int(value)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Core tables -----------------------------------------------------------------

transaction_table = Table(
    "transactions",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("transaction_hash", TransactionHashType(), nullable=False),
    Column("status", Enum(TransactionStatus, native_enum=False), nullable=False),
    Column("block_hash", String(HASH_LENGTH), nullable=False),
    Column("block_number", BigInteger, nullable=False),
    Column("sender", String, nullable=True),
    Column("recipient", String, nullable=True),
    Column("contract_address", String, nullable=True),
    Column("log_count", Integer, nullable=False, default=0),
    Column("payload", Text, nullable=False, default="0x"),
    Column("value", WeiAmount(), nullable=False, default=0),
    UniqueConstraint("transaction_hash"),
)

user_table = Table(
    "users",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("display_name", String, nullable=False),
    Column("credential", String, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    UniqueConstraint("display_name"),
)

user_transaction_table = Table(
    "user_transactions",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("user_id", UUIDColumnType, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("transaction_hash", TransactionHashType(), nullable=False),
    Column("linked_at", UTCDateTime(), nullable=False),
    UniqueConstraint("user_id", "transaction_hash", name="uq_user_transactions_pair"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(TransactionRecord, transaction_table)
    mapper_registry.map_imperatively(User, user_table)
    mapper_registry.map_imperatively(UserTransaction, user_transaction_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
