"""SQLAlchemy adapter package for ethfetcher."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyTransactionRepository,
    SqlAlchemyUserRepository,
    SqlAlchemyUserTransactionRepository,
)
from .store import SqlAlchemyRecordStore
from .unit_of_work import (
    SqlAlchemyLedgerUnitOfWork,
    configured_engine,
    database_health,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyLedgerUnitOfWork",
    "SqlAlchemyRecordStore",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyUserTransactionRepository",
    "configured_engine",
    "create_all_tables",
    "database_health",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
