"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import RemoteSession, RemoteSource
from .persistence import (
    RecordStore,
    Repository,
    TransactionRepository,
    UserRepository,
    UserTransactionRepository,
)
from .unit_of_work import (
    LedgerRepositories,
    LedgerUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "LedgerRepositories",
    "LedgerUnitOfWork",
    "RecordStore",
    "RemoteSession",
    "RemoteSource",
    "Repository",
    "RepositoryCollection",
    "TransactionRepository",
    "UnitOfWork",
    "UserRepository",
    "UserTransactionRepository",
]
