"""Public domain model surface."""

from __future__ import annotations

from ethfetcher.domain.model.base import Entity
from ethfetcher.domain.model.enums import TransactionStatus
from ethfetcher.domain.model.identifiers import (
    HASH_BYTES,
    HASH_LENGTH,
    HASH_PREFIX,
    TransactionHash,
    parse_transaction_hash,
)
from ethfetcher.domain.model.transactions import TransactionRecord
from ethfetcher.domain.model.user import User, UserTransaction

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    # identifiers
    "HASH_BYTES",
    "HASH_LENGTH",
    "HASH_PREFIX",
    "TransactionHash",
    "parse_transaction_hash",
    # records
    "TransactionRecord",
    "TransactionStatus",
    # principals
    "User",
    "UserTransaction",
]
