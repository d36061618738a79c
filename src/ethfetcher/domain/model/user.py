"""Principals and the transactions resolved on their behalf."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from ethfetcher.domain.model.base import Entity

if TYPE_CHECKING:
    from uuid import UUID

    from ethfetcher.domain.model.identifiers import TransactionHash


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(eq=False, kw_only=True)
class User(Entity):
    """An already-authenticated requester. The engine only reads it."""

    display_name: str
    credential: str | None = field(default=None, repr=False)
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(eq=False, kw_only=True)
class UserTransaction(Entity):
    """Durable fact that ``user_id`` has resolved ``transaction_hash``.

    The ``(user_id, transaction_hash)`` pair is unique in the store.
    """

    user_id: UUID
    transaction_hash: TransactionHash
    linked_at: datetime = field(default_factory=_utcnow)

    @property
    def key(self) -> tuple[UUID, TransactionHash]:
        return (self.user_id, self.transaction_hash)
