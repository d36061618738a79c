"""Idempotent bookkeeping of which hashes each principal has resolved."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from ethfetcher.domain.errors import AlreadyExistsError, RecordStoreError
from ethfetcher.domain.model import UserTransaction

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from ethfetcher.domain.model import TransactionHash
    from ethfetcher.domain.ports.persistence import RecordStore

log = getLogger(__name__)


class AssociationTracker:
    """Create principal/transaction links without ever duplicating a pair.

    Race safety comes from the store's unique constraint on the pair: losing an
    insert race surfaces as ``AlreadyExistsError`` and is reported as success.
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def link(self, user_id: UUID, transaction_hash: TransactionHash) -> UserTransaction:
        link, _ = self._insert_link(user_id, transaction_hash)
        return link

    def link_missing(
        self,
        user_id: UUID,
        hashes: Iterable[TransactionHash],
    ) -> list[UserTransaction]:
        """Link every hash in ``hashes`` not yet linked to ``user_id``.

        Existing links are read once up front, so ``insert_link`` runs at most
        once per absent pair. Only links this call created are returned; a pair
        that another writer linked in the meantime is skipped, as is a pair
        whose insert fails.
        """

        already_linked = {
            link.transaction_hash for link in self._store.find_links_by_principal(user_id)
        }
        created: list[UserTransaction] = []
        for transaction_hash in hashes:
            if transaction_hash in already_linked:
                continue
            try:
                link, inserted = self._insert_link(user_id, transaction_hash)
            except RecordStoreError as exc:
                log.warning("Failed to link %s to user %s: %s", transaction_hash, user_id, exc)
                continue
            already_linked.add(transaction_hash)
            if inserted:
                created.append(link)
        return created

    def list_by_principal(self, user_id: UUID) -> list[TransactionHash]:
        return [link.transaction_hash for link in self._store.find_links_by_principal(user_id)]

    def _insert_link(
        self, user_id: UUID, transaction_hash: TransactionHash
    ) -> tuple[UserTransaction, bool]:
        candidate = UserTransaction(user_id=user_id, transaction_hash=transaction_hash)
        try:
            self._store.insert_link(candidate)
        except AlreadyExistsError:
            log.debug("Link %s -> %s already exists", user_id, transaction_hash)
            for existing in self._store.find_links_by_principal(user_id):
                if existing.transaction_hash == transaction_hash:
                    return existing, False
            return candidate, False
        return candidate, True
