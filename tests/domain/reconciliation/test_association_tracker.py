from __future__ import annotations

from uuid import uuid4

from ethfetcher.domain.errors import RecordStoreError
from ethfetcher.domain.model import UserTransaction
from ethfetcher.domain.reconciliation import AssociationTracker
from tests.helpers.ledger import InMemoryRecordStore, make_hash


class FlakyLinkStore(InMemoryRecordStore):
    def __init__(self, failing: set[object]) -> None:
        super().__init__()
        self.failing = failing

    def insert_link(self, link: UserTransaction) -> None:
        if link.transaction_hash in self.failing:
            raise RecordStoreError("connection reset")
        super().insert_link(link)


def test_link_creates_a_new_pair() -> None:
    store = InMemoryRecordStore()
    user_id = uuid4()

    link = AssociationTracker(store).link(user_id, make_hash(1))

    assert store.links == {(user_id, make_hash(1)): link}


def test_link_returns_existing_pair_on_conflict() -> None:
    store = InMemoryRecordStore()
    user_id = uuid4()
    tracker = AssociationTracker(store)
    original = tracker.link(user_id, make_hash(1))

    again = tracker.link(user_id, make_hash(1))

    assert again is original
    assert len(store.links) == 1


def test_link_missing_skips_existing_pairs() -> None:
    store = InMemoryRecordStore()
    user_id = uuid4()
    tracker = AssociationTracker(store)
    tracker.link(user_id, make_hash(1))
    store.link_calls.clear()

    created = tracker.link_missing(user_id, [make_hash(1), make_hash(2), make_hash(2)])

    assert [link.transaction_hash for link in created] == [make_hash(2)]
    assert store.link_calls == [(user_id, make_hash(2))]


def test_link_missing_skips_failing_pairs() -> None:
    store = FlakyLinkStore({make_hash(1)})
    user_id = uuid4()

    created = AssociationTracker(store).link_missing(user_id, [make_hash(1), make_hash(2)])

    assert [link.transaction_hash for link in created] == [make_hash(2)]


def test_links_are_scoped_to_their_user() -> None:
    store = InMemoryRecordStore()
    alice, bob = uuid4(), uuid4()
    tracker = AssociationTracker(store)
    tracker.link(alice, make_hash(1))
    tracker.link(bob, make_hash(2))

    assert tracker.list_by_principal(alice) == [make_hash(1)]
    assert tracker.list_by_principal(bob) == [make_hash(2)]
    assert tracker.list_by_principal(uuid4()) == []


def test_link_missing_does_not_count_pairs_linked_concurrently() -> None:
    store = InMemoryRecordStore()
    store.racing_links.add(make_hash(1))
    user_id = uuid4()

    created = AssociationTracker(store).link_missing(user_id, [make_hash(1), make_hash(2)])

    assert [link.transaction_hash for link in created] == [make_hash(2)]
    assert set(store.links) == {(user_id, make_hash(1)), (user_id, make_hash(2))}
