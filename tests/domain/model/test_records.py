from __future__ import annotations

from uuid import uuid4

import pytest

from ethfetcher.domain.model import TransactionRecord, TransactionStatus, User, UserTransaction
from tests.helpers.ledger import make_hash


def test_record_rejects_negative_counters() -> None:
    with pytest.raises(ValueError, match="log_count"):
        TransactionRecord(
            transaction_hash=make_hash(1),
            status=TransactionStatus.SUCCESS,
            block_hash="0x" + "b" * 64,
            block_number=1,
            log_count=-1,
        )
    with pytest.raises(ValueError, match="block_number"):
        TransactionRecord(
            transaction_hash=make_hash(1),
            status=TransactionStatus.SUCCESS,
            block_hash="0x" + "b" * 64,
            block_number=-5,
        )


def test_entities_have_identity_on_creation() -> None:
    user = User(display_name="alice")
    other = User(display_name="alice")

    assert user.id != other.id
    assert user != other
    assert user.created_at.tzinfo is not None


def test_user_repr_hides_credential() -> None:
    user = User(display_name="alice", credential="s3cret")

    assert "s3cret" not in repr(user)


def test_link_key_is_user_and_hash() -> None:
    user_id = uuid4()
    link = UserTransaction(user_id=user_id, transaction_hash=make_hash(7))

    assert link.key == (user_id, make_hash(7))
