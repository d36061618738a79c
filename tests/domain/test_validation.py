from __future__ import annotations

import pytest
import rlp

from ethfetcher.domain.errors import EmptyBatchError, InvalidIdentifierError
from ethfetcher.domain.model import parse_transaction_hash
from ethfetcher.domain.validation import (
    decode_encoded_batch,
    validate_batch,
    validate_encoded_batch,
)
from tests.helpers.ledger import repeated_hash


def test_validate_batch_returns_canonical_hashes_in_order() -> None:
    raw = [repeated_hash("b"), repeated_hash("a")]

    validated = validate_batch(raw)

    assert [str(item) for item in validated] == raw


def test_validate_batch_collapses_duplicates() -> None:
    validated = validate_batch([repeated_hash("a"), repeated_hash("A"), repeated_hash("a")])

    assert validated == (parse_transaction_hash(repeated_hash("a")),)


def test_empty_batch_is_rejected() -> None:
    with pytest.raises(EmptyBatchError):
        validate_batch([])


def test_one_malformed_entry_rejects_the_batch() -> None:
    with pytest.raises(InvalidIdentifierError) as excinfo:
        validate_batch([repeated_hash("a"), "0x1234", repeated_hash("b")])

    assert excinfo.value.raw == "0x1234"


def test_decode_encoded_batch_accepts_prefixed_and_bare_hex() -> None:
    hashes = [bytes.fromhex("aa" * 32), bytes.fromhex("bb" * 32)]
    encoded = rlp.encode(hashes).hex()

    assert decode_encoded_batch(encoded) == [repeated_hash("a"), repeated_hash("b")]
    assert decode_encoded_batch("0x" + encoded) == [repeated_hash("a"), repeated_hash("b")]


def test_validate_encoded_batch_applies_hash_rules() -> None:
    encoded = rlp.encode([bytes.fromhex("aa" * 32), bytes.fromhex("aa" * 32)]).hex()

    assert validate_encoded_batch(encoded) == (parse_transaction_hash(repeated_hash("a")),)


def test_encoded_batch_with_short_element_is_rejected() -> None:
    encoded = rlp.encode([bytes.fromhex("aa" * 31)]).hex()

    with pytest.raises(InvalidIdentifierError, match="expected 66 characters"):
        validate_encoded_batch(encoded)


def test_encoded_zero_hash_is_rejected() -> None:
    encoded = rlp.encode([bytes(32)]).hex()

    with pytest.raises(InvalidIdentifierError, match="all-zero"):
        validate_encoded_batch(encoded)


def test_encoded_empty_list_is_an_empty_batch() -> None:
    with pytest.raises(EmptyBatchError):
        validate_encoded_batch(rlp.encode([]).hex())


@pytest.mark.parametrize(
    "encoded",
    [
        "not-hex",
        "0xc",
        rlp.encode(b"single string, not a list").hex(),
        "f8",
    ],
)
def test_malformed_encoding_is_rejected(encoded: str) -> None:
    with pytest.raises(InvalidIdentifierError):
        validate_encoded_batch(encoded)
