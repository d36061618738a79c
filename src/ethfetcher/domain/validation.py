"""Batch validation for requested transaction hashes.

Two request shapes are accepted: a plain list of hex strings, and a single
hex-encoded RLP list of byte strings. Both end up in ``validate_batch`` so the
same rules apply, and the batch is rejected as a whole on the first bad entry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import rlp
from rlp.exceptions import RLPException
from rlp.sedes import CountableList, binary

from ethfetcher.domain.errors import EmptyBatchError, InvalidIdentifierError
from ethfetcher.domain.model.identifiers import HASH_PREFIX, parse_transaction_hash

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ethfetcher.domain.model.identifiers import TransactionHash

_ENCODED_BATCH = CountableList(binary)


def validate_batch(raw_hashes: Sequence[str]) -> tuple[TransactionHash, ...]:
    """Return canonical hashes for ``raw_hashes``, deduplicated in request order."""

    if not raw_hashes:
        raise EmptyBatchError
    parsed = [parse_transaction_hash(raw) for raw in raw_hashes]
    return tuple(dict.fromkeys(parsed))


def decode_encoded_batch(encoded: str) -> list[str]:
    """Decode a hex-encoded RLP list into raw ``0x`` hex strings.

    Only the transport framing is checked here; element lengths and values are
    left to ``validate_batch``.
    """

    hex_body = encoded.strip()
    if hex_body.startswith(HASH_PREFIX):
        hex_body = hex_body[len(HASH_PREFIX) :]
    try:
        blob = bytes.fromhex(hex_body)
    except ValueError:
        raise InvalidIdentifierError(encoded, "encoded batch is not hexadecimal") from None
    try:
        items = rlp.decode(blob, sedes=_ENCODED_BATCH)
    except RLPException as exc:
        raise InvalidIdentifierError(encoded, f"cannot decode RLP list: {exc}") from exc
    return [HASH_PREFIX + bytes(item).hex() for item in items]


def validate_encoded_batch(encoded: str) -> tuple[TransactionHash, ...]:
    return validate_batch(decode_encoded_batch(encoded))
