"""Transaction hash value type."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Final

from ethfetcher.domain.errors import InvalidIdentifierError

HASH_PREFIX: Final[str] = "0x"
HASH_BYTES: Final[int] = 32
HASH_LENGTH: Final[int] = len(HASH_PREFIX) + 2 * HASH_BYTES


@dataclass(frozen=True, slots=True)
class TransactionHash:
    """A 32-byte transaction identifier.

    Equality and hashing follow the byte value; ``str()`` yields the canonical
    ``0x``-prefixed lowercase hex form.
    """

    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != HASH_BYTES:
            raise ValueError(f"TransactionHash requires {HASH_BYTES} bytes, got {len(self.value)}")

    @property
    def hex(self) -> str:
        return HASH_PREFIX + self.value.hex()

    def __str__(self) -> str:
        return self.hex

    def __repr__(self) -> str:
        return f"TransactionHash({self.hex})"


def parse_transaction_hash(raw: str) -> TransactionHash:
    """Validate ``raw`` and return its canonical value.

    Rules run in order: ``0x`` prefix, total length of 66, hex suffix, and a
    non-zero value. The all-zero hash is reserved.
    """

    if not raw.startswith(HASH_PREFIX):
        raise InvalidIdentifierError(raw, "missing 0x prefix")
    if len(raw) != HASH_LENGTH:
        raise InvalidIdentifierError(raw, f"expected {HASH_LENGTH} characters, got {len(raw)}")
    suffix = raw[len(HASH_PREFIX) :]
    if not all(char in string.hexdigits for char in suffix):
        raise InvalidIdentifierError(raw, "suffix is not hexadecimal")
    value = bytes.fromhex(suffix)
    if not any(value):
        raise InvalidIdentifierError(raw, "all-zero hash is reserved")
    return TransactionHash(value)
