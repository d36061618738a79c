"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class TransactionStatus(StrEnum):
    """Execution outcome as reported by the transaction receipt."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"

    @classmethod
    def from_receipt_status(cls, code: int | None) -> TransactionStatus:
        # Receipts before the Byzantium fork carry a state root instead of a status code.
        if code is None:
            return cls.PENDING
        return cls.SUCCESS if code == 1 else cls.FAILED
