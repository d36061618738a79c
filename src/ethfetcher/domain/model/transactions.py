"""Resolved transaction records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ethfetcher.domain.model.base import Entity

if TYPE_CHECKING:
    from ethfetcher.domain.model.enums import TransactionStatus
    from ethfetcher.domain.model.identifiers import TransactionHash


@dataclass(eq=False, kw_only=True)
class TransactionRecord(Entity):
    """Durable outcome of resolving one transaction hash.

    Written once by the reconciliation engine and never mutated afterwards;
    the store enforces a single record per ``transaction_hash``.
    """

    transaction_hash: TransactionHash
    status: TransactionStatus
    block_hash: str
    block_number: int
    sender: str | None = None
    recipient: str | None = None
    contract_address: str | None = None
    log_count: int = 0
    payload: str = "0x"
    value: int = 0

    def __post_init__(self) -> None:
        if self.log_count < 0:
            raise ValueError("TransactionRecord.log_count must be non-negative")
        if self.block_number < 0:
            raise ValueError("TransactionRecord.block_number must be non-negative")
