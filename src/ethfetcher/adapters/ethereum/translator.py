"""Translate JSON-RPC payloads into domain transaction records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ethfetcher.domain.model import TransactionRecord, TransactionStatus, parse_transaction_hash

if TYPE_CHECKING:
    from .schema import RpcReceipt, RpcTransaction


def translate_transaction(transaction: RpcTransaction, receipt: RpcReceipt) -> TransactionRecord:
    return TransactionRecord(
        transaction_hash=parse_transaction_hash(transaction.hash.lower()),
        status=TransactionStatus.from_receipt_status(receipt.status),
        block_hash=receipt.block_hash,
        block_number=receipt.block_number,
        sender=transaction.sender,
        recipient=transaction.to,
        contract_address=receipt.contract_address,
        log_count=len(receipt.logs),
        payload=transaction.input,
        value=transaction.value,
    )
