from __future__ import annotations

import pytest
from pydantic import ValidationError

from ethfetcher.adapters.ethereum.schema import RpcReceipt, RpcResponse, RpcTransaction
from ethfetcher.adapters.ethereum.translator import translate_transaction
from ethfetcher.domain.errors import InvalidIdentifierError
from ethfetcher.domain.model import TransactionStatus
from tests.helpers.ledger import repeated_hash, rpc_receipt_payload, rpc_transaction_payload


def test_transaction_parses_hex_quantities_and_aliases() -> None:
    payload = rpc_transaction_payload(repeated_hash("a"), block_number=0x1B4, value=10**18)

    transaction = RpcTransaction.model_validate(payload)

    assert transaction.block_number == 436
    assert transaction.value == 10**18
    assert transaction.sender == "0x" + "a1" * 20
    assert transaction.to == "0x" + "b2" * 20


def test_pending_transaction_has_no_block() -> None:
    payload = rpc_transaction_payload(repeated_hash("a"))
    payload["blockHash"] = None
    payload["blockNumber"] = None

    transaction = RpcTransaction.model_validate(payload)

    assert transaction.block_hash is None
    assert transaction.block_number is None


def test_receipt_without_status_field() -> None:
    receipt = RpcReceipt.model_validate(rpc_receipt_payload(repeated_hash("a"), status=None))

    assert receipt.status is None
    assert len(receipt.logs) == 2


def test_invalid_quantity_is_rejected() -> None:
    payload = rpc_receipt_payload(repeated_hash("a"))
    payload["blockNumber"] = "0xnothex"

    with pytest.raises(ValueError, match="invalid literal"):
        RpcReceipt.model_validate(payload)


def test_missing_required_field_is_rejected() -> None:
    payload = rpc_transaction_payload(repeated_hash("a"))
    del payload["from"]

    with pytest.raises(ValidationError):
        RpcTransaction.model_validate(payload)


def test_response_with_error_object() -> None:
    response = RpcResponse.model_validate(
        {"jsonrpc": "2.0", "id": 3, "error": {"code": -32000, "message": "header not found"}}
    )

    assert response.result is None
    assert response.error is not None
    assert response.error.code == -32000


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("0x1", TransactionStatus.SUCCESS),
        ("0x0", TransactionStatus.FAILED),
        (None, TransactionStatus.PENDING),
    ],
)
def test_translate_transaction(status: str | None, expected: TransactionStatus) -> None:
    raw_hash = "0x" + "AB" * 32
    transaction = RpcTransaction.model_validate(rpc_transaction_payload(raw_hash, value=5))
    receipt = RpcReceipt.model_validate(rpc_receipt_payload(raw_hash, block_number=7, status=status))

    record = translate_transaction(transaction, receipt)

    assert str(record.transaction_hash) == "0x" + "ab" * 32
    assert record.status is expected
    assert record.block_number == 7
    assert record.block_hash == repeated_hash("c")
    assert record.log_count == 2
    assert record.value == 5
    assert record.payload == "0x"
    assert record.contract_address is None


def test_translate_rejects_malformed_hash() -> None:
    transaction = RpcTransaction.model_validate(rpc_transaction_payload("0x1234"))
    receipt = RpcReceipt.model_validate(rpc_receipt_payload("0x1234"))

    with pytest.raises(InvalidIdentifierError):
        translate_transaction(transaction, receipt)
