from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any
from uuid import UUID

from dotenv import load_dotenv

from ethfetcher.app import (
    create_user,
    database_health,
    fetch_encoded_transactions,
    fetch_transactions,
    list_transactions,
    list_user_transactions,
)
from ethfetcher.config import configure_logging
from ethfetcher.domain.errors import ValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from types import FrameType

    from ethfetcher.domain.model import TransactionRecord

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve Ethereum transaction hashes")
    subparsers = parser.add_subparsers(dest="command", required=True)

    fetch = subparsers.add_parser("fetch", help="Resolve one or more 0x transaction hashes")
    fetch.add_argument("hashes", nargs="*", help="0x-prefixed 32-byte transaction hashes")
    fetch.add_argument(
        "--user-id",
        type=str,
        help="Existing user id to link the resolved transactions to",
    )

    fetch_rlp = subparsers.add_parser(
        "fetch-rlp",
        help="Resolve hashes supplied as a hex-encoded RLP list",
    )
    fetch_rlp.add_argument("encoded", help="Hex string of an RLP list of 32-byte hashes")
    fetch_rlp.add_argument(
        "--user-id",
        type=str,
        help="Existing user id to link the resolved transactions to",
    )

    subparsers.add_parser("all", help="List every stored transaction")

    mine = subparsers.add_parser("my", help="List transactions resolved for a user")
    mine.add_argument("--user-id", type=str, required=True, help="User id to list for")

    user = subparsers.add_parser("user", help="User management commands")
    user_sub = user.add_subparsers(dest="user_command", required=True)
    user_create = user_sub.add_parser("create", help="Create a user")
    user_create.add_argument(
        "--display-name",
        type=str,
        required=True,
        help="Display name for the user",
    )
    user_create.add_argument(
        "--credential",
        type=str,
        help="Optional opaque credential stored alongside the user",
    )

    subparsers.add_parser("health", help="Report database connectivity")

    return parser.parse_args(list(argv))


def _parse_uuid(value: str | None) -> UUID | None:
    if value is None:
        return None
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _record_payload(record: TransactionRecord) -> dict[str, Any]:
    return {
        "transaction_hash": str(record.transaction_hash),
        "status": record.status.value,
        "block_hash": record.block_hash,
        "block_number": record.block_number,
        "from": record.sender,
        "to": record.recipient,
        "contract_address": record.contract_address,
        "log_count": record.log_count,
        "input": record.payload,
        "value": str(record.value),
    }


def _emit(payload: object) -> None:
    sys.stdout.write(json.dumps(payload, indent=2) + "\n")


def _emit_records(records: Iterable[TransactionRecord]) -> None:
    _emit([_record_payload(record) for record in records])


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        user_id = _parse_uuid(getattr(parsed_args, "user_id", None))
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "fetch":
            result = fetch_transactions(parsed_args.hashes, user_id=user_id)
            _emit_records(result.records)
        elif parsed_args.command == "fetch-rlp":
            result = fetch_encoded_transactions(parsed_args.encoded, user_id=user_id)
            _emit_records(result.records)
        elif parsed_args.command == "all":
            _emit_records(list_transactions())
        elif parsed_args.command == "my":
            if user_id is None:
                raise ValueError("Missing --user-id")  # noqa: TRY301
            _emit_records(list_user_transactions(user_id))
        elif parsed_args.command == "user" and parsed_args.user_command == "create":
            user = create_user(
                display_name=parsed_args.display_name,
                credential=parsed_args.credential,
            )
            _emit({"id": str(user.id), "display_name": user.display_name})
        elif parsed_args.command == "health":
            health = database_health()
            _emit(health)
            if health.get("status") != "up":
                sys.exit(1)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except ValidationError:
        log.exception("Rejected request")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
