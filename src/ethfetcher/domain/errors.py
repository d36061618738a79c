"""Error taxonomy for transaction reconciliation.

Batch-level errors (validation, upstream unavailability, deadlines) reach the
caller. Per-identifier errors (remote misses, store conflicts) are absorbed by
the engine and only ever logged.
"""

from __future__ import annotations


class EthFetcherError(RuntimeError):
    """Base class for domain errors."""


class ValidationError(EthFetcherError):
    """Raised when a request is rejected before any side effect."""


class InvalidIdentifierError(ValidationError):
    """Raised when a raw transaction hash (or encoded batch) is malformed."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"invalid transaction hash: {raw} ({reason})")
        self.raw = raw
        self.reason = reason


class EmptyBatchError(ValidationError):
    """Raised when a batch request carries no identifiers."""

    def __init__(self) -> None:
        super().__init__("transaction hash batch is empty")


class UpstreamUnavailableError(EthFetcherError):
    """Raised when the remote source cannot be reached for the whole call."""


class DeadlineExceededError(EthFetcherError):
    """Raised when a reconciliation call runs past its caller-supplied deadline."""


class RemoteFetchError(EthFetcherError):
    """Per-identifier remote failure; never surfaced as a batch error."""

    def __init__(self, transaction_hash: object, reason: str) -> None:
        super().__init__(f"{transaction_hash}: {reason}")
        self.transaction_hash = transaction_hash
        self.reason = reason


class RecordNotFoundError(RemoteFetchError):
    """The identifier does not exist upstream."""


class TransientFetchError(RemoteFetchError):
    """Network, timeout or payload failure; a later batch may succeed."""


class RecordStoreError(EthFetcherError):
    """Raised by record store implementations on persistence failures."""


class AlreadyExistsError(RecordStoreError):
    """Raised on a uniqueness conflict; callers treat it as 'already present'."""
