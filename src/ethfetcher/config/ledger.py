"""Ethereum JSON-RPC node and reconciliation configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_positive_float, optional_positive_int, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_MAX_CONCURRENCY = 8
DEFAULT_RATE_LIMIT_PER_SECOND = 10
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    """Fan-out limit and deadline of one reconciliation call.

    Readable without any node settings, so batches served entirely from the
    store never need ``ETH_NODE_URL``.
    """

    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    timeout_seconds: float | None = None


@dataclass(frozen=True, slots=True)
class LedgerConfig:
    """Remote node access plus the reconciliation limits."""

    node_url: str
    resilience: ResilienceConfig
    reconcile: ReconcileConfig = field(default_factory=ReconcileConfig)


def get_reconcile_config() -> ReconcileConfig:
    return ReconcileConfig(
        max_concurrency=optional_positive_int("LEDGER_MAX_CONCURRENCY", DEFAULT_MAX_CONCURRENCY),
        timeout_seconds=optional_positive_float("RECONCILE_TIMEOUT_SECONDS", None),
    )


def get_ledger_config() -> LedgerConfig:
    values = require_env_vars(("ETH_NODE_URL",))
    node_url = values["ETH_NODE_URL"].strip()

    rate = optional_positive_int("LEDGER_RATE_LIMIT_PER_SECOND", DEFAULT_RATE_LIMIT_PER_SECOND)
    http_timeout = optional_positive_float(
        "LEDGER_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS
    )

    # Reconciliation never retries inside a call; resubmitting the batch is the retry.
    resilience = ResilienceConfig(
        name="ethereum",
        timeout_seconds=http_timeout or DEFAULT_HTTP_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=0),
        ratelimit=RateLimit(max_calls=rate, per_seconds=1.0),
        default_headers={"Content-Type": "application/json"},
    )

    return LedgerConfig(
        node_url=node_url,
        resilience=resilience,
        reconcile=get_reconcile_config(),
    )
