"""Configuration types for resilient HTTP clients."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from tenacity import RetryCallState

ResponseHook = Callable[[httpx.Response], Awaitable[None] | None]


def _last_outcome(retry_state: RetryCallState) -> httpx.Response:
    # Hand back the final response, or re-raise the final exception.
    outcome = retry_state.outcome
    if outcome is None:
        raise RuntimeError("retry loop finished without an outcome")
    return outcome.result()


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = 4
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    allowed_methods: frozenset[str] = field(
        default_factory=lambda: frozenset(
            {"DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT"}
        )
    )
    status_forcelist: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 500, 502, 503, 504})
    )
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )
    backoff_jitter: float = 1.0

    def is_retryable_method(self, method: str) -> bool:
        return method.upper() in self.allowed_methods

    def build(self) -> AsyncRetrying:
        """Return a tenacity controller making at most ``total + 1`` attempts."""

        status_forcelist = self.status_forcelist
        return AsyncRetrying(
            stop=stop_after_attempt(self.total + 1),
            wait=wait_exponential(multiplier=self.backoff_factor, max=self.max_backoff_wait)
            + wait_random(0, self.backoff_jitter),
            retry=retry_if_exception_type(self.retry_on_exceptions)
            | retry_if_result(lambda response: response.status_code in status_forcelist),
            retry_error_callback=_last_outcome,
        )


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    response_hooks: tuple[ResponseHook, ...] = field(default_factory=tuple)
    default_headers: Mapping[str, str] | None = None
