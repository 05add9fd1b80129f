"""Bounded retries for outbound provider calls"""

import logging
from typing import Awaitable, Callable, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_incrementing,
)

from ...core.config import settings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

# Raised before any byte reached the provider, so a resend cannot duplicate a write
UNSENT_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout)
TRANSIENT_ERRORS = (httpx.TimeoutException, httpx.TransportError)


def is_transient(response: httpx.Response) -> bool:
    return response.status_code in RETRYABLE_STATUS_CODES


def is_rate_limited(response: httpx.Response) -> bool:
    return response.status_code == 429


def _last_outcome(retry_state: RetryCallState) -> httpx.Response:
    # Hand back the final response, or re-raise the final transport error
    return retry_state.outcome.result()


async def send_with_retry(
    send: Callable[[], Awaitable[httpx.Response]],
    max_retries: Optional[int] = None,
    backoff_seconds: Optional[float] = None,
    idempotent: bool = True,
) -> httpx.Response:
    """Run ``send`` with a bounded, linearly backed-off retry policy.

    Idempotent calls are retried on timeouts, transport errors and 5xx/429
    replies. Non-idempotent calls (provider writes) are only retried on a 429
    or when the connection could not be opened. The last response is returned
    even if it is still transient; the last transport error is re-raised.
    """
    retries = settings.PROVIDER_MAX_RETRIES if max_retries is None else max_retries
    backoff = settings.PROVIDER_RETRY_BACKOFF_SECONDS if backoff_seconds is None else backoff_seconds

    if idempotent:
        retry = retry_if_exception_type(TRANSIENT_ERRORS) | retry_if_result(is_transient)
    else:
        # A 429 means the provider refused the request outright
        retry = retry_if_exception_type(UNSENT_ERRORS) | retry_if_result(is_rate_limited)

    retrying = AsyncRetrying(
        retry=retry,
        stop=stop_after_attempt(retries + 1),
        wait=wait_incrementing(start=backoff, increment=backoff),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        retry_error_callback=_last_outcome,
    )
    return await retrying(send)
