"""Bounded retry around a single HTTP call, with per-status classification."""

import time
from typing import Callable

import httpx

from ..config import constants
from ..models.result import FailureKind, Result
from ..models.weather import RetryPolicy
from ..utils.logger import get_logger

logger = get_logger(__name__)

_TERMINAL_STATUSES = {
    401: (FailureKind.UNAUTHORIZED, "Invalid API key, check the weather token configuration"),
    403: (FailureKind.FORBIDDEN, "API access forbidden, check the account status"),
    404: (FailureKind.NOT_FOUND, "Requested weather resource does not exist"),
}


def parse_retry_after_ms(response: httpx.Response) -> int | None:
    """Retry-After header in milliseconds, or None if absent, not an integer or negative."""
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        seconds = int(value.strip())
    except ValueError:
        return None
    return seconds * 1000 if seconds >= 0 else None


def _exhausted(last_status: int | None, last_error: Exception | None, attempts: int) -> Result:
    if last_status == 429:
        return Result.failure(
            FailureKind.RATE_LIMITED, "API rate limit exceeded, try again later", attempts
        )
    if last_status is not None:
        return Result.failure(
            FailureKind.SERVER_ERROR, f"Request failed: HTTP {last_status}", attempts
        )
    if isinstance(last_error, httpx.TimeoutException):
        return Result.failure(
            FailureKind.TIMEOUT, "Request timed out, check the network connection", attempts
        )
    return Result.failure(
        FailureKind.UNEXPECTED, f"Failed to fetch weather data: {last_error or 'unknown error'}", attempts
    )


def fetch_with_retry(
    call: Callable[[], httpx.Response],
    policy: RetryPolicy,
    sleep: Callable[[float], None] = time.sleep,
) -> Result:
    """
    Execute call with bounded retries and backoff.

    Retries rate limiting (429), server errors (500/502/503/504) and timeouts.
    Authorization failures, not-found, other statuses, unreachable hosts and
    unexpected exceptions end the loop at once.

    Args:
        call: Performs one request; may return a non-2xx response or raise
            httpx.HTTPStatusError for one
        policy: Attempt and delay bounds
        sleep: Blocking sleep taking seconds (injected by tests)

    Returns:
        Result holding the successful httpx.Response, or a classified failure
    """
    current_delay = policy.initial_delay_ms
    last_status: int | None = None
    last_error: Exception | None = None

    for attempt in range(1, policy.max_attempts + 1):
        has_next = attempt < policy.max_attempts

        try:
            response = call()
        except httpx.HTTPStatusError as e:
            response = e.response
        except httpx.TimeoutException as e:
            last_status, last_error = None, e
            logger.warning(f"Attempt {attempt}/{policy.max_attempts} timed out: {e}")
            if has_next:
                sleep(current_delay / 1000)
                current_delay = min(current_delay * 2, policy.max_delay_ms)
            continue
        except httpx.ConnectError as e:
            logger.error(f"Network unreachable: {e}")
            return Result.failure(
                FailureKind.NETWORK_UNREACHABLE,
                "Network connection failed, check the network settings",
                attempt,
            )
        except Exception as e:
            logger.error(f"Unexpected error on attempt {attempt}: {e}", exc_info=True)
            return Result.failure(
                FailureKind.UNEXPECTED, f"Failed to fetch weather data: {e}", attempt
            )

        status = response.status_code
        if response.is_success:
            logger.debug(f"Attempt {attempt} succeeded with HTTP {status}")
            return Result.success(response, attempt)

        last_status, last_error = status, None

        if status in _TERMINAL_STATUSES:
            kind, message = _TERMINAL_STATUSES[status]
            logger.error(f"HTTP {status}, not retrying: {message}")
            return Result.failure(kind, message, attempt)

        if status == 429:
            if has_next:
                delay = parse_retry_after_ms(response)
                if delay is None:
                    delay = min(current_delay * 2, policy.max_delay_ms)
                logger.warning(f"Rate limited (attempt {attempt}/{policy.max_attempts}), waiting {delay} ms")
                sleep(delay / 1000)
                current_delay = delay
            continue

        if status in constants.RETRYABLE_SERVER_STATUSES:
            logger.warning(f"Server error HTTP {status} (attempt {attempt}/{policy.max_attempts})")
            if has_next:
                sleep(current_delay / 1000)
                current_delay = min(current_delay * 2, policy.max_delay_ms)
            continue

        logger.error(f"HTTP {status}, not retrying")
        return Result.failure(FailureKind.HTTP_ERROR, f"Request failed: HTTP {status}", attempt)

    logger.error(f"All {policy.max_attempts} attempts failed")
    return _exhausted(last_status, last_error, policy.max_attempts)
