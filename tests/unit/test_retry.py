import httpx
import pytest

from construction_log_reporter.models import FailureKind, RetryPolicy
from construction_log_reporter.network.retry import fetch_with_retry, parse_retry_after_ms


class ScriptedCall:
    """Returns (or raises) the scripted outcomes in order, counting calls."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    def __call__(self):
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class SleepRecorder:
    def __init__(self):
        self.delays_ms = []

    def __call__(self, seconds):
        self.delays_ms.append(round(seconds * 1000))


POLICY = RetryPolicy(max_attempts=3, initial_delay_ms=1000, max_delay_ms=10000)


def test_success_on_first_attempt_does_not_sleep():
    call = ScriptedCall(httpx.Response(200, json={"status": "ok"}))
    sleep = SleepRecorder()

    result = fetch_with_retry(call, POLICY, sleep=sleep)

    assert result.ok
    assert result.value.status_code == 200
    assert result.attempts == 1
    assert call.calls == 1
    assert sleep.delays_ms == []


def test_rate_limit_uses_retry_after_header():
    call = ScriptedCall(
        httpx.Response(429, headers={"Retry-After": "5"}),
        httpx.Response(429, headers={"Retry-After": "5"}),
        httpx.Response(200),
    )
    sleep = SleepRecorder()

    result = fetch_with_retry(call, POLICY, sleep=sleep)

    assert result.ok
    assert result.attempts == 3
    assert sleep.delays_ms == [5000, 5000]


def test_rate_limit_without_header_doubles_delay():
    call = ScriptedCall(httpx.Response(429), httpx.Response(429), httpx.Response(200))
    sleep = SleepRecorder()

    result = fetch_with_retry(call, POLICY, sleep=sleep)

    assert result.ok
    assert sleep.delays_ms == [2000, 4000]


def test_rate_limit_with_negative_retry_after_doubles_delay():
    call = ScriptedCall(httpx.Response(429, headers={"Retry-After": "-1"}), httpx.Response(200))
    sleep = SleepRecorder()

    result = fetch_with_retry(call, RetryPolicy(max_attempts=2), sleep=sleep)

    assert result.ok
    assert result.attempts == 2
    assert sleep.delays_ms == [2000]


def test_rate_limit_exhausted_is_tagged_rate_limited():
    call = ScriptedCall(httpx.Response(429))
    sleep = SleepRecorder()

    result = fetch_with_retry(call, POLICY, sleep=sleep)

    assert not result.ok
    assert result.kind == FailureKind.RATE_LIMITED
    assert call.calls == 3
    assert len(sleep.delays_ms) == 2


@pytest.mark.parametrize(
    "status, kind",
    [
        (401, FailureKind.UNAUTHORIZED),
        (403, FailureKind.FORBIDDEN),
        (404, FailureKind.NOT_FOUND),
    ],
)
def test_terminal_statuses_are_not_retried(status, kind):
    call = ScriptedCall(httpx.Response(status))
    sleep = SleepRecorder()

    result = fetch_with_retry(call, POLICY, sleep=sleep)

    assert not result.ok
    assert result.kind == kind
    assert call.calls == 1
    assert sleep.delays_ms == []


def test_terminal_messages_are_distinct():
    messages = {
        fetch_with_retry(ScriptedCall(httpx.Response(status)), POLICY, sleep=SleepRecorder()).message
        for status in (401, 403, 404, 429, 503)
    }
    assert len(messages) == 5


def test_server_error_exhaustion_backs_off_exponentially():
    call = ScriptedCall(httpx.Response(503))
    sleep = SleepRecorder()
    policy = RetryPolicy(max_attempts=4, initial_delay_ms=1000, max_delay_ms=3000)

    result = fetch_with_retry(call, policy, sleep=sleep)

    assert not result.ok
    assert result.kind == FailureKind.SERVER_ERROR
    assert "503" in result.message
    assert call.calls == 4
    assert sleep.delays_ms == [1000, 2000, 3000]


def test_server_error_three_attempts():
    call = ScriptedCall(httpx.Response(503))
    sleep = SleepRecorder()

    result = fetch_with_retry(call, POLICY, sleep=sleep)

    assert not result.ok
    assert result.attempts == 3
    assert call.calls == 3
    assert sleep.delays_ms == [1000, 2000]


def test_server_error_then_success():
    call = ScriptedCall(httpx.Response(502), httpx.Response(200))
    sleep = SleepRecorder()

    result = fetch_with_retry(call, POLICY, sleep=sleep)

    assert result.ok
    assert result.attempts == 2
    assert sleep.delays_ms == [1000]


def test_other_status_is_terminal_with_code_in_message():
    call = ScriptedCall(httpx.Response(418))

    result = fetch_with_retry(call, POLICY, sleep=SleepRecorder())

    assert not result.ok
    assert result.kind == FailureKind.HTTP_ERROR
    assert "418" in result.message
    assert call.calls == 1


def test_timeout_is_retried_then_reported():
    call = ScriptedCall(httpx.ReadTimeout("read timed out"))
    sleep = SleepRecorder()

    result = fetch_with_retry(call, POLICY, sleep=sleep)

    assert not result.ok
    assert result.kind == FailureKind.TIMEOUT
    assert call.calls == 3
    assert sleep.delays_ms == [1000, 2000]


def test_timeout_then_success():
    call = ScriptedCall(httpx.ConnectTimeout("connect timed out"), httpx.Response(200))

    result = fetch_with_retry(call, POLICY, sleep=SleepRecorder())

    assert result.ok
    assert result.attempts == 2


def test_unreachable_host_is_not_retried():
    call = ScriptedCall(httpx.ConnectError("Name or service not known"))
    sleep = SleepRecorder()

    result = fetch_with_retry(call, POLICY, sleep=sleep)

    assert not result.ok
    assert result.kind == FailureKind.NETWORK_UNREACHABLE
    assert call.calls == 1
    assert sleep.delays_ms == []


def test_unexpected_exception_stops_loop():
    call = ScriptedCall(RuntimeError("boom"), httpx.Response(200))

    result = fetch_with_retry(call, POLICY, sleep=SleepRecorder())

    assert not result.ok
    assert result.kind == FailureKind.UNEXPECTED
    assert "boom" in result.message
    assert call.calls == 1


def test_http_status_error_is_classified_by_response():
    request = httpx.Request("GET", "https://api.example.com/weather")
    response = httpx.Response(401, request=request)
    call = ScriptedCall(httpx.HTTPStatusError("unauthorized", request=request, response=response))

    result = fetch_with_retry(call, POLICY, sleep=SleepRecorder())

    assert result.kind == FailureKind.UNAUTHORIZED
    assert call.calls == 1


def test_single_attempt_policy_never_sleeps():
    call = ScriptedCall(httpx.Response(500))
    sleep = SleepRecorder()

    result = fetch_with_retry(call, RetryPolicy(max_attempts=1), sleep=sleep)

    assert result.kind == FailureKind.SERVER_ERROR
    assert sleep.delays_ms == []


@pytest.mark.parametrize(
    "headers, expected",
    [
        ({"Retry-After": "7"}, 7000),
        ({"Retry-After": " 2 "}, 2000),
        ({"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"}, None),
        ({"Retry-After": "-1"}, None),
        ({}, None),
    ],
)
def test_parse_retry_after_ms(headers, expected):
    assert parse_retry_after_ms(httpx.Response(429, headers=headers)) == expected
