from __future__ import annotations

import asyncio

import httpx
import pytest

from truelayer.errors import DecodeError, TransportError
from truelayer.retry import (
    RetryPolicy,
    compute_backoff_delay,
    retry_async,
    should_retry_transport,
)

pytestmark = pytest.mark.unit

NO_SLEEP = RetryPolicy(max_attempts=3, initial_delay_s=0.0, jitter=False)


@pytest.mark.parametrize(
    ("kwargs", "field"),
    [
        ({"max_attempts": 0}, "max_attempts"),
        ({"initial_delay_s": -1}, "initial_delay_s"),
        ({"backoff_multiplier": 0}, "backoff_multiplier"),
        ({"max_delay_s": -1}, "max_delay_s"),
        ({"max_elapsed_s": -1}, "max_elapsed_s"),
    ],
)
def test_policy_rejects_invalid_values(kwargs, field) -> None:
    with pytest.raises(ValueError, match=field):
        RetryPolicy(**kwargs)


def test_backoff_grows_and_is_capped() -> None:
    policy = RetryPolicy(
        initial_delay_s=0.5, backoff_multiplier=2.0, max_delay_s=1.5, jitter=False
    )

    delays = [compute_backoff_delay(policy, retry_index=i) for i in (1, 2, 3, 4)]

    assert delays == [0.5, 1.0, 1.5, 1.5]


def test_jittered_backoff_stays_within_bounds() -> None:
    policy = RetryPolicy(initial_delay_s=1.0, jitter=True)

    for _ in range(50):
        assert 0.0 <= compute_backoff_delay(policy, retry_index=1) <= 1.0


def test_retry_classification() -> None:
    assert should_retry_transport(TransportError("t", retryable=True))
    assert not should_retry_transport(TransportError("t", retryable=False))
    assert should_retry_transport(httpx.ConnectError("refused"))
    assert should_retry_transport(TimeoutError())
    assert not should_retry_transport(asyncio.CancelledError())
    assert not should_retry_transport(DecodeError("bad payload"))


@pytest.mark.asyncio
async def test_transient_failures_are_retried_until_success() -> None:
    attempts = 0

    async def flaky() -> str:
        nonlocal attempts
        attempts += 1
        if attempts < 3:
            raise TransportError("reset", retryable=True)
        return "ok"

    assert await retry_async(flaky, policy=NO_SLEEP) == "ok"
    assert attempts == 3


@pytest.mark.asyncio
async def test_attempts_are_bounded() -> None:
    attempts = 0

    async def always_down() -> str:
        nonlocal attempts
        attempts += 1
        raise TransportError("down", retryable=True)

    with pytest.raises(TransportError):
        await retry_async(always_down, policy=NO_SLEEP)
    assert attempts == 3


@pytest.mark.asyncio
async def test_non_retryable_failure_is_raised_immediately() -> None:
    attempts = 0

    async def broken() -> str:
        nonlocal attempts
        attempts += 1
        raise DecodeError("bad payload")

    with pytest.raises(DecodeError):
        await retry_async(broken, policy=NO_SLEEP)
    assert attempts == 1


@pytest.mark.asyncio
async def test_single_attempt_policy_never_retries() -> None:
    attempts = 0

    async def down() -> str:
        nonlocal attempts
        attempts += 1
        raise TransportError("down", retryable=True)

    with pytest.raises(TransportError):
        await retry_async(down, policy=RetryPolicy.none())
    assert attempts == 1
