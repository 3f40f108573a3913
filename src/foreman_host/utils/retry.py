# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

import time
from typing import Callable, TypeVar

from foreman_host.api.errors import ForemanAPIError

T = TypeVar("T")


def call_with_retry(
    fn: Callable[[], T],
    *,
    retries: int,
    delay: float = 0,
    retry_on: tuple[type[Exception], ...] = (ForemanAPIError,),
    on_retry: Callable[[int, Exception], None] | None = None,
) -> T:
    """
    Call *fn* until it succeeds or the attempt budget is spent.

    retries: number of attempts (0 still makes one attempt)
    delay: seconds between attempts, no backoff
    retry_on: exception types to retry
    on_retry: callback(attempt, exception) after each failed attempt

    The last failure is re-raised unchanged once the budget is spent.
    Callers that resend one prepared request must only do so when the
    request body is safe to replay.
    """
    attempts = max(retries, 1)
    for attempt in range(1, attempts + 1):
        try:
            return fn()
        except retry_on as exc:
            if on_retry:
                on_retry(attempt, exc)
            if attempt == attempts:
                raise
            if delay:
                time.sleep(delay)
    raise AssertionError("unreachable")
