"""
Retry with exponential backoff for single store calls.

Only rate-limited quotes are retried. Not-found and parse failures are
final on the first attempt, and timeouts are left to the transport.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from deckpricer.config import settings
from deckpricer.models.failure import FailureKind
from deckpricer.models.quote import StoreQuote

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


def is_rate_limited(quote: StoreQuote) -> bool:
    """Default retry predicate: only store-side throttling is retryable."""
    return quote.error is FailureKind.STORE_RATE_LIMITED


@dataclass(frozen=True)
class RetryPolicy:
    """
    Backoff settings for one store call.

    Attributes:
        max_retries: Retries after the first attempt (3 -> up to 4 calls)
        base_delay: Seconds to wait before the first retry
        multiplier: Factor applied to the delay after each retry
        is_retryable: Predicate deciding whether a quote warrants a retry
    """

    max_retries: int = 3
    base_delay: float = 1.0
    multiplier: float = 2.0
    is_retryable: Callable[[StoreQuote], bool] = is_rate_limited

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            max_retries=settings.retry_max_retries,
            base_delay=settings.retry_base_delay,
            multiplier=settings.retry_backoff_multiplier,
        )

    def delay_for(self, retry_index: int) -> float:
        """Delay before retry number retry_index (0-based): base, 2x, 4x, ..."""
        return self.base_delay * (self.multiplier**retry_index)


async def with_retry(
    call: Callable[[], Awaitable[StoreQuote]],
    policy: RetryPolicy,
    sleep: SleepFunc = asyncio.sleep,
) -> StoreQuote:
    """
    Run a store call, retrying retryable quotes with exponential backoff.

    Args:
        call: Zero-argument coroutine factory performing one store fetch
        policy: Retry settings
        sleep: Awaitable sleep, injectable for tests

    Returns:
        The first non-retryable quote, or the last retryable one once the
        retry bound is exhausted
    """
    retries = 0
    while True:
        quote = await call()

        if not policy.is_retryable(quote):
            return quote

        if retries >= policy.max_retries:
            logger.warning(
                "%s: still rate limited after %d retries, giving up", quote.store, retries
            )
            return quote

        delay = policy.delay_for(retries)
        logger.warning(
            "%s: rate limited, retrying in %.1fs (attempt %d/%d)",
            quote.store,
            delay,
            retries + 1,
            policy.max_retries,
        )
        await sleep(delay)
        retries += 1
