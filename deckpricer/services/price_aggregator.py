"""
Price aggregation across stores.

All stores are queried concurrently for one printing. Each store call is
wrapped in the retry policy independently, so a store that keeps
rate-limiting only delays its own quote. Every store ends up with an
entry in the result, priced or failed.
"""

import asyncio
import logging
from collections.abc import Sequence

import httpx

from deckpricer.models.printing import CardPrinting
from deckpricer.models.quote import PriceAggregate, StoreQuote, select_cheapest
from deckpricer.scrapers.base import StoreAdapter
from deckpricer.scrapers.stores import STORES
from deckpricer.services.retry import RetryPolicy, SleepFunc, with_retry

logger = logging.getLogger(__name__)


class PriceAggregator:
    """
    Queries every configured store for one printing.

    Args:
        stores: Store adapters in tie-break order
        retry_policy: Backoff for rate-limited store calls
        client: Optional shared httpx client
        sleep: Awaitable sleep used between retries
    """

    def __init__(
        self,
        stores: Sequence[StoreAdapter] = STORES,
        retry_policy: RetryPolicy | None = None,
        client: httpx.AsyncClient | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self.stores = tuple(stores)
        self.retry_policy = retry_policy or RetryPolicy.from_settings()
        self._client = client
        self._sleep = sleep

    async def quote_store(self, store: StoreAdapter, printing: CardPrinting) -> StoreQuote:
        """Price a printing at one store, retrying on rate limits."""
        locator = store.resolve_product_locator(printing)
        return await with_retry(
            lambda: store.fetch_quote(locator, self._client),
            self.retry_policy,
            self._sleep,
        )

    async def price_printing(self, printing: CardPrinting) -> PriceAggregate:
        """
        Price one printing at every store concurrently.

        Returns:
            PriceAggregate with a quote per store and the cheapest offer
            (None when no store produced a price)
        """
        quotes = await asyncio.gather(
            *(self.quote_store(store, printing) for store in self.stores)
        )

        by_store = {store.key: quote for store, quote in zip(self.stores, quotes, strict=True)}
        cheapest = select_cheapest(quotes)

        if cheapest is None:
            logger.info("%s: no prices found at any store", printing.display_printing)
        else:
            logger.info(
                "%s: cheapest %.2f %s at %s (%d/%d stores priced)",
                printing.display_printing,
                cheapest.price,
                cheapest.currency,
                cheapest.store,
                sum(1 for q in quotes if q.has_price),
                len(quotes),
            )

        return PriceAggregate(printing=printing, quotes=by_store, cheapest=cheapest)
