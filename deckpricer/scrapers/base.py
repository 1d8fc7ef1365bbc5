"""
Store adapter base.

An adapter knows how to address a printing at one store (pure, via its
StoreTemplate) and how to turn that store's product page into a
StoreQuote. fetch_quote never raises for store-side problems: 404, 429,
timeouts, transport errors and unparseable pages all come back as failed
quotes with a distinct FailureKind.
"""

import logging
from abc import ABC, abstractmethod

import httpx

from deckpricer.config import settings
from deckpricer.models.failure import FailureKind
from deckpricer.models.printing import CardPrinting
from deckpricer.models.quote import DEFAULT_CURRENCY, StoreQuote
from deckpricer.scrapers.extraction import find_condition_price, find_price_in_html
from deckpricer.services.product_locator import (
    ProductLocator,
    StoreTemplate,
    build_locator,
    locator_from_segments,
    resolve_identity,
)

logger = logging.getLogger(__name__)

PAGE_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


def page_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent, **PAGE_HEADERS}


class StoreAdapter(ABC):
    """Pricing adapter for one storefront."""

    def __init__(
        self,
        template: StoreTemplate,
        name: str,
        short_name: str,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self.template = template
        self.name = name
        self.short_name = short_name
        self.currency = currency

    @property
    def key(self) -> str:
        return self.template.store

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key!r})"

    def resolve_product_locator(self, printing: CardPrinting) -> ProductLocator:
        """Build this store's product locator for a printing."""
        return build_locator(resolve_identity(printing, self.template), self.template)

    def locator_from_segments(self, segments: tuple[str, ...]) -> ProductLocator:
        """Rebuild a locator from pricing API path segments."""
        return locator_from_segments(segments, self.template)

    @abstractmethod
    def extract_price(self, html: str) -> float | None:
        """Extract the price from a fetched product page."""

    async def fetch_quote(
        self,
        locator: ProductLocator,
        client: httpx.AsyncClient | None = None,
    ) -> StoreQuote:
        """
        Fetch the product page and extract a quote.

        Args:
            locator: Product locator for this store
            client: Optional httpx client for connection reuse

        Returns:
            Priced quote, or a failed quote classified by cause
        """
        url = locator.url
        logger.debug("Fetching %s: %s", self.short_name, url)

        try:
            if client:
                response = await client.get(
                    url,
                    headers=page_headers(),
                    timeout=settings.store_request_timeout,
                    follow_redirects=True,
                )
            else:
                async with httpx.AsyncClient(
                    timeout=settings.store_request_timeout, follow_redirects=True
                ) as own_client:
                    response = await own_client.get(url, headers=page_headers())
        except httpx.TimeoutException:
            logger.warning("%s timeout: %s", self.short_name, url)
            return StoreQuote.failed(self.key, url, FailureKind.STORE_TIMEOUT)
        except httpx.HTTPError as e:
            logger.warning("%s request error: %s", self.short_name, e)
            return StoreQuote.failed(self.key, url, FailureKind.STORE_UNAVAILABLE, str(e))

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info("%s: card not found at store: %s", self.short_name, url)
            return StoreQuote.failed(self.key, url, FailureKind.STORE_NOT_FOUND)

        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            return StoreQuote.failed(self.key, url, FailureKind.STORE_RATE_LIMITED)

        if not response.is_success:
            logger.warning("%s: HTTP %d for %s", self.short_name, response.status_code, url)
            return StoreQuote.failed(
                self.key,
                url,
                FailureKind.STORE_UNAVAILABLE,
                f"HTTP {response.status_code}",
            )

        price = self.extract_price(response.text)
        if price is None:
            logger.info("%s: no price found on page %s", self.short_name, url)
            return StoreQuote.failed(self.key, url, FailureKind.STORE_PARSE_FAILURE)

        return StoreQuote.priced(self.key, url, price, self.currency)


class SelectorStoreAdapter(StoreAdapter):
    """Store whose product pages render the price in common price elements."""

    def extract_price(self, html: str) -> float | None:
        return find_price_in_html(html)


class ConditionVariantStoreAdapter(StoreAdapter):
    """Store whose product pages list one variant per card condition."""

    def extract_price(self, html: str) -> float | None:
        return find_condition_price(html)
