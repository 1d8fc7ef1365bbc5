"""
Scryfall card catalog client.

Read-only lookups against the Scryfall API:
- all printings of an exact card name
- fuzzy single-card lookup
- name autocomplete

Failures (network errors, non-success status, 404) are logged and
returned as "no data" so one bad lookup never aborts a batch.

API docs: https://scryfall.com/docs/api
"""

import asyncio
import logging
from typing import Any

import httpx

from deckpricer.config import settings
from deckpricer.models.printing import CardPrinting
from deckpricer.parsers.scryfall import parse_printing

logger = logging.getLogger(__name__)

# Autocomplete queries shorter than this are not sent
MIN_AUTOCOMPLETE_LENGTH = 2


class ScryfallCatalog:
    """
    Async Scryfall client.

    Usage:
        async with httpx.AsyncClient() as client:
            catalog = ScryfallCatalog(client)
            printings = await catalog.search_printings("Lightning Bolt")
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        page_delay: float | None = None,
    ) -> None:
        self._client = client
        self.base_url = (base_url or settings.scryfall_api_url).rstrip("/")
        self.page_delay = settings.scryfall_page_delay if page_delay is None else page_delay

    async def _get_json(self, url: str, params: dict[str, str] | None = None) -> Any | None:
        """GET a Scryfall endpoint, returning parsed JSON or None on any failure."""
        headers = {"User-Agent": settings.catalog_user_agent, "Accept": "application/json"}

        try:
            if self._client:
                response = await self._client.get(url, params=params, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=30.0) as client:
                    response = await client.get(url, params=params, headers=headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code != httpx.codes.NOT_FOUND:
                logger.warning("Scryfall HTTP %d for %s", e.response.status_code, url)
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Scryfall request failed for %s: %s", url, e)
            return None

    async def search_printings(self, card_name: str) -> list[CardPrinting]:
        """
        Fetch every printing of an exact card name, in catalog order.

        Follows pagination. Returns an empty list if the card is unknown
        or the catalog cannot be reached.
        """
        url: str | None = f"{self.base_url}/cards/search"
        params: dict[str, str] | None = {"q": f'!"{card_name}"', "unique": "prints"}
        printings: list[CardPrinting] = []

        while url:
            data = await self._get_json(url, params)
            if not isinstance(data, dict):
                break

            for card in data.get("data", []):
                try:
                    printings.append(parse_printing(card))
                except KeyError as e:
                    logger.warning("Skipping malformed printing of %s: missing %s", card_name, e)

            url = data.get("next_page") if data.get("has_more") else None
            params = None  # Next page URL includes params
            if url:
                await asyncio.sleep(self.page_delay)

        logger.debug("Found %d printings for %s", len(printings), card_name)
        return printings

    async def fuzzy_lookup(self, card_name: str) -> CardPrinting | None:
        """Resolve a possibly misspelled name to Scryfall's best-match printing."""
        data = await self._get_json(f"{self.base_url}/cards/named", {"fuzzy": card_name})
        if not isinstance(data, dict):
            return None
        try:
            return parse_printing(data)
        except KeyError as e:
            logger.warning("Malformed fuzzy match for %s: missing %s", card_name, e)
            return None

    async def autocomplete(self, query: str) -> list[str]:
        """Card name suggestions for a partial name."""
        query = query.strip()
        if len(query) < MIN_AUTOCOMPLETE_LENGTH:
            return []

        data = await self._get_json(f"{self.base_url}/cards/autocomplete", {"q": query})
        if not isinstance(data, dict):
            return []
        return [str(name) for name in data.get("data", [])]
