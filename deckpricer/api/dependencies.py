"""
FastAPI dependencies.

The application lifespan opens one shared httpx client on app.state;
requests that arrive without it (e.g. tests that skip the lifespan) get
a per-request client instead.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

import httpx
from fastapi import Depends, Request

from deckpricer.services.card_catalog import ScryfallCatalog
from deckpricer.services.deck_evaluator import DeckEvaluator
from deckpricer.services.price_aggregator import PriceAggregator


async def get_http_client(request: Request) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Yield the shared HTTP client, or a short-lived one if none is set up."""
    shared: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)
    if shared is not None:
        yield shared
        return

    async with httpx.AsyncClient(follow_redirects=True) as client:
        yield client


HttpClient = Annotated[httpx.AsyncClient, Depends(get_http_client)]


def get_catalog(client: HttpClient) -> ScryfallCatalog:
    return ScryfallCatalog(client)


def get_aggregator(client: HttpClient) -> PriceAggregator:
    return PriceAggregator(client=client)


def get_evaluator(
    catalog: Annotated[ScryfallCatalog, Depends(get_catalog)],
    aggregator: Annotated[PriceAggregator, Depends(get_aggregator)],
) -> DeckEvaluator:
    return DeckEvaluator(catalog, aggregator)
