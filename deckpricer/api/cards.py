"""
Card API endpoints.

Single-card search (resolve a typed name and price its cheapest
printing at every store) and name autocomplete.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from deckpricer.api.dependencies import get_aggregator, get_catalog
from deckpricer.models.printing import CardPrinting
from deckpricer.models.quote import StoreQuote
from deckpricer.scrapers.stores import format_store_name
from deckpricer.services.card_catalog import ScryfallCatalog
from deckpricer.services.card_search import search_card
from deckpricer.services.exchange_rate import format_price_cad
from deckpricer.services.frame_variant import detect_frame_variant, is_promo_pack
from deckpricer.services.price_aggregator import PriceAggregator

router = APIRouter(prefix="/api/cards", tags=["cards"])


class PrintingResponse(BaseModel):
    """One printing of a card."""

    name: str
    set_code: str
    set_name: str
    collector_number: str
    frame_variant: str
    promo_pack: bool
    price_usd: float | None = None
    price_cad: str | None = None
    image_url: str | None = None
    scryfall_id: str | None = None


class QuoteResponse(BaseModel):
    """One store's answer for a printing."""

    store: str
    store_name: str
    url: str
    price: float | None = None
    currency: str
    error: str | None = None
    message: str | None = None


class CardSearchResponse(BaseModel):
    """Response model for a single-card search."""

    query: str
    printing: PrintingResponse
    quotes: dict[str, QuoteResponse] = Field(default_factory=dict)
    cheapest: QuoteResponse | None = None
    printings: list[PrintingResponse] = Field(default_factory=list)


class AutocompleteResponse(BaseModel):
    """Card name suggestions."""

    query: str
    suggestions: list[str]


def printing_to_response(printing: CardPrinting) -> PrintingResponse:
    return PrintingResponse(
        name=printing.name,
        set_code=printing.set_code,
        set_name=printing.set_name,
        collector_number=printing.collector_number,
        frame_variant=detect_frame_variant(printing).value,
        promo_pack=is_promo_pack(printing),
        price_usd=printing.price_usd,
        price_cad=format_price_cad(printing.price_usd),
        image_url=printing.image_url,
        scryfall_id=printing.scryfall_id,
    )


def quote_to_response(quote: StoreQuote) -> QuoteResponse:
    return QuoteResponse(
        store=quote.store,
        store_name=format_store_name(quote.store),
        url=quote.url,
        price=quote.price,
        currency=quote.currency,
        error=quote.error.value if quote.error else None,
        message=quote.message,
    )


@router.get("/search", response_model=CardSearchResponse)
async def search(
    name: Annotated[str, Query(min_length=1)],
    catalog: Annotated[ScryfallCatalog, Depends(get_catalog)],
    aggregator: Annotated[PriceAggregator, Depends(get_aggregator)],
    exclude_special: bool = False,
) -> CardSearchResponse:
    """
    Search a card and price its cheapest printing at every store.

    Returns 404 if the name matches no card.
    """
    result = await search_card(name, catalog, aggregator, exclude_special=exclude_special)
    aggregate = result.aggregate

    return CardSearchResponse(
        query=result.query,
        printing=printing_to_response(result.printing),
        quotes={key: quote_to_response(q) for key, q in aggregate.quotes.items()},
        cheapest=quote_to_response(aggregate.cheapest) if aggregate.cheapest else None,
        printings=[printing_to_response(p) for p in result.printings],
    )


@router.get("/autocomplete", response_model=AutocompleteResponse)
async def autocomplete(
    catalog: Annotated[ScryfallCatalog, Depends(get_catalog)],
    q: str = "",
) -> AutocompleteResponse:
    """Card name suggestions; queries under two characters return nothing."""
    suggestions = await catalog.autocomplete(q)
    return AutocompleteResponse(query=q, suggestions=suggestions)
