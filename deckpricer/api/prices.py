"""
Store pricing endpoints.

One endpoint per store, addressed by the product handle segments the
store's template declares:

    /api/price/f2f/{card}/{number}[/promo-pack][/{variant}]/{set-name}
    /api/price/hoc/{card}[/promo-pack][/{variant}]/{set-name}
    /api/price/401games/{card}[/promo-pack][/{variant}]/{set-code}

Each call is a single fetch with no retry; a rate-limited store answers
429 so the caller can back off.
"""

from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from deckpricer.api.dependencies import get_http_client
from deckpricer.models.failure import FailureKind
from deckpricer.scrapers.base import StoreAdapter
from deckpricer.scrapers.stores import STORES

router = APIRouter(prefix="/api/price", tags=["prices"])

# HTTP status for each store-level failure
FAILURE_STATUS: dict[FailureKind, int] = {
    FailureKind.STORE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.STORE_TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    FailureKind.STORE_RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    FailureKind.STORE_PARSE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    FailureKind.STORE_UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class PriceResponse(BaseModel):
    """A store's price for one product."""

    price: float
    currency: str
    store: str
    url: str


class PriceErrorResponse(BaseModel):
    """A store-level pricing failure."""

    error: str
    message: str | None = None
    url: str | None = None


async def get_store_price(
    store: StoreAdapter,
    locator_path: str,
    client: httpx.AsyncClient,
) -> PriceResponse | JSONResponse:
    """
    Fetch the live price of one product at one store.

    Returns 400 for a handle that does not fit the store's template.
    """
    segments = tuple(locator_path.strip("/").split("/"))
    try:
        locator = store.locator_from_segments(segments)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None

    quote = await store.fetch_quote(locator, client)

    if quote.price is not None:
        return PriceResponse(
            price=quote.price,
            currency=quote.currency,
            store=store.name,
            url=quote.url,
        )

    error = quote.error or FailureKind.STORE_UNAVAILABLE
    body = PriceErrorResponse(error=error.value, message=quote.message, url=quote.url)
    return JSONResponse(status_code=FAILURE_STATUS[error], content=body.model_dump())


def _store_endpoint(store: StoreAdapter):
    async def endpoint(
        locator_path: str,
        client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    ) -> PriceResponse | JSONResponse:
        return await get_store_price(store, locator_path, client)

    endpoint.__name__ = f"get_{store.key.replace('-', '_')}_price"
    endpoint.__doc__ = f"Fetch the live price of one product at {store.name}."
    return endpoint


for _store in STORES:
    router.add_api_route(
        f"/{_store.key}/{{locator_path:path}}",
        _store_endpoint(_store),
        methods=["GET"],
        response_model=PriceResponse,
        responses={
            404: {"model": PriceErrorResponse},
            429: {"model": PriceErrorResponse},
            500: {"model": PriceErrorResponse},
            504: {"model": PriceErrorResponse},
        },
        summary=f"{_store.name} price",
    )
