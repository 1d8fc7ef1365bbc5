"""
Health check endpoint.

Liveness probe reporting the USD -> CAD rate the service is using.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from deckpricer.scrapers.stores import store_keys
from deckpricer.services.exchange_rate import get_exchange_rate

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    usd_to_cad: float
    rate_source: str
    stores: list[str]


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not contact the stores or the card catalog.
    """
    rate = get_exchange_rate()
    return HealthResponse(
        status="healthy",
        usd_to_cad=rate.usd_to_cad,
        rate_source=rate.source,
        stores=store_keys(),
    )
