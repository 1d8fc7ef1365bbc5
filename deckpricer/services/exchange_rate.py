"""
USD -> CAD conversion for catalog prices.

The rate is fetched once at startup and kept for the lifetime of the
process. If the rate service cannot be reached the configured fallback
rate is used instead; there is no refresh cycle.
"""

import logging
from dataclasses import dataclass

import httpx

from deckpricer.config import settings

logger = logging.getLogger(__name__)

SOURCE_LIVE = "live"
SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True, slots=True)
class ExchangeRate:
    """A USD -> CAD rate and where it came from."""

    usd_to_cad: float
    source: str = SOURCE_FALLBACK

    def to_cad(self, usd: float) -> float:
        return usd * self.usd_to_cad


def fallback_rate() -> ExchangeRate:
    return ExchangeRate(usd_to_cad=settings.default_usd_to_cad, source=SOURCE_FALLBACK)


# Process-wide rate, replaced once by load_exchange_rate()
_current_rate: ExchangeRate = fallback_rate()


async def fetch_exchange_rate(client: httpx.AsyncClient | None = None) -> ExchangeRate:
    """
    Fetch the live USD -> CAD rate.

    Returns the fallback rate on any failure or if the response has no
    usable CAD rate.
    """
    url = settings.exchange_rate_url

    try:
        if client:
            response = await client.get(url)
        else:
            async with httpx.AsyncClient(timeout=10.0) as own_client:
                response = await own_client.get(url)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(
            "Failed to fetch exchange rate, using default %.2f: %s",
            settings.default_usd_to_cad,
            e,
        )
        return fallback_rate()

    rate = (data.get("rates") or {}).get("CAD") if isinstance(data, dict) else None
    if not isinstance(rate, (int, float)) or isinstance(rate, bool) or rate <= 0:
        logger.warning(
            "Exchange rate response had no CAD rate, using default %.2f",
            settings.default_usd_to_cad,
        )
        return fallback_rate()

    logger.info("Updated USD to CAD rate: %s", rate)
    return ExchangeRate(usd_to_cad=float(rate), source=SOURCE_LIVE)


async def load_exchange_rate(client: httpx.AsyncClient | None = None) -> ExchangeRate:
    """Fetch the rate and install it as the process-wide rate."""
    global _current_rate
    _current_rate = await fetch_exchange_rate(client)
    return _current_rate


def get_exchange_rate() -> ExchangeRate:
    """Current process-wide rate (the fallback until load_exchange_rate runs)."""
    return _current_rate


def format_price_cad(usd_price: float | None, rate: ExchangeRate | None = None) -> str | None:
    """
    Format a USD catalog price as CAD, e.g. "$1.35 CAD".

    Returns None for missing, zero or negative prices.
    """
    if usd_price is None or usd_price <= 0:
        return None
    rate = rate or get_exchange_rate()
    return f"${rate.to_cad(usd_price):.2f} CAD"
