from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from deckpricer.models.printing import CardPrinting
from deckpricer.services import exchange_rate as exchange_rate_module

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def reset_exchange_rate():
    """Restore the process-wide exchange rate between tests."""
    exchange_rate_module._current_rate = exchange_rate_module.fallback_rate()
    yield
    exchange_rate_module._current_rate = exchange_rate_module.fallback_rate()


@pytest.fixture
def make_printing() -> Callable[..., CardPrinting]:
    """Factory for CardPrinting values with sensible defaults."""

    def _make(**overrides: Any) -> CardPrinting:
        fields: dict[str, Any] = {
            "name": "Lightning Bolt",
            "set_code": "m10",
            "set_name": "Magic 2010",
            "collector_number": "146",
            "frame": "2003",
            "border_color": "black",
            "price_usd": 1.50,
        }
        fields.update(overrides)
        return CardPrinting(**fields)

    return _make


@pytest.fixture
def scryfall_card() -> dict[str, Any]:
    """Scryfall card object for a plain printing."""
    return {
        "object": "card",
        "id": "e3285e6b-3e79-4d7c-bf96-d920f973b122",
        "name": "Lightning Bolt",
        "set": "m10",
        "set_name": "Magic 2010",
        "collector_number": "146",
        "frame": "2003",
        "border_color": "black",
        "frame_effects": [],
        "promo_types": [],
        "prices": {"usd": "1.50", "usd_foil": "4.25", "eur": None},
        "image_uris": {
            "small": "https://cards.scryfall.io/small/front/e/3/e3285e6b.jpg",
            "normal": "https://cards.scryfall.io/normal/front/e/3/e3285e6b.jpg",
        },
    }


@pytest.fixture
def store_page() -> Callable[[str], str]:
    """Load a stored product page from tests/fixtures."""

    def _load(name: str) -> str:
        return (FIXTURES / name).read_text()

    return _load
