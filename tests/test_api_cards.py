"""Tests for card, deck and health endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from deckpricer.api.dependencies import get_aggregator, get_catalog, get_evaluator
from deckpricer.main import app
from deckpricer.models.failure import FailureKind
from deckpricer.models.quote import PriceAggregate, StoreQuote, select_cheapest
from deckpricer.scrapers.stores import STORES
from deckpricer.services.deck_evaluator import DeckEvaluator

URL = "https://houseofcards.ca/products/lightning-bolt-magic-2010"


def priced_aggregate(printing) -> PriceAggregate:
    quotes = {
        "f2f": StoreQuote.failed("f2f", URL, FailureKind.STORE_NOT_FOUND),
        "hoc": StoreQuote.priced("hoc", URL, 1.99),
        "401games": StoreQuote.priced("401games", URL, 2.49),
    }
    return PriceAggregate(printing=printing, quotes=quotes, cheapest=select_cheapest(quotes.values()))


@pytest.fixture
def catalog(make_printing):
    """Catalog that only knows Lightning Bolt."""
    bolt = make_printing(price_usd=2.0, image_url="https://cards.scryfall.io/normal/bolt.jpg")
    mock = MagicMock()
    mock.fuzzy_lookup = AsyncMock(side_effect=lambda name: bolt if "bolt" in name.lower() else None)
    mock.search_printings = AsyncMock(
        side_effect=lambda name: [bolt, make_printing(set_code="lea", set_name="Alpha", price_usd=None)]
        if name == "Lightning Bolt"
        else []
    )
    mock.autocomplete = AsyncMock(return_value=["Lightning Bolt", "Lightning Helix"])
    return mock


@pytest.fixture
def aggregator():
    mock = MagicMock()
    mock.stores = STORES
    mock.price_printing = AsyncMock(side_effect=priced_aggregate)
    return mock


@pytest.fixture
async def client(catalog, aggregator):
    """Provide an async test client with the catalog and stores mocked out."""
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_aggregator] = lambda: aggregator
    app.dependency_overrides[get_evaluator] = lambda: DeckEvaluator(
        catalog, aggregator, line_delay=0, sleep=AsyncMock()
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class TestCardSearchEndpoint:
    async def test_search(self, client: AsyncClient) -> None:
        """Search returns the chosen printing, store quotes and the cheapest offer."""
        response = await client.get("/api/cards/search", params={"name": "lightning bolt"})

        assert response.status_code == 200
        data = response.json()
        assert data["printing"]["set_code"] == "m10"
        assert data["printing"]["price_cad"] == "$2.70 CAD"
        assert data["printing"]["frame_variant"] == "none"
        assert data["cheapest"]["store"] == "hoc"
        assert data["cheapest"]["store_name"] == "House of Cards"
        assert data["quotes"]["f2f"]["error"] == "store_not_found"
        assert [p["set_code"] for p in data["printings"]] == ["m10", "lea"]

    async def test_unknown_card(self, client: AsyncClient) -> None:
        """Unknown names are 404 with a catalog_not_found error."""
        response = await client.get("/api/cards/search", params={"name": "zzzz"})

        assert response.status_code == 404
        assert response.json()["error"] == "catalog_not_found"

    async def test_exclude_special(self, client: AsyncClient, catalog, make_printing) -> None:
        """With exclude_special, a cheaper showcase printing is passed over."""
        bolt = await catalog.fuzzy_lookup("bolt")
        showcase = make_printing(set_code="mh3", frame_effects=("showcase",), price_usd=0.5)
        catalog.search_printings.side_effect = None
        catalog.search_printings.return_value = [showcase, bolt]

        response = await client.get(
            "/api/cards/search", params={"name": "lightning bolt", "exclude_special": "true"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["printing"]["set_code"] == "m10"
        assert [p["set_code"] for p in data["printings"]] == ["mh3", "m10"]

    async def test_exclude_special_no_standard(
        self, client: AsyncClient, catalog, make_printing
    ) -> None:
        """Only special printings with exclude_special is a 404."""
        catalog.search_printings.side_effect = None
        catalog.search_printings.return_value = [
            make_printing(set_code="mh3", frame_effects=("showcase",), price_usd=0.5)
        ]

        response = await client.get(
            "/api/cards/search", params={"name": "lightning bolt", "exclude_special": "true"}
        )

        assert response.status_code == 404
        assert response.json()["error"] == "no_standard_printings"

    async def test_name_required(self, client: AsyncClient) -> None:
        """A missing name is a validation error."""
        response = await client.get("/api/cards/search")
        assert response.status_code == 422


class TestAutocompleteEndpoint:
    async def test_suggestions(self, client: AsyncClient) -> None:
        """Suggestions are returned for the query."""
        response = await client.get("/api/cards/autocomplete", params={"q": "light"})

        assert response.status_code == 200
        assert response.json() == {
            "query": "light",
            "suggestions": ["Lightning Bolt", "Lightning Helix"],
        }


class TestDeckEvaluateEndpoint:
    async def test_evaluate(self, client: AsyncClient) -> None:
        """One row per surviving line, in order, with store totals."""
        response = await client.post(
            "/api/decks/evaluate",
            json={"deck_list": "4x Lightning Bolt\n2 Lightning Blot\n20 Mountain"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [r["name"] for r in data["results"]] == ["Lightning Bolt", "Lightning Blot"]
        assert data["results"][0]["line_total"] == pytest.approx(4 * 1.99)
        assert data["results"][1]["error"] == "catalog_not_found"
        assert data["results"][1]["error_message"] == "Card not found"
        assert data["store_totals"] == pytest.approx(
            {"f2f": 0.0, "hoc": 4 * 1.99, "401games": 4 * 2.49}
        )
        assert data["cheapest_total"] == pytest.approx(4 * 1.99)

    async def test_include_basic_lands(self, client: AsyncClient, catalog) -> None:
        """Basic lands get a row when the filter is off."""
        response = await client.post(
            "/api/decks/evaluate",
            json={"deck_list": "20 Mountain", "exclude_basic_lands": False},
        )

        assert response.status_code == 200
        assert response.json()["count"] == 1
        catalog.search_printings.assert_awaited_once_with("Mountain")

    async def test_empty_deck_list(self, client: AsyncClient) -> None:
        """A deck list with no cards is rejected."""
        response = await client.post("/api/decks/evaluate", json={"deck_list": "\n  \n"})
        assert response.status_code == 400


class TestHealthEndpoint:
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Liveness probe reports the exchange rate in use."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "usd_to_cad": 1.35,
            "rate_source": "fallback",
            "stores": ["f2f", "hoc", "401games"],
        }
