"""Tests for the single-card search flow."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from deckpricer.models.failure import CatalogNotFoundError, NoStandardPrintingsError
from deckpricer.models.quote import PriceAggregate
from deckpricer.services.card_search import search_card


@pytest.fixture
def aggregator():
    mock = MagicMock()
    mock.price_printing = AsyncMock(
        side_effect=lambda p: PriceAggregate(printing=p, quotes={}, cheapest=None)
    )
    return mock


class TestSearchCard:
    async def test_prices_cheapest_printing(self, make_printing, aggregator) -> None:
        """The cheapest printing of the fuzzy match is priced."""
        match = make_printing(set_code="m10", price_usd=1.50)
        catalog = MagicMock()
        catalog.fuzzy_lookup = AsyncMock(return_value=match)
        catalog.search_printings = AsyncMock(
            return_value=[
                make_printing(set_code="lea", price_usd=450.0),
                match,
                make_printing(set_code="sld", price_usd=None),
                make_printing(set_code="2xm", price_usd=0.95),
            ]
        )

        result = await search_card("lightnin bolt", catalog, aggregator)

        assert result.query == "lightnin bolt"
        assert result.printing.set_code == "2xm"
        assert [p.set_code for p in result.printings] == ["2xm", "m10", "lea", "sld"]
        catalog.search_printings.assert_awaited_once_with("Lightning Bolt")
        aggregator.price_printing.assert_awaited_once_with(result.printing)

    async def test_falls_back_to_fuzzy_match(self, make_printing, aggregator) -> None:
        """With no catalog prices, the fuzzy match itself is priced."""
        match = make_printing(set_code="m10", price_usd=None)
        catalog = MagicMock()
        catalog.fuzzy_lookup = AsyncMock(return_value=match)
        catalog.search_printings = AsyncMock(
            return_value=[make_printing(set_code="lea", price_usd=None), match]
        )

        result = await search_card("Lightning Bolt", catalog, aggregator)

        assert result.printing is match

    async def test_search_failure_uses_fuzzy_match(self, make_printing, aggregator) -> None:
        """If the printing search returns nothing the fuzzy match is used."""
        match = make_printing()
        catalog = MagicMock()
        catalog.fuzzy_lookup = AsyncMock(return_value=match)
        catalog.search_printings = AsyncMock(return_value=[])

        result = await search_card("Lightning Bolt", catalog, aggregator)

        assert result.printing is match
        assert result.printings == [match]

    async def test_unknown_card(self, aggregator) -> None:
        """No fuzzy match raises CatalogNotFoundError."""
        catalog = MagicMock()
        catalog.fuzzy_lookup = AsyncMock(return_value=None)

        with pytest.raises(CatalogNotFoundError):
            await search_card("zzzz", catalog, aggregator)

        aggregator.price_printing.assert_not_awaited()


class TestSearchCardExcludeSpecial:
    async def test_skips_cheaper_special_printings(self, make_printing, aggregator) -> None:
        """The cheapest standard printing wins over cheaper showcase and promo-pack ones."""
        match = make_printing(set_code="m10", price_usd=1.50)
        catalog = MagicMock()
        catalog.fuzzy_lookup = AsyncMock(return_value=match)
        catalog.search_printings = AsyncMock(
            return_value=[
                make_printing(set_code="mh3", frame_effects=("showcase",), price_usd=0.40),
                make_printing(set_code="pmh3", promo_types=("promopack",), price_usd=0.60),
                match,
                make_printing(set_code="lea", price_usd=450.0),
            ]
        )

        result = await search_card("bolt", catalog, aggregator, exclude_special=True)

        assert result.printing is match
        assert [p.set_code for p in result.printings] == ["mh3", "pmh3", "m10", "lea"]

    async def test_special_match_without_prices(self, make_printing, aggregator) -> None:
        """An unpriced special fuzzy match gives way to the first standard printing."""
        match = make_printing(set_code="mh3", frame_effects=("showcase",), price_usd=None)
        standard = make_printing(set_code="m10", price_usd=None)
        catalog = MagicMock()
        catalog.fuzzy_lookup = AsyncMock(return_value=match)
        catalog.search_printings = AsyncMock(return_value=[match, standard])

        result = await search_card("Lightning Bolt", catalog, aggregator, exclude_special=True)

        assert result.printing is standard
        aggregator.price_printing.assert_awaited_once_with(standard)

    async def test_standard_match_without_prices(self, make_printing, aggregator) -> None:
        """An unpriced standard fuzzy match is still priced directly."""
        match = make_printing(set_code="m10", price_usd=None)
        catalog = MagicMock()
        catalog.fuzzy_lookup = AsyncMock(return_value=match)
        catalog.search_printings = AsyncMock(
            return_value=[make_printing(set_code="lea", price_usd=None), match]
        )

        result = await search_card("Lightning Bolt", catalog, aggregator, exclude_special=True)

        assert result.printing is match

    async def test_only_special_printings(self, make_printing, aggregator) -> None:
        """Filtering every printing out raises NoStandardPrintingsError."""
        match = make_printing(set_code="mh3", frame_effects=("showcase",), price_usd=None)
        catalog = MagicMock()
        catalog.fuzzy_lookup = AsyncMock(return_value=match)
        catalog.search_printings = AsyncMock(
            return_value=[match, make_printing(set_code="sld", border_color="borderless")]
        )

        with pytest.raises(NoStandardPrintingsError):
            await search_card("Lightning Bolt", catalog, aggregator, exclude_special=True)

        aggregator.price_printing.assert_not_awaited()
