"""Tests for deck list and Scryfall parsers."""

import pytest

from deckpricer.models.deck import DeckLine
from deckpricer.parsers.deck_list import parse_deck_line, parse_deck_list
from deckpricer.parsers.scryfall import get_image_url, parse_price, parse_printing, parse_printings


class TestParseDeckLine:
    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("4 Lightning Bolt", DeckLine("Lightning Bolt", 4)),
            ("4x Lightning Bolt", DeckLine("Lightning Bolt", 4)),
            ("4X Lightning Bolt", DeckLine("Lightning Bolt", 4)),
            ("Island", DeckLine("Island", 1)),
            ("  2   Fire // Ice  ", DeckLine("Fire // Ice", 2)),
        ],
    )
    def test_formats(self, line: str, expected: DeckLine) -> None:
        """Quantity is optional and defaults to 1."""
        assert parse_deck_line(line) == expected

    def test_blank_line(self) -> None:
        """Blank lines produce nothing."""
        assert parse_deck_line("   ") is None

    def test_leading_number_is_quantity(self) -> None:
        """A leading number followed by whitespace is always read as the quantity."""
        assert parse_deck_line("1996 World Champion") == DeckLine("World Champion", 1996)

    def test_number_glued_to_name(self) -> None:
        """Without whitespace after the number the whole line is the name."""
        assert parse_deck_line("1996World") == DeckLine("1996World", 1)


class TestParseDeckList:
    def test_skips_blank_lines_and_keeps_order(self) -> None:
        """Blank lines are skipped; order is preserved."""
        text = "4x Lightning Bolt\n\nIsland\n2 Counterspell\n"

        lines = parse_deck_list(text)

        assert lines == [
            DeckLine("Lightning Bolt", 4),
            DeckLine("Island", 1),
            DeckLine("Counterspell", 2),
        ]

    def test_duplicates_not_merged(self) -> None:
        """The same card on two lines stays two lines."""
        lines = parse_deck_list("2 Opt\n2 Opt")
        assert lines == [DeckLine("Opt", 2), DeckLine("Opt", 2)]

    def test_windows_line_endings(self) -> None:
        """Carriage returns are stripped with the rest of the whitespace."""
        assert parse_deck_list("1 Opt\r\n1 Ponder\r\n") == [DeckLine("Opt", 1), DeckLine("Ponder", 1)]

    def test_empty(self) -> None:
        """Empty text has no lines."""
        assert parse_deck_list("") == []


class TestParsePrice:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("1.50", 1.50), ("0.00", None), (None, None), ("", None), ("abc", None), ("-1", None)],
    )
    def test_values(self, value, expected) -> None:
        """Only positive parseable values are prices."""
        assert parse_price(value) == expected


class TestParsePrinting:
    def test_fields(self, scryfall_card) -> None:
        """All printing fields are read from the card object."""
        printing = parse_printing(scryfall_card)

        assert printing.name == "Lightning Bolt"
        assert printing.set_code == "m10"
        assert printing.set_name == "Magic 2010"
        assert printing.collector_number == "146"
        assert printing.frame == "2003"
        assert printing.border_color == "black"
        assert printing.price_usd == pytest.approx(1.50)
        assert printing.price_usd_foil == pytest.approx(4.25)
        assert printing.scryfall_id == scryfall_card["id"]
        assert printing.image_url == scryfall_card["image_uris"]["normal"]
        assert printing.display_printing == "Magic 2010 (M10)"

    def test_tuples_for_tags(self, scryfall_card) -> None:
        """Frame effects and promo types keep catalog order as tuples."""
        scryfall_card["frame_effects"] = ["showcase", "legendary"]
        scryfall_card["promo_types"] = ["promopack"]

        printing = parse_printing(scryfall_card)

        assert printing.frame_effects == ("showcase", "legendary")
        assert printing.promo_types == ("promopack",)

    def test_missing_prices(self, scryfall_card) -> None:
        """Null prices mean no catalog price."""
        scryfall_card["prices"] = {"usd": None}

        printing = parse_printing(scryfall_card)

        assert printing.price_usd is None
        assert not printing.has_catalog_price

    def test_missing_required_field(self, scryfall_card) -> None:
        """Cards without a set name are rejected."""
        del scryfall_card["set_name"]
        with pytest.raises(KeyError):
            parse_printing(scryfall_card)

    def test_parse_printings_order(self, scryfall_card) -> None:
        """Catalog order is preserved."""
        second = {**scryfall_card, "set": "2xm", "set_name": "Double Masters"}
        assert [p.set_code for p in parse_printings([scryfall_card, second])] == ["m10", "2xm"]


class TestGetImageUrl:
    def test_prefers_normal(self) -> None:
        """Normal size is preferred."""
        card = {"image_uris": {"large": "L", "normal": "N", "png": "P"}}
        assert get_image_url(card) == "N"

    def test_falls_back_through_sizes(self) -> None:
        """Large then png are used when normal is missing."""
        assert get_image_url({"image_uris": {"large": "L", "png": "P"}}) == "L"
        assert get_image_url({"image_uris": {"png": "P"}}) == "P"

    def test_double_faced_front(self) -> None:
        """Double-faced cards use the front face image."""
        card = {"card_faces": [{"image_uris": {"normal": "FRONT"}}, {"image_uris": {"normal": "BACK"}}]}
        assert get_image_url(card) == "FRONT"

    def test_no_image(self) -> None:
        """Cards without images have no URL."""
        assert get_image_url({}) is None
