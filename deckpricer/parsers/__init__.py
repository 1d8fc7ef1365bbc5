from deckpricer.parsers.deck_list import parse_deck_line, parse_deck_list
from deckpricer.parsers.scryfall import get_image_url, parse_price, parse_printing, parse_printings

__all__ = [
    "get_image_url",
    "parse_deck_line",
    "parse_deck_list",
    "parse_price",
    "parse_printing",
    "parse_printings",
]
