"""
Scryfall card parser.

Converts Scryfall card objects into CardPrinting values.

Card objects: https://scryfall.com/docs/api/cards
"""

from typing import Any

from deckpricer.models.printing import CardPrinting

# Image sizes in order of preference
_IMAGE_SIZES = ("normal", "large", "png")


def parse_price(value: Any) -> float | None:
    """
    Parse a Scryfall price string.

    Scryfall prices are decimal strings or null. Zero, negative, and
    unparseable values mean "no price", never "free".
    """
    if value is None or value == "":
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    return price if price > 0 else None


def get_image_url(card: dict[str, Any]) -> str | None:
    """
    Get the best available image URL from a Scryfall card object.

    Double-faced cards carry images per face; the front face is used.
    """
    image_uris = card.get("image_uris") or {}
    for size in _IMAGE_SIZES:
        if image_uris.get(size):
            return str(image_uris[size])

    faces = card.get("card_faces") or []
    if faces:
        front = (faces[0].get("image_uris") or {}).get("normal")
        if front:
            return str(front)

    return None


def parse_printing(card: dict[str, Any]) -> CardPrinting:
    """
    Build a CardPrinting from a Scryfall card object.

    Args:
        card: Scryfall card JSON

    Returns:
        Immutable CardPrinting

    Raises:
        KeyError: If the card lacks name, set, set_name or collector_number
    """
    prices = card.get("prices") or {}

    return CardPrinting(
        name=card["name"],
        set_code=card["set"],
        set_name=card["set_name"],
        collector_number=str(card["collector_number"]),
        frame=card.get("frame"),
        frame_effects=tuple(card.get("frame_effects") or ()),
        border_color=card.get("border_color"),
        promo_types=tuple(card.get("promo_types") or ()),
        price_usd=parse_price(prices.get("usd")),
        price_usd_foil=parse_price(prices.get("usd_foil")),
        scryfall_id=card.get("id"),
        image_url=get_image_url(card),
    )


def parse_printings(cards: list[dict[str, Any]]) -> list[CardPrinting]:
    """Parse a list of Scryfall card objects, preserving catalog order."""
    return [parse_printing(card) for card in cards]
