"""
Printing selection.

Picks the one printing of a card that gets priced at the stores: the
cheapest by catalog price, optionally ignoring special printings.
"""

import math
from collections.abc import Sequence

from deckpricer.models.failure import CatalogNotFoundError, NoStandardPrintingsError
from deckpricer.models.printing import CardPrinting
from deckpricer.services.frame_variant import is_special_printing


def catalog_sort_key(printing: CardPrinting) -> float:
    """Catalog price, or infinity for printings without a usable price."""
    if printing.price_usd is None or printing.price_usd <= 0:
        return math.inf
    return printing.price_usd


def filter_standard_printings(printings: Sequence[CardPrinting]) -> list[CardPrinting]:
    """Drop frame-variant and promo-pack printings, preserving order."""
    return [p for p in printings if not is_special_printing(p)]


def select_printing(
    printings: Sequence[CardPrinting],
    exclude_special: bool = False,
    card_name: str | None = None,
) -> CardPrinting:
    """
    Select the printing to price.

    Args:
        printings: All known printings of one card, in catalog order
        exclude_special: Skip frame-variant and promo-pack printings
        card_name: Name used in error details

    Returns:
        The eligible printing with the lowest positive catalog price, or
        the first eligible printing if none has a catalog price

    Raises:
        CatalogNotFoundError: If printings is empty
        NoStandardPrintingsError: If every printing was filtered out
    """
    if not printings:
        raise CatalogNotFoundError(card_name)

    eligible = filter_standard_printings(printings) if exclude_special else list(printings)
    if not eligible:
        raise NoStandardPrintingsError(card_name or printings[0].name)

    cheapest = eligible[0]
    lowest = catalog_sort_key(cheapest)
    for printing in eligible[1:]:
        price = catalog_sort_key(printing)
        if price < lowest:
            lowest = price
            cheapest = printing

    return cheapest


def sort_printings_by_price(printings: Sequence[CardPrinting]) -> list[CardPrinting]:
    """Sort by catalog price, cheapest first; unpriced printings go last."""
    return sorted(printings, key=catalog_sort_key)
