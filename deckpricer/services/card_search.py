"""
Single-card search.

Resolves a typed (possibly misspelled) card name, picks the cheapest
printing by catalog price and prices it at every store.
"""

import logging
from dataclasses import dataclass

from deckpricer.models.failure import CatalogNotFoundError
from deckpricer.models.printing import CardPrinting
from deckpricer.models.quote import PriceAggregate
from deckpricer.services.card_catalog import ScryfallCatalog
from deckpricer.services.frame_variant import is_special_printing
from deckpricer.services.price_aggregator import PriceAggregator
from deckpricer.services.printing_selector import select_printing, sort_printings_by_price

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardSearchResult:
    """
    Outcome of a single-card search.

    Attributes:
        query: Name as typed by the user
        printing: Printing that was priced at the stores
        printings: Every known printing, cheapest catalog price first
        aggregate: Store quotes for the chosen printing
    """

    query: str
    printing: CardPrinting
    printings: list[CardPrinting]
    aggregate: PriceAggregate


async def search_card(
    query: str,
    catalog: ScryfallCatalog,
    aggregator: PriceAggregator,
    exclude_special: bool = False,
) -> CardSearchResult:
    """
    Search for a card by name and price its cheapest printing.

    Raises:
        CatalogNotFoundError: If the name matches no card
        NoStandardPrintingsError: If exclude_special filtered every printing
    """
    match = await catalog.fuzzy_lookup(query)
    if match is None:
        raise CatalogNotFoundError(query)

    printings = await catalog.search_printings(match.name) or [match]

    has_prices = any(p.has_catalog_price for p in printings)
    if has_prices or (exclude_special and is_special_printing(match)):
        printing = select_printing(printings, exclude_special, card_name=match.name)
    else:
        # Nothing to compare on, price the catalog's own best match
        printing = match

    logger.info("Search '%s' resolved to %s", query, printing.display_printing)

    aggregate = await aggregator.price_printing(printing)
    return CardSearchResult(
        query=query,
        printing=printing,
        printings=sort_printings_by_price(printings),
        aggregate=aggregate,
    )
