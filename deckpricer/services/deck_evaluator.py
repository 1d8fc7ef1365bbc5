"""
Deck evaluation.

Prices a whole deck list one line at a time. Each line runs the full
pipeline (catalog search, printing selection, store aggregation) before
the next line starts, with a fixed delay between lines to stay under
storefront rate limits. A line that cannot be resolved is reported with
an error and the batch carries on.
"""

import asyncio
import logging
from collections.abc import Sequence

from deckpricer.config import settings
from deckpricer.models.deck import DeckEvaluation, DeckLine, EvaluationResult
from deckpricer.models.failure import KnownError
from deckpricer.services.card_catalog import ScryfallCatalog
from deckpricer.services.price_aggregator import PriceAggregator
from deckpricer.services.printing_selector import select_printing
from deckpricer.services.retry import SleepFunc

logger = logging.getLogger(__name__)

BASIC_LANDS = frozenset({"mountain", "island", "plains", "swamp", "forest"})


def is_basic_land(card_name: str) -> bool:
    return card_name.strip().lower() in BASIC_LANDS


class DeckEvaluator:
    """
    Sequential deck pricing.

    Args:
        catalog: Card catalog used to find printings
        aggregator: Prices one printing across all stores
        line_delay: Seconds to wait between lines
        sleep: Awaitable sleep used for the line delay
    """

    def __init__(
        self,
        catalog: ScryfallCatalog,
        aggregator: PriceAggregator,
        line_delay: float | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self.catalog = catalog
        self.aggregator = aggregator
        self.line_delay = settings.deck_line_delay if line_delay is None else line_delay
        self._sleep = sleep

    async def evaluate_line(self, line: DeckLine, exclude_special: bool = False) -> EvaluationResult:
        """Resolve and price a single deck line. Never raises for catalog failures."""
        printings = await self.catalog.search_printings(line.name)

        try:
            printing = select_printing(printings, exclude_special, card_name=line.name)
        except KnownError as e:
            logger.warning("%s: %s", line.name, e.message)
            return EvaluationResult.failed(line, e.kind)

        aggregate = await self.aggregator.price_printing(printing)
        if aggregate.error is not None:
            return EvaluationResult.failed(
                line, aggregate.error, printing=printing, quotes=aggregate.quotes
            )

        contributions = {
            key: quote.price * line.quantity
            for key, quote in aggregate.priced_quotes.items()
            if quote.price is not None
        }
        return EvaluationResult(
            line=line,
            printing=printing,
            quotes=aggregate.quotes,
            cheapest=aggregate.cheapest,
            contributions=contributions,
        )

    async def evaluate(
        self,
        lines: Sequence[DeckLine],
        exclude_basic_lands: bool = True,
        exclude_special: bool = False,
    ) -> DeckEvaluation:
        """
        Evaluate a deck list.

        Args:
            lines: Deck lines in list order
            exclude_basic_lands: Skip basic lands entirely (no result row)
            exclude_special: Skip frame-variant and promo-pack printings

        Returns:
            DeckEvaluation with one result per surviving line, in order,
            and a running total per store
        """
        if exclude_basic_lands:
            lines = [line for line in lines if not is_basic_land(line.name)]

        evaluation = DeckEvaluation(
            store_totals={store.key: 0.0 for store in self.aggregator.stores}
        )

        for index, line in enumerate(lines):
            if index > 0 and self.line_delay > 0:
                await self._sleep(self.line_delay)

            result = await self.evaluate_line(line, exclude_special)
            evaluation.results.append(result)

            for key, amount in result.contributions.items():
                evaluation.store_totals[key] = evaluation.store_totals.get(key, 0.0) + amount

        logger.info(
            "Evaluated %d lines (%d failed), cheapest total %.2f",
            len(evaluation.results),
            len(evaluation.failed_lines),
            evaluation.cheapest_total,
        )
        return evaluation
