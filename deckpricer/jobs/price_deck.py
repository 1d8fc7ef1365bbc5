"""
Deck pricing job.

Prices a deck list file from the command line and prints one row per
line plus the per-store totals.

Usage:
    deckpricer-price-deck deck.txt
    deckpricer-price-deck --exclude-special --include-basic-lands deck.txt
    cat deck.txt | deckpricer-price-deck -
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

import httpx

from deckpricer.models.deck import DeckEvaluation, EvaluationResult
from deckpricer.parsers.deck_list import parse_deck_list
from deckpricer.scrapers.stores import format_store_name
from deckpricer.services.card_catalog import ScryfallCatalog
from deckpricer.services.deck_evaluator import DeckEvaluator
from deckpricer.services.exchange_rate import load_exchange_rate
from deckpricer.services.price_aggregator import PriceAggregator

logger = logging.getLogger(__name__)


def format_result_row(result: EvaluationResult) -> str:
    """One table row: quantity, name, cheapest store and line total (or the error)."""
    label = f"{result.quantity}x {result.name}"
    if result.cheapest is None or result.line_total is None:
        return f"{label:<40} {result.error_message or 'No prices found'}"

    store = format_store_name(result.cheapest.store)
    return f"{label:<40} {store:<20} ${result.line_total:>8.2f} {result.cheapest.currency}"


def format_report(evaluation: DeckEvaluation) -> str:
    """Render an evaluation as a plain-text report."""
    lines = [format_result_row(r) for r in evaluation.results]
    lines.append("")
    lines.append("Store totals:")
    for key, total in evaluation.store_totals.items():
        lines.append(f"  {format_store_name(key):<20} ${total:>8.2f}")
    lines.append(f"  {'Cheapest per card':<20} ${evaluation.cheapest_total:>8.2f}")

    failed = len(evaluation.failed_lines)
    if failed:
        lines.append(f"{failed} line(s) could not be fully priced")
    return "\n".join(lines)


async def run_price_deck(
    deck_text: str,
    exclude_basic_lands: bool = True,
    exclude_special: bool = False,
    line_delay: float | None = None,
) -> DeckEvaluation:
    """
    Price a deck list.

    Args:
        deck_text: Deck list, one card per line
        exclude_basic_lands: Skip basic lands
        exclude_special: Skip frame-variant and promo-pack printings
        line_delay: Seconds between lines (settings default if None)

    Returns:
        The deck evaluation
    """
    lines = parse_deck_list(deck_text)
    logger.info("Pricing %d deck lines...", len(lines))

    async with httpx.AsyncClient(follow_redirects=True) as client:
        await load_exchange_rate(client)
        evaluator = DeckEvaluator(
            ScryfallCatalog(client),
            PriceAggregator(client=client),
            line_delay=line_delay,
        )
        return await evaluator.evaluate(
            lines,
            exclude_basic_lands=exclude_basic_lands,
            exclude_special=exclude_special,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Price a deck list across Canadian stores.")
    parser.add_argument("deck_file", help="Deck list file, or - for stdin")
    parser.add_argument(
        "--include-basic-lands",
        action="store_true",
        help="Price basic lands too (skipped by default)",
    )
    parser.add_argument(
        "--exclude-special",
        action="store_true",
        help="Skip borderless, showcase, retro and other special printings",
    )
    parser.add_argument(
        "--line-delay",
        type=float,
        default=None,
        help="Seconds to wait between deck lines",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for pricing a deck list."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    if args.deck_file == "-":
        deck_text = sys.stdin.read()
    else:
        try:
            with open(args.deck_file, encoding="utf-8") as f:
                deck_text = f.read()
        except OSError as e:
            logger.error("Cannot read deck list %s: %s", args.deck_file, e)
            return 1

    if not parse_deck_list(deck_text):
        logger.error("Deck list contains no cards")
        return 1

    evaluation = asyncio.run(
        run_price_deck(
            deck_text,
            exclude_basic_lands=not args.include_basic_lands,
            exclude_special=args.exclude_special,
            line_delay=args.line_delay,
        )
    )
    print(format_report(evaluation))
    return 0


if __name__ == "__main__":
    sys.exit(main())
