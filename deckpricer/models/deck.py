from dataclasses import dataclass, field

from deckpricer.models.failure import STANDARD_MESSAGES, FailureKind
from deckpricer.models.printing import CardPrinting
from deckpricer.models.quote import StoreQuote


@dataclass(frozen=True, slots=True)
class DeckLine:
    """
    One line of a deck list.

    The name is kept exactly as typed; resolution against the catalog
    happens later and may fail per line.
    """

    name: str
    quantity: int = 1


@dataclass(frozen=True)
class EvaluationResult:
    """
    Pricing outcome for one deck line.

    Attributes:
        line: The deck line that was evaluated
        printing: Printing chosen for pricing, None if resolution failed
        quotes: Quote per store key
        cheapest: Cheapest store quote, None if no store had a price
        contributions: price x quantity per store that produced a price
        error: Failure kind when the line could not be fully priced
        error_message: Human-readable failure explanation
    """

    line: DeckLine
    printing: CardPrinting | None = None
    quotes: dict[str, StoreQuote] = field(default_factory=dict)
    cheapest: StoreQuote | None = None
    contributions: dict[str, float] = field(default_factory=dict)
    error: FailureKind | None = None
    error_message: str | None = None

    @classmethod
    def failed(
        cls,
        line: DeckLine,
        error: FailureKind,
        printing: CardPrinting | None = None,
        quotes: dict[str, StoreQuote] | None = None,
    ) -> "EvaluationResult":
        """Create a result for a line that produced no cheapest offer."""
        return cls(
            line=line,
            printing=printing,
            quotes=quotes or {},
            error=error,
            error_message=STANDARD_MESSAGES[error],
        )

    @property
    def name(self) -> str:
        return self.line.name

    @property
    def quantity(self) -> int:
        return self.line.quantity

    @property
    def line_total(self) -> float | None:
        """Cheapest price times quantity, None if unpriced."""
        if self.cheapest is None or self.cheapest.price is None:
            return None
        return self.cheapest.price * self.quantity


@dataclass
class DeckEvaluation:
    """Per-line results and per-store running totals for a whole deck."""

    results: list[EvaluationResult] = field(default_factory=list)
    store_totals: dict[str, float] = field(default_factory=dict)

    @property
    def cheapest_total(self) -> float:
        """Sum of each line's cheapest offer, ignoring unpriced lines."""
        return sum((r.line_total for r in self.results if r.line_total is not None), 0.0)

    @property
    def failed_lines(self) -> list[EvaluationResult]:
        return [r for r in self.results if r.error is not None]
