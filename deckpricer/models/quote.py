"""
Store quotes.

A StoreQuote is the priced-or-failed answer from one store for one
printing. It always carries exactly one of a positive price or a
store-level FailureKind.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from deckpricer.models.failure import STANDARD_MESSAGES, STORE_FAILURES, FailureKind
from deckpricer.models.printing import CardPrinting

DEFAULT_CURRENCY = "CAD"


@dataclass(frozen=True, slots=True)
class StoreQuote:
    """
    Result of pricing one printing at one store.

    Attributes:
        store: Store key the quote came from
        url: Direct product URL at the store
        price: Price in the store's currency (always > 0 when present)
        currency: Currency code of the price
        error: Failure classification when no price was obtained
        message: Human-readable explanation of the failure
    """

    store: str
    url: str
    price: float | None = None
    currency: str = DEFAULT_CURRENCY
    error: FailureKind | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        if self.price is not None:
            if self.price <= 0:
                raise ValueError(f"Quote price must be positive, got {self.price}")
            if self.error is not None:
                raise ValueError("A priced quote cannot carry an error")
        elif self.error is None:
            raise ValueError("A quote must carry either a price or an error")
        elif self.error not in STORE_FAILURES:
            raise ValueError(f"{self.error.value} is not a store-level failure")

    @classmethod
    def priced(
        cls, store: str, url: str, price: float, currency: str = DEFAULT_CURRENCY
    ) -> "StoreQuote":
        """Create a successful quote."""
        return cls(store=store, url=url, price=price, currency=currency)

    @classmethod
    def failed(
        cls, store: str, url: str, error: FailureKind, message: str | None = None
    ) -> "StoreQuote":
        """Create a failed quote with a standard message unless one is given."""
        return cls(
            store=store,
            url=url,
            error=error,
            message=message or STANDARD_MESSAGES[error],
        )

    @property
    def has_price(self) -> bool:
        return self.price is not None


def select_cheapest(quotes: Iterable[StoreQuote]) -> StoreQuote | None:
    """
    Pick the lowest-priced quote.

    Quotes must be given in store declaration order: on an exact tie the
    earlier store wins. Returns None if no quote carries a price.
    """
    cheapest: StoreQuote | None = None
    lowest = float("inf")
    for quote in quotes:
        if quote.price is not None and quote.price < lowest:
            lowest = quote.price
            cheapest = quote
    return cheapest


@dataclass(frozen=True)
class PriceAggregate:
    """
    All store quotes for one printing plus the cheapest offer.

    Attributes:
        printing: The printing that was priced
        quotes: Quote per store key, in store declaration order
        cheapest: Lowest-priced quote, None if every store failed
    """

    printing: CardPrinting
    quotes: dict[str, StoreQuote]
    cheapest: StoreQuote | None

    @property
    def has_price(self) -> bool:
        return self.cheapest is not None

    @property
    def error(self) -> FailureKind | None:
        """AGGREGATE_NO_PRICES when no store produced a price."""
        return None if self.has_price else FailureKind.AGGREGATE_NO_PRICES

    @property
    def priced_quotes(self) -> dict[str, StoreQuote]:
        return {key: quote for key, quote in self.quotes.items() if quote.has_price}
