from deckpricer.models.deck import DeckEvaluation, DeckLine, EvaluationResult
from deckpricer.models.failure import (
    STANDARD_MESSAGES,
    STORE_FAILURES,
    CatalogNotFoundError,
    FailureKind,
    KnownError,
    NoStandardPrintingsError,
    UnknownStoreError,
)
from deckpricer.models.printing import CardPrinting, FrameVariant
from deckpricer.models.quote import PriceAggregate, StoreQuote, select_cheapest
from deckpricer.models.store import StoreKey

__all__ = [
    "CardPrinting",
    "CatalogNotFoundError",
    "DeckEvaluation",
    "DeckLine",
    "EvaluationResult",
    "FailureKind",
    "FrameVariant",
    "KnownError",
    "NoStandardPrintingsError",
    "PriceAggregate",
    "STANDARD_MESSAGES",
    "STORE_FAILURES",
    "StoreKey",
    "StoreQuote",
    "UnknownStoreError",
    "select_cheapest",
]
