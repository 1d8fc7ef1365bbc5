"""
Failure classification.

Every way a price lookup can fail has a FailureKind. Store-level failures
travel as data on StoreQuote values; catalog-level failures are raised as
KnownError subclasses and caught per deck line or per request.

Contract violations (unknown store key, malformed identity) are not
classified here. They raise plain KeyError/ValueError subclasses so they
fail loudly instead of being rendered as a user-facing outcome.
"""

from enum import Enum
from typing import Any


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Catalog failures
    CATALOG_NOT_FOUND = "catalog_not_found"
    NO_STANDARD_PRINTINGS = "no_standard_printings"

    # Store failures
    STORE_NOT_FOUND = "store_not_found"
    STORE_RATE_LIMITED = "store_rate_limited"
    STORE_TIMEOUT = "store_timeout"
    STORE_PARSE_FAILURE = "store_parse_failure"
    STORE_UNAVAILABLE = "store_unavailable"

    # Aggregate failures
    AGGREGATE_NO_PRICES = "aggregate_no_prices"

    # Input validation failures
    INVALID_INPUT = "invalid_input"


STORE_FAILURES = frozenset(
    {
        FailureKind.STORE_NOT_FOUND,
        FailureKind.STORE_RATE_LIMITED,
        FailureKind.STORE_TIMEOUT,
        FailureKind.STORE_PARSE_FAILURE,
        FailureKind.STORE_UNAVAILABLE,
    }
)

# Short messages shown next to a failed store or deck line
STANDARD_MESSAGES: dict[FailureKind, str] = {
    FailureKind.CATALOG_NOT_FOUND: "Card not found",
    FailureKind.NO_STANDARD_PRINTINGS: "No standard printings found",
    FailureKind.STORE_NOT_FOUND: "Card not available at this store",
    FailureKind.STORE_RATE_LIMITED: "Store is rate limiting requests",
    FailureKind.STORE_TIMEOUT: "Store took too long to respond",
    FailureKind.STORE_PARSE_FAILURE: "Price not found",
    FailureKind.STORE_UNAVAILABLE: "Failed to fetch price",
    FailureKind.AGGREGATE_NO_PRICES: "No prices found",
    FailureKind.INVALID_INPUT: "Invalid input",
}


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str | None = None,
        detail: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message or STANDARD_MESSAGES[kind]
        self.detail = detail
        self.status_code = status_code
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        """Render as a JSON error body."""
        payload: dict[str, Any] = {"error": self.kind.value, "message": self.message}
        if self.detail:
            payload["detail"] = self.detail
        return payload


class CatalogNotFoundError(KnownError):
    """Raised when a card name resolves to no printings at all."""

    def __init__(self, card_name: str | None = None):
        self.card_name = card_name
        super().__init__(
            kind=FailureKind.CATALOG_NOT_FOUND,
            detail=f"No printings found for '{card_name}'" if card_name else None,
            status_code=404,
        )


class NoStandardPrintingsError(KnownError):
    """Raised when every printing of a card was filtered out as special."""

    def __init__(self, card_name: str | None = None):
        self.card_name = card_name
        super().__init__(
            kind=FailureKind.NO_STANDARD_PRINTINGS,
            detail=(
                f"All printings of '{card_name}' are special printings" if card_name else None
            ),
            status_code=404,
        )


class UnknownStoreError(KeyError):
    """Raised when a store key is not in the configured store list."""

    def __init__(self, store_key: str):
        self.store_key = store_key
        super().__init__(store_key)
