"""
DeckPricer services.

Printing identity, selection and pricing logic. Modules that talk to
stores or the card catalog (price_aggregator, deck_evaluator,
card_search, card_catalog, exchange_rate) are imported directly from
their own modules.
"""

from deckpricer.services.frame_variant import (
    detect_frame_variant,
    is_promo_pack,
    is_special_printing,
    normalize_frame_variant,
)
from deckpricer.services.printing_selector import (
    filter_standard_printings,
    select_printing,
    sort_printings_by_price,
)
from deckpricer.services.product_locator import (
    LocatorField,
    ProductIdentity,
    ProductLocator,
    StoreTemplate,
    build_locator,
    locator_from_segments,
    resolve_identity,
)
from deckpricer.services.retry import RetryPolicy, is_rate_limited, with_retry
from deckpricer.services.slugs import FacePolicy, slugify, slugify_card_name

__all__ = [
    "FacePolicy",
    "LocatorField",
    "ProductIdentity",
    "ProductLocator",
    "RetryPolicy",
    "StoreTemplate",
    "build_locator",
    "detect_frame_variant",
    "filter_standard_printings",
    "is_promo_pack",
    "is_rate_limited",
    "is_special_printing",
    "locator_from_segments",
    "normalize_frame_variant",
    "resolve_identity",
    "select_printing",
    "slugify",
    "slugify_card_name",
    "sort_printings_by_price",
    "with_retry",
]
