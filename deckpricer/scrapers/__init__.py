from deckpricer.scrapers.base import (
    ConditionVariantStoreAdapter,
    SelectorStoreAdapter,
    StoreAdapter,
)
from deckpricer.scrapers.stores import (
    FACE_TO_FACE,
    GAMES_401,
    HOUSE_OF_CARDS,
    STORES,
    format_store_name,
    get_store,
    store_keys,
)

__all__ = [
    "ConditionVariantStoreAdapter",
    "FACE_TO_FACE",
    "GAMES_401",
    "HOUSE_OF_CARDS",
    "STORES",
    "SelectorStoreAdapter",
    "StoreAdapter",
    "format_store_name",
    "get_store",
    "store_keys",
]
