"""
Configured storefronts.

STORES is ordered: when two stores quote the same price, the one
declared first wins.

Product handles:
    f2f:      {card}-{number}[-promo-pack][-{variant}]-{set-name}-non-foil
    hoc:      {card}[-promo-pack][-{variant}]-{set-name}
    401games: {card}[-promo-pack][-{variant}]-{set-code}
"""

from deckpricer.models.failure import UnknownStoreError
from deckpricer.models.store import StoreKey
from deckpricer.scrapers.base import (
    ConditionVariantStoreAdapter,
    SelectorStoreAdapter,
    StoreAdapter,
)
from deckpricer.services.product_locator import LocatorField, StoreTemplate
from deckpricer.services.slugs import FacePolicy

FACE_TO_FACE = SelectorStoreAdapter(
    StoreTemplate(
        store=StoreKey.F2F.value,
        product_base_url="https://facetofacegames.com/products/",
        fields=(
            LocatorField.CARD_SLUG,
            LocatorField.COLLECTOR_NUMBER,
            LocatorField.PROMO_PACK,
            LocatorField.VARIANT,
            LocatorField.SET_SLUG,
        ),
        suffix="-non-foil",
        face_policy=FacePolicy.ALL_FACES,
    ),
    name="Face to Face Games",
    short_name="F2F",
)

HOUSE_OF_CARDS = SelectorStoreAdapter(
    StoreTemplate(
        store=StoreKey.HOC.value,
        product_base_url="https://houseofcards.ca/products/",
        fields=(
            LocatorField.CARD_SLUG,
            LocatorField.PROMO_PACK,
            LocatorField.VARIANT,
            LocatorField.SET_SLUG,
        ),
        face_policy=FacePolicy.ALL_FACES,
    ),
    name="House of Cards",
    short_name="HOC",
)

GAMES_401 = ConditionVariantStoreAdapter(
    StoreTemplate(
        store=StoreKey.GAMES_401.value,
        product_base_url="https://store.401games.ca/products/",
        fields=(
            LocatorField.CARD_SLUG,
            LocatorField.PROMO_PACK,
            LocatorField.VARIANT,
            LocatorField.SET_CODE,
        ),
        face_policy=FacePolicy.ALL_FACES,
    ),
    name="401 Games",
    short_name="401",
)

STORES: tuple[StoreAdapter, ...] = (FACE_TO_FACE, HOUSE_OF_CARDS, GAMES_401)

_STORES_BY_KEY: dict[str, StoreAdapter] = {store.key: store for store in STORES}


def get_store(store_key: str) -> StoreAdapter:
    """
    Look up a configured store.

    Raises:
        UnknownStoreError: If no store has this key
    """
    try:
        return _STORES_BY_KEY[store_key]
    except KeyError:
        raise UnknownStoreError(store_key) from None


def store_keys() -> list[str]:
    """Store keys in declaration order."""
    return [store.key for store in STORES]


def format_store_name(store_key: str) -> str:
    """Display name for a store key, or the key itself if unknown."""
    store = _STORES_BY_KEY.get(store_key)
    return store.name if store else store_key
