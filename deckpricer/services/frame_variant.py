"""
Frame/variant detection and per-store normalization.

detect_frame_variant classifies a printing's visual treatment using
Scryfall's frame, border_color, frame_effects and promo_types fields.
normalize_frame_variant turns that classification into the token a
given store uses in its product URLs.

Precedence: future frame, retro frame, white border, then the FIRST
listed frame effect only, then a borderless border colour.
"""

from deckpricer.models.printing import CardPrinting, FrameVariant
from deckpricer.models.store import StoreKey

PROMO_PACK_TAG = "promopack"

# Retro-frame reprints are 1997-frame printings tagged as booster fun
RETRO_FRAME = "1997"
RETRO_PROMO_TAG = "boosterfun"

FUTURE_FRAME = "future"

_FRAME_EFFECT_VARIANTS: dict[str, FrameVariant] = {
    "extendedart": FrameVariant.EXTENDED_ART,
    "showcase": FrameVariant.SHOWCASE,
    "borderless": FrameVariant.BORDERLESS,
}

# (variant, store) -> URL token. None means the store omits the token.
# Combinations not listed use the variant's own value.
STORE_VARIANT_TOKENS: dict[tuple[FrameVariant, str], str | None] = {
    (FrameVariant.RETRO, StoreKey.F2F.value): "retro-frame",
    (FrameVariant.RETRO, StoreKey.GAMES_401.value): "retro-frame",
    (FrameVariant.FUTURE_FRAME, StoreKey.F2F.value): "future-frame",
    (FrameVariant.FUTURE_FRAME, StoreKey.HOC.value): "future-sight",
    (FrameVariant.FUTURE_FRAME, StoreKey.GAMES_401.value): None,
    (FrameVariant.WHITE_BORDER, StoreKey.GAMES_401.value): None,
}


def detect_frame_variant(printing: CardPrinting) -> FrameVariant:
    """Classify a printing's visual variant."""
    if printing.frame == FUTURE_FRAME:
        return FrameVariant.FUTURE_FRAME

    if printing.frame == RETRO_FRAME and RETRO_PROMO_TAG in printing.promo_types:
        return FrameVariant.RETRO

    if printing.border_color == "white":
        return FrameVariant.WHITE_BORDER

    if printing.frame_effects:
        variant = _FRAME_EFFECT_VARIANTS.get(printing.frame_effects[0])
        if variant is not None:
            return variant

    if printing.border_color == "borderless":
        return FrameVariant.BORDERLESS

    return FrameVariant.NONE


def is_promo_pack(printing: CardPrinting) -> bool:
    """
    True if the printing comes from a promo pack.

    Only the promo-pack tag counts; other promo tags (beginner box,
    booster fun, ...) do not change a store's product handle.
    """
    return PROMO_PACK_TAG in printing.promo_types


def is_special_printing(printing: CardPrinting) -> bool:
    """True for any non-standard frame variant or a promo-pack printing."""
    return detect_frame_variant(printing) is not FrameVariant.NONE or is_promo_pack(printing)


def normalize_frame_variant(variant: FrameVariant, store_key: str) -> str | None:
    """
    Map a frame variant to a store's URL token.

    Total over every (variant, store) pair: FrameVariant.NONE has no token,
    listed pairs use the table, anything else passes through unchanged.
    """
    if variant is FrameVariant.NONE:
        return None

    key = (variant, store_key)
    if key in STORE_VARIANT_TOKENS:
        return STORE_VARIANT_TOKENS[key]

    return variant.value
