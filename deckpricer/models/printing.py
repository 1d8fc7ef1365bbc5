from dataclasses import dataclass
from enum import Enum


class FrameVariant(str, Enum):
    """
    Store-agnostic classification of a printing's visual treatment.

    Values double as the default URL token a store uses for the variant.
    """

    NONE = "none"
    BORDERLESS = "borderless"
    EXTENDED_ART = "extended-art"
    SHOWCASE = "showcase"
    RETRO = "retro"
    FUTURE_FRAME = "future-frame"
    WHITE_BORDER = "white-border"


@dataclass(frozen=True, slots=True)
class CardPrinting:
    """
    One specific print of a card, as returned by the card catalog.

    Attributes:
        name: Card name (double-faced cards use "Front // Back")
        set_code: Set code (e.g., "mh3")
        set_name: Set display name (e.g., "Modern Horizons 3")
        collector_number: Collector number within set (may be alphanumeric)
        frame: Frame era ("1993", "1997", "2003", "2015", "future")
        frame_effects: Frame effects in catalog order (e.g., ("extendedart",))
        border_color: Border colour ("black", "white", "borderless", ...)
        promo_types: Promo tags (e.g., ("promopack", "boosterfun"))
        price_usd: Non-foil catalog price in USD, None if missing or zero
        price_usd_foil: Foil catalog price in USD, None if missing or zero
        scryfall_id: Catalog identifier of this printing
        image_url: Best available card image
    """

    name: str
    set_code: str
    set_name: str
    collector_number: str
    frame: str | None = None
    frame_effects: tuple[str, ...] = ()
    border_color: str | None = None
    promo_types: tuple[str, ...] = ()
    price_usd: float | None = None
    price_usd_foil: float | None = None
    scryfall_id: str | None = None
    image_url: str | None = None

    @property
    def has_catalog_price(self) -> bool:
        """True if the printing carries a usable (positive) catalog price."""
        return self.price_usd is not None and self.price_usd > 0

    @property
    def display_printing(self) -> str:
        """Set name with upper-cased code, e.g. "Alpha (LEA)"."""
        return f"{self.set_name} ({self.set_code.upper()})"
