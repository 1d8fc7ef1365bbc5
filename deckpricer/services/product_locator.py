"""
Printing identity -> store product locator.

Every store addresses a product by a handle assembled from the same
identity components (card slug, set slug, collector number, set code,
variant token, promo-pack flag). Which components, in which order, is
declared once per store in a StoreTemplate; build_locator is the single
generic builder that turns an identity into a URL for any template.
"""

from dataclasses import dataclass
from enum import Enum

from deckpricer.models.printing import CardPrinting
from deckpricer.services.frame_variant import (
    detect_frame_variant,
    is_promo_pack,
    normalize_frame_variant,
)
from deckpricer.services.slugs import FacePolicy, slugify, slugify_card_name

PROMO_PACK_TOKEN = "promo-pack"
API_PRICE_PREFIX = "/api/price"


class LocatorField(str, Enum):
    """Identity components a store template can reference."""

    CARD_SLUG = "card_slug"
    COLLECTOR_NUMBER = "collector_number"
    PROMO_PACK = "promo_pack"
    VARIANT = "variant_token"
    SET_SLUG = "set_slug"
    SET_CODE = "set_code"


# Fields that are dropped from the handle when they have no value
OPTIONAL_FIELDS = frozenset({LocatorField.PROMO_PACK, LocatorField.VARIANT})


@dataclass(frozen=True, slots=True)
class StoreTemplate:
    """
    Declarative product-handle layout for one store.

    Attributes:
        store: Store key
        product_base_url: URL prefix the handle is appended to
        fields: Identity components in handle order
        separator: Joins components inside the handle
        suffix: Appended after the last component (e.g., "-non-foil")
        face_policy: How multi-faced card names are slugged for this store
    """

    store: str
    product_base_url: str
    fields: tuple[LocatorField, ...]
    separator: str = "-"
    suffix: str = ""
    face_policy: FacePolicy = FacePolicy.ALL_FACES

    @property
    def required_fields(self) -> tuple[LocatorField, ...]:
        return tuple(f for f in self.fields if f not in OPTIONAL_FIELDS)

    def product_url(self, segments: tuple[str, ...]) -> str:
        """
        Assemble the product URL from already-resolved segments.

        Raises:
            ValueError: If the segment count cannot match this template
        """
        if not len(self.required_fields) <= len(segments) <= len(self.fields):
            raise ValueError(
                f"{self.store} expects {len(self.required_fields)}-{len(self.fields)} "
                f"locator segments, got {len(segments)}"
            )
        if any(not segment for segment in segments):
            raise ValueError(f"Empty locator segment for {self.store}: {segments}")

        return f"{self.product_base_url}{self.separator.join(segments)}{self.suffix}"


@dataclass(frozen=True, slots=True)
class ProductIdentity:
    """Store-specific identity components for one printing."""

    card_slug: str
    set_slug: str
    collector_number: str
    set_code: str
    variant_token: str | None
    promo_pack: bool

    def value_of(self, field: LocatorField) -> str | None:
        if field is LocatorField.PROMO_PACK:
            return PROMO_PACK_TOKEN if self.promo_pack else None
        value: str | None = getattr(self, field.value)
        return value


@dataclass(frozen=True, slots=True)
class ProductLocator:
    """
    Everything needed to address one product at one store.

    Attributes:
        store: Store key
        segments: Handle components in template order
        url: Direct product page URL
    """

    store: str
    segments: tuple[str, ...]
    url: str

    @property
    def api_path(self) -> str:
        """Path of this product on the pricing API."""
        return f"{API_PRICE_PREFIX}/{self.store}/{'/'.join(self.segments)}"


def resolve_identity(printing: CardPrinting, template: StoreTemplate) -> ProductIdentity:
    """Derive a printing's identity components as seen by one store."""
    variant = detect_frame_variant(printing)

    return ProductIdentity(
        card_slug=slugify_card_name(printing.name, template.face_policy),
        set_slug=slugify(printing.set_name),
        collector_number=printing.collector_number,
        set_code=printing.set_code.lower(),
        variant_token=normalize_frame_variant(variant, template.store),
        promo_pack=is_promo_pack(printing),
    )


def build_locator(identity: ProductIdentity, template: StoreTemplate) -> ProductLocator:
    """
    Build a store's product locator from an identity.

    Raises:
        ValueError: If a required component is empty (malformed identity)
    """
    segments: list[str] = []

    for field in template.fields:
        value = identity.value_of(field)
        if not value:
            if field in OPTIONAL_FIELDS:
                continue
            raise ValueError(f"Missing {field.value} for {template.store} locator")
        segments.append(value)

    resolved = tuple(segments)
    return ProductLocator(
        store=template.store,
        segments=resolved,
        url=template.product_url(resolved),
    )


def locator_from_segments(segments: tuple[str, ...], template: StoreTemplate) -> ProductLocator:
    """
    Rebuild a locator from API path segments.

    Raises:
        ValueError: If the segments cannot form a handle for this template
    """
    return ProductLocator(
        store=template.store,
        segments=segments,
        url=template.product_url(segments),
    )
