"""
Price extraction from storefront product pages.

Two approaches:

- Selector extraction: try common price-bearing CSS selectors in order
  and parse the first numeric match.
- Condition-variant extraction: find the product's embedded JSON,
  pick the variant whose label names the condition we price (Near Mint),
  and fall back to the page's og:price:amount meta tag.

Embedded product JSON is located by an ordered tuple of named strategies.
Each strategy is a pure function from page HTML to candidate payloads.

Note: Web scraping is inherently fragile. Page structure may change.
"""

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

COMMON_PRICE_SELECTORS = (
    ".price",
    ".product-price",
    "[data-product-price]",
    ".money",
    "span.money",
    ".product__price",
)

META_PRICE_SELECTOR = 'meta[property="og:price:amount"]'

# Case-insensitive substrings marking the Near Mint variant
CONDITION_KEYWORDS = ("near mint", "nm")

# Inline prices above this are assumed to be in cents
MINOR_UNIT_THRESHOLD = 1000

# Digits with optional thousands separators and decimal part: "1,234.50"
_PRICE_PATTERN = re.compile(r"\d[\d,]*(?:\.\d+)?")

INLINE_PRODUCT_PATTERNS = (
    re.compile(r"var\s+product\s*=\s*({[\s\S]*?});"),
    re.compile(r"window\.__PRODUCT__\s*=\s*({[\s\S]*?});"),
    re.compile(r'"product"\s*:\s*({[\s\S]*?"variants"[\s\S]*?})'),
)


def parse_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def parse_price_text(text: str | None) -> float | None:
    """
    Extract a price from display text like "$1,234.50 CAD".

    Returns None when there is no number or the number is not positive.
    """
    if not text:
        return None

    match = _PRICE_PATTERN.search(text)
    if not match:
        return None

    try:
        price = float(match.group(0).replace(",", ""))
    except ValueError:
        return None

    return price if price > 0 else None


def find_price_in_html(html: str, selectors: tuple[str, ...] = COMMON_PRICE_SELECTORS) -> float | None:
    """Return the first parseable price among the given selectors."""
    soup = parse_soup(html)

    for selector in selectors:
        element = soup.select_one(selector)
        if element is None:
            continue
        price = parse_price_text(element.get_text(strip=True))
        if price is not None:
            logger.debug("Found price %.2f via selector %s", price, selector)
            return price

    return None


# =============================================================================
# EMBEDDED PRODUCT DATA
# =============================================================================


def to_major_units(value: float) -> float:
    """
    Convert a price that may be in cents to dollars.

    Values above MINOR_UNIT_THRESHOLD are taken to be minor units.
    """
    return value / 100 if value > MINOR_UNIT_THRESHOLD else value


@dataclass(frozen=True)
class ProductPayload:
    """
    Product variants found embedded in a page.

    Attributes:
        variants: Raw variant objects
        minor_units: True if prices are always in cents; False to apply
            the to_major_units heuristic
    """

    variants: list[dict[str, Any]]
    minor_units: bool = False


@dataclass(frozen=True)
class ExtractionStrategy:
    """A named way of locating embedded product data in page HTML."""

    name: str
    extract: Callable[[str], list[ProductPayload]]


def _variants_of(data: Any) -> list[dict[str, Any]]:
    if not isinstance(data, dict):
        return []
    variants = data.get("variants")
    if variants is None and isinstance(data.get("product"), dict):
        variants = data["product"].get("variants")
    if not isinstance(variants, list):
        return []
    return [v for v in variants if isinstance(v, dict)]


def extract_json_script_payloads(html: str) -> list[ProductPayload]:
    """
    Typed JSON payloads: <script type="application/json"> with variants.

    Shopify product JSON prices are always integer cents.
    """
    payloads: list[ProductPayload] = []

    for script in parse_soup(html).select('script[type="application/json"]'):
        content = script.string or script.get_text()
        if not content or "variants" not in content:
            continue
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            continue
        variants = _variants_of(data)
        if variants:
            payloads.append(ProductPayload(variants=variants, minor_units=True))

    return payloads


def extract_inline_script_payloads(html: str) -> list[ProductPayload]:
    """Inline script assignments such as `var product = {...};`."""
    payloads: list[ProductPayload] = []

    for script in parse_soup(html).select("script:not([src])"):
        content = script.string or script.get_text()
        if not content or ("variants" not in content and "product" not in content):
            continue
        for pattern in INLINE_PRODUCT_PATTERNS:
            match = pattern.search(content)
            if not match:
                continue
            try:
                data = json.loads(match.group(1))
            except json.JSONDecodeError:
                continue
            variants = _variants_of(data)
            if variants:
                payloads.append(ProductPayload(variants=variants, minor_units=False))
                break

    return payloads


EXTRACTION_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    ExtractionStrategy("json-script", extract_json_script_payloads),
    ExtractionStrategy("inline-script", extract_inline_script_payloads),
)


def variant_label(variant: dict[str, Any]) -> str:
    return str(variant.get("title") or variant.get("option1") or variant.get("name") or "")


def matches_condition(label: str, keywords: tuple[str, ...] = CONDITION_KEYWORDS) -> bool:
    label = label.lower()
    return any(keyword in label for keyword in keywords)


def _variant_price(variant: dict[str, Any], minor_units: bool) -> float | None:
    raw = variant.get("price")
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        parsed = parse_price_text(str(raw))
        if parsed is None:
            return None
        value = parsed

    price = value / 100 if minor_units else to_major_units(value)
    return price if price > 0 else None


def select_condition_price(payload: ProductPayload) -> float | None:
    """Price of the first variant whose label matches the condition keywords."""
    for variant in payload.variants:
        label = variant_label(variant)
        logger.debug("  Variant %r - price %r", label, variant.get("price"))
        if matches_condition(label):
            return _variant_price(variant, payload.minor_units)
    return None


def find_meta_price(html: str) -> float | None:
    """Page-level og:price:amount fallback."""
    meta = parse_soup(html).select_one(META_PRICE_SELECTOR)
    if meta is None:
        return None
    content = meta.get("content")
    return parse_price_text(content if isinstance(content, str) else None)


def find_condition_price(
    html: str,
    strategies: tuple[ExtractionStrategy, ...] = EXTRACTION_STRATEGIES,
) -> float | None:
    """
    Find the Near Mint price on a product page.

    Strategies are tried in order; the first payload holding a matching
    variant with a usable price wins. Falls back to the meta price tag.
    """
    for strategy in strategies:
        for payload in strategy.extract(html):
            price = select_condition_price(payload)
            if price is not None:
                logger.debug("Found Near Mint price %.2f via %s", price, strategy.name)
                return price

    price = find_meta_price(html)
    if price is not None:
        logger.debug("No Near Mint variant found, using meta price %.2f", price)
    return price
