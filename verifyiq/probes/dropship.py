"""
Dropship probes (pure).

Credits measure trust: 1.0 = no dropship indicator from this signal.
"""
from typing import List, Optional, Tuple

from ..blocklists import (
    CATEGORY_KEYWORDS,
    DROPSHIP_TITLE_PATTERNS,
    DROPSHIP_TITLE_POINTS_MAX,
    SHOPIFY_INDICATORS,
    SOURCE_PRICE_RANGES,
)
from ..domain.kinds import ProbeId
from ..domain.subjects import ProductListing
from .base import Probe


def detect_category(title: str) -> Optional[str]:
    lowered = title.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return None


def estimate_markup(listing: ProductListing) -> Tuple[Optional[str], Optional[float], Optional[float]]:
    """
    (category, estimated source price, markup multiplier)

    Source price is the midpoint of the category's AliExpress range.
    """
    category = detect_category(listing.title)
    if category is None:
        return None, None, None
    low, high = SOURCE_PRICE_RANGES[category]
    source_price = (low + high) / 2
    if listing.price is None:
        return category, source_price, None
    return category, source_price, listing.price / source_price if listing.price > 0 else 0.0


def is_shopify(store_url: str) -> bool:
    lowered = store_url.lower()
    return any(indicator.lower() in lowered for indicator in SHOPIFY_INDICATORS)


class ShopifyPlatformProbe(Probe):
    """Scheduled only with a store URL."""
    probe_id = ProbeId.SHOPIFY_PLATFORM

    async def probe(self, subject: ProductListing):
        if is_shopify(subject.store_url):
            return self.ok(0.0, "Store runs on Shopify, commonly used by dropshippers", shopify=True)
        return self.ok(1.0, "No Shopify storefront markers", shopify=False)


class MarkupProbe(Probe):
    """
    Listed price vs typical source price.
        > 5x -> 0.0, > 3x -> 0.33, > 2x -> 0.67, else 1.0
    Scheduled only when a category is detected and a price is given.
    """
    probe_id = ProbeId.MARKUP

    async def probe(self, subject: ProductListing):
        category, source_price, multiplier = estimate_markup(subject)
        detail = dict(category=category, estimated_source_price=source_price,
                      markup_multiplier=round(multiplier, 2))
        if multiplier > 5:
            low, high = SOURCE_PRICE_RANGES[category]
            return self.ok(0.0, f"Extreme markup: {multiplier:.1f}x typical AliExpress range (${low:g}-${high:g})",
                           **detail)
        if multiplier > 3:
            return self.ok(0.33, f"High markup: {multiplier:.1f}x", **detail)
        if multiplier > 2:
            return self.ok(0.67, f"Moderate markup: {multiplier:.1f}x", **detail)
        return self.ok(1.0, f"Price in line with source ({multiplier:.1f}x)", **detail)


class TitlePatternsProbe(Probe):
    """Share of dropship title-pattern points not matched."""
    probe_id = ProbeId.TITLE_PATTERNS

    async def probe(self, subject: ProductListing):
        matched = [(points, flag) for pattern, points, flag in DROPSHIP_TITLE_PATTERNS if pattern.search(subject.title)]
        points = sum(p for p, _ in matched)
        flags = [flag for _, flag in matched]
        credit = 1 - points / DROPSHIP_TITLE_POINTS_MAX
        if not flags:
            return self.ok(1.0, "No dropship naming patterns", flags=[])
        return self.ok(round(credit, 4), f"Title patterns: {', '.join(flags)}", flags=flags, points=points)


class StoreDomainProbe(Probe):
    """Scheduled only with a store URL."""
    probe_id = ProbeId.STORE_DOMAIN

    async def probe(self, subject: ProductListing):
        if "myshopify.com" in subject.store_url.lower():
            return self.ok(0.0, "Default myshopify.com domain, no custom domain", custom_domain=False)
        return self.ok(1.0, "Custom store domain", custom_domain=True)


def build_dropship_probes(subject: ProductListing) -> List[Probe]:
    probes: List[Probe] = []
    if subject.store_url:
        probes.append(ShopifyPlatformProbe())
    category, _, multiplier = estimate_markup(subject)
    if category is not None and multiplier is not None:
        probes.append(MarkupProbe())
    probes.append(TitlePatternsProbe())
    if subject.store_url:
        probes.append(StoreDomainProbe())
    return probes
