"""
Quantity-banded pricing.

A tier matches when min_quantity <= quantity <= max_quantity
(max_quantity None = unbounded). Only active tiers count, checked in
ascending min_quantity order so the lowest band wins a tie.
No match is not an error; the caller's fallback price is used.
"""

import logging

from .pricing_engine import format_price

logger = logging.getLogger(__name__)


def _tier_contains(tier, quantity: float) -> bool:
    if quantity < tier.min_quantity:
        return False
    return tier.max_quantity is None or quantity <= tier.max_quantity


def get_tier_for_quantity(quantity: float, tiers):
    """Return the first active tier whose band contains quantity, or None."""
    if not tiers:
        return None
    active = sorted((t for t in tiers if t.is_active), key=lambda t: t.min_quantity)
    for tier in active:
        if _tier_contains(tier, quantity):
            return tier
    return None


def resolve_tier_price(quantity: float, tiers, fallback_price: float) -> float:
    """Tier price for quantity, or fallback_price when no active tier matches."""
    tier = get_tier_for_quantity(quantity, tiers)
    if tier is None:
        if tiers:
            logger.debug("No tier matches quantity %s, using fallback %s", quantity, fallback_price)
        return fallback_price
    return tier.tier_price


def format_tier_info(tier, settings) -> str:
    """e.g. 'Bulk: 50+ @ $9.00' or 'Small: 0-49 @ $12.00'."""
    price = format_price(tier.tier_price, settings)
    if tier.max_quantity is not None:
        band = f"{_fmt_qty(tier.min_quantity)}-{_fmt_qty(tier.max_quantity)}"
    else:
        band = f"{_fmt_qty(tier.min_quantity)}+"
    return f"{tier.tier_name}: {band} @ {price}"


def _fmt_qty(value: float) -> str:
    return f"{value:g}"
