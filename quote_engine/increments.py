"""
Increment Rounding Advisor.

Some products are only sold in whole units (rolls, pallets, bundles).
Given a measured quantity, report how many units to buy and how much
extra coverage that gives. Advisory only; the caller decides whether
to re-measure or continue.
"""

import logging
import math

from .config import settings
from .schemas import IncrementResult

logger = logging.getLogger(__name__)


def _units_for(measured: float, increment_size: float) -> int:
    """ceil(measured / size), without float fuzz pushing 3.0000000000000004 up to 4."""
    ratio = measured / increment_size
    nearest = round(ratio)
    if math.isclose(ratio, nearest, rel_tol=1e-9, abs_tol=1e-12):
        return int(nearest)
    return math.ceil(ratio)


def calculate_increment_quantity(measured_quantity: float, increment_size: float,
                                 allow_partial: bool = False,
                                 significant_waste_pct: float = None) -> IncrementResult:
    """
    47 measured, increments of 10, no partials → 5 units, 50 coverage, 3 extra.

    With partial increments allowed the last unit may be fractional, so
    coverage equals the measured quantity; units_needed is still the whole
    number of purchasable units.
    """
    threshold = settings.SIGNIFICANT_WASTE_PCT if significant_waste_pct is None else significant_waste_pct
    measured = max(float(measured_quantity or 0.0), 0.0)

    if not increment_size or increment_size <= 0:
        logger.warning("Invalid increment size %r, no rounding applied", increment_size)
        return IncrementResult(
            units_needed=math.ceil(measured),
            total_coverage=measured,
            extra=0.0,
            waste_percentage=0.0,
            is_significant_waste=False,
        )

    units_needed = _units_for(measured, increment_size)
    if allow_partial:
        total_coverage = measured
    else:
        total_coverage = units_needed * increment_size

    extra = max(total_coverage - measured, 0.0)
    waste_percentage = round(extra / measured * 100.0, 1) if measured > 0 else 0.0

    return IncrementResult(
        units_needed=units_needed,
        total_coverage=total_coverage,
        extra=extra,
        waste_percentage=waste_percentage,
        is_significant_waste=waste_percentage > threshold,
    )


def increment_quantity_for_product(product, measured_quantity: float) -> IncrementResult:
    """Advisor input straight from a product's increment settings."""
    return calculate_increment_quantity(
        measured_quantity,
        product.sold_in_increments_of,
        allow_partial=product.allow_partial_increments,
    )
