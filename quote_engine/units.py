"""
Unit Resolver: turns a raw measurement into the billing quantity.

measurement.value is always in the product's native unit (SF, LF or count).
Two conversions can apply:
  - depth (inches) on an area measurement → cubic yards
  - a height (variation first, then product base height) → area = length × height
"""

import logging

from .schemas import AddonCalculationType

logger = logging.getLogger(__name__)

# sq ft × depth in inches / (12 in/ft × 27 cu ft/cu yd) = cu yd
CUBIC_YARD_DIVISOR = 324.0

# Multipliers to convert a height into feet
HEIGHT_TO_FEET = {
    "ft": 1.0,
    "feet": 1.0,
    "foot": 1.0,
    "inches": 1.0 / 12.0,
    "inch": 1.0 / 12.0,
    "in": 1.0 / 12.0,
    "m": 3.28084,
    "cm": 0.0328084,
}

UNIT_ABBREVIATIONS = {
    "sq_ft": "SF",
    "linear_ft": "LF",
    "cubic_yard": "cu yd",
    "each": "ea",
    "hour": "hr",
    "pound": "lb",
    "ton": "ton",
    "pallet": "pallet",
}


def height_in_feet(height_value: float, unit: str = "ft") -> float:
    """Normalize a height to feet. Unknown units are taken as feet."""
    key = (unit or "ft").strip().lower()
    if key not in HEIGHT_TO_FEET:
        logger.debug("Unknown height unit %r, treating as feet", unit)
        return height_value
    return height_value * HEIGHT_TO_FEET[key]


def calculate_area_with_height(base_quantity: float, height_value=None, unit: str = "ft") -> float:
    """Expand a linear quantity by a height. No height → quantity unchanged."""
    if not height_value:
        return base_quantity
    return base_quantity * height_in_feet(height_value, unit)


def resolve_height(product, variation=None):
    """
    Pick the height that expands a quantity into an area.

    Priority: selected variation's height (when it affects area),
    then the product's base height (when enabled), else None.
    Returns (height_value, unit) or None.
    """
    if variation is not None and variation.affects_area_calculation and variation.height_value:
        return variation.height_value, variation.unit_of_measurement or "ft"
    if product.use_height_in_calculation and product.base_height:
        return product.base_height, product.base_height_unit or "ft"
    return None


def resolve_base_quantity(measurement) -> float:
    """
    Unexpanded billing quantity: raw value, or cubic yards when a depth is given.
    This is the quantity tier bands are matched against.
    """
    if measurement.depth:
        return (measurement.value * measurement.depth) / CUBIC_YARD_DIVISOR
    return measurement.value


def resolve_billing_quantity(measurement, product, variation=None) -> float:
    """Final quantity multiplied against the unit price."""
    if measurement.depth:
        return resolve_base_quantity(measurement)

    height = resolve_height(product, variation)
    if height is None:
        return measurement.value
    return calculate_area_with_height(measurement.value, *height)


def resolve_billing_unit(measurement, product, variation=None) -> str:
    """Unit the billing quantity is expressed in: cu yd after depth, SF after height."""
    if measurement.depth:
        return "cubic_yard"
    if resolve_height(product, variation) is not None:
        return "sq_ft"
    return product.unit_type


def resolve_addon_quantity(measurement, product, variation, calculation_type: str) -> float:
    """
    Quantity an add-on is multiplied against.

    area_calculation add-ons always expand the raw measured length by the
    height rule, ignoring depth. Everything else uses the billing quantity.
    """
    if calculation_type == AddonCalculationType.AREA_CALCULATION:
        height = resolve_height(product, variation)
        if height is None:
            return measurement.value
        return calculate_area_with_height(measurement.value, *height)
    return resolve_billing_quantity(measurement, product, variation)


def get_unit_abbreviation(unit_type: str) -> str:
    """Short display label for a unit type, same in every view."""
    if not unit_type:
        return "unit"
    return UNIT_ABBREVIATIONS.get(unit_type, unit_type.replace("_", " "))
