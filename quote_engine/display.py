"""
Display equations for quote lines: the same wording in every quote view.

    describe_product_line → "45 LF × $35.00/LF = $1,575.00"
    describe_addon        → ("Gate Kit (Black)", "2 × $150.00")

Totals are never recomputed here: product lines show a stored unit price
and quantity, add-ons show the total they were priced at.
"""

from .pricing_engine import format_price
from .schemas import AddonCalculationType, AddonPriceType
from .units import get_unit_abbreviation


def _fmt_qty(quantity: float) -> str:
    if float(quantity).is_integer():
        return f"{int(quantity):,}"
    return f"{quantity:,.2f}"


def describe_product_line(quantity: float, unit_price: float, unit_type: str, settings) -> str:
    unit = get_unit_abbreviation(unit_type)
    total = quantity * unit_price
    return (
        f"{_fmt_qty(quantity)} {unit} × {format_price(unit_price, settings)}/{unit}"
        f" = {format_price(total, settings)}"
    )


def addon_display_name(addon) -> str:
    if addon.selected_option:
        return f"{addon.name} ({addon.selected_option})"
    return addon.name


def describe_addon(addon, product_quantity: float, product_total: float, unit_type: str,
                   settings, area: float = None) -> tuple:
    """
    Returns (display_name, equation) for an embedded or consolidated add-on.

    area is the height-expanded area when the add-on is area_calculation;
    without it the equation falls back to the flat form.
    """
    price = addon.price_value + (addon.selected_option_price_adjustment or 0.0)
    qty_prefix = f"{addon.quantity} × " if addon.quantity > 1 else ""
    name = addon_display_name(addon)

    if addon.price_type == AddonPriceType.PERCENTAGE:
        qty_suffix = f" × {addon.quantity}" if addon.quantity > 1 else ""
        return name, f"{price:g}% of {format_price(product_total, settings)}{qty_suffix}"

    if addon.calculation_type == AddonCalculationType.AREA_CALCULATION and area is not None:
        return name, f"{qty_prefix}{_fmt_qty(area)} SF × {format_price(price, settings)}/SF"

    if addon.calculation_type == AddonCalculationType.PER_UNIT:
        unit = get_unit_abbreviation(unit_type)
        return name, (
            f"{qty_prefix}{_fmt_qty(product_quantity)} {unit} × "
            f"{format_price(price, settings)}/{unit}"
        )

    return name, f"{qty_prefix}{format_price(price, settings)}"
