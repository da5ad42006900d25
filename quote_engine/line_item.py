"""
Line Item Price Calculator: the single source of truth for pricing one quote line.

Every screen (widget, internal builder, quote edit, review) prices lines
through calculate_line_price / build_quote_item. Nothing else computes
variation or add-on math.

Formula:
    base_quantity    = measurement.value, or value × depth / 324 (cu yd)
    billing_quantity = base_quantity × height in feet (variation height first,
                       then product base height), unless depth was given
    base_unit_price  = tier price for base_quantity, else product.unit_price
    unit_price       = base_unit_price + fixed adjustment
                       or base_unit_price × (1 + pct/100)
    line_total       = unit_price × billing_quantity + Σ add-on totals

No intermediate rounding; only composed quote totals are rounded.
"""

import logging

from .schemas import (
    AddonCalculationType,
    AddonCharge,
    AddonPriceType,
    AdjustmentType,
    LinePrice,
    MeasurementType,
    QuoteItem,
    QuoteItemAddon,
    VariationSelection,
)
from .tiers import get_tier_for_quantity
from .units import (
    resolve_addon_quantity,
    resolve_base_quantity,
    resolve_billing_quantity,
    resolve_billing_unit,
)

logger = logging.getLogger(__name__)


def adjust_unit_price(unit_price: float, variation=None) -> float:
    """Apply one variation's price adjustment to a unit price."""
    if variation is None:
        return unit_price
    if variation.adjustment_type == AdjustmentType.PERCENTAGE:
        return unit_price * (1 + variation.price_adjustment / 100.0)
    return unit_price + variation.price_adjustment


def resolve_base_unit_price(product, base_quantity: float):
    """
    Returns (price, tier). Tiered products use the matching active tier;
    otherwise, or when nothing matches, the catalog unit price.
    """
    if product.use_tiered_pricing and product.pricing_tiers:
        tier = get_tier_for_quantity(base_quantity, product.pricing_tiers)
        if tier is not None:
            return tier.tier_price, tier
        logger.debug("Product %s: no tier for %s, using unit price", product.id, base_quantity)
    return product.unit_price, None


def minimum_required_variation_price(product, variations, quantity: float = 0.0) -> float:
    """
    Floor unit price shown before the customer picks a variation.

    When the product has required variations, the cheapest adjusted price
    among them; otherwise the unadjusted price.
    """
    base_price, _ = resolve_base_unit_price(product, quantity)
    required = [v for v in variations if v.is_required]
    if not required:
        return base_price
    return min(adjust_unit_price(base_price, v) for v in required)


def effective_addon_price(addon) -> float:
    return addon.price_value + (addon.selected_option_price_adjustment or 0.0)


def calculate_addon_total(addon, quantity: int, measurement, product, variation=None,
                          product_total: float = 0.0) -> float:
    """
    Total for one selected add-on.

    percentage       → product_total × quantity × price / 100
    area_calculation → price × area × quantity
    per_unit         → price × billing quantity × quantity
    total (default)  → price × quantity
    """
    price = effective_addon_price(addon)

    if addon.price_type == AddonPriceType.PERCENTAGE:
        return product_total * quantity * price / 100.0

    if addon.calculation_type == AddonCalculationType.AREA_CALCULATION:
        area = resolve_addon_quantity(measurement, product, variation, addon.calculation_type)
        return price * area * quantity

    if addon.calculation_type == AddonCalculationType.PER_UNIT:
        billing_quantity = resolve_billing_quantity(measurement, product, variation)
        return price * billing_quantity * quantity

    if addon.calculation_type != AddonCalculationType.TOTAL:
        logger.debug("Add-on %s: unknown calculation type %r, pricing as total",
                     addon.id, addon.calculation_type)
    return price * quantity


def calculate_line_price(measurement, product, variation=None, addons=()) -> LinePrice:
    """
    Price one quote line.

    addons is a sequence of SelectedAddon. Inputs are never mutated; the
    same inputs always give the same LinePrice.
    """
    base_quantity = resolve_base_quantity(measurement)
    billing_quantity = resolve_billing_quantity(measurement, product, variation)

    base_unit_price, tier = resolve_base_unit_price(product, base_quantity)
    unit_price = adjust_unit_price(base_unit_price, variation)
    product_total = unit_price * billing_quantity

    charges = []
    for selected in addons:
        if selected.quantity <= 0:
            continue
        total = calculate_addon_total(
            selected.addon, selected.quantity, measurement, product,
            variation=variation, product_total=product_total,
        )
        charges.append(AddonCharge(
            addon_id=selected.addon.id,
            name=selected.addon.name,
            quantity=selected.quantity,
            effective_price=effective_addon_price(selected.addon),
            total=total,
        ))

    addons_total = sum(c.total for c in charges)

    return LinePrice(
        base_quantity=base_quantity,
        billing_quantity=billing_quantity,
        base_unit_price=base_unit_price,
        unit_price=unit_price,
        product_total=product_total,
        addon_charges=charges,
        addons_total=addons_total,
        line_total=product_total + addons_total,
        tier=tier,
    )


def _variation_selection(variation) -> VariationSelection:
    return VariationSelection(
        id=variation.id,
        name=variation.name,
        price_adjustment=variation.price_adjustment,
        adjustment_type=variation.adjustment_type,
        height_value=variation.height_value,
        unit_of_measurement=variation.unit_of_measurement,
        affects_area_calculation=variation.affects_area_calculation,
    )


def build_quote_item(item_id: str, measurement, product, variation=None, addons=(),
                     notes: str = None) -> QuoteItem:
    """
    Create the persisted QuoteItem for a main product line.

    quantity is the billing quantity and unit_type the unit it is in,
    so a height-expanded fence line is stored in SF, not LF.

    Each embedded add-on keeps the total it was priced at, so display and
    consolidation never recompute it.
    """
    price = calculate_line_price(measurement, product, variation, addons)
    chosen = [selected for selected in addons if selected.quantity > 0]

    item_addons = [
        QuoteItemAddon(
            id=selected.addon.id,
            name=selected.addon.name,
            price_value=selected.addon.price_value,
            price_type=selected.addon.price_type,
            calculation_type=selected.addon.calculation_type,
            quantity=selected.quantity,
            selected_option=selected.option_name,
            selected_option_price_adjustment=selected.addon.selected_option_price_adjustment or 0.0,
            total=charge.total,
        )
        for selected, charge in zip(chosen, price.addon_charges)
    ]

    return QuoteItem(
        id=item_id,
        product_id=product.id,
        product_name=product.name,
        unit_type=resolve_billing_unit(measurement, product, variation),
        measurement=measurement,
        unit_price=price.unit_price,
        quantity=price.billing_quantity,
        line_total=price.line_total,
        variations=[_variation_selection(variation)] if variation is not None else [],
        addons=item_addons,
        notes=notes,
    )


def build_map_addon_item(item_id: str, parent_item_id: str, addon, measurement,
                         unit_type: str = "each") -> QuoteItem:
    """
    Create the QuoteItem for an add-on placed on the map.

    Each placement is its own line linked to its parent by id. Point
    placements are priced per point: effective price × count.
    """
    unit_price = effective_addon_price(addon)
    quantity = measurement.value
    if measurement.type == MeasurementType.POINT and measurement.point_locations:
        quantity = float(len(measurement.point_locations))

    return QuoteItem(
        id=item_id,
        product_id=addon.id,
        product_name=addon.name,
        unit_type=unit_type,
        measurement=measurement,
        unit_price=unit_price,
        quantity=quantity,
        line_total=unit_price * quantity,
        parent_quote_item_id=parent_item_id,
        is_addon_item=True,
        addon_id=addon.id,
    )
