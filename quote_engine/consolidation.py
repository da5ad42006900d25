"""
Quote Consolidation Engine: regroups a quote's flat item list for display.

Input: every QuoteItem of one quote.
  - main instances: items without is_addon_item
  - addon instances: map-placed add-ons, each linked to a main instance
    by parent_quote_item_id

Main instances group by product and variation selection. Per group:
  total_quantity     = Σ instance.quantity
  total_line_total   = Σ instance unit_price × quantity
  traditional_addons = embedded add-ons merged by (id, selected option)
  map_placed_addons  = child items merged by addon id

Value is only re-bucketed, never created or lost:
    Σ base + Σ traditional add-ons + Σ map add-ons == Σ item.line_total
A mismatch means an item whose line_total is not its unit price ×
quantity plus its add-ons, or a child with no main parent; both raise
ConsolidationError.

Recomputed on every render, linear in item count, nothing cached.
"""

import logging
import math

from .config import settings
from .schemas import (
    AddonInstance,
    ConsolidatedAddon,
    ConsolidatedMainProduct,
    ConsolidatedMapAddon,
    ConsolidatedQuote,
)

logger = logging.getLogger(__name__)

TOTAL_TOLERANCE = 1e-6


class ConsolidationError(ValueError):
    """Consolidated totals do not add back up to the quote's items."""


def variation_signature(item) -> tuple:
    """Sorted variation ids; instances only merge when their selections match."""
    return tuple(sorted(v.id for v in item.variations))


def _new_group(item) -> ConsolidatedMainProduct:
    return ConsolidatedMainProduct(
        product_id=item.product_id,
        product_name=item.product_name,
        unit_type=item.unit_type,
        unit_price=item.unit_price,
        color=item.measurement.map_color or settings.DEFAULT_PRODUCT_COLOR,
        variations=list(item.variations),
    )


def _consolidate_traditional_addons(instances) -> list:
    merged = {}
    for instance in instances:
        for addon in instance.addons:
            if addon.quantity <= 0:
                continue
            key = (addon.id, addon.selected_option or "")
            entry = merged.get(key)
            if entry is None:
                entry = ConsolidatedAddon(
                    id=addon.id,
                    name=addon.name,
                    price_value=addon.price_value,
                    price_type=addon.price_type,
                    calculation_type=addon.calculation_type,
                    selected_option=addon.selected_option,
                    selected_option_price_adjustment=addon.selected_option_price_adjustment,
                )
                merged[key] = entry
            entry.quantity += addon.quantity
            entry.total += addon.total
            entry.instances.append(AddonInstance(
                parent_item_id=instance.id,
                quantity=addon.quantity,
                total=addon.total,
            ))
    return list(merged.values())


def _consolidate_map_addons(instances, children_by_parent) -> list:
    merged = {}
    for instance in instances:
        for child in children_by_parent.get(instance.id, []):
            key = child.addon_id or child.product_id
            entry = merged.get(key)
            if entry is None:
                entry = ConsolidatedMapAddon(
                    addon_id=key,
                    product_id=child.product_id,
                    product_name=child.product_name,
                    unit_price=child.unit_price,
                    unit_type=child.unit_type,
                    map_color=child.measurement.map_color or settings.DEFAULT_ADDON_COLOR,
                )
                merged[key] = entry
            entry.total_quantity += child.quantity
            entry.total_line_total += child.line_total
            entry.items.append(child)
    return list(merged.values())


def consolidated_total(groups) -> float:
    """Sum of every display bucket across all groups."""
    total = 0.0
    for group in groups:
        total += group.total_line_total
        total += sum(a.total for a in group.traditional_addons)
        total += sum(a.total_line_total for a in group.map_placed_addons)
    return total


def consolidate_quote_items(items) -> ConsolidatedQuote:
    """Group a quote's items for display. Raises ConsolidationError on lost value."""
    main_items = [item for item in items if not item.is_addon_item]
    addon_items = [item for item in items if item.is_addon_item]

    main_ids = {item.id for item in main_items}
    children_by_parent = {}
    for child in addon_items:
        if child.parent_quote_item_id not in main_ids:
            raise ConsolidationError(
                f"Add-on item {child.id} references unknown parent "
                f"{child.parent_quote_item_id!r}"
            )
        children_by_parent.setdefault(child.parent_quote_item_id, []).append(child)

    groups = {}
    for item in main_items:
        key = (item.product_id, variation_signature(item))
        group = groups.get(key)
        if group is None:
            group = _new_group(item)
            groups[key] = group
        group.instances.append(item)
        group.total_quantity += item.quantity
        group.total_line_total += item.unit_price * item.quantity

    for group in groups.values():
        group.traditional_addons = _consolidate_traditional_addons(group.instances)
        group.map_placed_addons = _consolidate_map_addons(group.instances, children_by_parent)

    products = list(groups.values())
    expected = sum(item.line_total for item in items)
    actual = consolidated_total(products)
    if not math.isclose(actual, expected, rel_tol=1e-9, abs_tol=TOTAL_TOLERANCE):
        raise ConsolidationError(
            f"Consolidated total {actual!r} does not match item total {expected!r}"
        )

    logger.debug("Consolidated %d items into %d product groups", len(items), len(products))
    return ConsolidatedQuote(consolidated_main_products=products, grand_total=expected)
