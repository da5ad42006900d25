"""
Caller-input validation for catalog editing and quote entry.

Every check returns human-readable messages and never raises;
calculation still proceeds on best-effort resolution. Messages are
surfaced in the catalog-editing screens.

Rules:
- tiers: max <= min, gaps, overlaps, negative bounds or prices
- measurements: negative value or depth
- add-on selections: negative quantities
"""

from typing import List


def _add_issue(issues: List[str], issue: str) -> None:
    if issue not in issues:
        issues.append(issue)


def _tier_label(tier) -> str:
    return tier.tier_name or f"Tier starting at {tier.min_quantity:g}"


def validate_tiers(tiers) -> List[str]:
    """
    Check a product's tiers for gaps, overlaps and malformed ranges.

    Bands are whole-unit: [0, 49] followed by [50, ...] is contiguous.
    Reports problems only; tiers are never repaired.
    """
    errors: List[str] = []
    ordered = sorted(tiers, key=lambda t: t.min_quantity)

    for i, tier in enumerate(ordered):
        label = _tier_label(tier)

        if i > 0:
            prev = ordered[i - 1]
            prev_label = _tier_label(prev)
            if prev.max_quantity is None:
                _add_issue(errors, f"Overlap between {prev_label} and {label}")
            else:
                if prev.max_quantity < tier.min_quantity - 1:
                    _add_issue(errors, f"Gap between {prev_label} and {label}")
                if prev.max_quantity >= tier.min_quantity:
                    _add_issue(errors, f"Overlap between {prev_label} and {label}")

        if tier.max_quantity is not None and tier.max_quantity <= tier.min_quantity:
            _add_issue(errors, f"{label}: max quantity must be greater than min quantity")
        if tier.min_quantity < 0:
            _add_issue(errors, f"{label}: min quantity cannot be negative")
        if tier.tier_price < 0:
            _add_issue(errors, f"{label}: tier price cannot be negative")

    return errors


def validate_measurement(measurement) -> List[str]:
    issues: List[str] = []
    if measurement.value < 0:
        _add_issue(issues, f"Measurement value cannot be negative ({measurement.value:g})")
    if measurement.depth is not None and measurement.depth < 0:
        _add_issue(issues, f"Depth cannot be negative ({measurement.depth:g})")
    return issues


def validate_addon_selection(addons) -> List[str]:
    issues: List[str] = []
    for selected in addons:
        if selected.quantity < 0:
            name = selected.addon.name or selected.addon.id
            _add_issue(issues, f"{name}: quantity cannot be negative ({selected.quantity})")
    return issues
