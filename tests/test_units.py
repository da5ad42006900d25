"""
Unit Resolver tests.

Tests:
1-4.  Height normalization (ft, inches, m, cm, unknown)
5-8.  Billing quantity: raw, depth → cubic yards, variation height, product base height
9.    Billing unit follows the conversion that applied
10-11. Add-on quantity for area_calculation vs per_unit
12.   Unit abbreviations
"""

import pytest

from quote_engine.schemas import Measurement, Product, Variation
from quote_engine.units import (
    calculate_area_with_height,
    get_unit_abbreviation,
    height_in_feet,
    resolve_addon_quantity,
    resolve_base_quantity,
    resolve_billing_quantity,
    resolve_billing_unit,
)


def _product(**kwargs):
    return Product(id="p1", name="Test", unit_price=10.0, **kwargs)


def _height_variation(height, unit="ft", affects=True):
    return Variation(id="v1", height_value=height, unit_of_measurement=unit,
                     affects_area_calculation=affects)


# ============================================================
# Height normalization
# ============================================================

def test_height_in_feet_units():
    assert height_in_feet(6, "ft") == 6
    assert height_in_feet(18, "inches") == pytest.approx(1.5)
    assert height_in_feet(2, "m") == pytest.approx(6.56168)
    assert height_in_feet(100, "cm") == pytest.approx(3.28084)


def test_unknown_height_unit_treated_as_feet():
    assert height_in_feet(4, "furlongs") == 4
    assert height_in_feet(4, None) == 4


def test_area_with_no_height_is_unchanged():
    assert calculate_area_with_height(50, None) == 50
    assert calculate_area_with_height(50, 0) == 50


def test_area_with_height_in_inches():
    # 50 LF × 36" = 50 × 3 ft = 150 SF
    assert calculate_area_with_height(50, 36, "inches") == pytest.approx(150)


# ============================================================
# Billing quantity
# ============================================================

def test_billing_quantity_is_raw_value_by_default():
    m = Measurement(type="area", value=100)
    assert resolve_billing_quantity(m, _product()) == 100


def test_depth_converts_to_cubic_yards():
    # 324 SF × 3" deep = 3 cu yd
    m = Measurement(type="area", value=324, depth=3)
    assert resolve_base_quantity(m) == pytest.approx(3.0)
    assert resolve_billing_quantity(m, _product(unit_type="cubic_yard")) == pytest.approx(3.0)


def test_depth_wins_over_height():
    m = Measurement(type="area", value=324, depth=3)
    product = _product(base_height=8, use_height_in_calculation=True)
    assert resolve_billing_quantity(m, product, _height_variation(6)) == pytest.approx(3.0)


def test_variation_height_wins_over_product_base_height():
    m = Measurement(type="linear", value=50)
    product = _product(base_height=8, use_height_in_calculation=True)
    assert resolve_billing_quantity(m, product, _height_variation(6)) == pytest.approx(300)
    # Variation that does not affect area → product base height applies
    flat = _height_variation(6, affects=False)
    assert resolve_billing_quantity(m, product, flat) == pytest.approx(400)


def test_product_base_height_needs_flag():
    m = Measurement(type="linear", value=50)
    assert resolve_billing_quantity(m, _product(base_height=8)) == 50
    product = _product(base_height=96, base_height_unit="inches", use_height_in_calculation=True)
    assert resolve_billing_quantity(m, product) == pytest.approx(400)


def test_billing_unit_follows_conversion():
    fence = _product(unit_type="linear_ft")
    linear = Measurement(type="linear", value=50)
    assert resolve_billing_unit(linear, fence) == "linear_ft"
    assert resolve_billing_unit(linear, fence, _height_variation(6)) == "sq_ft"
    assert resolve_billing_unit(linear, fence, _height_variation(6, affects=False)) == "linear_ft"
    mulch = Measurement(type="area", value=324, depth=3)
    assert resolve_billing_unit(mulch, _product(), _height_variation(6)) == "cubic_yard"


# ============================================================
# Add-on quantity
# ============================================================

def test_area_addon_ignores_depth():
    m = Measurement(type="area", value=324, depth=3)
    product = _product()
    assert resolve_addon_quantity(m, product, None, "area_calculation") == 324
    assert resolve_addon_quantity(m, product, None, "per_unit") == pytest.approx(3.0)


def test_area_addon_uses_height_priority():
    m = Measurement(type="linear", value=50)
    product = _product(base_height=4, use_height_in_calculation=True)
    assert resolve_addon_quantity(m, product, _height_variation(6), "area_calculation") == 300
    assert resolve_addon_quantity(m, product, None, "area_calculation") == 200


# ============================================================
# Display units
# ============================================================

def test_unit_abbreviations():
    assert get_unit_abbreviation("sq_ft") == "SF"
    assert get_unit_abbreviation("linear_ft") == "LF"
    assert get_unit_abbreviation("cubic_yard") == "cu yd"
    assert get_unit_abbreviation("each") == "ea"
    assert get_unit_abbreviation("square_meter") == "square meter"
    assert get_unit_abbreviation("") == "unit"
