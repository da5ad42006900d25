"""
Shared test fixtures: API test client and a small sample catalog.
"""

import pytest
from fastapi.testclient import TestClient

from quote_engine.main import app
from quote_engine.schemas import (
    PriceSettings,
    PricingTier,
    Product,
    Variation,
)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def price_settings():
    """Exact-price display in dollars, ranges off."""
    return PriceSettings(currency_symbol="$", decimal_precision=2)


@pytest.fixture
def sod():
    """$10/SF area product, no tiers."""
    return Product(id="sod", name="Sod", unit_price=10.0, unit_type="sq_ft")


@pytest.fixture
def tiered_sod():
    """Same product with [0, 49] → $12 and [50, ∞) → $9."""
    return Product(
        id="sod", name="Sod", unit_price=10.0, unit_type="sq_ft",
        use_tiered_pricing=True,
        pricing_tiers=[
            PricingTier(tier_name="Small", min_quantity=0, max_quantity=49, tier_price=12.0),
            PricingTier(tier_name="Bulk", min_quantity=50, max_quantity=None, tier_price=9.0),
        ],
    )


@pytest.fixture
def fence():
    """$25/LF linear product."""
    return Product(id="fence", name="Privacy Fence", unit_price=25.0, unit_type="linear_ft")


@pytest.fixture
def six_foot():
    """Height variation that turns fence length into face area."""
    return Variation(
        id="h6", name="6 ft", price_adjustment=5.0, adjustment_type="fixed",
        height_value=6, unit_of_measurement="ft", affects_area_calculation=True,
    )
