"""
HTTP surface smoke tests: every endpoint delegates to the same pure functions.

Tests:
1.   Health
2-3. Line item pricing and QuoteItem creation
4-6. Compose, display, increment
7.   Display equations for a height-expanded line
8.   Tier validation
9-11. Quote summary and consolidation, including the 422 on corrupted input
"""


def _product():
    return {
        "id": "sod", "name": "Sod", "unit_price": 10.0, "unit_type": "sq_ft",
        "use_tiered_pricing": True,
        "pricing_tiers": [
            {"tier_name": "Small", "min_quantity": 0, "max_quantity": 49, "tier_price": 12.0},
            {"tier_name": "Bulk", "min_quantity": 50, "max_quantity": None, "tier_price": 9.0},
        ],
    }


def _item(item_id, line_total, **kwargs):
    body = {
        "id": item_id, "product_id": "sod", "measurement": {"type": "area", "value": 10},
        "unit_price": 10.0, "quantity": 10, "line_total": line_total,
    }
    body.update(kwargs)
    return body


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_price_line_item(client):
    resp = client.post("/api/pricing/line-item", json={
        "measurement": {"type": "area", "value": 100},
        "product": _product(),
        "addons": [{"addon": {"id": "edging", "price_value": 2, "calculation_type": "per_unit"},
                    "quantity": 1}],
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["price"]["unit_price"] == 9.0
    assert data["price"]["line_total"] == 1100.0
    assert data["tier_info"] == "Bulk: 50+ @ $9.00"
    assert data["warnings"] == []


def test_line_item_warnings_do_not_block(client):
    resp = client.post("/api/pricing/line-item", json={
        "measurement": {"type": "area", "value": -5},
        "product": _product(),
    })
    assert resp.status_code == 200
    assert resp.json()["warnings"] == ["Measurement value cannot be negative (-5)"]


def test_create_quote_item(client):
    resp = client.post("/api/pricing/quote-item", json={
        "item_id": "item-1",
        "measurement": {"type": "area", "value": 100},
        "product": _product(),
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == "item-1"
    assert data["line_total"] == 900.0
    assert data["is_addon_item"] is False


def test_compose(client):
    resp = client.post("/api/pricing/compose", json={
        "base_price": 1000, "markup_percentage": 10, "tax_rate": 8,
    })
    assert resp.json() == {"with_markup": 1100.0, "final_price": 1188.0}


def test_display_modes(client):
    settings = {"use_price_ranges": True, "price_range_display_format": "dollar_amounts"}
    draft = client.post("/api/pricing/display", json={
        "amount": 1000, "mode": "quote_total", "settings": settings,
    })
    assert draft.json()["text"] == "$1,000.00"
    sent = client.post("/api/pricing/display", json={
        "amount": 1000, "mode": "quote_total", "quote_status": "pending", "settings": settings,
    })
    assert sent.json()["text"] == "$900.00 - $1,200.00"


def test_describe_line(client):
    resp = client.post("/api/pricing/describe", json={
        "measurement": {"type": "linear", "value": 50},
        "product": {"id": "fence", "name": "Privacy Fence", "unit_price": 25.0, "unit_type": "linear_ft"},
        "variation": {"id": "h6", "name": "6 ft", "price_adjustment": 5, "adjustment_type": "fixed",
                      "height_value": 6, "unit_of_measurement": "ft", "affects_area_calculation": True},
        "addons": [{"addon": {"id": "stain", "name": "Stain", "price_value": 2,
                              "calculation_type": "area_calculation"}, "quantity": 1}],
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["product_line"] == "300 SF × $30.00/SF = $9,000.00"
    assert data["addons"] == [{"name": "Stain", "equation": "300 SF × $2.00/SF"}]


def test_increment(client):
    resp = client.post("/api/pricing/increment", json={
        "measured_quantity": 47, "increment_size": 10,
    })
    data = resp.json()
    assert data["units_needed"] == 5
    assert data["total_coverage"] == 50
    assert data["is_significant_waste"] is False


def test_validate_tiers(client):
    resp = client.post("/api/pricing/tiers/validate", json={"tiers": [
        {"tier_name": "A", "min_quantity": 0, "max_quantity": 40, "tier_price": 12},
        {"tier_name": "B", "min_quantity": 50, "max_quantity": None, "tier_price": 9},
    ]})
    assert resp.json() == {"errors": ["Gap between A and B"]}


def test_quote_summary(client):
    resp = client.post("/api/quotes/summary", json={
        "items": [_item("a", 600.0), _item("b", 400.0)],
        "markup_percentage": 10, "tax_rate": 8,
    })
    assert resp.status_code == 200
    assert resp.json()["total"] == 1188.0


def test_consolidate(client):
    resp = client.post("/api/quotes/consolidate", json={"items": [
        _item("a", 100.0),
        _item("b", 100.0),
        _item("pin", 40.0, is_addon_item=True, parent_quote_item_id="a", addon_id="pin"),
    ]})
    assert resp.status_code == 200
    data = resp.json()
    assert data["grand_total"] == 240.0
    group = data["consolidated_main_products"][0]
    assert group["total_line_total"] == 200.0
    assert group["map_placed_addons"][0]["total_line_total"] == 40.0


def test_consolidate_orphan_is_422(client):
    resp = client.post("/api/quotes/consolidate", json={"items": [
        _item("a", 100.0),
        _item("pin", 40.0, is_addon_item=True, parent_quote_item_id="zzz"),
    ]})
    assert resp.status_code == 422
