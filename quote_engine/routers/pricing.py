from fastapi import APIRouter
from pydantic import BaseModel
from typing import List, Optional

from .. import pricing_engine
from ..display import describe_addon, describe_product_line
from ..increments import calculate_increment_quantity
from ..line_item import build_quote_item, calculate_line_price
from ..schemas import (
    AddonCalculationType,
    IncrementResult,
    LinePrice,
    Measurement,
    PriceSettings,
    PricingTier,
    Product,
    QuoteItem,
    SelectedAddon,
    Variation,
)
from ..tiers import format_tier_info
from ..units import resolve_addon_quantity
from ..validation import validate_addon_selection, validate_measurement, validate_tiers

router = APIRouter(prefix="/pricing", tags=["pricing"])


# --- Schemas ---
class LineItemRequest(BaseModel):
    measurement: Measurement
    product: Product
    variation: Optional[Variation] = None
    addons: List[SelectedAddon] = []


class QuoteItemRequest(LineItemRequest):
    item_id: str
    notes: Optional[str] = None


class LineItemResponse(BaseModel):
    price: LinePrice
    tier_info: Optional[str] = None
    warnings: List[str] = []


class AddonLine(BaseModel):
    name: str
    equation: str


class DescribeResponse(BaseModel):
    product_line: str
    addons: List[AddonLine] = []


class ComposeRequest(BaseModel):
    base_price: float
    markup_percentage: Optional[float] = None
    tax_rate: Optional[float] = None


class DisplayRequest(BaseModel):
    amount: float
    mode: str = "exact"  # exact | price | quote_total | line_item
    quote_status: str = "draft"
    settings: Optional[PriceSettings] = None


class IncrementRequest(BaseModel):
    measured_quantity: float
    increment_size: float
    allow_partial: bool = False


class TierValidationRequest(BaseModel):
    tiers: List[PricingTier]


def _warnings(req: LineItemRequest) -> List[str]:
    return (
        validate_measurement(req.measurement)
        + validate_addon_selection(req.addons)
        + (validate_tiers(req.product.pricing_tiers) if req.product.use_tiered_pricing else [])
    )


@router.post("/line-item", response_model=LineItemResponse)
def price_line_item(req: LineItemRequest):
    """Price one line. Validation problems are returned alongside, never block."""
    price = calculate_line_price(req.measurement, req.product, req.variation, req.addons)
    tier_info = format_tier_info(price.tier, PriceSettings.from_settings()) if price.tier else None
    return LineItemResponse(price=price, tier_info=tier_info, warnings=_warnings(req))


@router.post("/quote-item", response_model=QuoteItem)
def create_quote_item(req: QuoteItemRequest):
    return build_quote_item(
        req.item_id, req.measurement, req.product, req.variation, req.addons, notes=req.notes,
    )


@router.post("/compose")
def compose(req: ComposeRequest):
    defaults = PriceSettings.from_settings()
    markup = req.markup_percentage if req.markup_percentage is not None else defaults.global_markup_percentage
    tax = req.tax_rate if req.tax_rate is not None else defaults.global_tax_rate
    with_markup = pricing_engine.apply_markup(req.base_price, markup) if markup > 0 else req.base_price
    return {
        "with_markup": pricing_engine.round_to_cents(with_markup),
        "final_price": pricing_engine.compose_final_price(req.base_price, markup, tax),
    }


@router.post("/display")
def display(req: DisplayRequest):
    settings = req.settings or PriceSettings.from_settings()
    if req.mode == "price":
        text = pricing_engine.display_price(req.amount, settings)
    elif req.mode == "quote_total":
        text = pricing_engine.display_quote_total(req.amount, settings, req.quote_status)
    elif req.mode == "line_item":
        text = pricing_engine.display_line_item_price(req.amount, settings)
    else:
        text = pricing_engine.format_price(req.amount, settings)
    return {"text": text}


@router.post("/increment", response_model=IncrementResult)
def increment(req: IncrementRequest):
    return calculate_increment_quantity(req.measured_quantity, req.increment_size, req.allow_partial)


@router.post("/tiers/validate")
def check_tiers(req: TierValidationRequest):
    return {"errors": validate_tiers(req.tiers)}


@router.post("/describe", response_model=DescribeResponse)
def describe_line(req: LineItemRequest):
    """Display equations for one line, as shown on the customer's quote."""
    settings = PriceSettings.from_settings()
    item = build_quote_item("preview", req.measurement, req.product, req.variation, req.addons)
    area = resolve_addon_quantity(req.measurement, req.product, req.variation,
                                  AddonCalculationType.AREA_CALCULATION)
    product_total = item.unit_price * item.quantity
    addons = []
    for addon in item.addons:
        name, equation = describe_addon(
            addon, item.quantity, product_total, item.unit_type, settings, area=area,
        )
        addons.append(AddonLine(name=name, equation=equation))
    return DescribeResponse(
        product_line=describe_product_line(item.quantity, item.unit_price, item.unit_type, settings),
        addons=addons,
    )
