from pydantic import BaseModel
from typing import Optional, List
import enum

from .config import settings


# --- Known values for string-typed fields ---
# Fields stay plain `str` so unknown values reach the documented fallbacks.

class MeasurementType(str, enum.Enum):
    AREA = "area"
    LINEAR = "linear"
    POINT = "point"


class AdjustmentType(str, enum.Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


class AddonPriceType(str, enum.Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


class AddonCalculationType(str, enum.Enum):
    TOTAL = "total"
    PER_UNIT = "per_unit"
    AREA_CALCULATION = "area_calculation"


class QuoteStatus(str, enum.Enum):
    DRAFT = "draft"
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


class PriceRangeFormat(str, enum.Enum):
    PERCENTAGE = "percentage"
    DOLLAR_AMOUNTS = "dollar_amounts"


class Frozen(BaseModel):
    class Config:
        frozen = True


# --- Catalog snapshot ---

class PricingTier(Frozen):
    id: Optional[str] = None
    tier_name: str = ""
    min_quantity: float
    max_quantity: Optional[float] = None  # None = unbounded
    tier_price: float
    is_active: bool = True
    display_order: int = 0


class Variation(Frozen):
    id: str
    name: str = ""
    price_adjustment: float = 0.0
    adjustment_type: str = AdjustmentType.FIXED.value
    height_value: Optional[float] = None
    unit_of_measurement: Optional[str] = None
    affects_area_calculation: bool = False
    is_required: bool = False
    is_default: bool = False


class Addon(Frozen):
    id: str
    name: str = ""
    price_value: float = 0.0
    price_type: str = AddonPriceType.FIXED.value
    calculation_type: str = AddonCalculationType.TOTAL.value
    selected_option_price_adjustment: Optional[float] = None


class Product(Frozen):
    id: str
    name: str = ""
    unit_price: float
    unit_type: str = "sq_ft"
    use_tiered_pricing: bool = False
    pricing_tiers: List[PricingTier] = []
    base_height: Optional[float] = None
    base_height_unit: Optional[str] = None
    use_height_in_calculation: bool = False
    sold_in_increments_of: Optional[float] = None
    increment_unit_label: Optional[str] = None
    allow_partial_increments: bool = False


# --- Inputs ---

class Measurement(Frozen):
    type: str = MeasurementType.AREA.value
    value: float
    unit: str = ""
    depth: Optional[float] = None  # inches, volume products only
    coordinates: Optional[List[List[float]]] = None
    point_locations: Optional[List[List[float]]] = None
    map_color: Optional[str] = None
    dimensions: Optional[dict] = None


class SelectedAddon(Frozen):
    """One add-on chosen for a line, with how many of it."""
    addon: Addon
    quantity: int = 1
    option_name: Optional[str] = None


class PriceSettings(Frozen):
    currency_symbol: str = "$"
    decimal_precision: int = 2
    use_price_ranges: bool = False
    price_range_lower_percentage: float = 10.0
    price_range_upper_percentage: float = 20.0
    price_range_display_format: str = PriceRangeFormat.PERCENTAGE.value
    global_markup_percentage: float = 0.0
    global_tax_rate: float = 0.0

    @classmethod
    def from_settings(cls, cfg=None) -> "PriceSettings":
        """Contractor defaults from the app configuration."""
        cfg = cfg or settings
        return cls(
            currency_symbol=cfg.CURRENCY_SYMBOL,
            decimal_precision=cfg.DECIMAL_PRECISION,
            use_price_ranges=cfg.USE_PRICE_RANGES,
            price_range_lower_percentage=cfg.PRICE_RANGE_LOWER_PERCENTAGE,
            price_range_upper_percentage=cfg.PRICE_RANGE_UPPER_PERCENTAGE,
            price_range_display_format=cfg.PRICE_RANGE_DISPLAY_FORMAT,
            global_markup_percentage=cfg.GLOBAL_MARKUP_PERCENTAGE,
            global_tax_rate=cfg.GLOBAL_TAX_RATE,
        )


# --- Calculator outputs ---

class AddonCharge(Frozen):
    addon_id: str
    name: str = ""
    quantity: int
    effective_price: float
    total: float


class LinePrice(Frozen):
    base_quantity: float       # raw or depth-converted, used for the tier lookup
    billing_quantity: float    # after height expansion
    base_unit_price: float     # tier or catalog price, before variation
    unit_price: float          # after variation adjustment
    product_total: float       # unit_price × billing_quantity
    addon_charges: List[AddonCharge] = []
    addons_total: float = 0.0
    line_total: float
    tier: Optional[PricingTier] = None


class VariationSelection(Frozen):
    id: str
    name: str = ""
    price_adjustment: float = 0.0
    adjustment_type: str = AdjustmentType.FIXED.value
    height_value: Optional[float] = None
    unit_of_measurement: Optional[str] = None
    affects_area_calculation: bool = False


class QuoteItemAddon(Frozen):
    id: str
    name: str = ""
    price_value: float = 0.0
    price_type: str = AddonPriceType.FIXED.value
    calculation_type: str = AddonCalculationType.TOTAL.value
    quantity: int = 0
    selected_option: Optional[str] = None
    selected_option_price_adjustment: float = 0.0
    total: float = 0.0  # fixed when the item was priced


class QuoteItem(Frozen):
    id: str
    product_id: str
    product_name: str = ""
    unit_type: str = ""
    measurement: Measurement
    unit_price: float
    quantity: float
    line_total: float
    variations: List[VariationSelection] = []
    addons: List[QuoteItemAddon] = []
    parent_quote_item_id: Optional[str] = None
    is_addon_item: bool = False
    addon_id: Optional[str] = None
    notes: Optional[str] = None


class IncrementResult(Frozen):
    units_needed: int
    total_coverage: float
    extra: float
    waste_percentage: float
    is_significant_waste: bool


class QuoteSummary(Frozen):
    subtotal: float
    markup_amount: float
    tax_amount: float
    total: float


# --- Consolidated view (never persisted) ---

class AddonInstance(BaseModel):
    parent_item_id: str
    quantity: int
    total: float


class ConsolidatedAddon(BaseModel):
    id: str
    name: str = ""
    price_value: float = 0.0
    price_type: str = AddonPriceType.FIXED.value
    calculation_type: str = AddonCalculationType.TOTAL.value
    selected_option: Optional[str] = None
    selected_option_price_adjustment: float = 0.0
    quantity: int = 0
    total: float = 0.0
    instances: List[AddonInstance] = []


class ConsolidatedMapAddon(BaseModel):
    addon_id: str
    product_id: str
    product_name: str = ""
    unit_price: float = 0.0
    unit_type: str = ""
    total_quantity: float = 0.0
    total_line_total: float = 0.0
    map_color: str = ""
    items: List[QuoteItem] = []


class ConsolidatedMainProduct(BaseModel):
    product_id: str
    product_name: str = ""
    unit_type: str = ""
    unit_price: float = 0.0
    color: str = ""
    total_quantity: float = 0.0
    total_line_total: float = 0.0
    instances: List[QuoteItem] = []
    variations: List[VariationSelection] = []
    traditional_addons: List[ConsolidatedAddon] = []
    map_placed_addons: List[ConsolidatedMapAddon] = []


class ConsolidatedQuote(BaseModel):
    consolidated_main_products: List[ConsolidatedMainProduct] = []
    grand_total: float = 0.0
