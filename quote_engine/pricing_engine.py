"""
Pricing Composition Pipeline.

Quote-level math on top of line totals: markup, then tax, then round to cents.
Also owns every price string the customer sees: exact prices and
"lower - upper" ranges.

Pure math. Line items are never rounded here; only composed totals are.
"""

from decimal import Decimal, ROUND_HALF_UP

from .schemas import PriceRangeFormat, QuoteStatus, QuoteSummary


_CENT = Decimal("0.01")
_WHOLE = Decimal("1")

# Quote totals show a range only once the quote has left draft
SUBMITTED_STATUSES = {
    QuoteStatus.PENDING.value,
    QuoteStatus.ACCEPTED.value,
    QuoteStatus.DECLINED.value,
    QuoteStatus.EXPIRED.value,
}


def _round_half_up(value: float, step: Decimal) -> float:
    return float(Decimal(str(value)).quantize(step, rounding=ROUND_HALF_UP))


def round_to_cents(value: float) -> float:
    """Round half-up to 2 decimal places (1.005 → 1.01, not banker's 1.0)."""
    return _round_half_up(value, _CENT)


def apply_markup(base_price: float, markup_percentage: float) -> float:
    return base_price * (1 + markup_percentage / 100.0)


def apply_tax(price: float, tax_rate: float) -> float:
    return price * (1 + tax_rate / 100.0)


def compose_final_price(base_price: float, markup_percentage: float = 0.0,
                        tax_rate: float = 0.0) -> float:
    """
    Markup first, then tax, then round to cents.

    $1000 with 10% markup and 8% tax → 1100.00 → 1188.00
    """
    price = base_price
    if markup_percentage > 0:
        price = apply_markup(price, markup_percentage)
    if tax_rate > 0:
        price = apply_tax(price, tax_rate)
    return round_to_cents(price)


def summarize_quote(items, markup_percentage: float = 0.0, tax_rate: float = 0.0) -> QuoteSummary:
    """Subtotal of every stored line_total, plus markup and tax amounts."""
    subtotal = sum(item.line_total for item in items)
    with_markup = apply_markup(subtotal, markup_percentage) if markup_percentage > 0 else subtotal
    total = compose_final_price(subtotal, markup_percentage, tax_rate)
    return QuoteSummary(
        subtotal=round_to_cents(subtotal),
        markup_amount=round_to_cents(with_markup - subtotal),
        tax_amount=round_to_cents(total - with_markup),
        total=total,
    )


# --- Display ---

def format_price(amount: float, settings) -> str:
    """Currency symbol + thousands separators + configured precision: $1,575.00"""
    precision = max(int(settings.decimal_precision), 0)
    return f"{settings.currency_symbol}{amount:,.{precision}f}"


def calculate_price_range(price: float, lower_percentage: float,
                          upper_percentage: float) -> tuple:
    """
    Returns (lower, upper), each rounded half-up to whole currency units.
    Rounded independently, not to cents.
    """
    lower = _round_half_up(price * (1 - lower_percentage / 100.0), _WHOLE)
    upper = _round_half_up(price * (1 + upper_percentage / 100.0), _WHOLE)
    return lower, upper


def format_price_range(amount: float, lower_percentage: float, upper_percentage: float,
                       settings) -> str:
    """'$900.00 - $1,200.00', with ' (-10% / +20%)' in percentage display format."""
    lower, upper = calculate_price_range(amount, lower_percentage, upper_percentage)
    text = f"{format_price(lower, settings)} - {format_price(upper, settings)}"
    if settings.price_range_display_format == PriceRangeFormat.PERCENTAGE:
        text += f" (-{lower_percentage:g}% / +{upper_percentage:g}%)"
    return text


def _settings_range(amount: float, settings) -> str:
    return format_price_range(
        amount,
        settings.price_range_lower_percentage,
        settings.price_range_upper_percentage,
        settings,
    )


def display_price(amount: float, settings) -> str:
    """Range when the contractor enabled price ranges, exact otherwise."""
    if settings.use_price_ranges:
        return _settings_range(amount, settings)
    return format_price(amount, settings)


def display_quote_total(amount: float, settings, quote_status: str = QuoteStatus.DRAFT.value) -> str:
    """Whole-quote total. Drafts always show the exact figure."""
    if settings.use_price_ranges and quote_status in SUBMITTED_STATUSES:
        return _settings_range(amount, settings)
    return format_price(amount, settings)


def display_line_item_price(amount: float, settings) -> str:
    """Line items are exact regardless of range settings."""
    return format_price(amount, settings)
