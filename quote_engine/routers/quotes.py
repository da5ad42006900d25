from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import List, Optional
import logging

from ..consolidation import ConsolidationError, consolidate_quote_items
from ..pricing_engine import summarize_quote
from ..schemas import ConsolidatedQuote, PriceSettings, QuoteItem, QuoteSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quotes", tags=["quotes"])


# --- Schemas ---
class QuoteItemsRequest(BaseModel):
    items: List[QuoteItem]


class QuoteSummaryRequest(QuoteItemsRequest):
    markup_percentage: Optional[float] = None
    tax_rate: Optional[float] = None


@router.post("/summary", response_model=QuoteSummary)
def quote_summary(req: QuoteSummaryRequest):
    defaults = PriceSettings.from_settings()
    markup = req.markup_percentage if req.markup_percentage is not None else defaults.global_markup_percentage
    tax = req.tax_rate if req.tax_rate is not None else defaults.global_tax_rate
    return summarize_quote(req.items, markup, tax)


@router.post("/consolidate", response_model=ConsolidatedQuote)
def consolidate(req: QuoteItemsRequest):
    try:
        return consolidate_quote_items(req.items)
    except ConsolidationError as e:
        logger.error("Quote consolidation failed: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
