from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import pricing, quotes

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("quote_engine")

app = FastAPI(
    title="Quote Pricing Engine",
    description="Line item pricing, quote totals and quote consolidation for contractor quotes",
    version="1.0.0"
)

# Called from the embeddable widget on contractor sites
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(pricing.router, prefix="/api")
app.include_router(quotes.router, prefix="/api")

logger.info("Quote pricing engine ready (currency=%s, markup=%s%%, tax=%s%%)",
            settings.CURRENCY_SYMBOL, settings.GLOBAL_MARKUP_PERCENTAGE, settings.GLOBAL_TAX_RATE)


@app.get("/health")
def health():
    return {"status": "ok", "app": "quote-pricing-engine"}
