from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Display
    CURRENCY_SYMBOL: str = "$"
    DECIMAL_PRECISION: int = 2

    # Quote-level pricing, in percent
    GLOBAL_MARKUP_PERCENTAGE: float = 0.0
    GLOBAL_TAX_RATE: float = 0.0

    # Customer-facing price ranges
    USE_PRICE_RANGES: bool = False
    PRICE_RANGE_LOWER_PERCENTAGE: float = 10.0
    PRICE_RANGE_UPPER_PERCENTAGE: float = 20.0
    PRICE_RANGE_DISPLAY_FORMAT: str = "percentage"  # or "dollar_amounts"

    # Increment advisor: extra coverage above this % asks the customer to confirm
    SIGNIFICANT_WASTE_PCT: float = 30.0

    # Map colors used when a measurement has none
    DEFAULT_PRODUCT_COLOR: str = "#3B82F6"
    DEFAULT_ADDON_COLOR: str = "#F59E0B"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
