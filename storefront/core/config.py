"""Storefront Configuration"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Storefront"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001
    log_level: str = "INFO"

    # Store
    store_name: str = "PUTHIYAM PRODUCTS"
    currency: str = "INR"
    currency_symbol: str = "₹"

    # Pricing
    free_shipping_threshold: float = 200
    flat_shipping_fee: float = 100

    # Payments
    payment_timeout_seconds: float = 600
    upi_payee: str = "store@upi"
    auto_confirm_payments: bool = False

    class Config:
        env_prefix = "STOREFRONT_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
