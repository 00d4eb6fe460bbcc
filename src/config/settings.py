"""Application settings and configuration management."""
from decimal import Decimal
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class PricingSettings(BaseSettings):
    """Tax and fee rates applied to every price breakdown."""

    tax_rate: Decimal = Decimal("0.10")
    service_fee_rate: Decimal = Decimal("0.05")
    currency: str = "USD"

    model_config = SettingsConfigDict(env_prefix="PRICING_")


class StaySettings(BaseSettings):
    """Stay-length bounds for a single booking."""

    min_stay_nights: int = 1
    max_stay_nights: int = 30

    model_config = SettingsConfigDict(env_prefix="STAY_")


class GuestSettings(BaseSettings):
    """Guest counter bounds and the defaults a new booking starts with."""

    min_adults: int = 1
    max_adults: int = 8
    min_children: int = 0
    max_children: int = 4
    min_rooms: int = 1
    max_rooms: int = 5

    default_adults: int = 2
    default_children: int = 0
    default_rooms: int = 1

    model_config = SettingsConfigDict(env_prefix="GUESTS_")


class PromotionSettings(BaseSettings):
    """Promotion catalog backend configuration."""

    catalog_url: str = ""  # Empty means the in-memory catalog is used
    api_key: Optional[str] = None
    request_timeout: float = 10.0
    max_retries: int = 3

    # "booking": one free night covers every booked room
    # "room": one free night covers a single room
    free_night_scope: Literal["booking", "room"] = "booking"

    model_config = SettingsConfigDict(env_prefix="PROMO_")


class PaymentSettings(BaseSettings):
    """Payment hand-off configuration."""

    deposit_rate: Decimal = Decimal("0.30")  # Pay-later deposit share of the total
    deposit_due_hours: int = 24

    model_config = SettingsConfigDict(env_prefix="PAYMENT_")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "json"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    """Main application settings."""

    environment: Literal["dev", "staging", "prod"] = "dev"
    debug: bool = False

    # Sub-settings
    pricing: PricingSettings = PricingSettings()
    stay: StaySettings = StaySettings()
    guests: GuestSettings = GuestSettings()
    promotion: PromotionSettings = PromotionSettings()
    payment: PaymentSettings = PaymentSettings()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    def validate_booking_rules(self) -> list[str]:
        """Validate rule settings that would make every booking impossible.

        Returns:
            List of human-readable problems (empty when consistent)
        """
        problems = []
        if self.stay.min_stay_nights < 1:
            problems.append("STAY_MIN_STAY_NIGHTS must be at least 1")
        if self.stay.max_stay_nights < self.stay.min_stay_nights:
            problems.append("STAY_MAX_STAY_NIGHTS must not be below STAY_MIN_STAY_NIGHTS")
        if self.guests.min_adults < 1:
            problems.append("GUESTS_MIN_ADULTS must be at least 1")
        if self.guests.min_rooms < 1:
            problems.append("GUESTS_MIN_ROOMS must be at least 1")
        if self.pricing.tax_rate < 0 or self.pricing.service_fee_rate < 0:
            problems.append("PRICING rates must not be negative")
        if not Decimal("0") <= self.payment.deposit_rate <= Decimal("1"):
            problems.append("PAYMENT_DEPOSIT_RATE must be between 0 and 1")
        return problems


# Global settings instance
settings = Settings()
