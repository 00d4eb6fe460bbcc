"""Pydantic models for the promotion catalog."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PromoType(str, Enum):
    """Closed set of discount kinds a promotion can grant."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"
    FREE_NIGHT = "freeNight"


class PromoCode(BaseModel):
    """Promotion rule record as returned by the promotion catalog."""

    code: str = Field(description="Promotion code, stored upper-case")
    type: PromoType = Field(description="Discount kind")
    value: Decimal = Field(
        ge=0,
        description="Percent for percentage, amount for fixed, night count for freeNight",
    )
    description: str = ""
    min_amount: Optional[Decimal] = Field(
        None,
        alias="minAmount",
        ge=0,
        description="Minimum room subtotal required to use the code",
    )
    max_discount: Optional[Decimal] = Field(
        None,
        alias="maxDiscount",
        ge=0,
        description="Upper bound for the granted discount",
    )
    valid_until: Optional[date] = Field(
        None,
        alias="validUntil",
        description="Last calendar day the code can be used",
    )
    is_valid: bool = Field(default=True, alias="isValid")

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        return value.strip().upper()
