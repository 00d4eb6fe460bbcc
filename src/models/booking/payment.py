"""Guest contact, payment hand-off and confirmation models."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GuestContact(BaseModel):
    """Contact details of the lead guest."""

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = ""
    phone: str = ""
    special_requests: Optional[str] = Field(None, alias="specialRequests")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name.strip()} {self.last_name.strip()}".strip()


class PaymentMethod(str, Enum):
    """How the guest settles the booking."""

    ONLINE = "online"  # Immediate online payment
    PAY_LATER = "pay_later"  # Pay at the property, deposit up front


class PaymentItem(BaseModel):
    """Single line of the payment request."""

    name: str
    quantity: int = 1
    price: Decimal

    model_config = ConfigDict(frozen=True)


class PaymentRequest(BaseModel):
    """Payload handed to the payment collaborator."""

    order_code: str = Field(alias="orderCode")
    amount: Decimal
    currency: str
    description: str
    items: tuple[PaymentItem, ...] = ()
    buyer_name: str = Field(default="", alias="buyerName")
    buyer_email: str = Field(default="", alias="buyerEmail")
    buyer_phone: str = Field(default="", alias="buyerPhone")
    payment_method: PaymentMethod = Field(alias="paymentMethod")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ConfirmationStatus(str, Enum):
    """Status of a confirmed booking."""

    CONFIRMED = "confirmed"
    PENDING_DEPOSIT = "pending_deposit"


class BookingConfirmation(BaseModel):
    """Final record produced when the wizard reaches confirmation."""

    booking_id: str = Field(alias="bookingId")
    confirmation_number: str = Field(alias="confirmationNumber")
    status: ConfirmationStatus
    payment_method: PaymentMethod = Field(alias="paymentMethod")
    payment_reference: str = Field(alias="paymentReference")
    booked_at: datetime = Field(alias="bookedAt")
    total: Decimal
    deposit_amount: Optional[Decimal] = Field(None, alias="depositAmount")
    deposit_due_at: Optional[datetime] = Field(None, alias="depositDueAt")

    model_config = ConfigDict(populate_by_name=True, frozen=True)
