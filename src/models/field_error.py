"""Rejections surfaced to the presentation layer as plain data."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ErrorKind(str, Enum):
    """Error taxonomy of the booking core.

    - INPUT_REJECTED: a user input was not accepted into the state
    - PROMO_ERROR: the promotion code could not be applied (never blocks)
    - TRANSITION_BLOCKED: the wizard cannot move forward yet
    """
    INPUT_REJECTED = "input_rejected"
    PROMO_ERROR = "promo_error"
    TRANSITION_BLOCKED = "transition_blocked"


class FieldError(BaseModel):
    """Field-level message attached to a rejected command."""

    kind: ErrorKind
    field: str
    code: str
    message: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def rejected(cls, field: str, code: str, message: str) -> "FieldError":
        return cls(kind=ErrorKind.INPUT_REJECTED, field=field, code=code, message=message)

    @classmethod
    def promo(cls, code: str, message: str) -> "FieldError":
        return cls(kind=ErrorKind.PROMO_ERROR, field="promo_code", code=code, message=message)

    @classmethod
    def blocked(cls, field: str, code: str, message: str) -> "FieldError":
        return cls(kind=ErrorKind.TRANSITION_BLOCKED, field=field, code=code, message=message)
