"""Pydantic v2 request/response schemas for booking endpoints."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from stayhub.models.booking import BookingState

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Schema for creating a new booking."""

    user_id: int
    apartment_id: int
    start_date: date
    end_date: date
    guests: int = Field(..., ge=1, le=10)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("start_date")
    @classmethod
    def start_not_in_past(cls, value: date) -> date:
        """Start date must be today or in the future."""
        if value < date.today():
            raise ValueError("Start date must be today or in the future")
        return value

    @field_validator("end_date")
    @classmethod
    def end_in_future(cls, value: date) -> date:
        """End date must be in the future."""
        if value <= date.today():
            raise ValueError("End date must be in the future")
        return value

    @model_validator(mode="after")
    def check_dates(self) -> "BookingCreate":
        """Validate that end_date is strictly after start_date."""
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(BaseModel):
    """Booking returned from every booking endpoint."""

    id: int
    user_id: int = Field(validation_alias="renter_id", serialization_alias="userId")
    apartment_id: int
    start_date: date
    end_date: date
    cost: Decimal
    state: BookingState
    guests: int
    created_at: datetime | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
