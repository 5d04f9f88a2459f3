from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.api.schemas.common import MONEY_ENCODERS, Money
from app.api.schemas.invoices import InvoiceResponse
from app.api.schemas.line_items import AttachLineItemRequest, LineItemResponse
from app.domain.entities.reservation import ReservationStatus


class CreateReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    client_id: int = Field(..., gt=0)
    employee_id: int = Field(..., gt=0)
    trip_start: date
    trip_end: date
    passenger_count: int = Field(..., ge=1)
    status: ReservationStatus = ReservationStatus.PENDING
    description: str | None = Field(default=None, max_length=500)
    observations: str | None = Field(default=None, max_length=1000)


class CreateFullReservationRequest(CreateReservationRequest):
    items: list[AttachLineItemRequest] = Field(default_factory=list)


class UpdateReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    employee_id: int | None = Field(default=None, gt=0)
    trip_start: date | None = None
    trip_end: date | None = None
    passenger_count: int | None = Field(default=None, ge=1)
    description: str | None = Field(default=None, max_length=500)
    observations: str | None = Field(default=None, max_length=1000)

    @field_validator("observations", "description")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class CancelReservationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reason: str = Field(..., min_length=1, max_length=500)


class ReservationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, json_encoders=MONEY_ENCODERS)

    id: int
    client_id: int
    employee_id: int
    description: str | None = None
    trip_start: date
    trip_end: date
    passenger_count: int
    total_amount: Money
    amount_paid: Money
    balance_due: Money
    status: ReservationStatus
    observations: str | None = None
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None
    lock_version: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ReservationDetailResponse(ReservationResponse):
    items: list[LineItemResponse] = Field(default_factory=list)
    invoices: list[InvoiceResponse] = Field(default_factory=list)
