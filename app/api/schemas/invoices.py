from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from app.api.schemas.common import MONEY_ENCODERS, Money
from app.domain.entities.invoice import InvoiceStatus


class GenerateInvoiceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reservation_id: int = Field(..., gt=0)
    observations: str | None = Field(default=None, max_length=500)


class ChangeInvoiceStatusRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: InvoiceStatus
    reason: str | None = Field(default=None, max_length=500)


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, json_encoders=MONEY_ENCODERS)

    id: int
    reservation_id: int
    invoice_number: str
    total: Money
    amount_paid: Money
    status: InvoiceStatus
    issue_date: date | None = None
    due_date: date | None = None
    observations: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @computed_field
    @property
    def pending_balance(self) -> Decimal:
        return self.total - self.amount_paid
