from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, constr

from app.api.schemas.common import MONEY_ENCODERS, Money
from app.api.schemas.invoices import InvoiceResponse
from app.domain.entities.payment import PaymentStatus


class RecordPaymentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    invoice_id: int = Field(..., gt=0)
    payment_method_id: int = Field(..., gt=0)
    amount: Money = Field(..., gt=0)
    status: PaymentStatus = PaymentStatus.PENDING
    transaction_reference: constr(strip_whitespace=True, min_length=1, max_length=100) | None = None
    receipt_url: HttpUrl | None = None
    observations: str | None = Field(default=None, max_length=500)


class UpdatePaymentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: Money | None = Field(default=None, gt=0)
    transaction_reference: constr(strip_whitespace=True, min_length=1, max_length=100) | None = None
    receipt_url: HttpUrl | None = None
    observations: str | None = Field(default=None, max_length=500)


class ChangePaymentStatusRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: PaymentStatus


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, json_encoders=MONEY_ENCODERS)

    id: int
    invoice_id: int
    payment_method_id: int
    amount: Money
    status: PaymentStatus
    transaction_reference: str | None = None
    receipt_url: str | None = None
    observations: str | None = None
    payment_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ReservationBalance(BaseModel):
    model_config = ConfigDict(from_attributes=True, json_encoders=MONEY_ENCODERS)

    id: int
    total_amount: Money
    amount_paid: Money
    balance_due: Money


class PaymentResultResponse(BaseModel):
    """Pago afectado junto con la factura y la reserva ya conciliadas."""

    payment: PaymentResponse
    invoice: InvoiceResponse
    reservation: ReservationBalance
