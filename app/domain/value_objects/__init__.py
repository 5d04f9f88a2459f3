"""Value Objects del dominio financiero de reservas."""

from app.domain.value_objects.date_range import DateRange
from app.domain.value_objects.invoice_number import InvoiceNumber
from app.domain.value_objects.money import ZERO, sum_amounts, to_amount

__all__ = [
    "DateRange",
    "InvoiceNumber",
    "ZERO",
    "sum_amounts",
    "to_amount",
]
