from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_use_cases
from app.api.schemas.invoices import (
    ChangeInvoiceStatusRequest,
    GenerateInvoiceRequest,
    InvoiceResponse,
)
from app.config import get_settings
from app.domain.entities.invoice import InvoiceStatus

router = APIRouter()


def _many(invoices) -> list[InvoiceResponse]:
    return [InvoiceResponse.model_validate(invoice) for invoice in invoices]


@router.post(
    "/invoices",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_invoice(
    payload: GenerateInvoiceRequest,
    use_cases=Depends(get_use_cases),
) -> InvoiceResponse:
    invoice = await use_cases["generate_invoice"].execute(request=payload)
    return InvoiceResponse.model_validate(invoice)


# Las rutas fijas van antes de /invoices/{invoice_id}


@router.get("/invoices/overdue", response_model=list[InvoiceResponse])
async def list_overdue_invoices(use_cases=Depends(get_use_cases)) -> list[InvoiceResponse]:
    return _many(await use_cases["invoice_queries"].overdue())


@router.get("/invoices/due-soon", response_model=list[InvoiceResponse])
async def list_invoices_due_soon(
    days: int | None = Query(default=None, ge=0, le=365),
    use_cases=Depends(get_use_cases),
) -> list[InvoiceResponse]:
    if days is None:
        days = get_settings().invoice_upcoming_days
    return _many(await use_cases["invoice_queries"].due_soon(days))


@router.post("/invoices/mark-overdue", response_model=list[InvoiceResponse])
async def mark_overdue_invoices(use_cases=Depends(get_use_cases)) -> list[InvoiceResponse]:
    """Barrido de vencimiento: pasa a OVERDUE las facturas pendientes con due_date < hoy."""
    return _many(await use_cases["mark_overdue_invoices"].execute())


@router.get("/invoices/number/{invoice_number}", response_model=InvoiceResponse)
async def get_invoice_by_number(
    invoice_number: str,
    use_cases=Depends(get_use_cases),
) -> InvoiceResponse:
    invoice = await use_cases["invoice_queries"].get_by_number(invoice_number)
    return InvoiceResponse.model_validate(invoice)


@router.get("/invoices/reservation/{reservation_id}", response_model=list[InvoiceResponse])
async def list_invoices_by_reservation(
    reservation_id: int,
    use_cases=Depends(get_use_cases),
) -> list[InvoiceResponse]:
    return _many(await use_cases["invoice_queries"].by_reservation(reservation_id))


@router.get("/invoices/status/{invoice_status}", response_model=list[InvoiceResponse])
async def list_invoices_by_status(
    invoice_status: InvoiceStatus,
    use_cases=Depends(get_use_cases),
) -> list[InvoiceResponse]:
    return _many(await use_cases["invoice_queries"].by_status(invoice_status))


@router.get("/invoices/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: int,
    use_cases=Depends(get_use_cases),
) -> InvoiceResponse:
    invoice = await use_cases["invoice_queries"].get(invoice_id)
    return InvoiceResponse.model_validate(invoice)


@router.patch("/invoices/{invoice_id}/status", response_model=InvoiceResponse)
async def change_invoice_status(
    invoice_id: int,
    payload: ChangeInvoiceStatusRequest,
    use_cases=Depends(get_use_cases),
) -> InvoiceResponse:
    invoice = await use_cases["change_invoice_status"].execute(
        invoice_id=invoice_id, new_status=payload.status, reason=payload.reason
    )
    return InvoiceResponse.model_validate(invoice)


@router.post("/invoices/{invoice_id}/cancel", response_model=InvoiceResponse)
async def cancel_invoice(
    invoice_id: int,
    use_cases=Depends(get_use_cases),
) -> InvoiceResponse:
    invoice = await use_cases["cancel_invoice"].execute(invoice_id=invoice_id)
    return InvoiceResponse.model_validate(invoice)
