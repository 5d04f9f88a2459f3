from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_use_cases
from app.api.schemas.invoices import InvoiceResponse
from app.api.schemas.payments import (
    ChangePaymentStatusRequest,
    PaymentResponse,
    PaymentResultResponse,
    RecordPaymentRequest,
    ReservationBalance,
    UpdatePaymentRequest,
)

router = APIRouter()


def _result(outcome) -> PaymentResultResponse:
    return PaymentResultResponse(
        payment=PaymentResponse.model_validate(outcome.payment),
        invoice=InvoiceResponse.model_validate(outcome.invoice),
        reservation=ReservationBalance.model_validate(outcome.reservation),
    )


@router.post(
    "/payments",
    response_model=PaymentResultResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_payment(
    payload: RecordPaymentRequest,
    use_cases=Depends(get_use_cases),
) -> PaymentResultResponse:
    outcome = await use_cases["record_payment"].execute(request=payload)
    return _result(outcome)


@router.get("/payments/invoice/{invoice_id}", response_model=list[PaymentResponse])
async def list_payments_by_invoice(
    invoice_id: int,
    use_cases=Depends(get_use_cases),
) -> list[PaymentResponse]:
    payments = await use_cases["payment_queries"].by_invoice(invoice_id)
    return [PaymentResponse.model_validate(payment) for payment in payments]


@router.get("/payments/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: int,
    use_cases=Depends(get_use_cases),
) -> PaymentResponse:
    payment = await use_cases["payment_queries"].get(payment_id)
    return PaymentResponse.model_validate(payment)


@router.patch("/payments/{payment_id}", response_model=PaymentResultResponse)
async def update_payment(
    payment_id: int,
    payload: UpdatePaymentRequest,
    use_cases=Depends(get_use_cases),
) -> PaymentResultResponse:
    outcome = await use_cases["update_payment"].execute(payment_id=payment_id, request=payload)
    return _result(outcome)


@router.patch("/payments/{payment_id}/status", response_model=PaymentResultResponse)
async def change_payment_status(
    payment_id: int,
    payload: ChangePaymentStatusRequest,
    use_cases=Depends(get_use_cases),
) -> PaymentResultResponse:
    outcome = await use_cases["change_payment_status"].execute(
        payment_id=payment_id, new_status=payload.status
    )
    return _result(outcome)


@router.delete("/payments/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment(
    payment_id: int,
    use_cases=Depends(get_use_cases),
) -> Response:
    await use_cases["delete_payment"].execute(payment_id=payment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
