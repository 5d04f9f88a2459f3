from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_use_cases
from app.api.schemas.invoices import InvoiceResponse
from app.api.schemas.line_items import (
    AttachFlightRequest,
    AttachHotelRequest,
    AttachPackageRequest,
    AttachServiceRequest,
    LineItemResponse,
)
from app.api.schemas.reservations import (
    CancelReservationRequest,
    CreateFullReservationRequest,
    CreateReservationRequest,
    ReservationDetailResponse,
    ReservationResponse,
    UpdateReservationRequest,
)

router = APIRouter()


def _detail(reservation, items, invoices) -> ReservationDetailResponse:
    response = ReservationDetailResponse.model_validate(reservation)
    return response.model_copy(
        update={
            "items": [LineItemResponse.from_entity(item) for item in items],
            "invoices": [InvoiceResponse.model_validate(invoice) for invoice in invoices],
        }
    )


@router.post(
    "/reservations",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reservation(
    payload: CreateReservationRequest,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    reservation = await use_cases["create_reservation"].execute(request=payload)
    return ReservationResponse.model_validate(reservation)


@router.post(
    "/reservations/full",
    response_model=ReservationDetailResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_full_reservation(
    payload: CreateFullReservationRequest,
    use_cases=Depends(get_use_cases),
) -> ReservationDetailResponse:
    result = await use_cases["create_full_reservation"].execute(request=payload)
    return _detail(result.reservation, result.items, [])


@router.get(
    "/reservations/{reservation_id}",
    response_model=ReservationDetailResponse,
    status_code=status.HTTP_200_OK,
)
async def get_reservation(
    reservation_id: int,
    use_cases=Depends(get_use_cases),
) -> ReservationDetailResponse:
    view = await use_cases["get_reservation"].execute(reservation_id=reservation_id)
    return _detail(view.reservation, view.items, view.invoices)


@router.patch(
    "/reservations/{reservation_id}",
    response_model=ReservationResponse,
    status_code=status.HTTP_200_OK,
)
async def update_reservation(
    reservation_id: int,
    payload: UpdateReservationRequest,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    reservation = await use_cases["update_reservation"].execute(
        reservation_id=reservation_id, request=payload
    )
    return ReservationResponse.model_validate(reservation)


@router.delete("/reservations/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reservation(
    reservation_id: int,
    use_cases=Depends(get_use_cases),
) -> Response:
    await use_cases["delete_reservation"].execute(reservation_id=reservation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# === Ciclo de vida ===


@router.post(
    "/reservations/{reservation_id}/confirm",
    response_model=ReservationResponse,
    status_code=status.HTTP_200_OK,
)
async def confirm_reservation(
    reservation_id: int,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    reservation = await use_cases["confirm_reservation"].execute(reservation_id=reservation_id)
    return ReservationResponse.model_validate(reservation)


@router.post(
    "/reservations/{reservation_id}/cancel",
    response_model=ReservationResponse,
    status_code=status.HTTP_200_OK,
)
async def cancel_reservation(
    reservation_id: int,
    payload: CancelReservationRequest,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    reservation = await use_cases["cancel_reservation"].execute(
        reservation_id=reservation_id, reason=payload.reason
    )
    return ReservationResponse.model_validate(reservation)


@router.post(
    "/reservations/{reservation_id}/complete",
    response_model=ReservationResponse,
    status_code=status.HTTP_200_OK,
)
async def complete_reservation(
    reservation_id: int,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    reservation = await use_cases["complete_reservation"].execute(reservation_id=reservation_id)
    return ReservationResponse.model_validate(reservation)


@router.post(
    "/reservations/{reservation_id}/recalculate",
    response_model=ReservationResponse,
    status_code=status.HTTP_200_OK,
)
async def recalculate_reservation(
    reservation_id: int,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    reservation = await use_cases["recalculate_totals"].execute(reservation_id=reservation_id)
    return ReservationResponse.model_validate(reservation)


# === Ítems ===


async def _attach(reservation_id: int, payload, use_cases) -> LineItemResponse:
    item = await use_cases["attach_line_item"].execute(reservation_id=reservation_id, request=payload)
    return LineItemResponse.from_entity(item)


@router.post(
    "/reservations/{reservation_id}/items/hotels",
    response_model=LineItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def attach_hotel(
    reservation_id: int,
    payload: AttachHotelRequest,
    use_cases=Depends(get_use_cases),
) -> LineItemResponse:
    return await _attach(reservation_id, payload, use_cases)


@router.post(
    "/reservations/{reservation_id}/items/flights",
    response_model=LineItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def attach_flight(
    reservation_id: int,
    payload: AttachFlightRequest,
    use_cases=Depends(get_use_cases),
) -> LineItemResponse:
    return await _attach(reservation_id, payload, use_cases)


@router.post(
    "/reservations/{reservation_id}/items/packages",
    response_model=LineItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def attach_package(
    reservation_id: int,
    payload: AttachPackageRequest,
    use_cases=Depends(get_use_cases),
) -> LineItemResponse:
    return await _attach(reservation_id, payload, use_cases)


@router.post(
    "/reservations/{reservation_id}/items/services",
    response_model=LineItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def attach_service(
    reservation_id: int,
    payload: AttachServiceRequest,
    use_cases=Depends(get_use_cases),
) -> LineItemResponse:
    return await _attach(reservation_id, payload, use_cases)


@router.delete(
    "/reservations/{reservation_id}/items/{item_id}",
    response_model=ReservationResponse,
    status_code=status.HTTP_200_OK,
)
async def detach_item(
    reservation_id: int,
    item_id: int,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    reservation = await use_cases["detach_line_item"].execute(
        reservation_id=reservation_id, item_id=item_id
    )
    return ReservationResponse.model_validate(reservation)
