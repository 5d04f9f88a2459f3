from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, constr

from app.api.schemas.common import MONEY_ENCODERS, Money
from app.domain.entities.line_item import CabinClass, LineItem, LineItemKind


class AttachHotelRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["HOTEL"] = "HOTEL"
    hotel_id: int = Field(..., gt=0)
    check_in: date
    check_out: date
    rooms: int = Field(default=1, ge=1)
    room_type: constr(strip_whitespace=True, max_length=50) | None = None
    guests: int = Field(default=1, ge=1)
    observations: str | None = Field(default=None, max_length=500)


class AttachFlightRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["FLIGHT"] = "FLIGHT"
    flight_id: int = Field(..., gt=0)
    passengers: int = Field(..., ge=1)
    cabin_class: CabinClass = CabinClass.ECONOMY
    assigned_seats: list[constr(strip_whitespace=True, min_length=1, max_length=5)] = Field(
        default_factory=list
    )
    baggage_included: bool = True
    extra_baggage_kg: int = Field(default=0, ge=0)
    extra_baggage_cost: Money = Field(default=Decimal("0"), ge=0)
    observations: str | None = Field(default=None, max_length=500)


class AttachPackageRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["PACKAGE"] = "PACKAGE"
    package_id: int = Field(..., gt=0)
    persons: int = Field(..., ge=1)
    start_date: date
    end_date: date | None = None
    customizations: str | None = Field(default=None, max_length=1000)
    observations: str | None = Field(default=None, max_length=500)


class AttachServiceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["SERVICE"] = "SERVICE"
    service_id: int = Field(..., gt=0)
    quantity: int = Field(default=1, ge=1)
    service_date: date | None = None
    service_time: constr(pattern=r"^\d{2}:\d{2}$") | None = None
    observations: str | None = Field(default=None, max_length=500)


AttachLineItemRequest = Annotated[
    Union[AttachHotelRequest, AttachFlightRequest, AttachPackageRequest, AttachServiceRequest],
    Field(discriminator="kind"),
]


class LineItemResponse(BaseModel):
    model_config = ConfigDict(json_encoders=MONEY_ENCODERS)

    id: int
    kind: LineItemKind
    reservation_id: int
    resource_id: int
    quantity: int
    unit_price: Money
    subtotal: Money
    start_date: date | None = None
    end_date: date | None = None
    observations: str | None = None
    capacity_released: bool = False
    details: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, item: LineItem) -> "LineItemResponse":
        return cls(
            id=item.id,
            kind=item.kind,
            reservation_id=item.reservation_id,
            resource_id=item.resource_id,
            quantity=item.quantity,
            unit_price=item.unit_price,
            subtotal=item.subtotal,
            start_date=item.start_date,
            end_date=item.end_date,
            observations=item.observations,
            capacity_released=item.capacity_released,
            details=item.details(),
            created_at=item.created_at,
        )
