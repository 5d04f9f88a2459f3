"""Almacén compartido por los repositorios in-memory."""

import copy
from collections import defaultdict
from dataclasses import dataclass, field, fields

from app.domain.entities.catalog import (
    AdditionalService,
    Flight,
    Hotel,
    PaymentMethod,
    TourPackage,
)
from app.domain.entities.invoice import Invoice
from app.domain.entities.line_item import LineItem
from app.domain.entities.payment import Payment
from app.domain.entities.reservation import Reservation


@dataclass
class InMemoryStore:
    """
    Tablas en diccionarios. Los repositorios guardan y entregan copias para
    que un objeto modificado fuera de un save no altere el estado guardado.
    """

    reservations: dict[int, Reservation] = field(default_factory=dict)
    line_items: dict[int, LineItem] = field(default_factory=dict)
    invoices: dict[int, Invoice] = field(default_factory=dict)
    payments: dict[int, Payment] = field(default_factory=dict)

    hotels: dict[int, Hotel] = field(default_factory=dict)
    flights: dict[int, Flight] = field(default_factory=dict)
    packages: dict[int, TourPackage] = field(default_factory=dict)
    services: dict[int, AdditionalService] = field(default_factory=dict)
    payment_methods: dict[int, PaymentMethod] = field(default_factory=dict)
    clients: set[int] = field(default_factory=set)
    employees: set[int] = field(default_factory=set)

    sequences: defaultdict[str, int] = field(default_factory=lambda: defaultdict(int))

    def next_id(self, table: str) -> int:
        self.sequences[table] += 1
        return self.sequences[table]

    def snapshot(self) -> "InMemoryStore":
        return copy.deepcopy(self)

    def restore(self, snapshot: "InMemoryStore") -> None:
        for store_field in fields(self):
            setattr(self, store_field.name, getattr(snapshot, store_field.name))

    # === Carga de catálogo ===

    def add_hotel(self, hotel: Hotel) -> Hotel:
        self.hotels[hotel.id] = hotel
        return hotel

    def add_flight(self, flight: Flight) -> Flight:
        self.flights[flight.id] = flight
        return flight

    def add_package(self, package: TourPackage) -> TourPackage:
        self.packages[package.id] = package
        return package

    def add_service(self, service: AdditionalService) -> AdditionalService:
        self.services[service.id] = service
        return service

    def add_payment_method(self, method: PaymentMethod) -> PaymentMethod:
        self.payment_methods[method.id] = method
        return method
