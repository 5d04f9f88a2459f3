from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)

metadata = MetaData()

# === Personas ===

clients = Table(
    "clients",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("full_name", String(255), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
)

employees = Table(
    "employees",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("full_name", String(255), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
)

# === Catálogo ===

hotels = Table(
    "hotels",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(150), nullable=False),
    Column("price_per_night", Numeric(12, 2), nullable=False),
    Column("room_count", Integer),
    Column("is_active", Boolean, nullable=False, default=True),
)

flights = Table(
    "flights",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("flight_number", String(20), nullable=False),
    Column("departure_at", DateTime, nullable=False),
    Column("arrival_at", DateTime, nullable=False),
    Column("economy_price", Numeric(12, 2), nullable=False),
    Column("business_price", Numeric(12, 2)),
    Column("total_seats", Integer, nullable=False),
    Column("available_seats", Integer, nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("lock_version", Integer, nullable=False, default=0),
)

tour_packages = Table(
    "tour_packages",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(150), nullable=False),
    Column("price", Numeric(12, 2), nullable=False),
    Column("duration_days", Integer, nullable=False),
    Column("total_slots", Integer, nullable=False),
    Column("available_slots", Integer, nullable=False),
    Column("min_persons", Integer, nullable=False, default=1),
    Column("max_persons", Integer),
    Column("valid_until", Date),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("lock_version", Integer, nullable=False, default=0),
)

additional_services = Table(
    "additional_services",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(150), nullable=False),
    Column("unit_price", Numeric(12, 2), nullable=False),
    Column("max_capacity", Integer),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("is_available", Boolean, nullable=False, default=True),
)

payment_methods = Table(
    "payment_methods",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
)

# === Reservas ===

reservations = Table(
    "reservations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("client_id", Integer, ForeignKey("clients.id"), nullable=False),
    Column("employee_id", Integer, ForeignKey("employees.id"), nullable=False),
    Column("description", String(500)),
    Column("trip_start", Date, nullable=False),
    Column("trip_end", Date, nullable=False),
    Column("passenger_count", Integer, nullable=False),
    Column("total_amount", Numeric(12, 2), nullable=False),
    Column("amount_paid", Numeric(12, 2), nullable=False),
    Column("balance_due", Numeric(12, 2), nullable=False),
    Column("status", String(32), nullable=False),
    Column("observations", Text),
    Column("cancellation_reason", String(500)),
    Column("cancelled_at", DateTime),
    Column("lock_version", Integer, nullable=False, default=0),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
)

reservation_items = Table(
    "reservation_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("reservation_id", Integer, ForeignKey("reservations.id"), nullable=False),
    Column("kind", String(16), nullable=False),
    Column("resource_id", Integer, nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("unit_price", Numeric(12, 2), nullable=False),
    Column("subtotal", Numeric(12, 2), nullable=False),
    Column("start_date", Date),
    Column("end_date", Date),
    Column("observations", String(500)),
    Column("capacity_released", Boolean, nullable=False, default=False),
    Column("details", JSON),
    Column("created_at", DateTime),
    Index("ix_reservation_items_resource", "kind", "resource_id"),
)

# === Facturación ===

invoices = Table(
    "invoices",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("reservation_id", Integer, ForeignKey("reservations.id"), nullable=False, index=True),
    Column("invoice_number", String(32), nullable=False, unique=True),
    Column("total", Numeric(12, 2), nullable=False),
    Column("amount_paid", Numeric(12, 2), nullable=False),
    Column("status", String(32), nullable=False),
    Column("issue_date", Date, nullable=False),
    Column("due_date", Date, nullable=False),
    Column("observations", String(500)),
    Column("lock_version", Integer, nullable=False, default=0),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
)

payments = Table(
    "payments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("invoice_id", Integer, ForeignKey("invoices.id"), nullable=False, index=True),
    Column("payment_method_id", Integer, ForeignKey("payment_methods.id"), nullable=False),
    Column("amount", Numeric(12, 2), nullable=False),
    Column("status", String(32), nullable=False),
    Column("transaction_reference", String(100), unique=True),
    Column("receipt_url", String(500)),
    Column("observations", String(500)),
    Column("payment_date", DateTime),
    Column("lock_version", Integer, nullable=False, default=0),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
)
