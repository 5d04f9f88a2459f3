"""Excepciones de dominio para el motor financiero de reservas."""


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Taxonomía ===


class NotFoundError(DomainError):
    """La entidad referenciada no existe."""


class InvalidStateError(DomainError):
    """La operación no es válida para el estado actual o viola una regla de negocio."""


class InvalidRangeError(DomainError):
    """Fecha o cantidad fuera de los límites permitidos."""


class ConflictError(DomainError):
    """Violación de unicidad."""


# === No encontrados ===


class ReservationNotFoundError(NotFoundError):
    def __init__(self, reservation_id: int):
        super().__init__(
            message=f"Reserva no encontrada: {reservation_id}",
            code="RESERVATION_NOT_FOUND",
        )
        self.reservation_id = reservation_id


class LineItemNotFoundError(NotFoundError):
    def __init__(self, item_id: int):
        super().__init__(
            message=f"Ítem de reserva no encontrado: {item_id}",
            code="LINE_ITEM_NOT_FOUND",
        )
        self.item_id = item_id


class ResourceNotFoundError(NotFoundError):
    """Recurso de catálogo (hotel, vuelo, paquete, servicio) inexistente."""

    def __init__(self, resource_type: str, resource_id: int):
        super().__init__(
            message=f"{resource_type} no encontrado: {resource_id}",
            code="RESOURCE_NOT_FOUND",
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ClientNotFoundError(NotFoundError):
    def __init__(self, client_id: int):
        super().__init__(message=f"Cliente no encontrado: {client_id}", code="CLIENT_NOT_FOUND")
        self.client_id = client_id


class EmployeeNotFoundError(NotFoundError):
    def __init__(self, employee_id: int):
        super().__init__(
            message=f"Empleado no encontrado: {employee_id}", code="EMPLOYEE_NOT_FOUND"
        )
        self.employee_id = employee_id


class InvoiceNotFoundError(NotFoundError):
    def __init__(self, identifier: int | str):
        super().__init__(message=f"Factura no encontrada: {identifier}", code="INVOICE_NOT_FOUND")
        self.identifier = identifier


class PaymentNotFoundError(NotFoundError):
    def __init__(self, payment_id: int):
        super().__init__(message=f"Pago no encontrado: {payment_id}", code="PAYMENT_NOT_FOUND")
        self.payment_id = payment_id


class PaymentMethodNotFoundError(NotFoundError):
    def __init__(self, payment_method_id: int):
        super().__init__(
            message=f"Forma de pago no encontrada: {payment_method_id}",
            code="PAYMENT_METHOD_NOT_FOUND",
        )
        self.payment_method_id = payment_method_id


# === Estado inválido ===


class InvalidReservationStatusError(InvalidStateError):
    """El estado de la reserva no permite la operación."""

    def __init__(self, current_status: str, expected_status: str | list[str], operation: str):
        expected = expected_status if isinstance(expected_status, str) else ", ".join(expected_status)
        super().__init__(
            message=f"No se puede {operation}: estado actual '{current_status}', esperado '{expected}'",
            code="INVALID_RESERVATION_STATUS",
        )
        self.current_status = current_status
        self.expected_status = expected_status
        self.operation = operation


class ReservationNotEmptyError(InvalidStateError):
    def __init__(self, reservation_id: int):
        super().__init__(
            message=f"La reserva {reservation_id} tiene ítems asociados y no puede eliminarse",
            code="RESERVATION_NOT_EMPTY",
        )
        self.reservation_id = reservation_id


class ResourceUnavailableError(InvalidStateError):
    """El recurso de catálogo está inactivo o no disponible."""

    def __init__(self, resource_type: str, resource_id: int, reason: str = "no está disponible"):
        super().__init__(
            message=f"{resource_type} {resource_id} {reason}",
            code="RESOURCE_UNAVAILABLE",
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InsufficientCapacityError(InvalidStateError):
    def __init__(self, resource_type: str, resource_id: int, requested: int, available: int):
        super().__init__(
            message=f"{resource_type} {resource_id}: se solicitaron {requested} cupos "
            f"pero solo hay {available} disponibles",
            code="INSUFFICIENT_CAPACITY",
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.requested = requested
        self.available = available


class LineItemAlreadyStartedError(InvalidStateError):
    def __init__(self, item_id: int):
        super().__init__(
            message=f"El ítem {item_id} ya inició y no puede modificarse ni eliminarse",
            code="LINE_ITEM_ALREADY_STARTED",
        )
        self.item_id = item_id


class InvalidInvoiceStatusError(InvalidStateError):
    def __init__(self, invoice_number: str, current_status: str, operation: str):
        super().__init__(
            message=f"No se puede {operation} la factura {invoice_number} en estado '{current_status}'",
            code="INVALID_INVOICE_STATUS",
        )
        self.invoice_number = invoice_number
        self.current_status = current_status


class NothingToInvoiceError(InvalidStateError):
    def __init__(self, reservation_id: int):
        super().__init__(
            message=f"La reserva {reservation_id} no tiene monto facturable",
            code="NOTHING_TO_INVOICE",
        )
        self.reservation_id = reservation_id


class PaymentMethodInactiveError(InvalidStateError):
    def __init__(self, payment_method_id: int):
        super().__init__(
            message=f"La forma de pago {payment_method_id} está inactiva",
            code="PAYMENT_METHOD_INACTIVE",
        )
        self.payment_method_id = payment_method_id


class PaymentExceedsBalanceError(InvalidStateError):
    def __init__(self, amount, pending_balance):
        super().__init__(
            message=f"El monto {amount} excede el saldo pendiente de la factura ({pending_balance})",
            code="PAYMENT_EXCEEDS_BALANCE",
        )
        self.amount = amount
        self.pending_balance = pending_balance


class InvalidPaymentStatusError(InvalidStateError):
    def __init__(self, payment_id: int, current_status: str, operation: str):
        super().__init__(
            message=f"No se puede {operation} el pago {payment_id} en estado '{current_status}'",
            code="INVALID_PAYMENT_STATUS",
        )
        self.payment_id = payment_id
        self.current_status = current_status


# === Rangos ===


class DateOutsideTripError(InvalidRangeError):
    def __init__(self, start, end, trip_start, trip_end):
        super().__init__(
            message=f"Las fechas {start} - {end} están fuera del viaje ({trip_start} - {trip_end})",
            code="DATE_OUTSIDE_TRIP",
        )


class InvalidDateRangeError(InvalidRangeError):
    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_DATE_RANGE")


class QuantityOutOfBoundsError(InvalidRangeError):
    def __init__(self, message: str):
        super().__init__(message=message, code="QUANTITY_OUT_OF_BOUNDS")


# === Conflictos ===


class DuplicateLineItemError(ConflictError):
    def __init__(self, resource_type: str, resource_id: int, reservation_id: int):
        super().__init__(
            message=f"{resource_type} {resource_id} ya está asociado a la reserva {reservation_id}",
            code="DUPLICATE_LINE_ITEM",
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.reservation_id = reservation_id


class DuplicatePaymentReferenceError(ConflictError):
    def __init__(self, reference: str):
        super().__init__(
            message=f"Ya existe un pago con la referencia: {reference}",
            code="DUPLICATE_PAYMENT_REFERENCE",
        )
        self.reference = reference


class InvoiceAlreadyExistsError(ConflictError):
    def __init__(self, reservation_id: int, invoice_number: str):
        super().__init__(
            message=f"La reserva {reservation_id} ya tiene la factura {invoice_number}",
            code="INVOICE_ALREADY_EXISTS",
        )
        self.reservation_id = reservation_id
        self.invoice_number = invoice_number


class OptimisticLockError(ConflictError):
    """Conflicto de concurrencia al actualizar un registro versionado."""

    def __init__(self, entity: str, entity_id: int, expected_version: int):
        super().__init__(
            message=f"Conflicto de concurrencia en {entity} {entity_id}: "
            f"versión esperada {expected_version}",
            code="OPTIMISTIC_LOCK_ERROR",
        )
        self.entity = entity
        self.entity_id = entity_id
        self.expected_version = expected_version
