"""
Capa de Dominio - Motor financiero de reservas.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.

Estructura:
- entities/: Reserva, ítems (hotel, vuelo, paquete, servicio), catálogo, factura, pago
- value_objects/: DateRange, InvoiceNumber, helpers monetarios
- totals.py: recálculo de totales desde los registros fuente
- errors.py: Excepciones específicas del dominio
"""
