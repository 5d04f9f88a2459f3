class PartyDirectory:
    """Verificación de existencia de clientes y empleados."""

    async def client_exists(self, client_id: int) -> bool:
        raise NotImplementedError

    async def employee_exists(self, employee_id: int) -> bool:
        raise NotImplementedError
