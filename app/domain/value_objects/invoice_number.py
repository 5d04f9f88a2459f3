"""Value Object InvoiceNumber - número legible y secuencial de factura."""

import re
from dataclasses import dataclass

_PATTERN = re.compile(r"^(?P<prefix>[A-Z]+)-(?P<year>\d{4})-(?P<sequence>\d{5,})$")


@dataclass(frozen=True)
class InvoiceNumber:
    """
    Número de factura con formato PREFIJO-AAAA-NNNNN (ej: FAC-2026-00001).

    La secuencia se reinicia cada año.
    """

    prefix: str
    year: int
    sequence: int

    def __post_init__(self) -> None:
        if self.sequence < 1:
            raise ValueError(f"La secuencia debe ser positiva: {self.sequence}")
        if not self.prefix or not self.prefix.isalpha():
            raise ValueError(f"Prefijo inválido: {self.prefix!r}")

    @property
    def value(self) -> str:
        return f"{self.prefix}-{self.year:04d}-{self.sequence:05d}"

    def __str__(self) -> str:
        return self.value

    def next(self) -> "InvoiceNumber":
        return InvoiceNumber(prefix=self.prefix, year=self.year, sequence=self.sequence + 1)

    @classmethod
    def first(cls, prefix: str, year: int) -> "InvoiceNumber":
        return cls(prefix=prefix.upper(), year=year, sequence=1)

    @classmethod
    def parse(cls, value: str) -> "InvoiceNumber":
        """Crea un InvoiceNumber desde su representación de texto."""
        match = _PATTERN.match(value.strip().upper())
        if not match:
            raise ValueError(f"Número de factura inválido: {value!r}")
        return cls(
            prefix=match.group("prefix"),
            year=int(match.group("year")),
            sequence=int(match.group("sequence")),
        )
