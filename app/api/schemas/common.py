from decimal import Decimal

from pydantic import condecimal

Money = condecimal(max_digits=12, decimal_places=2)

MONEY_ENCODERS = {Decimal: lambda v: format(v, ".2f")}
