import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional, Tuple

NBSP = "\u00a0"
CURRENCY_SYMBOL = "R$"
_CENTS = Decimal("0.01")
# Wide enough for any finite float.
_FORMAT_CONTEXT = Context(prec=400)
_PT_BR_SEPARATORS = str.maketrans(",.", ".,")


def format_currency(value: float) -> str:
    """Render an amount the way Intl.NumberFormat('pt-BR', BRL) does, e.g. 'R$ 1.234,56'."""
    if math.isnan(value):
        return f"{CURRENCY_SYMBOL}{NBSP}NaN"
    sign = "-" if value < 0 else ""
    if math.isinf(value):
        return f"{sign}{CURRENCY_SYMBOL}{NBSP}∞"
    amount = Decimal(abs(value)).quantize(_CENTS, rounding=ROUND_HALF_UP, context=_FORMAT_CONTEXT)
    return f"{sign}{CURRENCY_SYMBOL}{NBSP}{amount:,.2f}".translate(_PT_BR_SEPARATORS)


def split_months(months: int) -> Tuple[int, int]:
    return months // 12, months % 12


def safe_div(a: float, b: float, default: Optional[float] = None) -> Optional[float]:
    if b == 0:
        return default
    return a / b
