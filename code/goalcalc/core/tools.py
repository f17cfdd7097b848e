from typing import Dict, Optional

from compounding.utils import safe_div, split_months

RATE_TYPE_LABELS = {
    "ANNUAL": "anual",
    "MONTHLY": "mensal",
}
PERIOD_TYPE_LABELS = {
    "YEARS": "anos",
    "MONTHS": "meses",
}


def rate_type_label(value: str) -> str:
    return RATE_TYPE_LABELS.get(str(getattr(value, "value", value)).upper(), "anual")


def period_type_label(value: str) -> str:
    return PERIOD_TYPE_LABELS.get(str(getattr(value, "value", value)).upper(), "anos")


def compute_composition(total_invested: float, total_interest: float) -> Dict[str, Optional[float]]:
    total = total_invested + total_interest
    power = safe_div(total_interest, total_invested)
    return {
        "invested_share": safe_div(total_invested, total, 0.0),
        "interest_share": safe_div(total_interest, total, 0.0),
        "interest_power_pct": None if power is None else round(power * 100),
    }


def period_label(months: int) -> str:
    years, rest = split_months(months)
    return f"{years} anos e {rest} meses"


def format_rate(rate: float) -> str:
    # 10.0 -> "10", 0.85 -> "0.85"
    return f"{rate:g}"
