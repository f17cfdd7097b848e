from typing import Dict

from compounding.schemas import TARGET_GOAL
from compounding.utils import format_currency

from .tools import format_rate, period_label, rate_type_label


def build_commentary_prompt(values: Dict[str, float], rate_type: str) -> str:
    return f"""
Analise este cenário de investimento de juros compostos:
Objetivo: {format_currency(TARGET_GOAL)}
Valor Inicial: {format_currency(values['initial_value'])}
Aporte Mensal Calculado/Sugerido: {format_currency(values['monthly_contribution'])}
Taxa de Juros: {format_rate(values['interest_rate'])}% {rate_type_label(rate_type)}
Tempo Necessário: {period_label(int(values['period_in_months']))}.
Total Investido: {format_currency(values['total_invested'])}
Total Ganho em Juros: {format_currency(values['total_interest'])}

Dê 3 dicas práticas e motivadoras para esse investidor, sendo breve e profissional.
""".strip()
