import logging
from typing import Optional

from compounding.schemas import TARGET_GOAL, SimulationInput, SimulationResult
from compounding.simulator import simulate
from compounding.utils import format_currency, split_months

from .models import (
    AnnualPoint,
    CommentaryResponse,
    Composition,
    FormattedTotals,
    MonthlyPoint,
    SimulationRequest,
    SimulationResponse,
)
from .prompts import build_commentary_prompt
from .tools import compute_composition
from goalcalc.ai.llm_client import extract_text, query_llm

logger = logging.getLogger(__name__)

EMPTY_COMMENTARY = "Não foi possível gerar insights no momento."
FAILED_COMMENTARY = "Houve um erro ao consultar o especialista digital."


def to_simulation_input(payload: SimulationRequest) -> SimulationInput:
    return SimulationInput(
        calculation_type=payload.calculation_type,
        initial_value=payload.initial_value,
        monthly_contribution=payload.monthly_contribution,
        interest_rate=payload.interest_rate,
        rate_type=payload.rate_type,
        period=payload.period,
        period_type=payload.period_type,
    )


def build_response(result: SimulationResult) -> SimulationResponse:
    years, rest = split_months(result.period_in_months)
    return SimulationResponse(
        goal=TARGET_GOAL,
        total_final=result.total_final,
        total_invested=result.total_invested,
        total_interest=result.total_interest,
        monthly_contribution=result.monthly_contribution,
        period_in_months=result.period_in_months,
        period_years=years,
        period_remainder_months=rest,
        outcome=result.outcome,
        composition=Composition(**compute_composition(result.total_invested, result.total_interest)),
        formatted=FormattedTotals(
            goal=format_currency(TARGET_GOAL),
            total_final=format_currency(result.total_final),
            total_invested=format_currency(result.total_invested),
            total_interest=format_currency(result.total_interest),
            monthly_contribution=format_currency(result.monthly_contribution),
        ),
        history=[MonthlyPoint(**vars(point)) for point in result.history],
        annual_history=[AnnualPoint(**vars(point)) for point in result.annual_history],
    )


def run_calculation(payload: SimulationRequest) -> SimulationResponse:
    result = simulate(to_simulation_input(payload))
    logger.debug(
        "Simulated %s: months=%d contribution=%.2f outcome=%s",
        payload.calculation_type.value,
        result.period_in_months,
        result.monthly_contribution,
        result.outcome.value,
    )
    return build_response(result)


def build_prompt(payload: SimulationRequest, result: SimulationResult) -> str:
    values = {
        "initial_value": payload.initial_value,
        "monthly_contribution": result.monthly_contribution,
        "interest_rate": payload.interest_rate,
        "period_in_months": result.period_in_months,
        "total_invested": result.total_invested,
        "total_interest": result.total_interest,
    }
    return build_commentary_prompt(values, payload.rate_type)


def run_commentary(payload: SimulationRequest, result: Optional[SimulationResult] = None) -> CommentaryResponse:
    if result is None:
        result = simulate(to_simulation_input(payload))
    prompt = build_prompt(payload, result)
    try:
        response = query_llm(prompt)
        summary = extract_text(response).strip()
    except Exception:
        logger.warning("Commentary request failed", exc_info=True)
        return CommentaryResponse(summary=FAILED_COMMENTARY, source="fallback")

    if not summary:
        return CommentaryResponse(summary=EMPTY_COMMENTARY, source="fallback")
    return CommentaryResponse(summary=summary, source="llm")
