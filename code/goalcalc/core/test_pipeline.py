import pytest
from pydantic import ValidationError

from compounding.schemas import MAX_MONTHS, GoalOutcome
from goalcalc.core import pipeline
from goalcalc.core.models import SimulationRequest
from goalcalc.core.sample_payloads import SAMPLE_CONTRIBUTION_REQUEST, SAMPLE_TIME_REQUEST
from goalcalc.core.tools import compute_composition, period_label, rate_type_label


def test_contribution_response_shape():
    response = pipeline.run_calculation(SimulationRequest.model_validate(SAMPLE_CONTRIBUTION_REQUEST))
    assert response.period_in_months == 240
    assert response.period_years == 20
    assert response.period_remainder_months == 0
    assert len(response.history) == 241
    assert len(response.annual_history) == 20
    assert response.total_final == pytest.approx(1_000_000, rel=1e-9)
    assert response.formatted.goal == "R$\u00a01.000.000,00"
    shares = response.composition
    assert shares.invested_share + shares.interest_share == pytest.approx(1.0)
    assert shares.interest_power_pct == round(response.total_interest / response.total_invested * 100)


def test_time_response_uses_given_contribution():
    response = pipeline.run_calculation(SimulationRequest.model_validate(SAMPLE_TIME_REQUEST))
    assert response.monthly_contribution == 1800
    assert response.total_final >= 1_000_000
    assert response.history[response.period_in_months - 1].total_accumulated < 1_000_000
    assert response.outcome == GoalOutcome.SOLVED


def test_blank_fields_count_as_zero():
    request = SimulationRequest.model_validate({"calculation_type": "TIME", "initial_value": "", "monthly_contribution": None, "interest_rate": "abc"})
    assert request.initial_value == 0
    assert request.monthly_contribution == 0
    assert request.interest_rate == 0
    response = pipeline.run_calculation(request)
    assert response.period_in_months == 0
    assert response.outcome == GoalOutcome.UNREACHABLE
    assert response.composition.interest_power_pct is None


def test_composition_without_investment():
    assert compute_composition(0.0, 0.0) == {"invested_share": 0.0, "interest_share": 0.0, "interest_power_pct": None}


def test_labels():
    assert period_label(187) == "15 anos e 7 meses"
    assert rate_type_label("MONTHLY") == "mensal"


def test_prompt_mentions_scenario():
    request = SimulationRequest.model_validate(SAMPLE_CONTRIBUTION_REQUEST)
    result = pipeline.simulate(pipeline.to_simulation_input(request))
    prompt = pipeline.build_prompt(request, result)
    assert "Objetivo: R$\u00a01.000.000,00" in prompt
    assert "Taxa de Juros: 10% anual" in prompt
    assert "Tempo Necessário: 20 anos e 0 meses." in prompt
    assert "3 dicas" in prompt


def test_prompt_reports_horizons_past_a_century():
    request = SimulationRequest.model_validate({"calculation_type": "TIME", "monthly_contribution": 100, "interest_rate": 0})
    result = pipeline.simulate(pipeline.to_simulation_input(request))
    prompt = pipeline.build_prompt(request, result)
    assert result.period_in_months == 10000
    assert "Tempo Necessário: 833 anos e 4 meses." in prompt
    assert "Total Investido: R$\u00a01.000.000,00" in prompt


def test_requested_horizon_is_capped():
    with pytest.raises(ValidationError):
        SimulationRequest.model_validate(dict(SAMPLE_CONTRIBUTION_REQUEST, period=1e9))
    with pytest.raises(ValidationError):
        SimulationRequest.model_validate(dict(SAMPLE_CONTRIBUTION_REQUEST, period=MAX_MONTHS + 1, period_type="MONTHS"))
    # The horizon field is ignored when solving for time.
    request = SimulationRequest.model_validate(dict(SAMPLE_TIME_REQUEST, period=1e9))
    assert pipeline.run_calculation(request).outcome == GoalOutcome.SOLVED


def test_commentary_returns_llm_text(monkeypatch):
    prompts = []

    def fake_query(prompt):
        prompts.append(prompt)
        return {"choices": [{"message": {"content": "  1. Comece cedo.  "}}]}

    monkeypatch.setattr(pipeline, "query_llm", fake_query)
    commentary = pipeline.run_commentary(SimulationRequest.model_validate(SAMPLE_TIME_REQUEST))
    assert commentary.summary == "1. Comece cedo."
    assert commentary.source == "llm"
    assert len(prompts) == 1


def test_commentary_falls_back_on_error(monkeypatch):
    def failing_query(prompt):
        raise RuntimeError("Missing GOALCALC_LLM_API_KEY.")

    monkeypatch.setattr(pipeline, "query_llm", failing_query)
    commentary = pipeline.run_commentary(SimulationRequest.model_validate(SAMPLE_TIME_REQUEST))
    assert commentary.summary == pipeline.FAILED_COMMENTARY
    assert commentary.source == "fallback"


def test_commentary_falls_back_on_empty_text(monkeypatch):
    monkeypatch.setattr(pipeline, "query_llm", lambda prompt: {"choices": []})
    commentary = pipeline.run_commentary(SimulationRequest.model_validate(SAMPLE_CONTRIBUTION_REQUEST))
    assert commentary.summary == pipeline.EMPTY_COMMENTARY
    assert commentary.source == "fallback"
