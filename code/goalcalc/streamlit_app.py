# streamlit_app.py
import os
import sys

import pandas as pd
import plotly.graph_objects as go
import streamlit as st
from pydantic import ValidationError

# Ensure the source root is on sys.path so package imports work when Streamlit runs the file directly.
SOURCE_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if SOURCE_ROOT not in sys.path:
    sys.path.insert(0, SOURCE_ROOT)

from compounding.schemas import MAX_MONTHS, CalculationType, GoalOutcome, InterestRateType, PeriodType  # noqa: E402
from compounding.simulator import simulate  # noqa: E402
from compounding.utils import format_currency  # noqa: E402
from goalcalc.ai.llm_client import LLM_API_KEY, check_llm_online  # noqa: E402
from goalcalc.core.models import SimulationRequest  # noqa: E402
from goalcalc.core.pipeline import build_response, run_commentary, to_simulation_input  # noqa: E402
from goalcalc.core.tools import period_type_label  # noqa: E402

COLORS = ["#4b5563", "#991b1b"]  # invested, interest

DEFAULTS = {
    "calculation_type": CalculationType.CONTRIBUTION,
    "initial_value": 0.0,
    "monthly_contribution": 0.0,
    "interest_rate": 0.0,
    "rate_type": InterestRateType.ANNUAL,
    "period": 0.0,
    "period_type": PeriodType.YEARS,
}

MODE_LABELS = {
    CalculationType.CONTRIBUTION: "Quanto investir por mês",
    CalculationType.TIME: "Quanto tempo vai levar",
}
RATE_LABELS = {InterestRateType.ANNUAL: "Anual", InterestRateType.MONTHLY: "Mensal"}
PERIOD_LABELS = {PeriodType.YEARS: "Anos", PeriodType.MONTHS: "Meses"}


def init_state():
    for key, value in DEFAULTS.items():
        st.session_state.setdefault(key, value)
    st.session_state.setdefault("result", None)
    st.session_state.setdefault("request", None)
    st.session_state.setdefault("commentary", "")
    st.session_state.setdefault("form_error", "")


def reset_state():
    for key, value in DEFAULTS.items():
        st.session_state[key] = value
    st.session_state.result = None
    st.session_state.request = None
    st.session_state.commentary = ""
    st.session_state.form_error = ""


def calculate():
    values = {key: st.session_state.get(key, value) for key, value in DEFAULTS.items()}
    st.session_state.commentary = ""
    try:
        request = SimulationRequest(**values)
    except ValidationError:
        st.session_state.form_error = f"O período máximo é de {MAX_MONTHS // 12} anos ({MAX_MONTHS} meses)."
        st.session_state.request = None
        st.session_state.result = None
        return
    st.session_state.form_error = ""
    st.session_state.request = request
    st.session_state.result = simulate(to_simulation_input(request))


def render_form():
    st.subheader("Simulador")
    st.radio("O que você quer descobrir?", list(MODE_LABELS), format_func=MODE_LABELS.get, key="calculation_type")
    st.number_input("Valor inicial (R$)", min_value=0.0, step=100.0, key="initial_value")
    if st.session_state.calculation_type == CalculationType.TIME:
        st.number_input("Aporte mensal (R$)", min_value=0.0, step=100.0, key="monthly_contribution")
    rate_col, rate_type_col = st.columns([2, 1])
    rate_col.number_input("Taxa de juros (%)", min_value=0.0, step=0.1, key="interest_rate")
    rate_type_col.selectbox("Período da taxa", list(RATE_LABELS), format_func=RATE_LABELS.get, key="rate_type")
    if st.session_state.calculation_type == CalculationType.CONTRIBUTION:
        period_col, period_type_col = st.columns([2, 1])
        period_col.number_input("Período", min_value=0.0, step=1.0, key="period")
        period_type_col.selectbox("Unidade", list(PERIOD_LABELS), format_func=PERIOD_LABELS.get, key="period_type")

    calc_col, reset_col = st.columns(2)
    calc_col.button("Calcular", type="primary", on_click=calculate, use_container_width=True)
    reset_col.button("Limpar", on_click=reset_state, use_container_width=True)
    if st.session_state.form_error:
        st.error(st.session_state.form_error)


def render_summary(request: SimulationRequest, response):
    if request.calculation_type == CalculationType.CONTRIBUTION:
        headline = response.formatted.monthly_contribution
        caption = f"Para atingir R$ 1 milhão em {request.period:g} {period_type_label(request.period_type)}"
        label = "Aporte mensal necessário"
    else:
        headline = f"{response.period_years} anos e {response.period_remainder_months} meses"
        caption = f"Investindo {format_currency(request.monthly_contribution)} por mês"
        label = "Tempo até o primeiro milhão"
    st.metric(label, headline)
    st.caption(caption)

    if response.outcome == GoalOutcome.ALREADY_MET:
        st.success("Com esses valores a meta de R$ 1 milhão já é atingida sem novos aportes.")
    elif response.outcome == GoalOutcome.UNREACHABLE:
        st.warning("Não é possível atingir a meta com esses valores. Revise o aporte, a taxa ou o período.")

    final_col, invested_col, interest_col = st.columns(3)
    final_col.metric("Valor total final", response.formatted.total_final)
    invested_col.metric("Valor total investido", response.formatted.total_invested)
    interest_col.metric("Total em juros", response.formatted.total_interest)


def render_composition(response):
    st.subheader("Composição do patrimônio")
    pie = go.Figure(
        go.Pie(
            labels=["Valor Investido", "Total em Juros"],
            values=[response.total_invested, response.total_interest],
            hole=0.55,
            marker={"colors": COLORS},
            sort=False,
        )
    )
    pie.update_layout(margin={"t": 10, "b": 10, "l": 10, "r": 10}, height=260, showlegend=True)
    st.plotly_chart(pie, use_container_width=True)

    power_col, time_col = st.columns(2)
    power = response.composition.interest_power_pct
    power_col.metric("Poder dos Juros", "-" if power is None else f"{power}%")
    power_col.caption("Mais em rendimentos do que o investido")
    time_col.metric("Tempo para a Meta", f"{response.period_years} anos")
    time_col.caption("Estimativa de acumulação")


def render_growth_chart(response):
    st.subheader("Evolução do patrimônio")
    if not response.annual_history:
        st.info("Nenhum período para exibir.")
        return
    years = [row.year for row in response.annual_history]
    chart = go.Figure()
    chart.add_trace(go.Bar(name="Valor Investido", x=years, y=[row.total_invested for row in response.annual_history], marker_color=COLORS[0]))
    chart.add_trace(go.Bar(name="Total em Juros", x=years, y=[row.total_interest for row in response.annual_history], marker_color=COLORS[1]))
    chart.update_layout(barmode="stack", xaxis_title="Ano", yaxis_title="R$", height=360, margin={"t": 10})
    st.plotly_chart(chart, use_container_width=True)


def render_table(response):
    st.subheader("Tabela anual")
    df = pd.DataFrame([row.model_dump() for row in response.annual_history])
    if df.empty:
        return
    money_columns = ["annual_investment", "annual_interest", "total_invested", "total_interest", "total_accumulated"]
    for column in money_columns:
        df[column] = df[column].map(format_currency)
    df = df.rename(
        columns={
            "year": "Ano",
            "annual_investment": "Aporte no ano",
            "annual_interest": "Juros no ano",
            "total_invested": "Total investido",
            "total_interest": "Total em juros",
            "total_accumulated": "Total acumulado",
        }
    )
    st.dataframe(df, hide_index=True, use_container_width=True)


def render_commentary(request: SimulationRequest):
    st.subheader("Análise de IA Especialista")
    if not LLM_API_KEY:
        st.caption("Defina GOALCALC_LLM_API_KEY para habilitar a análise.")
    if not st.session_state.commentary:
        if st.button("Gerar análise"):
            with st.spinner("Consultando o especialista digital..."):
                commentary = run_commentary(request, st.session_state.result)
            st.session_state.commentary = commentary.summary
    for line in st.session_state.commentary.splitlines():
        if line.strip():
            st.markdown(line)


st.set_page_config(page_title="Investidor Elite", layout="wide")
st.title("Investidor Elite")
st.caption("Calculadora do primeiro milhão")

init_state()


@st.cache_data(ttl=60, show_spinner=False)
def llm_status() -> bool:
    return check_llm_online()


with st.sidebar:
    st.header("Especialista digital")
    if not LLM_API_KEY:
        st.warning("Sem chave de API: a análise usará a mensagem padrão.")
    elif llm_status():
        st.success("Serviço de análise disponível.")
    else:
        st.error("Serviço de análise inacessível no momento.")

form_col, result_col = st.columns([1, 2])
with form_col:
    render_form()

with result_col:
    if st.session_state.result is None:
        st.markdown("### Pronto para simular?")
        st.write("Preencha os campos ao lado e clique em **Calcular** para ver sua jornada até R$ 1 milhão.")
    else:
        current_request = st.session_state.request
        current_response = build_response(st.session_state.result)
        render_summary(current_request, current_response)
        render_composition(current_response)
        render_growth_chart(current_response)
        render_table(current_response)
        render_commentary(current_request)
