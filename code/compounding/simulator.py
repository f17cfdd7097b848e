# compounding/simulator.py
import math
from typing import List, Tuple

from .schemas import (
    MAX_MONTHS,
    TARGET_GOAL,
    AnnualDataPoint,
    CalculationType,
    GoalOutcome,
    InterestRateType,
    MonthlyDataPoint,
    PeriodType,
    SimulationInput,
    SimulationResult,
)


# Float helpers that return nan/inf where Python would raise.

def _div(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _pow(base: float, exp: float) -> float:
    try:
        return math.pow(base, exp)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan


def _log(x: float) -> float:
    if math.isnan(x) or x < 0:
        return math.nan
    if x == 0:
        return -math.inf
    if math.isinf(x):
        return math.inf
    return math.log(x)


def _ceil(x: float) -> float:
    if not math.isfinite(x):
        return x
    return float(math.ceil(x))


def _floor(x: float) -> float:
    if not math.isfinite(x):
        return x
    return float(math.floor(x))


def _clamp_to_zero(value: float) -> float:
    if math.isnan(value) or math.isinf(value) or value < 0:
        return 0.0
    return value


def _exceeds_max_months(raw_months: float) -> bool:
    return _clamp_to_zero(raw_months) > MAX_MONTHS


def effective_monthly_rate(interest_rate: float, rate_type: InterestRateType) -> float:
    """Monthly compounding rate equivalent to the nominal percentage rate."""
    if rate_type == InterestRateType.MONTHLY:
        return interest_rate / 100
    return _pow(1 + interest_rate / 100, 1 / 12) - 1


def horizon_in_months(period: float, period_type: PeriodType) -> float:
    months = period * 12 if period_type == PeriodType.YEARS else period
    # Partial months are dropped; the series is built one whole month at a time.
    return _floor(months)


def solve_months(initial_value: float, contribution: float, monthly_rate: float, goal: float = TARGET_GOAL) -> float:
    """Unclamped number of months needed to reach `goal`; may be nan, inf or negative."""
    if monthly_rate == 0:
        return _ceil(_div(goal - initial_value, contribution))
    numerator = goal * monthly_rate + contribution
    denominator = initial_value * monthly_rate + contribution
    return _ceil(_div(_log(_div(numerator, denominator)), _log(1 + monthly_rate)))


def solve_contribution(initial_value: float, months: float, monthly_rate: float, goal: float = TARGET_GOAL) -> float:
    """Unclamped monthly contribution needed to reach `goal` in `months`."""
    if monthly_rate == 0:
        return _div(goal - initial_value, months)
    growth = _pow(1 + monthly_rate, months)
    return _div(goal - initial_value * growth, _div(growth - 1, monthly_rate))


def _classify_outcome(sim: SimulationInput, raw_months: float, raw_contribution: float) -> GoalOutcome:
    if sim.initial_value >= TARGET_GOAL:
        return GoalOutcome.ALREADY_MET
    if _exceeds_max_months(raw_months):
        return GoalOutcome.UNREACHABLE
    raw = raw_months if sim.calculation_type == CalculationType.TIME else raw_contribution
    if sim.calculation_type == CalculationType.CONTRIBUTION and math.isfinite(raw) and raw < 0:
        # The initial value alone compounds past the goal within the horizon.
        return GoalOutcome.ALREADY_MET
    if _clamp_to_zero(raw) != raw:
        return GoalOutcome.UNREACHABLE
    return GoalOutcome.SOLVED


def build_history(initial_value: float, contribution: float, monthly_rate: float, months: int) -> List[MonthlyDataPoint]:
    history = [MonthlyDataPoint(month=0, total_accumulated=initial_value, total_invested=initial_value, total_interest=0.0)]
    accumulated = initial_value
    invested = initial_value
    interest = 0.0
    for month in range(1, months + 1):
        interest_of_month = accumulated * monthly_rate
        interest += interest_of_month
        invested += contribution
        accumulated = accumulated + interest_of_month + contribution
        history.append(
            MonthlyDataPoint(
                month=month,
                total_accumulated=accumulated,
                total_invested=invested,
                total_interest=interest,
            )
        )
    return history


def build_annual_history(history: List[MonthlyDataPoint]) -> List[AnnualDataPoint]:
    months = len(history) - 1
    annual: List[AnnualDataPoint] = []
    for year in range(1, -(-months // 12) + 1):
        # The last bucket may cover fewer than 12 months.
        at_end = history[min(year * 12, months)]
        at_start = history[max(0, (year - 1) * 12)]
        annual.append(
            AnnualDataPoint(
                year=year,
                annual_investment=at_end.total_invested - at_start.total_invested,
                annual_interest=at_end.total_interest - at_start.total_interest,
                total_invested=at_end.total_invested,
                total_interest=at_end.total_interest,
                total_accumulated=at_end.total_accumulated,
            )
        )
    return annual


def _solve(sim: SimulationInput, monthly_rate: float) -> Tuple[float, float]:
    if sim.calculation_type == CalculationType.TIME:
        raw_months = solve_months(sim.initial_value, sim.monthly_contribution, monthly_rate)
        return raw_months, sim.monthly_contribution
    raw_months = horizon_in_months(sim.period, sim.period_type)
    return raw_months, solve_contribution(sim.initial_value, raw_months, monthly_rate)


def simulate(sim: SimulationInput) -> SimulationResult:
    """
    Solve for the missing variable of the goal equation and build both series.

    In TIME mode the monthly contribution is given and the number of months to
    reach TARGET_GOAL is solved; in CONTRIBUTION mode the horizon is given and
    the monthly contribution is solved. Degenerate solutions (nan, inf or
    negative) are clamped to zero, and so are horizons past MAX_MONTHS; `outcome`
    and the raw_* fields tell them apart.
    """
    monthly_rate = effective_monthly_rate(sim.interest_rate, sim.rate_type)
    raw_months, raw_contribution = _solve(sim, monthly_rate)

    if _exceeds_max_months(raw_months):
        # Too long to simulate month by month; reported as unreachable.
        months, contribution = 0, 0.0
    else:
        months = int(_clamp_to_zero(raw_months))
        contribution = _clamp_to_zero(raw_contribution)

    history = build_history(sim.initial_value, contribution, monthly_rate, months)
    annual_history = build_annual_history(history)
    final = history[-1]

    return SimulationResult(
        total_final=final.total_accumulated,
        total_invested=final.total_invested,
        total_interest=final.total_interest,
        monthly_contribution=contribution,
        period_in_months=months,
        history=tuple(history),
        annual_history=tuple(annual_history),
        outcome=_classify_outcome(sim, raw_months, raw_contribution),
        raw_months=raw_months,
        raw_contribution=raw_contribution,
        monthly_rate=monthly_rate,
    )
