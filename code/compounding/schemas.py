from dataclasses import dataclass
from enum import Enum
from typing import Tuple

TARGET_GOAL = 1_000_000.0
# Longest series the simulator will build (1000 years).
MAX_MONTHS = 12_000


class CalculationType(str, Enum):
    TIME = "TIME"
    CONTRIBUTION = "CONTRIBUTION"


class PeriodType(str, Enum):
    YEARS = "YEARS"
    MONTHS = "MONTHS"


class InterestRateType(str, Enum):
    ANNUAL = "ANNUAL"
    MONTHLY = "MONTHLY"


class GoalOutcome(str, Enum):
    SOLVED = "solved"
    ALREADY_MET = "already_met"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class SimulationInput:
    calculation_type: CalculationType
    initial_value: float
    monthly_contribution: float = 0.0
    interest_rate: float = 0.0
    rate_type: InterestRateType = InterestRateType.ANNUAL
    period: float = 0.0
    period_type: PeriodType = PeriodType.YEARS


@dataclass(frozen=True)
class MonthlyDataPoint:
    month: int
    total_accumulated: float
    total_invested: float
    total_interest: float


@dataclass(frozen=True)
class AnnualDataPoint:
    year: int
    annual_investment: float
    annual_interest: float
    total_invested: float
    total_interest: float
    total_accumulated: float


@dataclass(frozen=True)
class SimulationResult:
    total_final: float
    total_invested: float
    total_interest: float
    monthly_contribution: float
    period_in_months: int
    history: Tuple[MonthlyDataPoint, ...] = ()
    annual_history: Tuple[AnnualDataPoint, ...] = ()
    # Diagnostics; the fields above keep the clamped values.
    outcome: GoalOutcome = GoalOutcome.SOLVED
    raw_months: float = 0.0
    raw_contribution: float = 0.0
    monthly_rate: float = 0.0
