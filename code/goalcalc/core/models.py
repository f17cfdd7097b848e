from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from compounding.schemas import MAX_MONTHS, CalculationType, GoalOutcome, InterestRateType, PeriodType


class SimulationRequest(BaseModel):
    calculation_type: CalculationType = CalculationType.CONTRIBUTION
    initial_value: float = Field(ge=0, default=0.0, allow_inf_nan=False)
    monthly_contribution: float = Field(ge=0, default=0.0, allow_inf_nan=False)
    interest_rate: float = Field(ge=0, default=0.0, allow_inf_nan=False)
    rate_type: InterestRateType = InterestRateType.ANNUAL
    period: float = Field(ge=0, default=0.0, allow_inf_nan=False)
    period_type: PeriodType = PeriodType.YEARS

    @field_validator("initial_value", "monthly_contribution", "interest_rate", "period", mode="before")
    @classmethod
    def _blank_to_zero(cls, value):
        # Empty or unparsable form entries count as zero.
        if value is None or value == "":
            return 0.0
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0

    @model_validator(mode="after")
    def _horizon_within_limit(self):
        if self.calculation_type == CalculationType.CONTRIBUTION:
            months = self.period * 12 if self.period_type == PeriodType.YEARS else self.period
            if months > MAX_MONTHS:
                raise ValueError(f"period must be at most {MAX_MONTHS} months")
        return self


class MonthlyPoint(BaseModel):
    month: int
    total_accumulated: float
    total_invested: float
    total_interest: float


class AnnualPoint(BaseModel):
    year: int
    annual_investment: float
    annual_interest: float
    total_invested: float
    total_interest: float
    total_accumulated: float


class Composition(BaseModel):
    invested_share: float
    interest_share: float
    interest_power_pct: Optional[int] = None


class FormattedTotals(BaseModel):
    goal: str
    total_final: str
    total_invested: str
    total_interest: str
    monthly_contribution: str


class SimulationResponse(BaseModel):
    goal: float
    total_final: float
    total_invested: float
    total_interest: float
    monthly_contribution: float
    period_in_months: int
    period_years: int
    period_remainder_months: int
    outcome: GoalOutcome
    composition: Composition
    formatted: FormattedTotals
    history: List[MonthlyPoint]
    annual_history: List[AnnualPoint]


class CommentaryResponse(BaseModel):
    summary: str
    source: Literal["llm", "fallback"]
