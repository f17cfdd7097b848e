SAMPLE_CONTRIBUTION_REQUEST = {
    "calculation_type": "CONTRIBUTION",
    "initial_value": 0,
    "interest_rate": 10,
    "rate_type": "ANNUAL",
    "period": 20,
    "period_type": "YEARS",
}

SAMPLE_TIME_REQUEST = {
    "calculation_type": "TIME",
    "initial_value": 15000,
    "monthly_contribution": 1800,
    "interest_rate": 0.8,
    "rate_type": "MONTHLY",
}
