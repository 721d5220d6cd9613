# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Builders shared by the Monte Carlo tests."""

from ..montecarlo.analyzer import AnalysisResult, ExtremeScenarios, KeyMetrics, RiskMetrics
from ..montecarlo.inputs import RetirementInput
from ..montecarlo.results import Batch
from ..montecarlo.state import PortfolioState, ReturnBreakdown

# Household from the end-to-end scenario
SCENARIO_RECORD = {
    'age': 40,
    'retirementAge': 65,
    'yearsInRetirement': 25,
    'retirementSavings': 200000,
    'monthlyRetirementContribution': 1000,
    'incomeGrowthRate': 3,
    'monthlyIncome': 6000,
    'desiredRetirementIncome': 60000,
    'budgetAllocation': {'Savings': 15, 'Housing': 30, 'Food': 15},
    'simulationCount': 2000,
    'marketConditions': 'normal',
}


def make_inputs(**overrides) -> RetirementInput:
    values = dict(
        age=40,
        retirement_age=65,
        years_in_retirement=25,
        retirement_savings=200000.0,
        monthly_retirement_contribution=1000.0,
        income_growth_rate=3.0,
        monthly_income=6000.0,
        desired_retirement_income=60000.0,
        savings_percentage=15.0,
    )
    values.update(overrides)
    return RetirementInput(**values)


def make_stressed_inputs(**overrides) -> RetirementInput:
    """One year from retirement with savings near the income floor.
    
    Withdrawals are capped at 5% of savings, so income falls below the
    floor whenever savings dip under 360,000. Roughly one path in ten does.
    """
    values = dict(
        age=64,
        retirement_age=65,
        years_in_retirement=25,
        retirement_savings=500000.0,
        monthly_retirement_contribution=0.0,
        monthly_income=5000.0,
        savings_percentage=10.0,
    )
    values.update(overrides)
    return make_inputs(**values)


def make_path(savings, income=100000.0, inflation=0.0, returns=None, start_age=64):
    """Path with given savings per year. Returns default to zero."""
    returns = returns or [0.0] * len(savings)
    return [
        PortfolioState(
            age=start_age + year + 1,
            savings=float(balance),
            income=income[year] if isinstance(income, list) else income,
            expenses=50000.0,
            inflation=inflation,
            returns=ReturnBreakdown(0.0, 0.0, 0.0, returns[year]),
        )
        for year, balance in enumerate(savings)
    ]


def make_batch(*paths) -> Batch:
    return Batch(list(paths))


def make_analysis(success_rate, probability_of_ruin=0.0,
                  sustainable_withdrawal_rate=0.05,
                  real_wealth_preservation=80.0) -> AnalysisResult:
    return AnalysisResult(
        success_rate=success_rate,
        confidence_intervals={},
        median_path=[],
        extreme_scenarios=ExtremeScenarios([], [], [], []),
        risk_metrics=RiskMetrics(0.0, 0.0, 0.0, 0.0),
        key_metrics=KeyMetrics(
            median_final_wealth=0.0,
            probability_of_ruin=probability_of_ruin,
            sustainable_withdrawal_rate=sustainable_withdrawal_rate,
            real_wealth_preservation=real_wealth_preservation,
        ),
    )
