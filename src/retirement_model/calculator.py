# Copyright 2022 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Deterministic retirement projection at a fixed investment rate."""

from dataclasses import dataclass
from typing import Dict

from .montecarlo.inputs import RetirementInput


@dataclass(frozen=True)
class RetirementProjection:
    years_until_retirement: int
    years_in_retirement: int
    retirement_savings_at_retirement: float
    monthly_retirement_income: float
    desired_monthly_retirement_income: float
    retirement_income_gap: float
    savings_rate: float
    projected_coverage_ratio: float
    additional_savings_needed: float
    
    def to_dict(self) -> Dict[str, float]:
        return {
            'yearsUntilRetirement': self.years_until_retirement,
            'yearsInRetirement': self.years_in_retirement,
            'retirementSavingsAtRetirement': self.retirement_savings_at_retirement,
            'monthlyRetirementIncome': self.monthly_retirement_income,
            'desiredMonthlyRetirementIncome': self.desired_monthly_retirement_income,
            'retirementIncomeGap': self.retirement_income_gap,
            'savingsRate': self.savings_rate,
            'projectedCoverageRatio': self.projected_coverage_ratio,
            'additionalSavingsNeeded': self.additional_savings_needed,
        }


def future_value(current_savings: float, monthly_contribution: float,
                 months: int, monthly_rate: float) -> float:
    """Savings after compounding a balance and a stream of monthly contributions."""
    if monthly_rate == 0:
        return current_savings + monthly_contribution * months
    growth = (1 + monthly_rate) ** months
    return current_savings * growth + monthly_contribution * (growth - 1) / monthly_rate


def annuity_payment(principal: float, monthly_rate: float, months: int) -> float:
    """Level monthly payout that exhausts principal over the given months."""
    if monthly_rate == 0:
        return principal / months
    growth = (1 + monthly_rate) ** months
    return principal * monthly_rate * growth / (growth - 1)


def annuity_present_value(payment: float, monthly_rate: float, months: int) -> float:
    if monthly_rate == 0:
        return payment * months
    growth = (1 + monthly_rate) ** months
    return payment * (growth - 1) / (monthly_rate * growth)


def project_retirement(inputs: RetirementInput) -> RetirementProjection:
    """Project savings and income assuming investment_rate every year.
    
    Raises:
        InvalidConfiguration: If the input horizon is invalid
    """
    inputs.validate()
    monthly_rate = inputs.investment_rate / 12
    months_until = inputs.years_to_retirement * 12
    months_in = inputs.years_in_retirement * 12
    
    savings_at_retirement = future_value(inputs.retirement_savings,
                                         inputs.monthly_retirement_contribution,
                                         months_until, monthly_rate)
    monthly_income = annuity_payment(savings_at_retirement, monthly_rate, months_in)
    desired_monthly = inputs.desired_retirement_income / 12
    gap = desired_monthly - monthly_income
    
    additional = 0.0
    if gap > 0:
        # Extra monthly contribution whose future value funds the gap annuity
        required = annuity_present_value(gap, monthly_rate, months_in)
        additional = required / future_value(0.0, 1.0, months_until, monthly_rate)
    
    return RetirementProjection(
        years_until_retirement=inputs.years_to_retirement,
        years_in_retirement=inputs.years_in_retirement,
        retirement_savings_at_retirement=savings_at_retirement,
        monthly_retirement_income=monthly_income,
        desired_monthly_retirement_income=desired_monthly,
        retirement_income_gap=gap,
        savings_rate=(inputs.monthly_retirement_contribution / inputs.monthly_income * 100
                      if inputs.monthly_income else 0.0),
        projected_coverage_ratio=(monthly_income / desired_monthly
                                  if desired_monthly else 0.0),
        additional_savings_needed=additional,
    )
