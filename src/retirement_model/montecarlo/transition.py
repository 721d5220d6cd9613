# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Year transition for a simulated path.

Before retirement the portfolio grows by the blended return plus a fixed
annual contribution. From retirement on, a withdrawal is taken every year
under a dynamic cap and the balance is floored at zero (ruin).
"""

from .inputs import RetirementInput
from .return_generator import YearDraws
from .state import PortfolioState

# Withdrawals above this share of current savings are cut back to it
MAX_WITHDRAWAL_RATE = 0.05


def initial_state(inputs: RetirementInput, inflation_mean: float) -> PortfolioState:
    """Starting state built from the input record."""
    return PortfolioState(
        age=inputs.age,
        savings=inputs.retirement_savings,
        income=inputs.annual_income,
        expenses=inputs.annual_expenses,
        inflation=inflation_mean,
    )


def calculate_withdrawal(savings: float,
                         desired_income: float,
                         inflation: float) -> float:
    """Withdrawal for one retirement year.
    
    The desired income grows with the year's inflation draw unless it
    would exceed MAX_WITHDRAWAL_RATE of current savings, in which case
    exactly that share of savings is withdrawn. Only the current balance
    matters; earlier years' caps are not remembered.
    
    Args:
        savings: Portfolio balance at the start of the year
        desired_income: Nominal desired retirement income
        inflation: Inflation drawn for the year
    
    Returns:
        Withdrawal amount. Zero once savings are exhausted.
    """
    if savings <= 0:
        return 0.0
    if desired_income / savings > MAX_WITHDRAWAL_RATE:
        return savings * MAX_WITHDRAWAL_RATE
    return desired_income * (1 + inflation)


def accumulate(state: PortfolioState,
               inputs: RetirementInput,
               draws: YearDraws) -> PortfolioState:
    """Advance one pre-retirement year."""
    total_return = draws.returns.total_return
    return PortfolioState(
        age=state.age + 1,
        savings=max(0.0, state.savings * (1 + total_return) + inputs.annual_contribution),
        income=state.income * (1 + draws.income_growth),
        expenses=state.expenses * (1 + draws.inflation),
        inflation=draws.inflation,
        returns=draws.returns,
    )


def decumulate(state: PortfolioState,
               inputs: RetirementInput,
               draws: YearDraws) -> PortfolioState:
    """Advance one retirement year."""
    withdrawal = calculate_withdrawal(state.savings,
                                      inputs.desired_retirement_income,
                                      draws.inflation)
    return PortfolioState(
        age=state.age + 1,
        savings=max(0.0, state.savings * (1 + draws.returns.total_return) - withdrawal),
        income=inputs.guaranteed_income + withdrawal,
        expenses=state.expenses * (1 + draws.inflation),
        inflation=draws.inflation,
        returns=draws.returns,
        withdrawal=withdrawal,
    )


def advance_year(state: PortfolioState,
                 inputs: RetirementInput,
                 draws: YearDraws) -> PortfolioState:
    """Produce next year's state, accumulating until retirement age."""
    if state.age < inputs.retirement_age:
        return accumulate(state, inputs, draws)
    return decumulate(state, inputs, draws)
