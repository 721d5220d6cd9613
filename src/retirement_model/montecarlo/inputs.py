# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Household input record consumed by the engine."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .errors import InvalidConfiguration

# Guaranteed retirement income: 40% of current monthly income, capped
GUARANTEED_INCOME_SHARE = 0.4
GUARANTEED_INCOME_MONTHLY_CAP = 3000.0


@dataclass(frozen=True)
class RetirementInput:
    """Savings, contribution and spending assumptions for one household.
    
    Monetary amounts are nominal. ``income_growth_rate`` and
    ``savings_percentage`` are percentages (3 means 3%), while
    ``investment_rate`` is a decimal annual rate.
    """
    age: int
    retirement_age: int
    years_in_retirement: int
    retirement_savings: float
    monthly_retirement_contribution: float
    income_growth_rate: float
    monthly_income: float
    desired_retirement_income: float
    savings_percentage: float = 0.0
    investment_rate: float = 0.06
    risk_tolerance: int = 3
    investments: Dict[str, float] = field(default_factory=dict)
    healthcare_savings: float = 0.0
    insurance_coverage: List[str] = field(default_factory=list)
    
    def validate(self) -> 'RetirementInput':
        """Check the horizon and balances.
        
        Raises:
            InvalidConfiguration: If the horizon is empty or balances are negative
        """
        if self.retirement_age <= self.age:
            raise InvalidConfiguration(
                f"retirement_age ({self.retirement_age}) must be greater than age ({self.age})"
            )
        if self.years_in_retirement <= 0:
            raise InvalidConfiguration("years_in_retirement must be positive")
        if self.retirement_savings < 0:
            raise InvalidConfiguration("retirement_savings cannot be negative")
        if self.monthly_income < 0:
            raise InvalidConfiguration("monthly_income cannot be negative")
        return self
    
    @property
    def years_to_retirement(self) -> int:
        return self.retirement_age - self.age
    
    @property
    def horizon(self) -> int:
        """Number of simulated years in one path."""
        return self.years_to_retirement + self.years_in_retirement
    
    @property
    def annual_contribution(self) -> float:
        return self.monthly_retirement_contribution * 12
    
    @property
    def annual_income(self) -> float:
        return self.monthly_income * 12
    
    @property
    def annual_expenses(self) -> float:
        """Spending implied by the share of income not budgeted for savings."""
        return self.monthly_income * (1 - self.savings_percentage / 100) * 12
    
    @property
    def guaranteed_income(self) -> float:
        """Annual external benefit available in every retirement year."""
        return min(self.monthly_income * GUARANTEED_INCOME_SHARE,
                   GUARANTEED_INCOME_MONTHLY_CAP) * 12
    
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'RetirementInput':
        """Build an input record from the camelCase form used by callers.
        
        Raises:
            InvalidConfiguration: If a required field is missing or not numeric
        """
        required = {
            'age': 'age',
            'retirementAge': 'retirement_age',
            'yearsInRetirement': 'years_in_retirement',
            'retirementSavings': 'retirement_savings',
            'monthlyRetirementContribution': 'monthly_retirement_contribution',
            'incomeGrowthRate': 'income_growth_rate',
            'monthlyIncome': 'monthly_income',
            'desiredRetirementIncome': 'desired_retirement_income',
        }
        kwargs: Dict[str, Any] = {}
        missing = [key for key in required if data.get(key) is None]
        if missing:
            raise InvalidConfiguration(f"Missing input fields: {missing}")
        try:
            for key, name in required.items():
                kwargs[name] = float(data[key])
            for name in ('age', 'retirement_age', 'years_in_retirement'):
                kwargs[name] = int(kwargs[name])
            
            budget = data.get('budgetAllocation') or {}
            kwargs['savings_percentage'] = float(budget.get('Savings', 0.0))
            if data.get('investmentRate') is not None:
                kwargs['investment_rate'] = float(data['investmentRate'])
            if data.get('riskTolerance') is not None:
                kwargs['risk_tolerance'] = int(data['riskTolerance'])
            
            assets = data.get('assets') or {}
            kwargs['investments'] = {str(k): float(v)
                                     for k, v in (assets.get('Investments') or {}).items()}
            kwargs['healthcare_savings'] = float(assets.get('Healthcare Savings', 0.0) or 0.0)
        except (TypeError, ValueError, AttributeError) as e:
            raise InvalidConfiguration(f"Invalid input record: {e}") from e
        kwargs['insurance_coverage'] = [str(item) for item in data.get('insuranceCoverage') or []]
        return cls(**kwargs)
