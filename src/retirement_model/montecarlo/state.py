# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Yearly portfolio state produced by the year transition."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ReturnBreakdown:
    """Fractional returns drawn for one year.
    
    Attributes:
        stocks: Equity return
        bonds: Fixed income return
        cash: Cash return
        total_return: Glide-path blend of the asset class returns
    """
    stocks: float
    bonds: float
    cash: float
    total_return: float
    
    def to_dict(self) -> Dict[str, float]:
        return {
            'stocks': self.stocks,
            'bonds': self.bonds,
            'cash': self.cash,
            'totalReturn': self.total_return,
        }


@dataclass(frozen=True)
class PortfolioState:
    """Household finances at the end of one simulated year.
    
    Attributes:
        age: Age at the end of the year
        savings: Portfolio balance, never negative
        income: Annual income (salary before retirement, guaranteed income
                plus withdrawal after)
        expenses: Annual expenses
        inflation: Inflation drawn for the year
        returns: Asset class returns drawn for the year. None for the
                 starting state and for synthetic median paths.
        withdrawal: Amount withdrawn from savings (retirement years only)
    """
    age: int
    savings: float
    income: float
    expenses: float
    inflation: float
    returns: Optional[ReturnBreakdown] = None
    withdrawal: float = 0.0
    
    def to_dict(self) -> Dict[str, Any]:
        data = {
            'age': self.age,
            'savings': self.savings,
            'income': self.income,
            'expenses': self.expenses,
            'inflation': self.inflation,
            'withdrawal': self.withdrawal,
        }
        if self.returns is not None:
            data['returns'] = self.returns.to_dict()
        return data


# One simulated trajectory, oldest year first
Path = List[PortfolioState]


def path_to_dicts(path: Path) -> List[Dict[str, Any]]:
    return [state.to_dict() for state in path]
