# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Market assumptions for asset classes.

This module contains the MarketAssumptions class which holds return and
volatility assumptions for the asset classes drawn every simulated year,
the age-based equity glide path, and the market condition adjustments.
"""

from dataclasses import dataclass, replace
from typing import Dict, List

import numpy as np

from .errors import InvalidConfiguration


@dataclass(frozen=True)
class AssetClassAssumptions:
    """Return and volatility assumptions for a single asset class.
    
    Attributes:
        name: Asset class identifier (e.g., "stocks")
        expected_return: Annual expected return as decimal (e.g., 0.10 for 10%)
        volatility: Annual standard deviation as decimal (e.g., 0.15 for 15%)
    """
    name: str
    expected_return: float
    volatility: float
    
    def __post_init__(self):
        if self.volatility < 0:
            raise ValueError(f"Volatility cannot be negative: {self.volatility}")


@dataclass(frozen=True)
class MarketCondition:
    """Adjustment applied to every asset class draw.
    
    The mean shift is added to the expected return and the volatility
    multiplier scales the standard deviation before drawing.
    """
    name: str
    mean_shift: float
    volatility_multiplier: float
    
    def adjust(self, asset: AssetClassAssumptions) -> AssetClassAssumptions:
        return AssetClassAssumptions(
            asset.name,
            asset.expected_return + self.mean_shift,
            asset.volatility * self.volatility_multiplier,
        )


MARKET_CONDITION_TABLE: Dict[str, MarketCondition] = {
    'normal': MarketCondition('normal', 0.0, 1.0),
    'bull': MarketCondition('bull', 0.02, 0.8),
    'bear': MarketCondition('bear', -0.02, 1.2),
}


class MarketAssumptions:
    """Return assumptions and the glide path used to blend them.
    
    Equity weight falls linearly with years to retirement, from
    ``max_equity`` at ``glide_years`` or more years out down to
    ``min_equity`` at (and after) retirement. The remainder is held in bonds.
    Cash is drawn and reported but not part of the blend.
    
    Example:
        >>> market = MarketAssumptions.create_default()
        >>> market.equity_weight(25)
        0.8333333333333334
        >>> market.equity_weight(0)
        0.2
    """
    
    EQUITY = 'stocks'
    FIXED_INCOME = 'bonds'
    CASH = 'cash'
    
    def __init__(self,
                 asset_classes: Dict[str, AssetClassAssumptions],
                 min_equity: float = 0.20,
                 max_equity: float = 0.90,
                 glide_years: float = 30.0):
        """Initialize market assumptions.
        
        Args:
            asset_classes: Dict mapping asset class name to its assumptions.
                           Must contain 'stocks', 'bonds' and 'cash'.
            min_equity: Equity weight at and after retirement
            max_equity: Upper bound on the equity weight
            glide_years: Years to retirement at which the glide path starts
        
        Raises:
            ValueError: If asset classes are missing or bounds are inconsistent
        """
        self.asset_classes = dict(asset_classes)
        self.min_equity = min_equity
        self.max_equity = max_equity
        self.glide_years = glide_years
        self._validate()
    
    def _validate(self):
        """Validate that all inputs are consistent."""
        missing = [name for name in self.asset_class_order
                   if name not in self.asset_classes]
        if missing:
            raise ValueError(f"Asset classes missing from assumptions: {missing}")
        
        if not 0 <= self.min_equity <= self.max_equity <= 1:
            raise ValueError(
                f"Equity bounds must satisfy 0 <= min <= max <= 1, "
                f"got min={self.min_equity}, max={self.max_equity}"
            )
        
        if self.glide_years <= 0:
            raise ValueError("glide_years must be positive")
    
    @property
    def asset_class_order(self) -> List[str]:
        return [self.EQUITY, self.FIXED_INCOME, self.CASH]
    
    def equity_weight(self, years_to_retirement: float) -> float:
        """Equity share of the blended portfolio for the given horizon."""
        weight = years_to_retirement / self.glide_years
        return min(self.max_equity, max(self.min_equity, weight))
    
    def blend_weights(self, years_to_retirement: float) -> np.ndarray:
        """Weights in asset_class_order for the given horizon."""
        equity = self.equity_weight(years_to_retirement)
        return np.array([equity, 1.0 - equity, 0.0])
    
    def for_condition(self, condition: str) -> Dict[str, AssetClassAssumptions]:
        """Asset classes adjusted for a market condition.
        
        Raises:
            InvalidConfiguration: If the condition is not in the table
        """
        try:
            adjustment = MARKET_CONDITION_TABLE[condition]
        except KeyError:
            raise InvalidConfiguration(
                f"Unknown market condition '{condition}'. "
                f"Expected one of {list(MARKET_CONDITION_TABLE)}"
            ) from None
        return {name: adjustment.adjust(self.asset_classes[name])
                for name in self.asset_class_order}
    
    def without_volatility(self) -> 'MarketAssumptions':
        """Copy of these assumptions with every standard deviation set to zero."""
        flat = {name: replace(asset, volatility=0.0)
                for name, asset in self.asset_classes.items()}
        return MarketAssumptions(flat, self.min_equity, self.max_equity, self.glide_years)
    
    @classmethod
    def create_default(cls) -> 'MarketAssumptions':
        """Create default market assumptions.
        
        Returns:
            MarketAssumptions with long-run stock, bond and cash parameters.
        """
        asset_classes = {
            "stocks": AssetClassAssumptions("stocks", 0.10, 0.15),
            "bonds": AssetClassAssumptions("bonds", 0.04, 0.05),
            "cash": AssetClassAssumptions("cash", 0.02, 0.01),
        }
        return cls(asset_classes)
    
    def __repr__(self) -> str:
        return (f"MarketAssumptions(asset_classes={list(self.asset_classes)}, "
                f"equity={self.min_equity:.0%}-{self.max_equity:.0%})")
