# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Random draws for simulated years.

This module generates normally distributed samples with the Box-Muller
transform from an injectable uniform source, and assembles them into the
per-year draws (asset returns, inflation, income growth) that drive a path.
"""

import math
from dataclasses import dataclass
from typing import Optional, Protocol

import numpy as np

from .market_assumptions import MarketAssumptions
from .state import ReturnBreakdown


class UniformSource(Protocol):
    """Anything producing floats uniformly distributed on [0, 1).
    
    ``numpy.random.Generator`` and ``random.Random`` both qualify.
    """
    
    def random(self) -> float:
        ...


class NormalDrawSource:
    """Draws Normal(mean, std_dev) samples from a uniform source.
    
    Example:
        >>> source = NormalDrawSource(np.random.default_rng(42))
        >>> source.draw_normal(0.02, 0.01)  # e.g., 0.0231
        >>> source.draw_normal(0.02, 0.0)
        0.02
    """
    
    def __init__(self, uniform_source: Optional[UniformSource] = None):
        self.uniform_source = uniform_source if uniform_source is not None \
            else np.random.default_rng()
    
    def draw_normal(self, mean: float, std_dev: float) -> float:
        # Uniforms are consumed even for a zero std_dev so every draw uses
        # the same amount of entropy
        u1 = 1.0 - float(self.uniform_source.random())  # (0, 1], keeps log finite
        u2 = float(self.uniform_source.random())
        if std_dev == 0:
            return mean
        z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
        return mean + std_dev * z0


@dataclass(frozen=True)
class YearDraws:
    """Everything random about one simulated year."""
    returns: ReturnBreakdown
    inflation: float
    income_growth: float


class ScenarioGenerator:
    """Produces the yearly draws for one path.
    
    Each asset class is drawn from its market-condition adjusted
    assumptions and the total return is the glide-path blend of those draws.
    
    Example:
        >>> gen = ScenarioGenerator(NormalDrawSource(np.random.default_rng(1)),
        ...                         MarketAssumptions.create_default())
        >>> draws = gen.draw_year(years_to_retirement=25, income_growth_mean=0.03)
        >>> draws.returns.total_return  # e.g., 0.11
    """
    
    def __init__(self,
                 draw_source: NormalDrawSource,
                 market: MarketAssumptions,
                 market_condition: str = 'normal',
                 inflation_mean: float = 0.02,
                 inflation_volatility: float = 0.01,
                 income_growth_volatility: float = 0.01):
        self.draw_source = draw_source
        self.market = market
        self.asset_classes = market.for_condition(market_condition)
        self.inflation_mean = inflation_mean
        self.inflation_volatility = inflation_volatility
        self.income_growth_volatility = income_growth_volatility
    
    def draw_returns(self, years_to_retirement: float) -> ReturnBreakdown:
        draws = np.array([
            self.draw_source.draw_normal(asset.expected_return, asset.volatility)
            for asset in (self.asset_classes[name] for name in self.market.asset_class_order)
        ])
        total = float(self.market.blend_weights(years_to_retirement) @ draws)
        return ReturnBreakdown(float(draws[0]), float(draws[1]), float(draws[2]), total)
    
    def draw_year(self, years_to_retirement: float, income_growth_mean: float) -> YearDraws:
        returns = self.draw_returns(years_to_retirement)
        inflation = self.draw_source.draw_normal(self.inflation_mean, self.inflation_volatility)
        income_growth = self.draw_source.draw_normal(income_growth_mean,
                                                     self.income_growth_volatility)
        return YearDraws(returns, inflation, income_growth)
