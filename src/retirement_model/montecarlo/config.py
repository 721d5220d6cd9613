# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Configuration for Monte Carlo simulations."""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Tuple

from .errors import InvalidConfiguration

DEFAULT_SIMULATION_COUNT = 1000
DEFAULT_CONFIDENCE_LEVELS = (0.95, 0.75, 0.50)
DEFAULT_INFLATION_MEAN = 0.02
DEFAULT_INFLATION_VOLATILITY = 0.01
DEFAULT_INCOME_GROWTH_VOLATILITY = 0.01
MARKET_CONDITIONS = ('normal', 'bull', 'bear')

# camelCase option names used by callers of the engine
_OPTION_NAMES = {
    'simulationCount': 'simulation_count',
    'confidenceLevels': 'confidence_levels',
    'inflationMean': 'inflation_mean',
    'inflationVolatility': 'inflation_volatility',
    'incomeGrowthVolatility': 'income_growth_volatility',
    'marketConditions': 'market_conditions',
    'seed': 'random_seed',
    'maxWorkers': 'max_workers',
}


def _to_levels(value: Any) -> Tuple[float, ...]:
    if isinstance(value, (str, bytes)):
        raise TypeError(f"confidence levels must be a list, got {value!r}")
    return tuple(float(level) for level in value)


# Options may arrive as strings from JSON clients
_OPTION_TYPES = {
    'simulation_count': int,
    'confidence_levels': _to_levels,
    'inflation_mean': float,
    'inflation_volatility': float,
    'income_growth_volatility': float,
    'market_conditions': str,
    'random_seed': int,
    'max_workers': int,
}


@dataclass(frozen=True)
class MonteCarloConfig:
    """Configuration for Monte Carlo simulation parameters.
    
    Attributes:
        simulation_count: Number of independent paths per batch. Default 1000.
        confidence_levels: Levels used to build percentile bands. A level L
                           contributes the (1 - L) and L percentiles.
        inflation_mean: Mean of the yearly inflation draw.
        inflation_volatility: Standard deviation of the yearly inflation draw.
        income_growth_volatility: Standard deviation of the yearly income
                                  growth draw around the input growth rate.
        market_conditions: One of 'normal', 'bull', 'bear'.
        random_seed: Optional seed for reproducible results. Default None.
        max_workers: Threads used to simulate paths. 1 runs sequentially.
    """
    simulation_count: int = DEFAULT_SIMULATION_COUNT
    confidence_levels: Tuple[float, ...] = DEFAULT_CONFIDENCE_LEVELS
    inflation_mean: float = DEFAULT_INFLATION_MEAN
    inflation_volatility: float = DEFAULT_INFLATION_VOLATILITY
    income_growth_volatility: float = DEFAULT_INCOME_GROWTH_VOLATILITY
    market_conditions: str = 'normal'
    random_seed: Optional[int] = None
    max_workers: int = 1
    
    def __post_init__(self):
        object.__setattr__(self, 'confidence_levels', tuple(self.confidence_levels))
        if self.simulation_count < 1:
            raise InvalidConfiguration("simulation_count must be at least 1")
        if not self.confidence_levels:
            raise InvalidConfiguration("confidence_levels must not be empty")
        for level in self.confidence_levels:
            if not 0 < level < 1:
                raise InvalidConfiguration(
                    f"Confidence level must be between 0 and 1: {level}"
                )
        if self.inflation_volatility < 0:
            raise InvalidConfiguration(
                f"inflation_volatility cannot be negative: {self.inflation_volatility}"
            )
        if self.income_growth_volatility < 0:
            raise InvalidConfiguration(
                f"income_growth_volatility cannot be negative: {self.income_growth_volatility}"
            )
        if self.market_conditions not in MARKET_CONDITIONS:
            raise InvalidConfiguration(
                f"Unknown market condition '{self.market_conditions}'. "
                f"Expected one of {list(MARKET_CONDITIONS)}"
            )
        if self.max_workers < 1:
            raise InvalidConfiguration("max_workers must be at least 1")
    
    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> 'MonteCarloConfig':
        """Build a config from caller options.
        
        Accepts both the camelCase names used by the surrounding application
        and the attribute names of this class. Unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in options.items():
            name = _OPTION_NAMES.get(key, key)
            if name in known and value is not None:
                kwargs[name] = value
        try:
            for name, convert in _OPTION_TYPES.items():
                if name in kwargs:
                    kwargs[name] = convert(kwargs[name])
        except (TypeError, ValueError) as e:
            raise InvalidConfiguration(f"Invalid simulation option: {e}") from e
        return cls(**kwargs)
