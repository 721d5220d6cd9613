# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo simulation orchestrator.

This module provides the path simulator and the MonteCarloSimulator class,
which runs many independent paths into a Batch and exposes the two engine
entry points: projecting a household once (batch, analysis and
recommendations) and calibrating a sustainable withdrawal rate.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import numpy as np

from .analyzer import AnalysisResult, RiskMetrics, analyze_batch
from .calibrator import CalibrationResult, calibrate_withdrawal_rate
from .config import MonteCarloConfig
from .errors import InvalidConfiguration
from .inputs import RetirementInput
from .market_assumptions import MarketAssumptions
from .recommendations import Recommendation, generate_recommendations
from .results import Batch
from .return_generator import NormalDrawSource, ScenarioGenerator
from .state import Path
from .transition import advance_year, initial_state

logger = logging.getLogger(__name__)

SeedLike = Union[None, int, np.random.SeedSequence]


def simulate_path(inputs: RetirementInput, scenario: ScenarioGenerator) -> Path:
    """Chain year transitions across the full horizon.
    
    Runs (retirement_age - age) accumulation years followed by
    years_in_retirement decumulation years. The starting state is not part
    of the returned path; element 0 is the state after the first year.
    """
    income_growth_mean = inputs.income_growth_rate / 100
    state = initial_state(inputs, scenario.inflation_mean)
    path = []
    for _ in range(inputs.horizon):
        draws = scenario.draw_year(inputs.retirement_age - state.age, income_growth_mean)
        state = advance_year(state, inputs, draws)
        path.append(state)
    return path


@dataclass
class SimulationReport:
    """Output record handed back to the surrounding application."""
    simulations: Batch
    analysis: AnalysisResult
    recommendations: List[Recommendation]
    risk_metrics: RiskMetrics
    
    def to_dict(self, include_paths: bool = True) -> Dict[str, Any]:
        data = {
            'simulations': self.simulations.to_list() if include_paths else [],
            'analysis': self.analysis.to_dict(),
            'recommendations': [rec.to_dict() for rec in self.recommendations],
            'riskMetrics': self.risk_metrics.to_dict(),
        }
        return data


class MonteCarloSimulator:
    """Runs independent retirement paths and summarizes them.
    
    Every path draws from its own random stream spawned from one seed
    sequence, so paths share no state and a fixed seed reproduces the
    batch regardless of ``max_workers``.
    
    Example:
        >>> simulator = MonteCarloSimulator(config=MonteCarloConfig(simulation_count=500))
        >>> report = simulator.run(inputs)
        >>> print(f"Success rate: {report.analysis.success_rate:.1f}%")
        >>> calibration = simulator.calibrate(inputs, target_success=0.9)
    """
    
    def __init__(self,
                 market_assumptions: Optional[MarketAssumptions] = None,
                 config: Optional[MonteCarloConfig] = None):
        """Initialize the simulator.
        
        Args:
            market_assumptions: Asset class assumptions. If None, uses defaults.
            config: Simulation configuration. If None, uses defaults.
        """
        self.market = market_assumptions or MarketAssumptions.create_default()
        self.config = config or MonteCarloConfig()
    
    def _scenario(self, seed: np.random.SeedSequence, market_condition: str) -> ScenarioGenerator:
        return ScenarioGenerator(
            NormalDrawSource(np.random.default_rng(seed)),
            self.market,
            market_condition=market_condition,
            inflation_mean=self.config.inflation_mean,
            inflation_volatility=self.config.inflation_volatility,
            income_growth_volatility=self.config.income_growth_volatility,
        )
    
    def run_batch(self,
                  inputs: RetirementInput,
                  market_condition: Optional[str] = None,
                  simulation_count: Optional[int] = None,
                  seed: SeedLike = None) -> Batch:
        """Simulate independent paths for one configuration.
        
        Args:
            inputs: Household input record
            market_condition: Overrides config.market_conditions
            simulation_count: Overrides config.simulation_count
            seed: Seed or SeedSequence for this batch. Falls back to
                  config.random_seed, then to fresh entropy.
        
        Returns:
            Batch with one path per simulation
        
        Raises:
            InvalidConfiguration: If the count is not positive, the horizon
                                  is empty, or the condition is unknown
        """
        count = self.config.simulation_count if simulation_count is None else simulation_count
        if count <= 0:
            raise InvalidConfiguration("simulation_count must be at least 1")
        condition = market_condition or self.config.market_conditions
        inputs.validate()
        self.market.for_condition(condition)
        
        if not isinstance(seed, np.random.SeedSequence):
            seed = np.random.SeedSequence(self.config.random_seed if seed is None else seed)
        children = seed.spawn(count)
        
        logger.info("Simulating %d paths over %d years (%s market)",
                    count, inputs.horizon, condition)
        
        def run_one(child: np.random.SeedSequence) -> Path:
            return simulate_path(inputs, self._scenario(child, condition))
        
        if self.config.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                paths = list(pool.map(run_one, children))
        else:
            paths = [run_one(child) for child in children]
        
        return Batch(paths, market_condition=condition)
    
    def run(self, inputs: RetirementInput, seed: SeedLike = None) -> SimulationReport:
        """Project a household once: batch, analysis and recommendations."""
        batch = self.run_batch(inputs, seed=seed)
        analysis = analyze_batch(batch, inputs, self.config.confidence_levels)
        recommendations = generate_recommendations(analysis, inputs)
        logger.info("Projection complete: success rate %.1f%%, ruin %.1f%%",
                    analysis.success_rate, analysis.key_metrics.probability_of_ruin)
        return SimulationReport(batch, analysis, recommendations, analysis.risk_metrics)
    
    def calibrate(self,
                  inputs: RetirementInput,
                  target_success: float = 0.95,
                  batch: Optional[Batch] = None,
                  seed: SeedLike = None) -> CalibrationResult:
        """Find the highest constant withdrawal rate meeting target_success.
        
        Args:
            inputs: Household input record
            target_success: Required share of passing paths (0 to 1)
            batch: Previously simulated batch to replay. If None, a new
                   batch is simulated.
            seed: Seed for the new batch when one is simulated
        """
        if batch is None:
            batch = self.run_batch(inputs, seed=seed)
        return calibrate_withdrawal_rate(batch, inputs, target_success=target_success)
