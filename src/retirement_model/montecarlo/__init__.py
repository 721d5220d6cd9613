# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Monte Carlo simulation module for retirement planning.

This module simulates many independent futures for market returns and
inflation, advances each through an accumulation and a withdrawal phase,
and summarizes the batch into success probabilities, percentile bands,
risk statistics, a calibrated sustainable withdrawal rate and ranked
recommendations.
"""

from .errors import InvalidConfiguration
from .config import MonteCarloConfig
from .market_assumptions import MarketAssumptions, AssetClassAssumptions, MarketCondition
from .inputs import RetirementInput
from .state import PortfolioState, ReturnBreakdown
from .return_generator import NormalDrawSource, ScenarioGenerator, YearDraws
from .transition import advance_year, calculate_withdrawal
from .results import Batch
from .analyzer import AnalysisResult, KeyMetrics, RiskMetrics, analyze_batch
from .calibrator import CalibrationResult, calibrate_withdrawal_rate
from .recommendations import Recommendation, generate_recommendations
from .simulator import MonteCarloSimulator, SimulationReport, simulate_path

__all__ = [
    'InvalidConfiguration',
    'MonteCarloConfig',
    'MarketAssumptions',
    'AssetClassAssumptions',
    'MarketCondition',
    'RetirementInput',
    'PortfolioState',
    'ReturnBreakdown',
    'NormalDrawSource',
    'ScenarioGenerator',
    'YearDraws',
    'advance_year',
    'calculate_withdrawal',
    'Batch',
    'AnalysisResult',
    'KeyMetrics',
    'RiskMetrics',
    'analyze_batch',
    'CalibrationResult',
    'calibrate_withdrawal_rate',
    'Recommendation',
    'generate_recommendations',
    'MonteCarloSimulator',
    'SimulationReport',
    'simulate_path',
]
