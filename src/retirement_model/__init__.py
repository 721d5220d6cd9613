# Copyright 2022 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Retirement Projection Engine

Projects a household's retirement savings under uncertainty and calibrates
a safe spending policy.

Example usage:
    from retirement_model import MonteCarloSimulator, MonteCarloConfig, RetirementInput
    
    inputs = RetirementInput(age=40, retirement_age=65, years_in_retirement=25,
                             retirement_savings=200000,
                             monthly_retirement_contribution=1000,
                             income_growth_rate=3, monthly_income=6000,
                             desired_retirement_income=60000,
                             savings_percentage=15)
    simulator = MonteCarloSimulator(config=MonteCarloConfig(simulation_count=2000))
    report = simulator.run(inputs)
    print(report.analysis.success_rate)
"""

# Deterministic projection
from .calculator import RetirementProjection, project_retirement

# Monte Carlo Simulation
from .montecarlo import (
    MonteCarloSimulator,
    MonteCarloConfig,
    SimulationReport,
    RetirementInput,
    MarketAssumptions,
    AssetClassAssumptions,
    Batch,
    AnalysisResult,
    CalibrationResult,
    Recommendation,
    InvalidConfiguration,
)

# Version
from .__meta__ import __version__

__all__ = [
    # Deterministic
    'RetirementProjection', 'project_retirement',
    # Monte Carlo
    'MonteCarloSimulator', 'MonteCarloConfig', 'SimulationReport',
    'RetirementInput', 'MarketAssumptions', 'AssetClassAssumptions',
    'Batch', 'AnalysisResult', 'CalibrationResult', 'Recommendation',
    'InvalidConfiguration',
    # Version
    '__version__',
]
