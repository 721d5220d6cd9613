# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Statistical analysis of a simulated batch.

This module reduces a finished Batch into success and ruin probabilities,
per-year percentile bands, a synthetic median path, extreme scenarios and
risk metrics. Every result is recomputed from the batch on each call.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Sequence

import numpy as np
import pandas as pd

from .calibrator import DEFAULT_TARGET_SUCCESS, calibrate_withdrawal_rate
from .inputs import RetirementInput
from .results import Batch
from .state import Path, PortfolioState, path_to_dicts

# Retirement income must stay at or above this share of the desired income
MIN_INCOME_RATIO = 0.7
TAIL_PERCENTILE = 0.05


@dataclass(frozen=True)
class RiskMetrics:
    """Risk statistics pooled across a batch.
    
    Attributes:
        volatility: Std dev of year-over-year fractional savings changes
        max_drawdown: Largest peak-to-trough savings decline of any path
        var95: 5th percentile of the pooled savings changes
        cvar95: Mean of pooled changes at or below var95
    """
    volatility: float
    max_drawdown: float
    var95: float
    cvar95: float
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'volatility': self.volatility,
            'maxDrawdown': self.max_drawdown,
            'tailRisk': {'var95': self.var95, 'cvar95': self.cvar95},
        }


@dataclass(frozen=True)
class KeyMetrics:
    median_final_wealth: float
    probability_of_ruin: float
    sustainable_withdrawal_rate: float
    real_wealth_preservation: float
    
    def to_dict(self) -> Dict[str, float]:
        return {
            'medianFinalWealth': self.median_final_wealth,
            'probabilityOfRuin': self.probability_of_ruin,
            'sustainableWithdrawalRate': self.sustainable_withdrawal_rate,
            'realWealthPreservation': self.real_wealth_preservation,
        }


@dataclass(frozen=True)
class ExtremeScenarios:
    """Paths ranked by final-year savings."""
    worst: Path
    best: Path
    tenth_percentile: Path
    ninetieth_percentile: Path
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'worst': path_to_dicts(self.worst),
            'best': path_to_dicts(self.best),
            'tenthPercentile': path_to_dicts(self.tenth_percentile),
            'ninetiethPercentile': path_to_dicts(self.ninetieth_percentile),
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Summary of one batch.
    
    ``success_rate``, ``probability_of_ruin`` and ``real_wealth_preservation``
    are percentages (0 to 100). ``confidence_intervals`` maps a metric name
    to {year index: {percentile label: value}}.
    """
    success_rate: float
    confidence_intervals: Dict[str, Dict[int, Dict[str, float]]]
    median_path: Path
    extreme_scenarios: ExtremeScenarios
    risk_metrics: RiskMetrics
    key_metrics: KeyMetrics
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'successRate': self.success_rate,
            'confidenceIntervals': self.confidence_intervals,
            'medianPath': path_to_dicts(self.median_path),
            'extremeScenarios': self.extreme_scenarios.to_dict(),
            'riskMetrics': self.risk_metrics.to_dict(),
            'keyMetrics': self.key_metrics.to_dict(),
        }


def _percent(mask: np.ndarray) -> float:
    return float(mask.mean() * 100)


def _empirical_index(percentile: float, count: int) -> int:
    return min(int(np.floor(round(percentile * count, 9))), count - 1)


def calculate_success_rate(batch: Batch, inputs: RetirementInput) -> float:
    """Percentage of paths that stay solvent with adequate income every year.
    
    A single year with zero savings or income below MIN_INCOME_RATIO of
    the desired retirement income fails the whole path.
    """
    batch.require_non_empty()
    solvent = (batch.metric_matrix('savings') > 0).all(axis=1)
    income_floor = inputs.desired_retirement_income * MIN_INCOME_RATIO
    funded = (batch.metric_matrix('income') >= income_floor).all(axis=1)
    return _percent(solvent & funded)


def calculate_ruin_probability(batch: Batch) -> float:
    """Percentage of paths with savings at or below zero in any year."""
    batch.require_non_empty()
    return _percent((batch.metric_matrix('savings') <= 0).any(axis=1))


def percentile_levels(confidence_levels: Iterable[float]) -> List[float]:
    """Percentiles implied by confidence levels.
    
    A level L contributes the (1 - L) and L percentiles, so the default
    levels (0.95, 0.75, 0.50) give 5, 25, 50, 75 and 95.
    """
    levels = set()
    for level in confidence_levels:
        levels.add(round(1 - level, 6))
        levels.add(round(level, 6))
    return sorted(levels)


def percentile_label(percentile: float) -> str:
    return f"p{round(percentile * 100, 2):g}"


def percentile_frame(batch: Batch, metric: str, percentiles: Sequence[float]) -> pd.DataFrame:
    """Empirical percentiles of a metric for every year.
    
    Each year's values are sorted once and the value at
    floor(percentile * count) is taken, so bands are ordered by construction.
    
    Returns:
        DataFrame with year index as index and percentile labels as columns
    """
    values = np.sort(batch.metric_matrix(metric), axis=0)
    count = values.shape[0]
    df = pd.DataFrame({
        percentile_label(p): values[_empirical_index(p, count)] for p in percentiles
    })
    df.index.name = 'year'
    return df


def calculate_confidence_intervals(batch: Batch,
                                   confidence_levels: Iterable[float]
                                   ) -> Dict[str, Dict[int, Dict[str, float]]]:
    percentiles = percentile_levels(confidence_levels)
    return {
        metric: {int(year): {label: float(value) for label, value in row.items()}
                 for year, row in percentile_frame(batch, metric, percentiles).iterrows()}
        for metric in Batch.TRACKED_METRICS
    }


def calculate_median_path(batch: Batch) -> Path:
    """Synthetic path of per-year medians. Not drawn from any single trial."""
    medians = {metric: np.median(batch.metric_matrix(metric), axis=0)
               for metric in ('savings', 'income', 'expenses', 'inflation', 'withdrawal')}
    return [
        PortfolioState(
            age=age,
            savings=float(medians['savings'][year]),
            income=float(medians['income'][year]),
            expenses=float(medians['expenses'][year]),
            inflation=float(medians['inflation'][year]),
            withdrawal=float(medians['withdrawal'][year]),
        )
        for year, age in enumerate(batch.get_ages())
    ]


def identify_extreme_scenarios(batch: Batch) -> ExtremeScenarios:
    batch.require_non_empty()
    order = np.argsort(batch.final_values('savings'), kind='stable')
    count = len(order)
    return ExtremeScenarios(
        worst=batch[int(order[0])],
        best=batch[int(order[-1])],
        tenth_percentile=batch[int(order[_empirical_index(0.1, count)])],
        ninetieth_percentile=batch[int(order[_empirical_index(0.9, count)])],
    )


def pooled_savings_changes(batch: Batch) -> np.ndarray:
    """Year-over-year fractional savings changes of every path.
    
    Years starting from zero savings have no defined change and are skipped.
    """
    savings = batch.metric_matrix('savings')
    previous, current = savings[:, :-1], savings[:, 1:]
    defined = previous > 0
    return current[defined] / previous[defined] - 1


def calculate_max_drawdown(batch: Batch) -> float:
    """Largest peak-to-trough fractional savings decline across the batch."""
    savings = batch.metric_matrix('savings')
    running_max = np.maximum.accumulate(savings, axis=1)
    safe_max = np.where(running_max > 0, running_max, 1.0)
    drawdowns = np.where(running_max > 0, (running_max - savings) / safe_max, 0.0)
    return float(drawdowns.max())


def calculate_risk_metrics(batch: Batch) -> RiskMetrics:
    batch.require_non_empty()
    changes = np.sort(pooled_savings_changes(batch))
    max_drawdown = calculate_max_drawdown(batch)
    if changes.size == 0:
        return RiskMetrics(0.0, max_drawdown, 0.0, 0.0)
    
    var95 = float(changes[_empirical_index(TAIL_PERCENTILE, changes.size)])
    cvar95 = float(changes[changes <= var95].mean())
    return RiskMetrics(
        volatility=float(np.std(changes)),
        max_drawdown=max_drawdown,
        var95=var95,
        cvar95=cvar95,
    )


def calculate_real_wealth_preservation(batch: Batch, inputs: RetirementInput) -> float:
    """Percentage of paths whose final savings keep pace with their own inflation."""
    batch.require_non_empty()
    cumulative_inflation = np.prod(1 + batch.metric_matrix('inflation'), axis=1)
    preserved = batch.final_values('savings') >= inputs.retirement_savings * cumulative_inflation
    return _percent(preserved)


def analyze_batch(batch: Batch,
                  inputs: RetirementInput,
                  confidence_levels: Iterable[float] = (0.95, 0.75, 0.50),
                  target_success: float = DEFAULT_TARGET_SUCCESS) -> AnalysisResult:
    """Reduce a finished batch into an AnalysisResult.
    
    Raises:
        InvalidConfiguration: If the batch is empty
    """
    batch.require_non_empty()
    calibration = calibrate_withdrawal_rate(batch, inputs, target_success=target_success)
    key_metrics = KeyMetrics(
        median_final_wealth=float(np.median(batch.final_values('savings'))),
        probability_of_ruin=calculate_ruin_probability(batch),
        sustainable_withdrawal_rate=calibration.rate,
        real_wealth_preservation=calculate_real_wealth_preservation(batch, inputs),
    )
    return AnalysisResult(
        success_rate=calculate_success_rate(batch, inputs),
        confidence_intervals=calculate_confidence_intervals(batch, confidence_levels),
        median_path=calculate_median_path(batch),
        extreme_scenarios=identify_extreme_scenarios(batch),
        risk_metrics=calculate_risk_metrics(batch),
        key_metrics=key_metrics,
    )
