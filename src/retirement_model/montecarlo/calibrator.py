# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Sustainable withdrawal rate calibration.

Answers "what constant withdrawal rate would have been safe" for a batch,
independent of the capped withdrawal policy the paths were simulated with.
Each trial rate is replayed over every path's retirement years using that
path's realized returns and inflation.
"""

import logging
from dataclasses import dataclass
from typing import Dict

import numpy as np

from .errors import InvalidConfiguration
from .inputs import RetirementInput
from .results import Batch

logger = logging.getLogger(__name__)

MAX_WITHDRAWAL_RATE = 0.10
MAX_ITERATIONS = 20
RATE_TOLERANCE = 0.0001
DEFAULT_TARGET_SUCCESS = 0.95


@dataclass(frozen=True)
class CalibrationResult:
    """Outcome of the withdrawal rate search.
    
    Attributes:
        rate: Midpoint of the final bracket
        low: Highest rate known to meet the target
        high: Lowest rate known to miss it (or the search ceiling)
        iterations: Bisection steps taken
        target_success: Required share of passing paths
        success_rate: Share of paths passing at ``rate``
    """
    rate: float
    low: float
    high: float
    iterations: int
    target_success: float
    success_rate: float
    
    def to_dict(self) -> Dict[str, float]:
        return {
            'sustainableWithdrawalRate': self.rate,
            'low': self.low,
            'high': self.high,
            'iterations': self.iterations,
            'targetSuccess': self.target_success,
            'successRate': self.success_rate,
        }


class WithdrawalReplay:
    """Retirement-phase returns and inflation of a batch, ready for replay.
    
    A path passes a trial rate when, starting from its balance at
    retirement and withdrawing ``rate * start_balance`` grown by the path's
    cumulative inflation every year, the balance stays above zero.
    """
    
    def __init__(self, batch: Batch, inputs: RetirementInput):
        batch.require_non_empty()
        years_before = inputs.years_to_retirement
        if not 0 < years_before < batch.num_years:
            raise InvalidConfiguration(
                f"Batch of {batch.num_years} years has no retirement phase "
                f"after {years_before} accumulation years"
            )
        savings = batch.metric_matrix('savings')
        self.start_balance = savings[:, years_before - 1]
        self.returns = batch.return_matrix()[:, years_before:]
        inflation = batch.metric_matrix('inflation')[:, years_before:]
        self.inflation_index = np.cumprod(1 + inflation, axis=1)
    
    def pass_rate(self, rate: float) -> float:
        """Share of paths that never run out at a constant withdrawal rate."""
        balance = self.start_balance.copy()
        survived = balance > 0
        base_withdrawal = rate * self.start_balance
        for year in range(self.returns.shape[1]):
            balance = balance * (1 + self.returns[:, year]) \
                - base_withdrawal * self.inflation_index[:, year]
            survived &= balance > 0
        return float(survived.mean())


def calibrate_withdrawal_rate(batch: Batch,
                              inputs: RetirementInput,
                              target_success: float = DEFAULT_TARGET_SUCCESS,
                              max_rate: float = MAX_WITHDRAWAL_RATE,
                              max_iterations: int = MAX_ITERATIONS,
                              tolerance: float = RATE_TOLERANCE) -> CalibrationResult:
    """Binary search for the highest rate whose pass rate meets the target.
    
    Stops after ``max_iterations`` bisections or once the bracket is
    narrower than ``tolerance``, and returns the bracket midpoint. The
    result is an approximation within [0, max_rate].
    
    Raises:
        InvalidConfiguration: If the batch is empty or the target is not in (0, 1]
    """
    if not 0 < target_success <= 1:
        raise InvalidConfiguration(f"target_success must be in (0, 1], got {target_success}")
    
    replay = WithdrawalReplay(batch, inputs)
    low, high = 0.0, max_rate
    iterations = 0
    
    while iterations < max_iterations and (high - low) > tolerance:
        mid = (low + high) / 2
        success = replay.pass_rate(mid)
        logger.debug("Iteration %d: rate=%.5f success=%.3f", iterations, mid, success)
        if success >= target_success:
            low = mid
        else:
            high = mid
        iterations += 1
    
    rate = (low + high) / 2
    result = CalibrationResult(rate, low, high, iterations, target_success, replay.pass_rate(rate))
    logger.info("Sustainable withdrawal rate %.2f%% at %.0f%% target (%d iterations)",
                rate * 100, target_success * 100, iterations)
    return result
