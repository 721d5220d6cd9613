# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Batch of simulated paths.

This module provides the Batch class, the read-only set of equal-length
paths from one Monte Carlo run, with helpers that lay the paths out as
pandas/numpy tables for the analyzer and calibrator.
"""

from typing import Any, Dict, Iterator, List, Sequence

import numpy as np
import pandas as pd

from .errors import InvalidConfiguration
from .state import Path, path_to_dicts


class Batch:
    """Paths of equal length produced by one Monte Carlo run.
    
    Example:
        >>> batch = simulator.run_batch(inputs)
        >>> batch.metric_frame('savings')  # years x paths
        >>> batch.final_values('savings')
    """
    
    TRACKED_METRICS = ('savings', 'income', 'expenses')
    
    def __init__(self, paths: Sequence[Path], market_condition: str = 'normal'):
        """Initialize with simulated paths.
        
        Args:
            paths: One list of yearly states per simulation
            market_condition: Condition the paths were simulated under
        
        Raises:
            InvalidConfiguration: If paths differ in length
        """
        self.paths: List[Path] = [list(path) for path in paths]
        self.market_condition = market_condition
        self.num_simulations = len(self.paths)
        self._num_years = len(self.paths[0]) if self.paths else 0
        
        if any(len(path) != self._num_years for path in self.paths):
            raise InvalidConfiguration("All paths in a batch must have the same length")
    
    @property
    def num_years(self) -> int:
        return self._num_years
    
    def require_non_empty(self) -> None:
        """Raise InvalidConfiguration when there is nothing to analyze."""
        if self.num_simulations == 0 or self._num_years == 0:
            raise InvalidConfiguration("Batch contains no simulated paths")
    
    def get_ages(self) -> List[int]:
        """Ages at the end of each simulated year."""
        if self.num_simulations == 0:
            return []
        return [state.age for state in self.paths[0]]
    
    def metric_matrix(self, metric: str) -> np.ndarray:
        """Values of one state attribute as an array of shape (paths, years)."""
        self.require_non_empty()
        return np.array([[getattr(state, metric) for state in path] for path in self.paths],
                        dtype=float)
    
    def return_matrix(self) -> np.ndarray:
        """Blended total returns as an array of shape (paths, years)."""
        self.require_non_empty()
        return np.array([[state.returns.total_return for state in path] for path in self.paths],
                        dtype=float)
    
    def metric_frame(self, metric: str) -> pd.DataFrame:
        """Values of one metric with years as index and simulations as columns."""
        df = pd.DataFrame(self.metric_matrix(metric).T)
        df.index.name = 'year'
        return df
    
    def final_values(self, metric: str = 'savings') -> np.ndarray:
        """Final year values from all simulations."""
        if self.num_simulations == 0:
            return np.array([])
        return np.array([getattr(path[-1], metric) for path in self.paths], dtype=float)
    
    def to_list(self) -> List[List[Dict[str, Any]]]:
        return [path_to_dicts(path) for path in self.paths]
    
    def __len__(self) -> int:
        return self.num_simulations
    
    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)
    
    def __getitem__(self, index: int) -> Path:
        return self.paths[index]
    
    def __repr__(self) -> str:
        return (f"Batch(num_simulations={self.num_simulations}, "
                f"num_years={self._num_years}, market_condition='{self.market_condition}')")
