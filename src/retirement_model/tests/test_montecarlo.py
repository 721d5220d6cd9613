# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Tests for Monte Carlo simulation module.
"""

import random
import unittest
from unittest.mock import Mock

import numpy as np

from ..montecarlo.config import MonteCarloConfig
from ..montecarlo.errors import InvalidConfiguration
from ..montecarlo.market_assumptions import MarketAssumptions, AssetClassAssumptions
from ..montecarlo.inputs import RetirementInput
from ..montecarlo.return_generator import NormalDrawSource, ScenarioGenerator, YearDraws
from ..montecarlo.state import PortfolioState, ReturnBreakdown
from ..montecarlo.transition import (
    accumulate, advance_year, calculate_withdrawal, decumulate, initial_state,
)
from ..montecarlo.results import Batch
from ..montecarlo.simulator import simulate_path
from ..montecarlo.analyzer import (
    analyze_batch, calculate_confidence_intervals, calculate_median_path,
    calculate_real_wealth_preservation, calculate_risk_metrics, calculate_ruin_probability,
    calculate_success_rate, identify_extreme_scenarios, percentile_levels,
)
from ..montecarlo.calibrator import WithdrawalReplay, calibrate_withdrawal_rate
from ..montecarlo.recommendations import (
    HIGH, MEDIUM, Recommendation, calculate_urgency, generate_recommendations,
    ideal_equity_allocation, prioritize_recommendations,
)
from .helpers import SCENARIO_RECORD, make_analysis, make_batch, make_inputs, make_path


def _draws(total_return=0.05, inflation=0.02, income_growth=0.03):
    return YearDraws(ReturnBreakdown(total_return, total_return, 0.02, total_return),
                     inflation, income_growth)


def _flat_scenario(market_condition='normal', seed=0):
    return ScenarioGenerator(
        NormalDrawSource(np.random.default_rng(seed)),
        MarketAssumptions.create_default().without_volatility(),
        market_condition=market_condition,
        inflation_volatility=0.0,
        income_growth_volatility=0.0,
    )


class TestMonteCarloConfig(unittest.TestCase):
    """Tests for MonteCarloConfig."""
    
    def test_default_values(self):
        """Test default configuration values."""
        config = MonteCarloConfig()
        self.assertEqual(config.simulation_count, 1000)
        self.assertEqual(config.confidence_levels, (0.95, 0.75, 0.50))
        self.assertEqual(config.inflation_mean, 0.02)
        self.assertEqual(config.inflation_volatility, 0.01)
        self.assertEqual(config.market_conditions, 'normal')
        self.assertIsNone(config.random_seed)
    
    def test_invalid_simulation_count(self):
        """Test that a non-positive count raises InvalidConfiguration."""
        with self.assertRaises(InvalidConfiguration):
            MonteCarloConfig(simulation_count=0)
        with self.assertRaises(ValueError):
            MonteCarloConfig(simulation_count=-1)
    
    def test_invalid_market_condition(self):
        with self.assertRaises(InvalidConfiguration):
            MonteCarloConfig(market_conditions='sideways')
    
    def test_invalid_confidence_level(self):
        with self.assertRaises(InvalidConfiguration):
            MonteCarloConfig(confidence_levels=(0.95, 1.5))
    
    def test_from_options_camel_case(self):
        """Test that caller option names map onto config attributes."""
        config = MonteCarloConfig.from_options({
            'simulationCount': '50',
            'marketConditions': 'bear',
            'confidenceLevels': [0.9],
            'inflationVolatility': 0.0,
            'seed': 11,
            'age': 40,
        })
        self.assertEqual(config.simulation_count, 50)
        self.assertEqual(config.market_conditions, 'bear')
        self.assertEqual(config.confidence_levels, (0.9,))
        self.assertEqual(config.inflation_volatility, 0.0)
        self.assertEqual(config.random_seed, 11)
    
    def test_from_options_converts_strings(self):
        """Numeric options sent as strings are converted."""
        config = MonteCarloConfig.from_options({
            'inflationMean': '0.03',
            'inflationVolatility': '0.01',
            'incomeGrowthVolatility': '0',
            'confidenceLevels': ['0.9', 0.6],
            'seed': '7',
            'maxWorkers': '2',
        })
        self.assertEqual(config.inflation_mean, 0.03)
        self.assertEqual(config.inflation_volatility, 0.01)
        self.assertEqual(config.income_growth_volatility, 0.0)
        self.assertEqual(config.confidence_levels, (0.9, 0.6))
        self.assertEqual(config.random_seed, 7)
        self.assertEqual(config.max_workers, 2)
    
    def test_from_options_rejects_non_numeric(self):
        for options in ({'simulationCount': 'abc'},
                        {'inflationVolatility': 'high'},
                        {'inflationMean': [0.02]},
                        {'confidenceLevels': '0.9'}):
            with self.assertRaises(InvalidConfiguration):
                MonteCarloConfig.from_options(options)


class TestMarketAssumptions(unittest.TestCase):
    """Tests for MarketAssumptions."""
    
    def setUp(self):
        self.market = MarketAssumptions.create_default()
    
    def test_create_default(self):
        self.assertEqual(self.market.asset_class_order, ['stocks', 'bonds', 'cash'])
        self.assertEqual(self.market.asset_classes['stocks'].expected_return, 0.10)
        self.assertEqual(self.market.asset_classes['bonds'].volatility, 0.05)
    
    def test_equity_glide_path(self):
        """Equity falls linearly from 90% to 20% over the last 30 years."""
        self.assertEqual(self.market.equity_weight(40), 0.9)
        self.assertEqual(self.market.equity_weight(30), 0.9)
        self.assertAlmostEqual(self.market.equity_weight(25), 25 / 30)
        self.assertAlmostEqual(self.market.equity_weight(15), 0.5)
        self.assertEqual(self.market.equity_weight(3), 0.2)
        self.assertEqual(self.market.equity_weight(0), 0.2)
        self.assertEqual(self.market.equity_weight(-10), 0.2)
    
    def test_market_condition_adjustments(self):
        """Bull and bear shift means additively and scale volatility."""
        bull = self.market.for_condition('bull')
        self.assertAlmostEqual(bull['stocks'].expected_return, 0.12)
        self.assertAlmostEqual(bull['stocks'].volatility, 0.12)
        
        bear = self.market.for_condition('bear')
        self.assertAlmostEqual(bear['bonds'].expected_return, 0.02)
        self.assertAlmostEqual(bear['bonds'].volatility, 0.06)
        
        normal = self.market.for_condition('normal')
        self.assertEqual(normal['cash'], self.market.asset_classes['cash'])
    
    def test_unknown_condition_raises(self):
        with self.assertRaises(InvalidConfiguration):
            self.market.for_condition('sideways')
    
    def test_without_volatility(self):
        flat = self.market.without_volatility()
        for asset in flat.asset_classes.values():
            self.assertEqual(asset.volatility, 0.0)
        self.assertEqual(flat.asset_classes['stocks'].expected_return, 0.10)
    
    def test_negative_volatility_raises(self):
        with self.assertRaises(ValueError):
            AssetClassAssumptions("stocks", 0.10, -0.05)
    
    def test_missing_asset_class_raises(self):
        with self.assertRaises(ValueError):
            MarketAssumptions({"stocks": AssetClassAssumptions("stocks", 0.10, 0.15)})


class TestNormalDrawSource(unittest.TestCase):
    """Tests for the Box-Muller draw source."""
    
    def test_zero_std_dev_returns_mean(self):
        source = NormalDrawSource(np.random.default_rng(1))
        for _ in range(100):
            self.assertEqual(source.draw_normal(0.03, 0.0), 0.03)
    
    def test_zero_uniform_does_not_fail(self):
        """A uniform source returning 0.0 must not take log(0)."""
        uniform = Mock()
        uniform.random.side_effect = [0.0, 0.0]
        source = NormalDrawSource(uniform)
        self.assertEqual(source.draw_normal(0.05, 0.2), 0.05)
    
    def test_draws_have_expected_statistics(self):
        """Test that draws have approximately the requested mean/std."""
        source = NormalDrawSource(np.random.default_rng(42))
        draws = [source.draw_normal(0.08, 0.15) for _ in range(20000)]
        self.assertAlmostEqual(np.mean(draws), 0.08, places=2)
        self.assertAlmostEqual(np.std(draws), 0.15, places=2)
    
    def test_seeded_sources_are_reproducible(self):
        first = NormalDrawSource(np.random.default_rng(7))
        second = NormalDrawSource(np.random.default_rng(7))
        self.assertEqual([first.draw_normal(0, 1) for _ in range(10)],
                         [second.draw_normal(0, 1) for _ in range(10)])
    
    def test_accepts_stdlib_random(self):
        source = NormalDrawSource(random.Random(3))
        self.assertIsInstance(source.draw_normal(0.0, 1.0), float)


class TestScenarioGenerator(unittest.TestCase):
    """Tests for yearly draws."""
    
    def test_flat_draws_blend_by_glide_path(self):
        draws = _flat_scenario().draw_year(years_to_retirement=25, income_growth_mean=0.03)
        self.assertEqual(draws.returns.stocks, 0.10)
        self.assertEqual(draws.returns.bonds, 0.04)
        self.assertEqual(draws.returns.cash, 0.02)
        self.assertAlmostEqual(draws.returns.total_return, 25 / 30 * 0.10 + 5 / 30 * 0.04)
        self.assertEqual(draws.inflation, 0.02)
        self.assertEqual(draws.income_growth, 0.03)
    
    def test_market_condition_shifts_blend(self):
        draws = _flat_scenario('bull').draw_year(years_to_retirement=0, income_growth_mean=0.0)
        self.assertAlmostEqual(draws.returns.total_return, 0.2 * 0.12 + 0.8 * 0.06)
    
    def test_volatile_draws_vary(self):
        scenario = ScenarioGenerator(NormalDrawSource(np.random.default_rng(5)),
                                     MarketAssumptions.create_default())
        totals = {scenario.draw_returns(20).total_return for _ in range(20)}
        self.assertEqual(len(totals), 20)


class TestWithdrawalPolicy(unittest.TestCase):
    """Tests for the capped withdrawal."""
    
    def test_withdrawal_grows_with_inflation_below_cap(self):
        # 40k of 1M is 4%, under the 5% cap
        self.assertAlmostEqual(calculate_withdrawal(1000000, 40000, 0.02), 40800)
    
    def test_withdrawal_capped_at_five_percent(self):
        # 40k of 500k is 8%, cut to exactly 5% of savings
        self.assertAlmostEqual(calculate_withdrawal(500000, 40000, 0.02), 25000)
    
    def test_cap_has_no_memory(self):
        """A capped year does not affect the next year's withdrawal."""
        self.assertAlmostEqual(calculate_withdrawal(500000, 40000, 0.02), 25000)
        self.assertAlmostEqual(calculate_withdrawal(1000000, 40000, 0.03), 41200)
    
    def test_exhausted_savings_withdraw_nothing(self):
        self.assertEqual(calculate_withdrawal(0.0, 40000, 0.02), 0.0)


class TestYearTransition(unittest.TestCase):
    """Tests for accumulation and decumulation years."""
    
    def setUp(self):
        self.inputs = make_inputs()
    
    def test_initial_state(self):
        state = initial_state(self.inputs, 0.02)
        self.assertEqual(state.age, 40)
        self.assertEqual(state.savings, 200000)
        self.assertEqual(state.income, 72000)
        self.assertAlmostEqual(state.expenses, 6000 * 0.85 * 12)
        self.assertEqual(state.withdrawal, 0.0)
    
    def test_accumulation_year(self):
        state = PortfolioState(age=40, savings=100000, income=72000, expenses=60000, inflation=0.02)
        new_state = accumulate(state, self.inputs, _draws(0.05, 0.02, 0.03))
        
        self.assertEqual(new_state.age, 41)
        self.assertAlmostEqual(new_state.savings, 100000 * 1.05 + 12000)
        self.assertAlmostEqual(new_state.income, 72000 * 1.03)
        self.assertAlmostEqual(new_state.expenses, 60000 * 1.02)
        self.assertEqual(new_state.withdrawal, 0.0)
        self.assertEqual(new_state.returns.total_return, 0.05)
    
    def test_decumulation_year(self):
        state = PortfolioState(age=65, savings=500000, income=0, expenses=60000, inflation=0.02)
        new_state = decumulate(state, self.inputs, _draws(0.04, 0.02))
        
        # 60k of 500k exceeds the cap, so 25k is withdrawn
        self.assertAlmostEqual(new_state.withdrawal, 25000)
        self.assertAlmostEqual(new_state.savings, 500000 * 1.04 - 25000)
        # Guaranteed income is min(6000 * 0.4, 3000) * 12
        self.assertAlmostEqual(new_state.income, 28800 + 25000)
        self.assertAlmostEqual(new_state.expenses, 60000 * 1.02)
    
    def test_savings_floored_at_zero(self):
        state = PortfolioState(age=70, savings=10000, income=0, expenses=60000, inflation=0.02)
        new_state = decumulate(state, self.inputs, _draws(-0.99, 0.02))
        self.assertEqual(new_state.savings, 0.0)
    
    def test_advance_year_branches_on_retirement_age(self):
        before = PortfolioState(age=64, savings=500000, income=72000, expenses=60000, inflation=0.02)
        at = PortfolioState(age=65, savings=500000, income=72000, expenses=60000, inflation=0.02)
        
        self.assertEqual(advance_year(before, self.inputs, _draws()).withdrawal, 0.0)
        self.assertGreater(advance_year(at, self.inputs, _draws()).withdrawal, 0.0)


class TestRetirementInput(unittest.TestCase):
    """Tests for the input record."""
    
    def test_from_dict(self):
        inputs = RetirementInput.from_dict(SCENARIO_RECORD)
        self.assertEqual(inputs.age, 40)
        self.assertEqual(inputs.retirement_age, 65)
        self.assertEqual(inputs.savings_percentage, 15)
        self.assertEqual(inputs.horizon, 50)
        self.assertEqual(inputs.guaranteed_income, 28800)
    
    def test_missing_field_raises(self):
        record = dict(SCENARIO_RECORD)
        del record['monthlyIncome']
        with self.assertRaises(InvalidConfiguration):
            RetirementInput.from_dict(record)
    
    def test_validate_rejects_empty_horizon(self):
        with self.assertRaises(InvalidConfiguration):
            make_inputs(retirement_age=40).validate()
        with self.assertRaises(InvalidConfiguration):
            make_inputs(years_in_retirement=0).validate()


class TestPathSimulator(unittest.TestCase):
    """Tests for simulate_path."""
    
    def test_path_length_and_ages(self):
        inputs = make_inputs(age=60, retirement_age=63, years_in_retirement=4)
        path = simulate_path(inputs, _flat_scenario())
        
        self.assertEqual(len(path), 7)
        self.assertEqual([state.age for state in path], list(range(61, 68)))
        self.assertTrue(all(state.withdrawal == 0.0 for state in path[:3]))
        self.assertTrue(all(state.withdrawal > 0.0 for state in path[3:]))
    
    def test_first_year_without_volatility(self):
        path = simulate_path(make_inputs(), _flat_scenario())
        expected_return = 25 / 30 * 0.10 + 5 / 30 * 0.04
        self.assertAlmostEqual(path[0].savings, 200000 * (1 + expected_return) + 12000)


class TestBatch(unittest.TestCase):
    """Tests for Batch."""
    
    def test_unequal_paths_raise(self):
        with self.assertRaises(InvalidConfiguration):
            Batch([make_path([1, 2, 3]), make_path([1, 2])])
    
    def test_empty_batch_rejected_for_analysis(self):
        batch = Batch([])
        self.assertEqual(len(batch), 0)
        with self.assertRaises(InvalidConfiguration):
            batch.require_non_empty()
        with self.assertRaises(InvalidConfiguration):
            batch.metric_matrix('savings')
    
    def test_metric_frame_layout(self):
        batch = Batch([make_path([1, 2, 3]), make_path([4, 5, 6])])
        frame = batch.metric_frame('savings')
        
        self.assertEqual(frame.shape, (3, 2))
        self.assertEqual(frame[1].tolist(), [4.0, 5.0, 6.0])
        self.assertEqual(batch.final_values('savings').tolist(), [3.0, 6.0])
        self.assertEqual(batch.get_ages(), [65, 66, 67])
    
    def test_to_list(self):
        batch = Batch([make_path([1, 2])])
        data = batch.to_list()
        self.assertEqual(data[0][1]['savings'], 2.0)
        self.assertIn('totalReturn', data[0][1]['returns'])


class TestAnalyzer(unittest.TestCase):
    """Tests for batch statistics on hand-built paths."""
    
    def setUp(self):
        self.inputs = make_inputs(age=64, retirement_age=65, retirement_savings=100.0)
    
    def test_success_rate_and_ruin(self):
        """One solvent path, one ruined path, one with an income shortfall."""
        batch = make_batch(
            make_path([100, 50, 100]),
            make_path([100, 0, 10]),
            make_path([100, 80, 60], income=[100000.0, 30000.0, 100000.0]),
        )
        self.assertAlmostEqual(calculate_success_rate(batch, self.inputs), 100 / 3)
        self.assertAlmostEqual(calculate_ruin_probability(batch), 100 / 3)
    
    def test_percentile_levels(self):
        self.assertEqual(percentile_levels((0.95, 0.75, 0.50)),
                         [0.05, 0.25, 0.5, 0.75, 0.95])
    
    def test_confidence_intervals_are_empirical(self):
        batch = make_batch(*[make_path([value]) for value in range(20, 0, -1)])
        intervals = calculate_confidence_intervals(batch, (0.95, 0.75, 0.50))
        
        self.assertEqual(set(intervals), {'savings', 'income', 'expenses'})
        self.assertEqual(intervals['savings'][0],
                         {'p5': 2.0, 'p25': 6.0, 'p50': 11.0, 'p75': 16.0, 'p95': 20.0})
    
    def test_median_path_is_synthetic(self):
        batch = make_batch(make_path([100, 200]), make_path([300, 400]))
        median = calculate_median_path(batch)
        
        self.assertEqual([state.savings for state in median], [200.0, 300.0])
        self.assertEqual([state.age for state in median], [65, 66])
        self.assertIsNone(median[0].returns)
    
    def test_extreme_scenarios(self):
        batch = make_batch(*[make_path([value]) for value in (5, 0, 9, 3, 7, 1, 8, 2, 6, 4)])
        extremes = identify_extreme_scenarios(batch)
        
        self.assertEqual(extremes.worst[-1].savings, 0.0)
        self.assertEqual(extremes.best[-1].savings, 9.0)
        self.assertEqual(extremes.tenth_percentile[-1].savings, 1.0)
        self.assertEqual(extremes.ninetieth_percentile[-1].savings, 9.0)
    
    def test_risk_metrics(self):
        """Savings halve then double: changes of -50% and +100%."""
        metrics = calculate_risk_metrics(make_batch(make_path([100, 50, 100])))
        
        self.assertAlmostEqual(metrics.volatility, 0.75)
        self.assertAlmostEqual(metrics.max_drawdown, 0.5)
        self.assertAlmostEqual(metrics.var95, -0.5)
        self.assertAlmostEqual(metrics.cvar95, -0.5)
    
    def test_risk_metrics_skip_exhausted_years(self):
        metrics = calculate_risk_metrics(make_batch(make_path([0, 0, 0])))
        self.assertEqual(metrics.volatility, 0.0)
        self.assertEqual(metrics.max_drawdown, 0.0)
    
    def test_real_wealth_preservation(self):
        batch = make_batch(make_path([100, 100]), make_path([100, 50]))
        self.assertAlmostEqual(calculate_real_wealth_preservation(batch, self.inputs), 50.0)
    
    def test_empty_batch_raises(self):
        with self.assertRaises(InvalidConfiguration):
            analyze_batch(make_batch(), self.inputs)
    
    def test_analysis_to_dict_keys(self):
        batch = make_batch(make_path([100, 100, 100]), make_path([100, 90, 80]))
        data = analyze_batch(batch, self.inputs).to_dict()
        
        self.assertEqual(set(data), {'successRate', 'confidenceIntervals', 'medianPath',
                                     'extremeScenarios', 'riskMetrics', 'keyMetrics'})
        self.assertIn('tailRisk', data['riskMetrics'])
        self.assertIn('sustainableWithdrawalRate', data['keyMetrics'])


class TestCalibrator(unittest.TestCase):
    """Tests for the withdrawal rate search."""
    
    def setUp(self):
        # One accumulation year, the rest of each path is retirement
        self.inputs = make_inputs(age=64, retirement_age=65)
    
    def test_flat_paths_reach_ceiling(self):
        """Five flat years sustain any rate up to 10%."""
        batch = make_batch(make_path([100] * 6))
        result = calibrate_withdrawal_rate(batch, self.inputs)
        
        self.assertAlmostEqual(result.rate, 0.10, delta=1e-4)
        self.assertEqual(result.iterations, 10)
        self.assertLess(result.high - result.low, 1e-4)
        self.assertEqual(result.success_rate, 1.0)
    
    def test_crash_limits_rate(self):
        """A 96% loss then a flat year survives rates below 2%."""
        batch = make_batch(make_path([100, 100, 100], returns=[0.0, -0.96, 0.0]))
        result = calibrate_withdrawal_rate(batch, self.inputs)
        self.assertAlmostEqual(result.rate, 0.02, delta=1e-4)
    
    def test_target_selects_path_threshold(self):
        batch = make_batch(
            make_path([100, 100, 100], returns=[0.0, -0.96, 0.0]),
            make_path([100, 100, 100], returns=[0.0, -0.88, 0.0]),
        )
        self.assertAlmostEqual(calibrate_withdrawal_rate(batch, self.inputs, 0.5).rate,
                               0.06, delta=1e-4)
        self.assertAlmostEqual(calibrate_withdrawal_rate(batch, self.inputs, 1.0).rate,
                               0.02, delta=1e-4)
    
    def test_pass_rate_uses_cumulative_inflation(self):
        """Inflation grows the withdrawal every year."""
        batch = make_batch(make_path([100, 100, 100], inflation=0.5))
        replay = WithdrawalReplay(batch, self.inputs)
        # 100 - 15 - 22.5 stays positive at 10%, 100 - 60 - 90 does not at 40%
        self.assertEqual(replay.pass_rate(0.10), 1.0)
        self.assertEqual(replay.pass_rate(0.40), 0.0)
    
    def test_invalid_target_raises(self):
        batch = make_batch(make_path([100] * 3))
        with self.assertRaises(InvalidConfiguration):
            calibrate_withdrawal_rate(batch, self.inputs, target_success=0.0)
        with self.assertRaises(InvalidConfiguration):
            calibrate_withdrawal_rate(batch, self.inputs, target_success=1.5)
    
    def test_batch_without_retirement_raises(self):
        with self.assertRaises(InvalidConfiguration):
            calibrate_withdrawal_rate(make_batch(), self.inputs)
        with self.assertRaises(InvalidConfiguration):
            calibrate_withdrawal_rate(make_batch(make_path([100])), self.inputs)


class TestRecommendations(unittest.TestCase):
    """Tests for recommendation rules and ordering."""
    
    def setUp(self):
        self.inputs = make_inputs()
        self.covered = make_inputs(insurance_coverage=['long_term_care'])
    
    def _savings_rec(self, priority=MEDIUM):
        return Recommendation(priority, 'savings', 'Save more', 'Higher success')
    
    def test_escalation_below_threshold(self):
        prioritized = prioritize_recommendations([self._savings_rec()], make_analysis(60))
        self.assertEqual(prioritized[0].priority, HIGH)
    
    def test_no_escalation_at_threshold(self):
        prioritized = prioritize_recommendations([self._savings_rec()], make_analysis(75))
        self.assertEqual(prioritized[0].priority, MEDIUM)
    
    def test_other_categories_not_escalated(self):
        rec = Recommendation(MEDIUM, 'inflation', 'Hedge', 'Purchasing power')
        prioritized = prioritize_recommendations([rec], make_analysis(60))
        self.assertEqual(prioritized[0].priority, MEDIUM)
    
    def test_urgency_is_clamped(self):
        urgency = calculate_urgency(self._savings_rec(), make_analysis(0))
        self.assertEqual(urgency, 10.0)
    
    def test_struggling_plan_ordering(self):
        analysis = make_analysis(60, probability_of_ruin=10,
                                 sustainable_withdrawal_rate=0.03,
                                 real_wealth_preservation=40)
        recommendations = generate_recommendations(analysis, self.inputs)
        
        self.assertEqual([rec.category for rec in recommendations],
                         ['savings', 'risk', 'healthcare', 'spending',
                          'inflation', 'social_security'])
        priorities = [rec.priority for rec in recommendations]
        self.assertEqual(priorities, [HIGH] * 4 + [MEDIUM] * 2)
    
    def test_healthy_plan_has_no_recommendations(self):
        self.assertEqual(generate_recommendations(make_analysis(95), self.covered), [])
    
    def test_rebalancing_when_holdings_drift(self):
        inputs = make_inputs(insurance_coverage=['long_term_care'],
                             investments={'Bonds': 100000.0})
        recommendations = generate_recommendations(make_analysis(95), inputs)
        
        self.assertEqual(ideal_equity_allocation(inputs), 60)
        self.assertEqual([rec.category for rec in recommendations], ['investment'])
        self.assertIn('Adjust equity allocation to 60%', recommendations[0].actions)
    
    def test_no_rebalancing_when_on_target(self):
        inputs = make_inputs(insurance_coverage=['long_term_care'],
                             investments={'Stocks': 60000.0, 'Bonds': 40000.0})
        self.assertEqual(generate_recommendations(make_analysis(95), inputs), [])


if __name__ == '__main__':
    unittest.main()
