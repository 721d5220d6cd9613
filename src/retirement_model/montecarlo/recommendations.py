# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Advisory recommendations derived from an analysis.

Rules fire on thresholds of the AnalysisResult and the input record. The
resulting list is escalated when the plan is at risk and ordered by
priority, then by an urgency score.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List

from .analyzer import AnalysisResult
from .inputs import RetirementInput

HIGH = 'high'
MEDIUM = 'medium'
LOW = 'low'
PRIORITY_ORDER = {HIGH: 3, MEDIUM: 2, LOW: 1}

# Categories forced to high priority when the success rate is below ESCALATION_SUCCESS_RATE
ESCALATED_CATEGORIES = ('savings', 'spending', 'risk')
ESCALATION_SUCCESS_RATE = 75

EQUITY_HOLDINGS = ('Stocks', 'ETFs', 'Mutual Funds')


@dataclass(frozen=True)
class Recommendation:
    priority: str
    category: str
    suggestion: str
    impact: str
    actions: List[str] = field(default_factory=list)
    urgency: float = 0.0
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'priority': self.priority,
            'category': self.category,
            'suggestion': self.suggestion,
            'impact': self.impact,
            'actions': list(self.actions),
            'urgency': self.urgency,
        }


def ideal_equity_allocation(inputs: RetirementInput) -> float:
    """Age-based equity percentage adjusted 5 points per risk tolerance level."""
    base = 100 - inputs.age
    risk_adjustment = (inputs.risk_tolerance - 3) * 5
    return min(90, max(20, base + risk_adjustment))


def current_equity_allocation(inputs: RetirementInput) -> float:
    total = sum(inputs.investments.values())
    if total <= 0:
        return 0.0
    equity = sum(value for name, value in inputs.investments.items()
                 if name in EQUITY_HOLDINGS)
    return equity / total * 100


def has_adequate_healthcare_planning(inputs: RetirementInput) -> bool:
    """Long-term care coverage or healthcare savings above two years of income."""
    if 'long_term_care' in inputs.insurance_coverage:
        return True
    return inputs.healthcare_savings > inputs.monthly_income * 24


def calculate_urgency(recommendation: Recommendation, analysis: AnalysisResult) -> float:
    """Urgency score between 0 and 10 used to order equal priorities."""
    metrics = analysis.key_metrics
    urgency = 5.0
    if recommendation.category == 'savings':
        urgency += (100 - analysis.success_rate) / 10
    elif recommendation.category == 'risk':
        urgency += metrics.probability_of_ruin / 5
    elif recommendation.category == 'spending':
        urgency += (4 - metrics.sustainable_withdrawal_rate * 100) / 2
    else:
        urgency += (90 - analysis.success_rate) / 20
    return min(10.0, max(0.0, urgency))


def prioritize_recommendations(recommendations: List[Recommendation],
                               analysis: AnalysisResult) -> List[Recommendation]:
    """Escalate at-risk categories, score urgency and sort.
    
    Below ESCALATION_SUCCESS_RATE, savings, spending and risk
    recommendations become high priority whatever their default.
    """
    prioritized = []
    for rec in recommendations:
        if analysis.success_rate < ESCALATION_SUCCESS_RATE and rec.category in ESCALATED_CATEGORIES:
            rec = replace(rec, priority=HIGH)
        prioritized.append(replace(rec, urgency=calculate_urgency(rec, analysis)))
    
    return sorted(prioritized,
                  key=lambda rec: (PRIORITY_ORDER[rec.priority], rec.urgency),
                  reverse=True)


def generate_recommendations(analysis: AnalysisResult,
                             inputs: RetirementInput) -> List[Recommendation]:
    """Ordered advisory actions for an analyzed plan."""
    metrics = analysis.key_metrics
    recommendations = []
    
    if analysis.success_rate < 85:
        recommendations.append(Recommendation(
            HIGH, 'savings',
            'Increase retirement savings',
            'Improve probability of retirement success',
            ['Increase monthly contributions',
             'Review investment allocation',
             'Consider delaying retirement'],
        ))
    
    if metrics.sustainable_withdrawal_rate < 0.04:
        recommendations.append(Recommendation(
            HIGH, 'spending',
            'Adjust retirement spending expectations',
            'Ensure sustainable retirement income',
            ['Review discretionary spending plans',
             'Consider part-time work in retirement',
             'Explore ways to reduce fixed expenses'],
        ))
    
    if inputs.investments:
        ideal = ideal_equity_allocation(inputs)
        if abs(ideal - current_equity_allocation(inputs)) > 10:
            recommendations.append(Recommendation(
                MEDIUM, 'investment',
                'Rebalance investment portfolio',
                'Optimize risk-adjusted returns',
                [f'Adjust equity allocation to {ideal}%',
                 'Consider gradual rebalancing to minimize taxes',
                 'Review risk tolerance annually'],
            ))
    
    if metrics.probability_of_ruin > 5:
        recommendations.append(Recommendation(
            HIGH, 'risk',
            'Enhance retirement risk management',
            'Reduce probability of outliving assets',
            ['Build larger cash reserves',
             'Consider longevity insurance',
             'Develop multiple income streams'],
        ))
    
    if metrics.real_wealth_preservation < 50:
        recommendations.append(Recommendation(
            MEDIUM, 'inflation',
            'Strengthen inflation protection',
            'Maintain purchasing power over time',
            ['Include inflation-protected securities',
             'Consider real estate investments',
             'Review fixed income allocation'],
        ))
    
    if inputs.retirement_age < 70 and analysis.success_rate < 90:
        recommendations.append(Recommendation(
            MEDIUM, 'social_security',
            'Optimize Social Security strategy',
            'Maximize guaranteed lifetime income',
            ['Consider delaying benefits to age 70',
             'Review spousal benefit options',
             'Calculate break-even analysis'],
        ))
    
    if not has_adequate_healthcare_planning(inputs):
        recommendations.append(Recommendation(
            HIGH, 'healthcare',
            'Enhance healthcare planning',
            'Protect against medical expenses',
            ['Review Medicare options',
             'Consider long-term care insurance',
             'Build dedicated healthcare savings'],
        ))
    
    return prioritize_recommendations(recommendations, analysis)
