"""Satisfaction impact module.

Scores citizen and business sentiment on a 0-100 index from fines, permit
length, tax rate and grace periods.
"""

from dataclasses import dataclass

from simulation.core.config import PolicyParameters, SimulationConfig
from simulation.core.state import SatisfactionMetrics, SimulationState


BASE_SATISFACTION: float = 70.0

# Caps on each policy lever's effect, in index points
MAX_FINE_PENALTY: float = 20.0
MAX_PERMIT_BONUS: float = 10.0
MAX_TAX_PENALTY: float = 15.0
MAX_GRACE_BONUS: float = 5.0

# Permit length (days) at which the permit term is neutral
NEUTRAL_PERMIT_DAYS: float = 180.0

# Businesses feel fines less, value long permits more, mind taxes more
BUSINESS_FINE_WEIGHT: float = 0.5
BUSINESS_PERMIT_WEIGHT: float = 1.5
BUSINESS_TAX_WEIGHT: float = 1.2


@dataclass(frozen=True)
class PolicyImpacts:
    """Shared index-point effects of the effective parameters."""

    fine: float
    permit: float
    tax: float
    grace: float

    @classmethod
    def from_params(cls, params: PolicyParameters) -> "PolicyImpacts":
        return cls(
            fine=-min(MAX_FINE_PENALTY, params.fine_amount / 50),
            permit=min(MAX_PERMIT_BONUS, (params.permit_duration - NEUTRAL_PERMIT_DAYS) / 50),
            tax=-min(MAX_TAX_PENALTY, params.tax_rate / 2),
            grace=min(MAX_GRACE_BONUS, params.grace_period / 10),
        )


def _clamp_index(value: float) -> float:
    return min(100.0, max(0.0, value))


def update_satisfaction(
    state: SimulationState,
    config: SimulationConfig,
    params: PolicyParameters,
) -> None:
    """Compute the satisfaction index per segment and in aggregate.

    Empty segments score the base satisfaction. Overall is the plain mean of
    the citizen and business averages.
    """
    impacts: PolicyImpacts = PolicyImpacts.from_params(params)
    by_demographic: dict[str, float] = {}

    # ----- Citizens -----
    weighted_citizen: float = 0.0
    total_population: float = 0.0
    for group in state.citizen_groups:
        score: float = _clamp_index(
            BASE_SATISFACTION
            + impacts.fine * group.income_sensitivity
            + impacts.permit
            + impacts.tax
            + impacts.grace * group.policy_awareness
        )
        weighted_citizen += score * group.population
        total_population += group.population
        by_demographic[group.name] = score

    # ----- Businesses -----
    weighted_business: float = 0.0
    total_businesses: float = 0.0
    for business in state.business_categories:
        score = _clamp_index(
            BASE_SATISFACTION
            + impacts.fine * BUSINESS_FINE_WEIGHT
            + impacts.permit * BUSINESS_PERMIT_WEIGHT
            + impacts.tax * BUSINESS_TAX_WEIGHT
            * business.satisfaction_modifier
            * business.policy_awareness
        )
        weighted_business += score * business.count
        total_businesses += business.count
        by_demographic[business.name] = score

    citizen: float = (
        weighted_citizen / total_population if total_population > 0 else BASE_SATISFACTION
    )
    business: float = (
        weighted_business / total_businesses if total_businesses > 0 else BASE_SATISFACTION
    )

    state.set_result("satisfaction", SatisfactionMetrics(
        overall=(citizen + business) / 2,
        citizen=citizen,
        business=business,
        by_demographic=by_demographic,
    ))
