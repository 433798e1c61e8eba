"""Compliance impact module.

Adjusts each segment's baseline compliance rate for the deterrent effect of
fines, inspections and permit length.
"""

from simulation.core.config import (
    DEFAULT_PERMIT_DURATION_DAYS,
    PolicyParameters,
    SimulationConfig,
)
from simulation.core.state import ComplianceMetrics, SimulationState


# Citizen impact caps and scales
CITIZEN_MAX_FINE_IMPACT: float = 0.1
CITIZEN_FINE_SCALE: float = 10000.0
CITIZEN_MAX_INSPECTION_IMPACT: float = 0.05
CITIZEN_INSPECTION_SCALE: float = 20.0
MAX_PERMIT_IMPACT: float = 0.02
PERMIT_DURATION_SCALE: float = 3650.0

# Businesses react more strongly to fines and inspections
BUSINESS_MAX_FINE_IMPACT: float = 0.15
BUSINESS_FINE_SCALE: float = 5000.0
BUSINESS_MAX_INSPECTION_IMPACT: float = 0.08
BUSINESS_INSPECTION_SCALE: float = 12.0


def _clamp_rate(value: float) -> float:
    return min(1.0, max(0.0, value))


def citizen_adjustment(params: PolicyParameters) -> float:
    """Shift applied to every citizen group's baseline compliance.

    Permits longer than a year lower compliance, shorter ones raise it.
    """
    fine_impact: float = min(CITIZEN_MAX_FINE_IMPACT, params.fine_amount / CITIZEN_FINE_SCALE)
    inspection_impact: float = min(
        CITIZEN_MAX_INSPECTION_IMPACT, params.inspection_frequency / CITIZEN_INSPECTION_SCALE
    )
    permit_impact: float = -min(
        MAX_PERMIT_IMPACT,
        (params.permit_duration - DEFAULT_PERMIT_DURATION_DAYS) / PERMIT_DURATION_SCALE,
    )
    return fine_impact + inspection_impact + permit_impact


def business_adjustment(params: PolicyParameters) -> float:
    """Shift applied to every business category's baseline compliance."""
    fine_impact: float = min(BUSINESS_MAX_FINE_IMPACT, params.fine_amount / BUSINESS_FINE_SCALE)
    inspection_impact: float = min(
        BUSINESS_MAX_INSPECTION_IMPACT, params.inspection_frequency / BUSINESS_INSPECTION_SCALE
    )
    return fine_impact + inspection_impact


def update_compliance(
    state: SimulationState,
    config: SimulationConfig,
    params: PolicyParameters,
) -> None:
    """Compute adjusted compliance per segment and in aggregate.

    Steps:
        1. Population-weighted citizen compliance.
        2. Count-weighted business compliance.
        3. Overall = plain mean of the two sub-averages.

    The overall figure deliberately ignores how many citizens there are
    relative to businesses. An empty side contributes 0.
    """
    by_category: dict[str, float] = {}

    # ----- 1. Citizens -----
    citizen_shift: float = citizen_adjustment(params)
    weighted_citizen: float = 0.0
    total_population: float = 0.0
    for group in state.citizen_groups:
        adjusted: float = _clamp_rate(group.compliance_rate + citizen_shift)
        weighted_citizen += adjusted * group.population
        total_population += group.population
        by_category[group.name] = adjusted

    # ----- 2. Businesses -----
    business_shift: float = business_adjustment(params)
    weighted_business: float = 0.0
    total_businesses: float = 0.0
    for business in state.business_categories:
        adjusted = _clamp_rate(business.compliance_rate + business_shift)
        weighted_business += adjusted * business.count
        total_businesses += business.count
        by_category[business.name] = adjusted

    # ----- 3. Aggregate -----
    citizen: float = weighted_citizen / total_population if total_population > 0 else 0.0
    business: float = weighted_business / total_businesses if total_businesses > 0 else 0.0

    state.set_result("compliance", ComplianceMetrics(
        overall=(citizen + business) / 2,
        citizen=citizen,
        business=business,
        by_category=by_category,
    ))
