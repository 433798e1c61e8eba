"""Revenue impact module.

Models fine, permit and tax revenue raised from citizen groups and
business categories under the effective policy parameters.
"""

from simulation.core.config import MONTHS_PER_YEAR, PolicyParameters, SimulationConfig
from simulation.core.state import RevenueMetrics, SimulationState


# Detection probability before inspections, and the cap on both parts
BASE_DETECTION_RATE: float = 0.3
MAX_INSPECTION_BOOST: float = 0.4
MAX_DETECTION_RATE: float = 0.9

# Inspections per year at which the inspection boost is saturated
INSPECTIONS_FOR_FULL_BOOST: float = 25.0

# Fixed splits reported in the breakdown (not separately modelled)
CITIZEN_FINE_SHARE: float = 0.3
BUSINESS_FINE_SHARE: float = 0.7
CITIZEN_PERMIT_SHARE: float = 0.4
BUSINESS_PERMIT_SHARE: float = 0.6


def detection_rate(params: PolicyParameters) -> float:
    """Probability that a non-compliant entity is caught and fined."""
    inspection_boost: float = min(
        MAX_INSPECTION_BOOST, params.inspection_frequency / INSPECTIONS_FOR_FULL_BOOST
    )
    return min(MAX_DETECTION_RATE, BASE_DETECTION_RATE + inspection_boost)


def update_revenue(
    state: SimulationState,
    config: SimulationConfig,
    params: PolicyParameters,
) -> None:
    """Compute revenue over the configured horizon.

    Steps:
        1. Citizen fines, permit fees and income taxes.
        2. Business fines and permit fees scaled by size, revenue taxes.
        3. Scale every bucket by the horizon's economic growth factor.

    Fee revenue is part of the result but no source feeds it; permit fees
    land in ``from_permits``.
    """
    horizon_years: float = config.time_horizon / MONTHS_PER_YEAR
    detection: float = detection_rate(params)
    tax_fraction: float = params.tax_rate / 100.0

    total_fines: float = 0.0
    total_permits: float = 0.0
    total_taxes: float = 0.0
    total_fees: float = 0.0

    # ----- 1. Citizens -----
    for group in state.citizen_groups:
        non_compliant: float = group.population * (1 - group.compliance_rate)
        total_fines += non_compliant * detection * params.fine_amount
        total_permits += group.population * group.permit_eligibility * params.fee_amount
        total_taxes += group.population * group.average_income * tax_fraction * horizon_years

    # ----- 2. Businesses -----
    for business in state.business_categories:
        multiplier: float = business.revenue_multiplier
        non_compliant = business.count * (1 - business.compliance_rate)
        total_fines += non_compliant * detection * params.fine_amount * multiplier
        total_permits += business.count * params.fee_amount * multiplier
        total_taxes += business.count * business.average_revenue * tax_fraction * horizon_years

    # ----- 3. Growth -----
    growth_factor: float = 1 + (config.economic_growth / 100.0) * horizon_years
    fines: float = total_fines * growth_factor
    permits: float = total_permits * growth_factor
    taxes: float = total_taxes * growth_factor
    fees: float = total_fees * growth_factor

    state.set_result("revenue", RevenueMetrics(
        total=fines + permits + taxes + fees,
        from_fines=fines,
        from_permits=permits,
        from_taxes=taxes,
        from_fees=fees,
        breakdown={
            "citizenFines": fines * CITIZEN_FINE_SHARE,
            "businessFines": fines * BUSINESS_FINE_SHARE,
            "citizenPermits": permits * CITIZEN_PERMIT_SHARE,
            "businessPermits": permits * BUSINESS_PERMIT_SHARE,
        },
    ))
