"""Operational workload module.

Converts inspection schedules, permit renewals and expected appeals into
staff hours and headcount.
"""

import numpy as np

from simulation.core.config import (
    MONTHS_PER_YEAR,
    STAFF_HOURS_PER_MONTH,
    PolicyParameters,
    SimulationConfig,
)
from simulation.core.state import SimulationState, WorkloadMetrics


# Businesses are inspected at twice the per-entity rate of citizens
BUSINESS_INSPECTION_FACTOR: float = 2.0

# Share of residents that hold a renewable permit
CITIZEN_PERMIT_SHARE: float = 0.1

# Appeals per non-compliant entity at a 500 fine
APPEAL_RATE: float = 0.1
APPEAL_FINE_SCALE: float = 500.0

# Staff hours per unit of work
HOURS_PER_INSPECTION: float = 2.0
HOURS_PER_PERMIT: float = 0.5
HOURS_PER_APPEAL: float = 4.0

DAYS_PER_MONTH: float = 30.0


def _round_count(value: float) -> int:
    """Round half up to a whole count."""
    return int(np.floor(value + 0.5))


def update_workload(
    state: SimulationState,
    config: SimulationConfig,
    params: PolicyParameters,
) -> None:
    """Compute workload over the configured horizon.

    Steps:
        1. Inspections from frequency and population/business counts.
        2. Permit renewals from permit duration.
        3. Appeals from overall non-compliance and fine size.
        4. Total hours and staff required at 160 hours per staff-month.

    Requires the compliance stage to have run. ``permit_duration`` must be
    positive; the engine rejects other values before any stage runs.
    """
    if state.compliance is None:
        raise RuntimeError("workload stage requires compliance results")

    months: int = config.time_horizon
    horizon_years: float = months / MONTHS_PER_YEAR
    monthly_inspection_rate: float = params.inspection_frequency / MONTHS_PER_YEAR
    total_population: float = state.total_population
    total_businesses: float = state.total_businesses

    # ----- 1. Inspections -----
    inspections: float = sum(
        g.population * monthly_inspection_rate * months for g in state.citizen_groups
    )
    inspections += sum(
        b.count * monthly_inspection_rate * months * BUSINESS_INSPECTION_FACTOR
        for b in state.business_categories
    )

    # ----- 2. Permits -----
    renewals_per_year: float = MONTHS_PER_YEAR / (params.permit_duration / DAYS_PER_MONTH)
    permits: float = (
        (total_population * CITIZEN_PERMIT_SHARE + total_businesses)
        * renewals_per_year
        * horizon_years
    )

    # ----- 3. Appeals -----
    non_compliant_rate: float = 1 - state.compliance.overall
    appeal_rate: float = non_compliant_rate * APPEAL_RATE * (params.fine_amount / APPEAL_FINE_SCALE)
    appeals: float = (total_population + total_businesses) * appeal_rate

    # ----- 4. Hours and staffing -----
    total_hours: float = (
        inspections * HOURS_PER_INSPECTION
        + permits * HOURS_PER_PERMIT
        + appeals * HOURS_PER_APPEAL
    )
    staff_required: int = int(np.ceil(total_hours / (STAFF_HOURS_PER_MONTH * horizon_years)))

    state.set_result("workload", WorkloadMetrics(
        total_hours=total_hours,
        inspections=_round_count(inspections),
        permits=_round_count(permits),
        appeals=_round_count(appeals),
        staff_required=staff_required,
    ))
