"""Monthly projection module.

Spreads the horizon totals over individual months with seasonality and
growth, and jitters the compliance and satisfaction levels.
"""

from typing import Iterator

import numpy as np

from simulation.core.config import MONTHS_PER_YEAR, SimulationConfig
from simulation.core.state import MonthlyProjection, SimulationState


# Jan..Dec activity factors (summer peak, winter trough)
SEASONALITY_FACTORS: tuple[float, ...] = (
    0.85, 0.88, 0.95, 1.02, 1.08, 1.15, 1.12, 1.10, 1.02, 0.95, 0.88, 1.00,
)

# Relative noise on the replicated compliance/satisfaction levels
JITTER_FRACTION: float = 0.01

# Upper bounds of the compliance rate and satisfaction index
MAX_COMPLIANCE: float = 1.0
MAX_SATISFACTION: float = 100.0


def seasonal_factor(month: int, include_seasonality: bool) -> float:
    """Factor for a 1-based month, wrapping every twelve months."""
    if not include_seasonality:
        return 1.0
    return SEASONALITY_FACTORS[(month - 1) % MONTHS_PER_YEAR]


def iter_monthly_projections(
    state: SimulationState,
    config: SimulationConfig,
    rng: np.random.Generator,
) -> Iterator[MonthlyProjection]:
    """Yield one projection per month of the horizon.

    Revenue gets the seasonal and growth factors, workload only the
    seasonal one. Compliance and satisfaction are the overall values times
    ``1 + U(-1%, 1%)`` drawn from *rng*, capped at 1.0 and 100 respectively,
    so they are the only fields that vary between runs unless the generator
    is seeded.
    """
    months: int = config.time_horizon
    monthly_revenue: float = state.revenue.total / months
    monthly_hours: float = state.workload.total_hours / months

    for month in range(1, months + 1):
        season: float = seasonal_factor(month, config.include_seasonality)
        growth: float = 1 + (config.economic_growth / 100.0) * (month / MONTHS_PER_YEAR)
        compliance_noise: float = rng.uniform(-JITTER_FRACTION, JITTER_FRACTION)
        satisfaction_noise: float = rng.uniform(-JITTER_FRACTION, JITTER_FRACTION)
        yield MonthlyProjection(
            month=month,
            revenue=monthly_revenue * season * growth,
            compliance=min(MAX_COMPLIANCE, state.compliance.overall * (1 + compliance_noise)),
            workload=monthly_hours * season,
            satisfaction=min(
                MAX_SATISFACTION, state.satisfaction.overall * (1 + satisfaction_noise)
            ),
        )


def update_projections(
    state: SimulationState,
    config: SimulationConfig,
    rng: np.random.Generator,
) -> None:
    """Append the monthly projections to *state*.

    Requires every aggregate stage to have run.
    """
    stages = (state.revenue, state.compliance, state.workload, state.satisfaction)
    if any(result is None for result in stages):
        raise RuntimeError("projections require all aggregate stages")
    if state.monthly_projections:
        raise RuntimeError("monthly projections already generated")
    state.monthly_projections.extend(iter_monthly_projections(state, config, rng))
