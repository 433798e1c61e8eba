"""Main simulation engine.

Runs the five policy-impact stages in dependency order against one
shared state:
    1. Revenue (fines, permits, taxes)
    2. Compliance (adjusted rates per segment)
    3. Workload (inspections, permits, appeals; reads compliance)
    4. Satisfaction (0-100 index per segment)
    5. Monthly projections (seasonality, growth, jitter)
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

import numpy as np

from simulation.core.aggregation import PolicyContribution, effective_parameters
from simulation.core.config import (
    BusinessCategory,
    CitizenGroup,
    InvalidConfiguration,
    PolicyParameters,
    SimulationConfig,
    validate_population,
)
from simulation.core.state import SimulationMetrics, SimulationState

from simulation.impacts.revenue import update_revenue
from simulation.impacts.compliance import update_compliance
from simulation.impacts.workload import update_workload
from simulation.impacts.satisfaction import update_satisfaction
from simulation.projections.monthly import update_projections

logger = logging.getLogger(__name__)

TOTAL_STAGES: int = 5


@dataclass
class SimulationInput:
    """Fully materialized inputs for one run."""

    contributions: list[PolicyContribution] = field(default_factory=list)
    citizen_groups: list[CitizenGroup] = field(default_factory=list)
    business_categories: list[BusinessCategory] = field(default_factory=list)
    config: SimulationConfig = field(default_factory=SimulationConfig)


def check_inputs(
    params: PolicyParameters,
    citizen_groups: list[CitizenGroup],
    business_categories: list[BusinessCategory],
    config: SimulationConfig,
) -> None:
    """Raise InvalidConfiguration if the run cannot be computed."""
    errors: list[str] = config.validate()
    errors.extend(validate_population(citizen_groups, business_categories))
    if params.permit_duration <= 0:
        errors.append(f"permitDuration must be > 0 days, got {params.permit_duration}")
    if errors:
        raise InvalidConfiguration(errors)


def run_stages(
    state: SimulationState,
    config: SimulationConfig,
    params: PolicyParameters,
    rng: np.random.Generator,
    progress_callback: Optional[Callable[[float], None]] = None,
) -> None:
    """Run every stage in order, reporting percent complete after each."""
    stages = (
        ("revenue", lambda: update_revenue(state, config, params)),
        ("compliance", lambda: update_compliance(state, config, params)),
        ("workload", lambda: update_workload(state, config, params)),
        ("satisfaction", lambda: update_satisfaction(state, config, params)),
        ("projections", lambda: update_projections(state, config, rng)),
    )
    for done, (name, stage) in enumerate(stages, start=1):
        stage()
        logger.debug("Stage %s complete (%d/%d)", name, done, TOTAL_STAGES)
        if progress_callback is not None:
            progress_callback(done / TOTAL_STAGES * 100)


def run_simulation(
    inputs: SimulationInput,
    rng: Optional[np.random.Generator] = None,
    progress_callback: Optional[Callable[[float], None]] = None,
) -> SimulationMetrics:
    """Run the full simulation and return its metrics.

    Parameters
    ----------
    inputs : SimulationInput
        Policy contributions, population records and configuration.
    rng : np.random.Generator, optional
        Source of the projection jitter. Defaults to a generator seeded
        from ``config.random_seed`` (fresh entropy when that is None).
    progress_callback : callable, optional
        Called with the percentage complete after each stage.

    Returns
    -------
    SimulationMetrics
        Frozen result; nothing else holds a reference to it.

    Raises
    ------
    InvalidConfiguration
        If the configuration, population records or effective permit
        duration violate the input contract.
    """
    config: SimulationConfig = inputs.config
    params: PolicyParameters = effective_parameters(inputs.contributions)
    check_inputs(params, inputs.citizen_groups, inputs.business_categories, config)

    if rng is None:
        rng = np.random.default_rng(config.random_seed)

    state = SimulationState(inputs.citizen_groups, inputs.business_categories)
    run_stages(state, config, params, rng, progress_callback)

    metrics: SimulationMetrics = state.to_metrics()
    logger.debug(
        "Simulation finished: revenue=%.2f compliance=%.4f hours=%.1f satisfaction=%.2f",
        metrics.revenue.total,
        metrics.compliance.overall,
        metrics.workload.total_hours,
        metrics.satisfaction.overall,
    )
    return metrics
