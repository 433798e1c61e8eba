import numpy as np
import pytest

from simulation.core.aggregation import PolicyContribution
from simulation.core.config import (
    BusinessCategory,
    CitizenGroup,
    PolicyParameters,
    SimulationConfig,
)
from simulation.core.engine import SimulationInput
from simulation.core.state import SimulationState
from simulation.scenarios.population import build_business_categories, build_citizen_groups


REFERENCE_PARAMETERS = {
    "fineAmount": 150,
    "inspectionFrequency": 4,
    "feeAmount": 50,
    "taxRate": 2.5,
    "permitDuration": 365,
}


@pytest.fixture
def citizen_group():
    return CitizenGroup(
        name="Residents",
        population=1000,
        compliance_rate=0.8,
        demographics={"averageIncome": 30000, "permitEligibility": 0.3},
    )


@pytest.fixture
def params():
    return PolicyParameters.from_mapping(REFERENCE_PARAMETERS)


@pytest.fixture
def config():
    return SimulationConfig(time_horizon=12, include_seasonality=False, economic_growth=0.0)


@pytest.fixture
def citizen_state(citizen_group):
    return SimulationState([citizen_group], [])


@pytest.fixture
def reference_input(citizen_group, config):
    return SimulationInput(
        contributions=[PolicyContribution(parameters=dict(REFERENCE_PARAMETERS))],
        citizen_groups=[citizen_group],
        business_categories=[],
        config=config,
    )


@pytest.fixture
def seed_population():
    return build_citizen_groups(), build_business_categories()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def reference_parameters():
    return dict(REFERENCE_PARAMETERS)


@pytest.fixture
def make_business():
    def _make(size, count=100, compliance_rate=0.9, **kwargs):
        return BusinessCategory(
            name=f"{size or 'unsized'} firms",
            count=count,
            compliance_rate=compliance_rate,
            size_category=size,
            **kwargs,
        )

    return _make
