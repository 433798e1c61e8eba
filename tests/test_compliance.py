import pytest

from simulation.core.config import CitizenGroup, PolicyParameters
from simulation.core.state import SimulationState
from simulation.impacts.compliance import update_compliance


def _group(name, population, rate):
    return CitizenGroup(name=name, population=population, compliance_rate=rate)


def test_reference_citizen_compliance(citizen_state, config, params):
    update_compliance(citizen_state, config, params)
    compliance = citizen_state.compliance

    # 0.8 + fine 0.015 + inspections 0.05 + permit 0
    assert compliance.citizen == pytest.approx(0.865)
    assert compliance.business == 0
    assert compliance.overall == pytest.approx(0.4325)
    assert compliance.by_category == {"Residents": pytest.approx(0.865)}


def test_overall_is_unweighted_mean_of_segments(citizen_group, config, params, make_business):
    state = SimulationState([citizen_group], [make_business("medium", count=1)])
    update_compliance(state, config, params)
    compliance = state.compliance

    # business: 0.9 + 0.03 + 0.08 clamps to 1.0
    assert compliance.business == pytest.approx(1.0)
    assert compliance.overall == pytest.approx((0.865 + 1.0) / 2)


def test_citizen_compliance_is_population_weighted(config):
    state = SimulationState([_group("A", 100, 0.5), _group("B", 300, 0.9)], [])
    update_compliance(state, config, PolicyParameters())

    assert state.compliance.citizen == pytest.approx(0.8)


def test_permit_length_shifts_compliance(config):
    shorter = SimulationState([_group("A", 100, 0.5)], [])
    update_compliance(shorter, config, PolicyParameters(permit_duration=300))
    assert shorter.compliance.citizen == pytest.approx(0.5 + 65 / 3650)

    longer = SimulationState([_group("A", 100, 0.5)], [])
    update_compliance(longer, config, PolicyParameters(permit_duration=730))
    assert longer.compliance.citizen == pytest.approx(0.48)


def test_adjusted_compliance_is_clamped(config):
    state = SimulationState([_group("Low", 10, 0.0), _group("High", 10, 1.0)], [])
    update_compliance(state, config, PolicyParameters(permit_duration=3650))
    assert state.compliance.by_category["Low"] == 0.0

    state = SimulationState([_group("High", 10, 1.0)], [])
    update_compliance(state, config, PolicyParameters(fine_amount=5000, inspection_frequency=12))
    assert state.compliance.by_category["High"] == 1.0


def test_empty_segments_average_to_zero(config, params):
    state = SimulationState([_group("Nobody", 0, 0.9)], [])
    update_compliance(state, config, params)

    assert state.compliance.citizen == 0
    assert state.compliance.business == 0
    assert state.compliance.overall == 0
