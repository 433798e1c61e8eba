import pytest

from simulation.core.config import CitizenGroup, PolicyParameters
from simulation.core.state import SimulationState
from simulation.impacts.satisfaction import PolicyImpacts, update_satisfaction


def test_policy_impacts(params):
    impacts = PolicyImpacts.from_params(params)
    assert impacts.fine == pytest.approx(-3.0)
    assert impacts.permit == pytest.approx(3.7)
    assert impacts.tax == pytest.approx(-1.25)
    assert impacts.grace == 0


def test_reference_citizen_satisfaction(citizen_state, config, params):
    update_satisfaction(citizen_state, config, params)
    satisfaction = citizen_state.satisfaction

    assert satisfaction.citizen == pytest.approx(69.45)
    assert satisfaction.business == 70
    assert satisfaction.overall == pytest.approx((69.45 + 70) / 2)
    assert satisfaction.by_demographic == {"Residents": pytest.approx(69.45)}


def test_behavior_rules_scale_fine_and_grace(config):
    group = CitizenGroup(
        name="Sensitive",
        population=10,
        compliance_rate=0.5,
        behavior_rules={"incomeSensitivity": 2.0, "policyAwareness": 0.5},
    )
    state = SimulationState([group], [])
    update_satisfaction(state, config, PolicyParameters(fine_amount=100, grace_period=40))

    # fine -2 * 2.0, permit +3.7, grace +4 * 0.5
    assert state.satisfaction.citizen == pytest.approx(70 - 4 + 3.7 + 2)


@pytest.mark.parametrize("size, expected", [
    ("small", 70 - 1.5 + 5.55 - 1.25 * 1.2 * 1.2),
    ("medium", 70 - 1.5 + 5.55 - 1.25 * 1.2),
    ("large", 70 - 1.5 + 5.55 - 1.25 * 1.2 * 0.8),
    (None, 70 - 1.5 + 5.55 - 1.25 * 1.2),
])
def test_business_size_modifies_tax_sensitivity(config, params, make_business, size, expected):
    state = SimulationState([], [make_business(size)])
    update_satisfaction(state, config, params)
    assert state.satisfaction.business == pytest.approx(expected)


def test_satisfaction_is_clamped(config):
    group = CitizenGroup(
        name="Angry", population=5, compliance_rate=0.5,
        behavior_rules={"incomeSensitivity": 10.0},
    )
    state = SimulationState([group], [])
    update_satisfaction(state, config, PolicyParameters(fine_amount=5000, tax_rate=40, permit_duration=30))
    assert state.satisfaction.citizen == 0.0


def test_empty_population_scores_base(config, params):
    state = SimulationState([], [])
    update_satisfaction(state, config, params)
    assert state.satisfaction.overall == 70
