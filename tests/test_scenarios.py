import importlib

import pytest

from simulation.core.aggregation import effective_parameters
from simulation.core.config import SizeCategory
from simulation.scenarios.baseline import build_baseline_scenario
from simulation.scenarios.population import build_business_categories, build_citizen_groups


SCENARIO_MODULES = [
    "simulation.scenarios.baseline",
    "simulation.scenarios.strict_enforcement",
    "simulation.scenarios.permit_extension",
    "simulation.scenarios.tax_relief",
]


def test_baseline_effective_parameters():
    params = effective_parameters(list(build_baseline_scenario().contributions))

    assert params.fine_amount == pytest.approx(325)  # (150 + 500) / 2
    assert params.grace_period == pytest.approx(20.25)  # ((14 + 7) / 2 + 30) / 2
    assert params.penalty_rate == pytest.approx(7.5)
    assert params.fee_amount == 250
    assert params.inspection_frequency == 4


@pytest.mark.parametrize("module_name", SCENARIO_MODULES)
def test_scenario_modules_expose_builder(module_name):
    scenario = importlib.import_module(module_name).get_scenario()
    assert scenario.name
    assert scenario.is_baseline == (scenario.id == "baseline")
    if not scenario.is_baseline:
        assert scenario.parent_id == "baseline"


def test_branch_overrides_win():
    branch = build_baseline_scenario().branch("cheap", "Cheap fines", overrides={"fineAmount": 10})
    params = effective_parameters(list(branch.contributions))

    assert params.fine_amount == 10
    assert branch.policy_ids == ["POL-001", "POL-002", "POL-003", "POL-004"]
    assert branch.description == build_baseline_scenario().description


def test_branch_without_overrides_is_a_plain_clone():
    baseline = build_baseline_scenario()
    clone = baseline.branch("copy", "Copy")
    assert clone.contributions == baseline.contributions
    assert clone.parent_id == "baseline"


def test_seed_population():
    groups = build_citizen_groups()
    businesses = build_business_categories()

    assert sum(g.population for g in groups) == 80000
    assert sum(b.count for b in businesses) == 980
    assert [b.size_category for b in businesses] == [
        SizeCategory.SMALL, SizeCategory.MEDIUM, SizeCategory.LARGE, SizeCategory.SMALL,
    ]


def test_unknown_size_is_treated_as_unset(caplog):
    from simulation.core.config import BusinessCategory

    business = BusinessCategory(name="Odd", count=1, compliance_rate=0.5, size_category="huge")
    assert business.size_category is None
    assert business.revenue_multiplier == 1.0
    assert business.satisfaction_modifier == 1.0
    assert "huge" in caplog.text
