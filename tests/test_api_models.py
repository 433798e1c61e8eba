import pytest

from api.models import (
    SimulationConfigPayload,
    comparison_to_payload,
    metric_record_to_payload,
    metrics_to_payload,
    parse_simulation_request,
)
from simulation.comparison.deltas import ScenarioResult, build_metric_records, compare_scenarios
from simulation.core.config import InvalidConfiguration, SizeCategory
from simulation.core.engine import run_simulation


REQUEST = {
    "policies": [
        {"policyId": "POL-001", "parameters": {"fineAmount": 150, "inspectionFrequency": 4}},
        {
            "policyId": "POL-002",
            "parameters": {"feeAmount": 50, "taxRate": 2.5, "permitDuration": 365, "digital": True},
            "overrides": {"feeAmount": 50},
        },
    ],
    "citizenGroups": [
        {
            "name": "Residents",
            "population": 1000,
            "complianceRate": 0.8,
            "demographics": {"averageIncome": 30000, "permitEligibility": 0.3},
        }
    ],
    "businessCategories": [
        {"name": "Shops", "count": 0, "complianceRate": 0.7, "sizeCategory": "Medium"},
    ],
    "config": {"timeHorizon": 12, "includeSeasonality": False, "economicGrowth": 0},
}


def test_parse_request_to_engine_input():
    inputs = parse_simulation_request(REQUEST)

    assert [c.policy_id for c in inputs.contributions] == ["POL-001", "POL-002"]
    assert inputs.contributions[1].parameters["digital"] is True
    assert inputs.citizen_groups[0].compliance_rate == 0.8
    assert inputs.business_categories[0].size_category is SizeCategory.MEDIUM
    assert inputs.config.time_horizon == 12


def test_parsed_request_runs(rng):
    metrics = run_simulation(parse_simulation_request(REQUEST), rng=rng)
    assert metrics.revenue.total == pytest.approx(778800)


@pytest.mark.parametrize("path, value", [
    (("citizenGroups", 0, "complianceRate"), 1.5),
    (("citizenGroups", 0, "population"), -10),
    (("config", "timeHorizon"), 0),
])
def test_invalid_payload_raises(path, value):
    import copy

    data = copy.deepcopy(REQUEST)
    target = data
    for key in path[:-1]:
        target = target[key]
    target[path[-1]] = value

    with pytest.raises(InvalidConfiguration) as excinfo:
        parse_simulation_request(data)
    assert path[-1] in excinfo.value.errors[0]


def test_config_defaults():
    config = SimulationConfigPayload().to_domain()
    assert config.time_horizon == 12
    assert config.random_seed is None


def test_metrics_payload_uses_camel_case(reference_input, rng):
    payload = metrics_to_payload(run_simulation(reference_input, rng=rng))

    assert payload["revenue"]["fromFines"] == pytest.approx(13800)
    assert payload["workload"]["staffRequired"] == 51
    assert payload["compliance"]["byCategory"] == {"Residents": pytest.approx(0.865)}
    assert len(payload["monthlyProjections"]) == 12
    assert set(payload["monthlyProjections"][0]) == {
        "month", "revenue", "compliance", "workload", "satisfaction",
    }


def test_comparison_payload(reference_input, rng):
    metrics = run_simulation(reference_input, rng=rng)
    result = compare_scenarios(metrics, [ScenarioResult("same", "Same", metrics)], include_metric_deltas=True)
    payload = comparison_to_payload(result)

    [scenario] = payload["scenarios"]
    assert scenario["delta"] == {"revenue": 0, "compliance": 0, "workload": 0, "satisfaction": 0}
    assert scenario["metricDeltas"][0]["displayName"] == "Total Revenue"
    assert scenario["metricDeltas"][0]["isPositive"] is False


def test_metric_record_payload(reference_input, rng):
    records = build_metric_records(run_simulation(reference_input, rng=rng))
    payload = metric_record_to_payload(records[0])

    assert payload == {
        "name": "revenue",
        "displayName": "Total Revenue",
        "value": pytest.approx(778800),
        "unit": "currency",
        "category": "financial",
        "isPositive": True,
    }
