import pytest

from simulation.core.aggregation import (
    PolicyContribution,
    aggregate_parameters,
    effective_parameters,
)


def _contributions(*parameter_sets):
    return [PolicyContribution(parameters=p) for p in parameter_sets]


def test_running_pairwise_average_is_order_dependent():
    result = aggregate_parameters(_contributions(
        {"fineAmount": 100}, {"fineAmount": 200}, {"fineAmount": 300},
    ))
    assert result["fineAmount"] == pytest.approx(187.5)

    reordered = aggregate_parameters(_contributions(
        {"fineAmount": 300}, {"fineAmount": 200}, {"fineAmount": 100},
    ))
    assert reordered["fineAmount"] == pytest.approx(162.5)


def test_first_occurrence_and_distinct_keys_are_copied():
    result = aggregate_parameters(_contributions(
        {"fineAmount": 150, "gracePeriod": 14},
        {"taxRate": 2.5},
    ))
    assert result == {"fineAmount": 150, "gracePeriod": 14, "taxRate": 2.5}


def test_non_numeric_values_overwrite():
    result = aggregate_parameters(_contributions(
        {"zone": "north", "strict": True, "level": 100},
        {"zone": "south", "strict": False, "level": "high"},
    ))
    assert result == {"zone": "south", "strict": False, "level": "high"}

    back_to_number = aggregate_parameters(_contributions({"level": "high"}, {"level": 40}))
    assert back_to_number["level"] == 40


def test_overrides_win_over_merged_values():
    contributions = [
        PolicyContribution(parameters={"fineAmount": 100}, overrides={"fineAmount": 999}),
        PolicyContribution(parameters={"fineAmount": 300}),
    ]
    assert aggregate_parameters(contributions)["fineAmount"] == 999


def test_later_overrides_beat_earlier_ones():
    contributions = [
        PolicyContribution(parameters={"taxRate": 2.0}, overrides={"taxRate": 1.0}),
        PolicyContribution(parameters={}, overrides={"taxRate": 3.0}),
    ]
    assert aggregate_parameters(contributions)["taxRate"] == 3.0


def test_empty_input_gives_empty_map():
    assert aggregate_parameters([]) == {}


def test_effective_parameters_defaults_and_extras():
    params = effective_parameters(_contributions({"fineAmount": 80, "zone": "north"}))
    assert params.fine_amount == 80
    assert params.permit_duration == 365
    assert params.tax_rate == 0
    assert params.extras == {"zone": "north"}
    assert params.to_mapping()["zone"] == "north"
    assert params.to_mapping()["fineAmount"] == 80
