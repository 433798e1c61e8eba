"""Folding of a scenario's policy parameter sets into effective parameters."""

from dataclasses import dataclass, field
from typing import Optional

from simulation.core.config import ParameterValue, PolicyParameters, is_numeric


@dataclass
class PolicyContribution:
    """One policy version's parameters as attached to a scenario."""

    parameters: dict[str, ParameterValue] = field(default_factory=dict)
    overrides: Optional[dict[str, ParameterValue]] = None
    policy_id: str = ""


def aggregate_parameters(
    contributions: list[PolicyContribution],
) -> dict[str, ParameterValue]:
    """Merge contributions in order into one parameter map.

    A numeric value meeting an existing numeric value for the same key is
    folded as ``(existing + new) / 2``. This is a running pairwise average,
    so three contributions of 100, 200, 300 give 187.5, not 200. Anything
    else overwrites. Overrides are applied once every parameter set has
    been folded, in contribution order, so they always win over merged
    values and a later override beats an earlier one.
    """
    aggregated: dict[str, ParameterValue] = {}

    for contribution in contributions:
        for key, value in contribution.parameters.items():
            existing = aggregated.get(key)
            if key in aggregated and is_numeric(existing) and is_numeric(value):
                aggregated[key] = (existing + value) / 2
            else:
                aggregated[key] = value

    for contribution in contributions:
        if contribution.overrides:
            aggregated.update(contribution.overrides)

    return aggregated


def effective_parameters(contributions: list[PolicyContribution]) -> PolicyParameters:
    """Aggregate contributions and wrap the result in a typed record."""
    return PolicyParameters.from_mapping(aggregate_parameters(contributions))
