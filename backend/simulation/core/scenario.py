"""Scenario definitions: named bundles of policy contributions."""

from dataclasses import dataclass, field, replace
from typing import Optional

from simulation.core.aggregation import PolicyContribution
from simulation.core.config import ParameterValue


@dataclass(frozen=True)
class Scenario:
    """A what-if configuration of policy versions and overrides."""

    id: str
    name: str
    contributions: tuple[PolicyContribution, ...] = ()
    description: str = ""
    is_baseline: bool = False
    parent_id: Optional[str] = None

    @property
    def policy_ids(self) -> list[str]:
        return [c.policy_id for c in self.contributions if c.policy_id]

    def branch(
        self,
        scenario_id: str,
        name: str,
        overrides: Optional[dict[str, ParameterValue]] = None,
        description: str = "",
    ) -> "Scenario":
        """Clone this scenario as a child, optionally overriding parameters.

        The overrides travel as a trailing contribution with no parameters
        of its own, so they win over everything inherited.
        """
        contributions = tuple(self.contributions)
        if overrides:
            contributions += (PolicyContribution(parameters={}, overrides=dict(overrides)),)
        return replace(
            self,
            id=scenario_id,
            name=name,
            contributions=contributions,
            description=description or self.description,
            is_baseline=False,
            parent_id=self.id,
        )
