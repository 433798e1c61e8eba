"""Scenario: current, already-enacted policy.

Four standing policies: general enforcement fines, business permits,
health inspections and the local tax.
"""

from simulation.core.aggregation import PolicyContribution
from simulation.core.scenario import Scenario


BASELINE_SCENARIO_ID: str = "baseline"

BASELINE_POLICIES: dict[str, dict] = {
    "POL-001": {"fineAmount": 150, "penaltyRate": 5, "gracePeriod": 14},
    "POL-002": {"permitDuration": 365, "feeAmount": 250, "renewalPeriod": 30},
    "POL-003": {"inspectionFrequency": 4, "fineAmount": 500, "gracePeriod": 7},
    "POL-004": {"taxRate": 2.5, "penaltyRate": 10, "gracePeriod": 30},
}


def build_baseline_scenario() -> Scenario:
    """Build the baseline scenario.

    Returns
    -------
    Scenario
        One contribution per standing policy, in policy-code order.
    """
    return Scenario(
        id=BASELINE_SCENARIO_ID,
        name="Baseline (Current Policy)",
        description="Current policy configuration as baseline for comparison.",
        is_baseline=True,
        contributions=tuple(
            PolicyContribution(parameters=dict(params), policy_id=code)
            for code, params in BASELINE_POLICIES.items()
        ),
    )

# Alias for script compatibility
get_scenario = build_baseline_scenario
