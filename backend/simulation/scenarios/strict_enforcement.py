"""Scenario: double inspections and raise fines.

Tests how much compliance and fine revenue a tougher enforcement regime
buys, and what it costs in inspector hours and public sentiment.
"""

from simulation.core.scenario import Scenario
from simulation.scenarios.baseline import build_baseline_scenario


def build_strict_enforcement_scenario() -> Scenario:
    """Build the strict enforcement scenario.

    Returns
    -------
    Scenario
        Baseline branch with fines at 750, eight inspections per year and a
        shortened grace period.
    """
    return build_baseline_scenario().branch(
        "strict-enforcement",
        "Strict Enforcement",
        overrides={"fineAmount": 750, "inspectionFrequency": 8, "gracePeriod": 7},
        description=(
            "Raise the standard fine to 750, double routine inspections to "
            "eight per year and cut the grace period to one week."
        ),
    )

# Alias for script compatibility
get_scenario = build_strict_enforcement_scenario
