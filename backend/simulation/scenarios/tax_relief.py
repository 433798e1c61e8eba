"""Scenario: cut the local tax rate to 1.5%."""

from simulation.core.scenario import Scenario
from simulation.scenarios.baseline import build_baseline_scenario


def build_tax_relief_scenario() -> Scenario:
    """Build the tax relief scenario.

    Returns
    -------
    Scenario
        Baseline branch with ``taxRate`` at 1.5 and a 45-day grace period.
    """
    return build_baseline_scenario().branch(
        "tax-relief",
        "Local Tax Relief",
        overrides={"taxRate": 1.5, "gracePeriod": 45},
        description="Lower the local tax rate from 2.5% to 1.5% and lengthen the payment grace period.",
    )

# Alias for script compatibility
get_scenario = build_tax_relief_scenario
