"""Scenario: two-year permits.

Longer permits mean fewer renewals for staff to process, at the price of
less frequent oversight.
"""

from simulation.core.scenario import Scenario
from simulation.scenarios.baseline import build_baseline_scenario


PERMIT_DURATION_DAYS: int = 730


def build_permit_extension_scenario() -> Scenario:
    """Build the permit extension scenario.

    Returns
    -------
    Scenario
        Baseline branch with permits valid for 730 days.
    """
    return build_baseline_scenario().branch(
        "permit-extension",
        "Two-Year Permits",
        overrides={"permitDuration": PERMIT_DURATION_DAYS, "renewalPeriod": 60},
        description=(
            "Extend business and residential permits from one year to two, "
            "with a 60-day renewal window."
        ),
    )

# Alias for script compatibility
get_scenario = build_permit_extension_scenario
