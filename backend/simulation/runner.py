"""Scenario runner.

Resolves scenarios into engine input for one tenant's population, memoizes
results in an injected cache and invalidates them when a policy or
scenario changes.
"""

import logging
from dataclasses import astuple
from typing import Optional

import numpy as np

from simulation.cache.store import CacheKeys, CacheTags, CacheTTL, InMemoryCache
from simulation.comparison.deltas import (
    ComparisonResult,
    MetricRecord,
    ScenarioResult,
    build_metric_records,
    compare_scenarios,
)
from simulation.core.config import BusinessCategory, CitizenGroup, SimulationConfig
from simulation.core.engine import SimulationInput, run_simulation
from simulation.core.scenario import Scenario
from simulation.core.state import SimulationMetrics

logger = logging.getLogger(__name__)


def config_fingerprint(config: SimulationConfig) -> str:
    """Stable text form of every config field, for use in cache keys."""
    return ":".join(repr(value) for value in astuple(config))


class ScenarioRunner:
    """Runs scenarios against a fixed population.

    Parameters
    ----------
    citizen_groups, business_categories : list
        The tenant's population records.
    cache : InMemoryCache, optional
        Result cache. Without one every call recomputes.
    ttl : float, optional
        Seconds a cached result stays valid, ``None`` for no expiry.
    """

    def __init__(
        self,
        citizen_groups: list[CitizenGroup],
        business_categories: list[BusinessCategory],
        cache: Optional[InMemoryCache] = None,
        ttl: Optional[float] = CacheTTL.MEDIUM,
    ):
        self.citizen_groups = list(citizen_groups)
        self.business_categories = list(business_categories)
        self.cache = cache
        self.ttl = ttl

    def build_input(self, scenario: Scenario, config: SimulationConfig) -> SimulationInput:
        return SimulationInput(
            contributions=list(scenario.contributions),
            citizen_groups=self.citizen_groups,
            business_categories=self.business_categories,
            config=config,
        )

    def _tags(self, scenario: Scenario) -> list[str]:
        tags = [CacheTags.scenario(scenario.id), CacheTags.ALL_SIMULATIONS]
        tags.extend(CacheTags.policy(policy_id) for policy_id in scenario.policy_ids)
        return tags

    def run(
        self,
        scenario: Scenario,
        config: SimulationConfig,
        rng: Optional[np.random.Generator] = None,
    ) -> SimulationMetrics:
        """Run *scenario*, reusing a cached result when one is available.

        Results are cached per scenario and config. An explicit *rng* is not
        part of the key, so a cached result is returned whatever generator
        is passed.
        """
        key = CacheKeys.scenario_results(scenario.id, config_fingerprint(config))
        if self.cache is not None:
            hit = self.cache.get(key)
            if hit is not None:
                logger.debug("Cache hit for %s", key)
                return hit
            logger.debug("Cache miss for %s", key)

        logger.info(
            "Running scenario %s (%d policies, %d months)",
            scenario.id, len(scenario.contributions), config.time_horizon,
        )
        metrics = run_simulation(self.build_input(scenario, config), rng=rng)

        if self.cache is not None:
            self.cache.set(key, metrics, tags=self._tags(scenario), ttl=self.ttl)
        return metrics

    def metric_records(
        self,
        scenario: Scenario,
        config: SimulationConfig,
        rng: Optional[np.random.Generator] = None,
    ) -> list[MetricRecord]:
        return build_metric_records(self.run(scenario, config, rng))

    def compare(
        self,
        baseline: Scenario,
        scenarios: list[Scenario],
        config: SimulationConfig,
        rng: Optional[np.random.Generator] = None,
        include_metric_deltas: bool = True,
    ) -> ComparisonResult:
        """Run the baseline and each scenario, then diff them."""
        baseline_metrics = self.run(baseline, config, rng)
        results = [
            ScenarioResult(id=s.id, name=s.name, metrics=self.run(s, config, rng))
            for s in scenarios
        ]
        return compare_scenarios(baseline_metrics, results, include_metric_deltas)

    def invalidate_policy(self, policy_id: str) -> int:
        """Drop results of every scenario that includes *policy_id*."""
        if self.cache is None:
            return 0
        return self.cache.invalidate_tag(CacheTags.policy(policy_id))

    def invalidate_scenario(self, scenario_id: str) -> int:
        if self.cache is None:
            return 0
        return self.cache.invalidate_tag(CacheTags.scenario(scenario_id))

    def invalidate_all(self) -> int:
        """Drop every cached result, e.g. after the population changed."""
        if self.cache is None:
            return 0
        return self.cache.invalidate_tag(CacheTags.ALL_SIMULATIONS)
