#!/usr/bin/env python3
"""Run a predefined scenario, optionally against the baseline, and output results."""

import argparse
import importlib
import json
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

logging.basicConfig(
    level=os.environ.get("SANDBOX_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("scenario")

SCENARIOS = {
    "baseline": "simulation.scenarios.baseline",
    "strict_enforcement": "simulation.scenarios.strict_enforcement",
    "permit_extension": "simulation.scenarios.permit_extension",
    "tax_relief": "simulation.scenarios.tax_relief",
}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("scenario", choices=sorted(SCENARIOS), help="Predefined scenario name")
    parser.add_argument("--months", type=int, default=12, help="Time horizon in months")
    parser.add_argument("--seasonality", action="store_true", help="Apply monthly seasonality")
    parser.add_argument("--economic-growth", type=float, default=0.0, help="Percent per year")
    parser.add_argument("--population-growth", type=float, default=0.0, help="Percent per year")
    parser.add_argument("--population", help="JSON file with citizenGroups/businessCategories")
    parser.add_argument("--compare", action="store_true", help="Compare against the baseline")
    parser.add_argument("--out", help="Write results JSON here instead of stdout")
    return parser.parse_args(argv)


def load_population(path):
    from api.models import BusinessCategoryPayload, CitizenGroupPayload
    from simulation.scenarios.population import build_business_categories, build_citizen_groups

    if path is None:
        return build_citizen_groups(), build_business_categories()

    with open(path) as f:
        data = json.load(f)
    groups = [CitizenGroupPayload.model_validate(g).to_domain() for g in data.get("citizenGroups", [])]
    businesses = [
        BusinessCategoryPayload.model_validate(b).to_domain()
        for b in data.get("businessCategories", [])
    ]
    logger.info("Loaded %d citizen groups and %d business categories", len(groups), len(businesses))
    return groups, businesses


def main(argv=None):
    from api.models import comparison_to_payload, metric_record_to_payload, metrics_to_payload
    from simulation.cache.store import CacheTTL, InMemoryCache
    from simulation.comparison.deltas import build_metric_records
    from simulation.core.config import InvalidConfiguration, SimulationConfig
    from simulation.runner import ScenarioRunner

    args = parse_args(argv)
    seed = os.environ.get("SANDBOX_RANDOM_SEED")
    ttl = os.environ.get("SANDBOX_CACHE_TTL")

    config = SimulationConfig(
        time_horizon=args.months,
        include_seasonality=args.seasonality,
        population_growth=args.population_growth,
        economic_growth=args.economic_growth,
        random_seed=int(seed) if seed else None,
    )
    scenario = importlib.import_module(SCENARIOS[args.scenario]).get_scenario()
    groups, businesses = load_population(args.population)
    # SANDBOX_CACHE_TTL=0 disables caching
    ttl = float(ttl) if ttl else CacheTTL.MEDIUM
    cache = InMemoryCache() if ttl > 0 else None
    runner = ScenarioRunner(groups, businesses, cache=cache, ttl=ttl if cache is not None else None)

    try:
        if args.compare:
            baseline = importlib.import_module(SCENARIOS["baseline"]).get_scenario()
            result = runner.compare(baseline, [scenario], config)
            payload = comparison_to_payload(result)
            for s in result.scenarios:
                for kpi, pct in vars(s.percent_change).items():
                    logger.info("  %s %s: %+.1f%%", s.name, kpi, pct)
        else:
            metrics = runner.run(scenario, config)
            payload = metrics_to_payload(metrics)
            payload["metricRecords"] = [
                metric_record_to_payload(r) for r in build_metric_records(metrics)
            ]
            logger.info(
                "%s: revenue %.0f, compliance %.1f%%, %d staff, satisfaction %.1f",
                scenario.name,
                metrics.revenue.total,
                metrics.compliance.overall * 100,
                metrics.workload.staff_required,
                metrics.satisfaction.overall,
            )
    except InvalidConfiguration as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    if args.out:
        with open(args.out, "w") as f:
            json.dump(payload, f, indent=2)
        logger.info("Results saved to %s", args.out)
    else:
        json.dump(payload, sys.stdout, indent=2)
        sys.stdout.write("\n")


if __name__ == "__main__":
    main()
