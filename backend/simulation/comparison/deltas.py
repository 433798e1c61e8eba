"""Scenario comparison against a baseline run.

Two flavours: the four headline KPIs of full metrics values, and named
metric records (the flattened form results are stored in), where each
record knows whether a higher value is an improvement.
"""

from dataclasses import dataclass, field
from typing import Optional

import pandas as pd

from simulation.core.state import SimulationMetrics


KPI_NAMES: tuple[str, ...] = ("revenue", "compliance", "workload", "satisfaction")


@dataclass(frozen=True)
class KpiValues:
    revenue: float = 0.0
    compliance: float = 0.0
    workload: float = 0.0
    satisfaction: float = 0.0

    @classmethod
    def from_metrics(cls, metrics: SimulationMetrics) -> "KpiValues":
        return cls(
            revenue=metrics.revenue.total,
            compliance=metrics.compliance.overall,
            workload=metrics.workload.total_hours,
            satisfaction=metrics.satisfaction.overall,
        )


@dataclass(frozen=True)
class MetricRecord:
    """One named, stored metric of a simulation."""

    name: str
    display_name: str
    value: float
    unit: Optional[str] = None
    category: Optional[str] = None
    is_positive: bool = True  # higher is better


@dataclass(frozen=True)
class MetricDelta:
    name: str
    display_name: str
    baseline: float
    scenario: float
    delta: float
    percent_change: float
    unit: Optional[str] = None
    is_positive: bool = False  # the change is an improvement


@dataclass(frozen=True)
class ScenarioResult:
    """A computed scenario to compare against the baseline."""

    id: str
    name: str
    metrics: SimulationMetrics


@dataclass(frozen=True)
class ScenarioComparison:
    id: str
    name: str
    metrics: SimulationMetrics
    delta: KpiValues
    percent_change: KpiValues
    metric_deltas: list[MetricDelta] = field(default_factory=list)


@dataclass(frozen=True)
class ComparisonResult:
    baseline: SimulationMetrics
    scenarios: list[ScenarioComparison] = field(default_factory=list)


def percent_change(baseline: float, delta: float) -> float:
    """Delta as a percentage of baseline, 0 when the baseline is 0."""
    return delta / baseline * 100 if baseline != 0 else 0.0


def build_metric_records(metrics: SimulationMetrics) -> list[MetricRecord]:
    """Flatten metrics into the named records persisted per simulation."""
    revenue, compliance = metrics.revenue, metrics.compliance
    workload, satisfaction = metrics.workload, metrics.satisfaction
    return [
        MetricRecord("revenue", "Total Revenue", revenue.total, "currency", "financial", True),
        MetricRecord("revenue_fines", "Revenue from Fines", revenue.from_fines, "currency", "financial", True),
        MetricRecord("revenue_permits", "Revenue from Permits", revenue.from_permits, "currency", "financial", True),
        MetricRecord("revenue_taxes", "Revenue from Taxes", revenue.from_taxes, "currency", "financial", True),
        MetricRecord("compliance_overall", "Overall Compliance Rate", compliance.overall * 100,
                     "percentage", "operational", True),
        MetricRecord("compliance_citizen", "Citizen Compliance Rate", compliance.citizen * 100,
                     "percentage", "operational", True),
        MetricRecord("compliance_business", "Business Compliance Rate", compliance.business * 100,
                     "percentage", "operational", True),
        MetricRecord("workload_hours", "Total Work Hours", workload.total_hours, "hours", "operational", False),
        MetricRecord("workload_inspections", "Total Inspections", workload.inspections, "count", "operational", False),
        MetricRecord("workload_permits", "Permits Processed", workload.permits, "count", "operational", True),
        MetricRecord("workload_staff", "Staff Required", workload.staff_required, "count", "operational", False),
        MetricRecord("satisfaction_overall", "Overall Satisfaction", satisfaction.overall, "index", "social", True),
        MetricRecord("satisfaction_citizen", "Citizen Satisfaction", satisfaction.citizen, "index", "social", True),
        MetricRecord("satisfaction_business", "Business Satisfaction", satisfaction.business, "index", "social", True),
    ]


def compare_metric_records(
    baseline: list[MetricRecord],
    scenario: list[MetricRecord],
) -> list[MetricDelta]:
    """Diff named metrics, in baseline order.

    Baseline metrics with no same-named scenario metric are skipped.
    """
    scenario_by_name: dict[str, MetricRecord] = {}
    for record in scenario:
        scenario_by_name.setdefault(record.name, record)

    deltas: list[MetricDelta] = []
    for base in baseline:
        other = scenario_by_name.get(base.name)
        if other is None:
            continue
        delta: float = other.value - base.value
        deltas.append(MetricDelta(
            name=base.name,
            display_name=base.display_name,
            baseline=base.value,
            scenario=other.value,
            delta=delta,
            percent_change=percent_change(base.value, delta),
            unit=base.unit,
            is_positive=delta > 0 if base.is_positive else delta < 0,
        ))
    return deltas


def compare_scenarios(
    baseline: SimulationMetrics,
    scenarios: list[ScenarioResult],
    include_metric_deltas: bool = False,
) -> ComparisonResult:
    """Compute KPI deltas and percent changes of each scenario vs baseline."""
    base: KpiValues = KpiValues.from_metrics(baseline)
    baseline_records: list[MetricRecord] = (
        build_metric_records(baseline) if include_metric_deltas else []
    )

    comparisons: list[ScenarioComparison] = []
    for scenario in scenarios:
        values: KpiValues = KpiValues.from_metrics(scenario.metrics)
        deltas = {kpi: getattr(values, kpi) - getattr(base, kpi) for kpi in KPI_NAMES}
        changes = {kpi: percent_change(getattr(base, kpi), deltas[kpi]) for kpi in KPI_NAMES}
        metric_deltas: list[MetricDelta] = []
        if include_metric_deltas:
            metric_deltas = compare_metric_records(
                baseline_records, build_metric_records(scenario.metrics)
            )
        comparisons.append(ScenarioComparison(
            id=scenario.id,
            name=scenario.name,
            metrics=scenario.metrics,
            delta=KpiValues(**deltas),
            percent_change=KpiValues(**changes),
            metric_deltas=metric_deltas,
        ))

    return ComparisonResult(baseline=baseline, scenarios=comparisons)


def comparison_frame(result: ComparisonResult) -> pd.DataFrame:
    """One row per scenario and KPI, for tabular export."""
    base: KpiValues = KpiValues.from_metrics(result.baseline)
    rows: list[dict] = []
    for scenario in result.scenarios:
        values: KpiValues = KpiValues.from_metrics(scenario.metrics)
        for kpi in KPI_NAMES:
            rows.append({
                "scenario_id": scenario.id,
                "scenario_name": scenario.name,
                "kpi": kpi,
                "baseline": getattr(base, kpi),
                "scenario": getattr(values, kpi),
                "delta": getattr(scenario.delta, kpi),
                "percent_change": getattr(scenario.percent_change, kpi),
            })
    columns = ["scenario_id", "scenario_name", "kpi", "baseline", "scenario", "delta", "percent_change"]
    return pd.DataFrame(rows, columns=columns)
