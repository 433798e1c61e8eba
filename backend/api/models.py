"""Pydantic models for the records exchanged with the service layer.

Collaborators hand over population records, policy contributions and run
configuration in camelCase JSON; results go back the same way.
"""

from dataclasses import asdict
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from simulation.comparison.deltas import ComparisonResult, MetricDelta, MetricRecord
from simulation.core.aggregation import PolicyContribution
from simulation.core.config import (
    BusinessCategory,
    CitizenGroup,
    InvalidConfiguration,
    SimulationConfig,
)
from simulation.core.engine import SimulationInput
from simulation.core.state import SimulationMetrics

ParameterMap = dict[str, Union[bool, int, float, str, None]]


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CitizenGroupPayload(CamelModel):
    """A citizen population segment."""

    name: str = Field(..., description="Display name of the group")
    population: int = Field(..., ge=0, description="Number of residents")
    compliance_rate: float = Field(
        ..., alias="complianceRate", ge=0.0, le=1.0, description="Baseline compliance, 0-1"
    )
    demographics: dict[str, Any] = Field(
        default_factory=dict, description="Must carry averageIncome and permitEligibility"
    )
    behavior_rules: Optional[dict[str, float]] = Field(
        default=None, alias="behaviorRules", description="incomeSensitivity, policyAwareness"
    )

    def to_domain(self) -> CitizenGroup:
        return CitizenGroup(
            name=self.name,
            population=self.population,
            compliance_rate=self.compliance_rate,
            demographics=dict(self.demographics),
            behavior_rules=dict(self.behavior_rules) if self.behavior_rules else None,
        )


class BusinessCategoryPayload(CamelModel):
    """A business population segment."""

    name: str = Field(..., description="Display name of the category")
    count: int = Field(..., ge=0, description="Number of businesses")
    compliance_rate: float = Field(
        ..., alias="complianceRate", ge=0.0, le=1.0, description="Baseline compliance, 0-1"
    )
    size_category: Optional[str] = Field(
        default=None, alias="sizeCategory", description="small, medium or large"
    )
    industry: str = Field(default="", description="Industry label")
    behavior_rules: Optional[dict[str, float]] = Field(
        default=None, alias="behaviorRules", description="averageRevenue, policyAwareness"
    )

    def to_domain(self) -> BusinessCategory:
        return BusinessCategory(
            name=self.name,
            count=self.count,
            compliance_rate=self.compliance_rate,
            size_category=self.size_category,
            industry=self.industry,
            behavior_rules=dict(self.behavior_rules) if self.behavior_rules else None,
        )


class PolicyContributionPayload(CamelModel):
    """One policy version's parameters, with optional scenario overrides."""

    parameters: ParameterMap = Field(default_factory=dict)
    overrides: Optional[ParameterMap] = Field(default=None)
    policy_id: str = Field(default="", alias="policyId")

    def to_domain(self) -> PolicyContribution:
        return PolicyContribution(
            parameters=dict(self.parameters),
            overrides=dict(self.overrides) if self.overrides else None,
            policy_id=self.policy_id,
        )


class SimulationConfigPayload(CamelModel):
    time_horizon: int = Field(12, alias="timeHorizon", ge=1, description="Months")
    include_seasonality: bool = Field(False, alias="includeSeasonality")
    population_growth: float = Field(0.0, alias="populationGrowth", description="Percent per year")
    economic_growth: float = Field(0.0, alias="economicGrowth", description="Percent per year")
    random_seed: Optional[int] = Field(default=None, alias="randomSeed")

    def to_domain(self) -> SimulationConfig:
        return SimulationConfig(
            time_horizon=self.time_horizon,
            include_seasonality=self.include_seasonality,
            population_growth=self.population_growth,
            economic_growth=self.economic_growth,
            random_seed=self.random_seed,
        )


class SimulationRequest(CamelModel):
    """Everything one simulation run needs."""

    policies: list[PolicyContributionPayload] = Field(default_factory=list)
    citizen_groups: list[CitizenGroupPayload] = Field(default_factory=list, alias="citizenGroups")
    business_categories: list[BusinessCategoryPayload] = Field(
        default_factory=list, alias="businessCategories"
    )
    config: SimulationConfigPayload = Field(default_factory=SimulationConfigPayload)

    def to_domain(self) -> SimulationInput:
        return SimulationInput(
            contributions=[p.to_domain() for p in self.policies],
            citizen_groups=[g.to_domain() for g in self.citizen_groups],
            business_categories=[b.to_domain() for b in self.business_categories],
            config=self.config.to_domain(),
        )


def parse_simulation_request(data: dict) -> SimulationInput:
    """Validate a raw request dict and convert it to engine input.

    Raises
    ------
    InvalidConfiguration
        If the payload does not match the schema.
    """
    try:
        request = SimulationRequest.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise InvalidConfiguration(errors) from e
    return request.to_domain()


def metrics_to_payload(metrics: SimulationMetrics) -> dict:
    """Serialize metrics with the camelCase field names of the service layer."""
    revenue, compliance = metrics.revenue, metrics.compliance
    workload, satisfaction = metrics.workload, metrics.satisfaction
    return {
        "revenue": {
            "total": revenue.total,
            "fromFines": revenue.from_fines,
            "fromPermits": revenue.from_permits,
            "fromTaxes": revenue.from_taxes,
            "fromFees": revenue.from_fees,
            "breakdown": dict(revenue.breakdown),
        },
        "compliance": {
            "overall": compliance.overall,
            "citizen": compliance.citizen,
            "business": compliance.business,
            "byCategory": dict(compliance.by_category),
        },
        "workload": {
            "totalHours": workload.total_hours,
            "inspections": workload.inspections,
            "permits": workload.permits,
            "appeals": workload.appeals,
            "staffRequired": workload.staff_required,
        },
        "satisfaction": {
            "overall": satisfaction.overall,
            "citizen": satisfaction.citizen,
            "business": satisfaction.business,
            "byDemographic": dict(satisfaction.by_demographic),
        },
        "monthlyProjections": [
            {
                "month": p.month,
                "revenue": p.revenue,
                "compliance": p.compliance,
                "workload": p.workload,
                "satisfaction": p.satisfaction,
            }
            for p in metrics.monthly_projections
        ],
    }


def metric_record_to_payload(record: MetricRecord) -> dict:
    return {
        "name": record.name,
        "displayName": record.display_name,
        "value": record.value,
        "unit": record.unit,
        "category": record.category,
        "isPositive": record.is_positive,
    }


def metric_delta_to_payload(delta: MetricDelta) -> dict:
    return {
        "name": delta.name,
        "displayName": delta.display_name,
        "baseline": delta.baseline,
        "scenario": delta.scenario,
        "delta": delta.delta,
        "percentChange": delta.percent_change,
        "unit": delta.unit,
        "isPositive": delta.is_positive,
    }


def comparison_to_payload(result: ComparisonResult) -> dict:
    return {
        "baseline": metrics_to_payload(result.baseline),
        "scenarios": [
            {
                "id": s.id,
                "name": s.name,
                "metrics": metrics_to_payload(s.metrics),
                "delta": asdict(s.delta),
                "percentChange": asdict(s.percent_change),
                "metricDeltas": [metric_delta_to_payload(d) for d in s.metric_deltas],
            }
            for s in result.scenarios
        ],
    }
