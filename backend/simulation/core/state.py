"""Simulation state and result data structures."""

from dataclasses import asdict, dataclass, field
from typing import Optional

import pandas as pd

from simulation.core.config import BusinessCategory, CitizenGroup


@dataclass(frozen=True)
class RevenueMetrics:
    total: float = 0.0
    from_fines: float = 0.0
    from_permits: float = 0.0
    from_taxes: float = 0.0
    from_fees: float = 0.0
    breakdown: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class ComplianceMetrics:
    overall: float = 0.0  # 0-1
    citizen: float = 0.0
    business: float = 0.0
    by_category: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class WorkloadMetrics:
    total_hours: float = 0.0
    inspections: int = 0
    permits: int = 0
    appeals: int = 0
    staff_required: int = 0


@dataclass(frozen=True)
class SatisfactionMetrics:
    overall: float = 0.0  # index 0-100
    citizen: float = 0.0
    business: float = 0.0
    by_demographic: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class MonthlyProjection:
    month: int
    revenue: float
    compliance: float
    workload: float
    satisfaction: float


@dataclass(frozen=True)
class SimulationMetrics:
    """Complete result of one simulation run."""

    revenue: RevenueMetrics
    compliance: ComplianceMetrics
    workload: WorkloadMetrics
    satisfaction: SatisfactionMetrics
    monthly_projections: tuple[MonthlyProjection, ...] = ()

    def to_dict(self) -> dict:
        return asdict(self)

    def projections_frame(self) -> pd.DataFrame:
        """Monthly projections as a DataFrame indexed by month."""
        columns = ["month", "revenue", "compliance", "workload", "satisfaction"]
        frame = pd.DataFrame([asdict(p) for p in self.monthly_projections], columns=columns)
        return frame.set_index("month")


class SimulationState:
    """Inputs and partial results of a run in progress.

    Each stage fills exactly one result slot; later stages may read the
    slots filled before them but never rewrite them.
    """

    def __init__(
        self,
        citizen_groups: list[CitizenGroup],
        business_categories: list[BusinessCategory],
    ):
        self.citizen_groups: list[CitizenGroup] = list(citizen_groups)
        self.business_categories: list[BusinessCategory] = list(business_categories)
        self.revenue: Optional[RevenueMetrics] = None
        self.compliance: Optional[ComplianceMetrics] = None
        self.workload: Optional[WorkloadMetrics] = None
        self.satisfaction: Optional[SatisfactionMetrics] = None
        self.monthly_projections: list[MonthlyProjection] = []

    @property
    def total_population(self) -> int:
        return sum(g.population for g in self.citizen_groups)

    @property
    def total_businesses(self) -> int:
        return sum(b.count for b in self.business_categories)

    def set_result(self, slot: str, value) -> None:
        """Fill a result slot once."""
        if getattr(self, slot) is not None:
            raise RuntimeError(f"result slot {slot!r} already filled")
        setattr(self, slot, value)

    def to_metrics(self) -> SimulationMetrics:
        """Freeze the filled slots into the returned metrics value."""
        missing = [
            slot for slot in ("revenue", "compliance", "workload", "satisfaction")
            if getattr(self, slot) is None
        ]
        if missing:
            raise RuntimeError(f"simulation stages not run: {', '.join(missing)}")
        return SimulationMetrics(
            revenue=self.revenue,
            compliance=self.compliance,
            workload=self.workload,
            satisfaction=self.satisfaction,
            monthly_projections=tuple(self.monthly_projections),
        )
