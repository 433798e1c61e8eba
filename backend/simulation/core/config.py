"""Policy parameters, population records and simulation configuration."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

logger = logging.getLogger(__name__)

ParameterValue = Union[float, int, str, bool]

# Simulation constants
MONTHS_PER_YEAR = 12
STAFF_HOURS_PER_MONTH = 160.0
DEFAULT_PERMIT_DURATION_DAYS = 365.0

# Population fallbacks
DEFAULT_AVERAGE_INCOME = 30000.0
DEFAULT_PERMIT_ELIGIBILITY = 0.3
DEFAULT_BEHAVIOR_MODIFIER = 1.0

# Wire name -> record attribute for parameters every model reads
KNOWN_PARAMETERS: dict[str, str] = {
    "fineAmount": "fine_amount",
    "permitDuration": "permit_duration",
    "inspectionFrequency": "inspection_frequency",
    "taxRate": "tax_rate",
    "feeAmount": "fee_amount",
    "penaltyRate": "penalty_rate",
    "gracePeriod": "grace_period",
    "renewalPeriod": "renewal_period",
}


class InvalidConfiguration(ValueError):
    """Raised when simulation inputs violate the engine's input contract."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class SizeCategory(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["SizeCategory"]:
        """Map a raw size string to a category, ``None`` when unset or unknown."""
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            logger.warning("Unknown business size category %r; treating as unset", value)
            return None


# Fine/permit revenue multiplier by size (unset counts as small)
SIZE_REVENUE_MULTIPLIERS: dict[SizeCategory, float] = {
    SizeCategory.SMALL: 1.0,
    SizeCategory.MEDIUM: 2.0,
    SizeCategory.LARGE: 5.0,
}

# Annual revenue assumed when a category carries no averageRevenue rule
SIZE_DEFAULT_REVENUE: dict[SizeCategory, float] = {
    SizeCategory.SMALL: 100000.0,
    SizeCategory.MEDIUM: 500000.0,
    SizeCategory.LARGE: 2000000.0,
}

# Tax sensitivity of business satisfaction; unset and medium are neutral
SIZE_SATISFACTION_MODIFIERS: dict[SizeCategory, float] = {
    SizeCategory.SMALL: 1.2,
    SizeCategory.MEDIUM: 1.0,
    SizeCategory.LARGE: 0.8,
}


def is_numeric(value) -> bool:
    """True for int/float values, excluding booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class PolicyParameters:
    """Effective policy parameters with typed access to the known keys.

    Keys the models do not read are kept in ``extras`` so they survive a
    round trip through :meth:`to_mapping`.
    """

    fine_amount: float = 0.0
    permit_duration: float = DEFAULT_PERMIT_DURATION_DAYS  # days
    inspection_frequency: float = 0.0  # per year
    tax_rate: float = 0.0  # percent
    fee_amount: float = 0.0
    penalty_rate: float = 0.0
    grace_period: float = 0.0  # days
    renewal_period: float = 0.0  # days
    extras: dict[str, ParameterValue] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: dict[str, ParameterValue]) -> "PolicyParameters":
        known: dict[str, ParameterValue] = {}
        extras: dict[str, ParameterValue] = {}
        for key, value in mapping.items():
            if key in KNOWN_PARAMETERS:
                if value is not None:
                    known[KNOWN_PARAMETERS[key]] = value
            else:
                extras[key] = value
        return cls(**known, extras=extras)

    def to_mapping(self) -> dict[str, ParameterValue]:
        mapping: dict[str, ParameterValue] = {
            wire: getattr(self, attr) for wire, attr in KNOWN_PARAMETERS.items()
        }
        mapping.update(self.extras)
        return mapping


@dataclass
class CitizenGroup:
    """A citizen population segment."""

    name: str
    population: int = 0
    compliance_rate: float = 0.0
    demographics: dict = field(default_factory=dict)
    behavior_rules: Optional[dict] = None

    @property
    def average_income(self) -> float:
        return self.demographics.get("averageIncome") or DEFAULT_AVERAGE_INCOME

    @property
    def permit_eligibility(self) -> float:
        return self.demographics.get("permitEligibility") or DEFAULT_PERMIT_ELIGIBILITY

    @property
    def income_sensitivity(self) -> float:
        return (self.behavior_rules or {}).get("incomeSensitivity") or DEFAULT_BEHAVIOR_MODIFIER

    @property
    def policy_awareness(self) -> float:
        return (self.behavior_rules or {}).get("policyAwareness") or DEFAULT_BEHAVIOR_MODIFIER


@dataclass
class BusinessCategory:
    """A business population segment."""

    name: str
    count: int = 0
    compliance_rate: float = 0.0
    size_category: Optional[SizeCategory] = None
    industry: str = ""
    behavior_rules: Optional[dict] = None

    def __post_init__(self):
        self.size_category = SizeCategory.parse(self.size_category)

    @property
    def revenue_multiplier(self) -> float:
        return SIZE_REVENUE_MULTIPLIERS[self.size_category or SizeCategory.SMALL]

    @property
    def satisfaction_modifier(self) -> float:
        return SIZE_SATISFACTION_MODIFIERS.get(self.size_category, 1.0)

    @property
    def average_revenue(self) -> float:
        default = SIZE_DEFAULT_REVENUE[self.size_category or SizeCategory.SMALL]
        return (self.behavior_rules or {}).get("averageRevenue") or default

    @property
    def policy_awareness(self) -> float:
        return (self.behavior_rules or {}).get("policyAwareness") or DEFAULT_BEHAVIOR_MODIFIER


@dataclass
class SimulationConfig:
    """Time horizon and macro assumptions for one run."""

    time_horizon: int = 12  # months
    include_seasonality: bool = False
    population_growth: float = 0.0  # percent per year
    economic_growth: float = 0.0  # percent per year
    random_seed: Optional[int] = None

    def validate(self) -> list[str]:
        """Return list of validation errors, empty if valid."""
        errors = []
        if isinstance(self.time_horizon, bool) or not isinstance(self.time_horizon, int):
            errors.append(f"time_horizon must be an integer, got {self.time_horizon!r}")
        elif self.time_horizon < 1:
            errors.append(f"time_horizon must be >= 1, got {self.time_horizon}")
        return errors


def validate_population(
    citizen_groups: list[CitizenGroup],
    business_categories: list[BusinessCategory],
) -> list[str]:
    """Return list of population record errors, empty if valid."""
    errors = []
    for group in citizen_groups:
        if group.population < 0:
            errors.append(f"citizen group {group.name!r}: population must be >= 0, got {group.population}")
        if not 0.0 <= group.compliance_rate <= 1.0:
            errors.append(
                f"citizen group {group.name!r}: compliance_rate must be 0-1, got {group.compliance_rate}"
            )
    for business in business_categories:
        if business.count < 0:
            errors.append(f"business category {business.name!r}: count must be >= 0, got {business.count}")
        if not 0.0 <= business.compliance_rate <= 1.0:
            errors.append(
                f"business category {business.name!r}: compliance_rate must be 0-1, got {business.compliance_rate}"
            )
    return errors
