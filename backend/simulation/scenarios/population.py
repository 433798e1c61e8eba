"""Reference population used by the predefined scenarios.

Three age-banded citizen groups (80,000 residents) and four business
categories (980 businesses).
"""

from simulation.core.config import BusinessCategory, CitizenGroup


def build_citizen_groups() -> list[CitizenGroup]:
    return [
        CitizenGroup(
            name="Young Adults (18-35)",
            population=25000,
            compliance_rate=0.72,
            demographics={"averageIncome": 35000, "permitEligibility": 0.85, "ageRange": "18-35"},
            behavior_rules={"incomeSensitivity": 1.2, "policyAwareness": 0.9},
        ),
        CitizenGroup(
            name="Middle Age (36-55)",
            population=35000,
            compliance_rate=0.85,
            demographics={"averageIncome": 55000, "permitEligibility": 0.9, "ageRange": "36-55"},
            behavior_rules={"incomeSensitivity": 0.8, "policyAwareness": 1.1},
        ),
        CitizenGroup(
            name="Seniors (56+)",
            population=20000,
            compliance_rate=0.92,
            demographics={"averageIncome": 40000, "permitEligibility": 0.7, "ageRange": "56+"},
            behavior_rules={"incomeSensitivity": 1.0, "policyAwareness": 1.2},
        ),
    ]


def build_business_categories() -> list[BusinessCategory]:
    return [
        BusinessCategory(
            name="Small Retail",
            count=500,
            compliance_rate=0.78,
            size_category="small",
            industry="Retail",
            behavior_rules={"averageRevenue": 150000, "policyAwareness": 0.9},
        ),
        BusinessCategory(
            name="Medium Manufacturing",
            count=150,
            compliance_rate=0.88,
            size_category="medium",
            industry="Manufacturing",
            behavior_rules={"averageRevenue": 2000000, "policyAwareness": 1.1},
        ),
        BusinessCategory(
            name="Large Enterprise",
            count=30,
            compliance_rate=0.95,
            size_category="large",
            industry="Various",
            behavior_rules={"averageRevenue": 50000000, "policyAwareness": 1.3},
        ),
        BusinessCategory(
            name="Food Service",
            count=300,
            compliance_rate=0.82,
            size_category="small",
            industry="Hospitality",
            behavior_rules={"averageRevenue": 300000, "policyAwareness": 1.0},
        ),
    ]
