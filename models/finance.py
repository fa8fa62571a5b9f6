"""Pydantic models for the financial planning tools (business plan, rentability, costs)."""
from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import RecordModel, coerce_amount, coerce_count

ProjectionYear = Literal["year1", "year2", "year3"]
PROJECTION_YEARS: tuple[ProjectionYear, ...] = ("year1", "year2", "year3")


class YearProjection(BaseModel):
    """Revenue and expenses projected for one year."""

    revenue: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")

    @field_validator("revenue", "expenses", mode="before")
    @classmethod
    def _coerce_amount(cls, value: object) -> Decimal:
        return coerce_amount(value)

    @property
    def profit(self) -> Decimal:
        return self.revenue - self.expenses


class FinancialProjections(BaseModel):
    year1: YearProjection = Field(default_factory=YearProjection)
    year2: YearProjection = Field(default_factory=YearProjection)
    year3: YearProjection = Field(default_factory=YearProjection)

    def by_year(self) -> Dict[ProjectionYear, YearProjection]:
        return {year: getattr(self, year) for year in PROJECTION_YEARS}

    def profits(self) -> List[Decimal]:
        return [projection.profit for projection in self.by_year().values()]


class BusinessPlan(BaseModel):
    """Identity of the project plus a three-year financial projection."""

    model_config = ConfigDict(str_strip_whitespace=True)

    project_name: str = ""
    promoter_name: str = ""
    location: str = ""
    target_sectors: str = ""
    student_capacity: int = 0
    initial_investment: Decimal = Decimal("0")
    operating_costs: Decimal = Decimal("0")
    expected_revenue: Decimal = Decimal("0")
    partnerships: str = ""
    competition_analysis: str = ""
    marketing_strategy: str = ""
    financial_projections: FinancialProjections = Field(default_factory=FinancialProjections)

    @field_validator("student_capacity", mode="before")
    @classmethod
    def _coerce_count(cls, value: object) -> int:
        return coerce_count(value)

    @field_validator("initial_investment", "operating_costs", "expected_revenue", mode="before")
    @classmethod
    def _coerce_amount(cls, value: object) -> Decimal:
        return coerce_amount(value)


class BudgetInputs(BaseModel):
    """Initial budget needed to open a school."""

    local_cost: Decimal = Decimal("50000")
    equipment_cost: Decimal = Decimal("30000")
    it_cost: Decimal = Decimal("15000")
    startup_cost: Decimal = Decimal("10000")

    @field_validator("local_cost", "equipment_cost", "it_cost", "startup_cost", mode="before")
    @classmethod
    def _coerce_amount(cls, value: object) -> Decimal:
        return coerce_amount(value)

    def total(self) -> Decimal:
        return self.local_cost + self.equipment_cost + self.it_cost + self.startup_cost


class Scenario(str, Enum):
    OPTIMISTIC = "optimistic"
    REALISTIC = "realistic"
    PESSIMISTIC = "pessimistic"


SCENARIO_LABELS: Dict[Scenario, tuple[str, str]] = {
    Scenario.OPTIMISTIC: ("Optimiste", "+20% revenus, -10% charges"),
    Scenario.REALISTIC: ("Réaliste", "Données actuelles"),
    Scenario.PESSIMISTIC: ("Pessimiste", "-20% revenus, +10% charges"),
}


class RentabilityInputs(BaseModel):
    """Annual revenue and expense assumptions of the school."""

    students: int = 0
    tuition_fee: Decimal = Decimal("0")
    subsidies: Decimal = Decimal("0")
    other_revenue: Decimal = Decimal("0")
    salaries: Decimal = Decimal("0")
    facility_rent: Decimal = Decimal("0")
    equipment: Decimal = Decimal("0")
    utilities: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    other_expenses: Decimal = Decimal("0")
    scenario: Scenario = Scenario.REALISTIC

    @field_validator("students", mode="before")
    @classmethod
    def _coerce_count(cls, value: object) -> int:
        return coerce_count(value)

    @field_validator(
        "tuition_fee",
        "subsidies",
        "other_revenue",
        "salaries",
        "facility_rent",
        "equipment",
        "utilities",
        "insurance",
        "other_expenses",
        mode="before",
    )
    @classmethod
    def _coerce_amount(cls, value: object) -> Decimal:
        return coerce_amount(value)

    @field_validator("scenario", mode="before")
    @classmethod
    def _coerce_scenario(cls, value: object) -> object:
        if value in (None, ""):
            return Scenario.REALISTIC
        return value

    def base_revenue(self) -> Decimal:
        return Decimal(self.students) * self.tuition_fee + self.subsidies + self.other_revenue

    def base_expenses(self) -> Decimal:
        return (
            self.salaries
            + self.facility_rent
            + self.equipment
            + self.utilities
            + self.insurance
            + self.other_expenses
        )


class PedagogicalSector(RecordModel):
    """Training sector with its headcount and direct cost drivers."""

    name: str = Field(min_length=1)
    students: int = Field(gt=0)
    hours: int = 0
    trainers: int = 1
    trainer_salary: Decimal = Decimal("35000")
    equipment: Decimal = Decimal("0")
    materials: Decimal = Decimal("0")
    certifications: Decimal = Decimal("0")

    @field_validator("students", "hours", "trainers", mode="before")
    @classmethod
    def _coerce_count(cls, value: object) -> int:
        return coerce_count(value)

    @field_validator("trainer_salary", "equipment", "materials", "certifications", mode="before")
    @classmethod
    def _coerce_amount(cls, value: object) -> Decimal:
        return coerce_amount(value)


class PedagogicalCostData(BaseModel):
    sectors: List[PedagogicalSector] = Field(default_factory=list)
    overhead_rate: Decimal = Decimal("25")
    admin_costs: Decimal = Decimal("15000")

    @field_validator("overhead_rate", "admin_costs", mode="before")
    @classmethod
    def _coerce_amount(cls, value: object) -> Decimal:
        return coerce_amount(value)


SECTOR_TEMPLATES: tuple[Dict[str, object], ...] = (
    {"name": "Bâtiment - Maçonnerie", "hours": 1400, "equipment": 8000, "materials": 2000},
    {"name": "Industrie - Mécanique", "hours": 1200, "equipment": 15000, "materials": 3000},
    {"name": "Services - Commerce", "hours": 1000, "equipment": 3000, "materials": 1000},
    {"name": "Restauration", "hours": 1100, "equipment": 12000, "materials": 4000},
    {"name": "Électricité", "hours": 1300, "equipment": 10000, "materials": 2500},
)


DEFAULT_BUSINESS_PLAN = BusinessPlan(
    student_capacity=20,
    initial_investment=Decimal("100000"),
    operating_costs=Decimal("80000"),
    expected_revenue=Decimal("90000"),
    financial_projections=FinancialProjections(
        year1=YearProjection(revenue=Decimal("90000"), expenses=Decimal("80000")),
        year2=YearProjection(revenue=Decimal("110000"), expenses=Decimal("85000")),
        year3=YearProjection(revenue=Decimal("130000"), expenses=Decimal("90000")),
    ),
)

DEFAULT_RENTABILITY_INPUTS = RentabilityInputs(
    students=20,
    tuition_fee=Decimal("3000"),
    subsidies=Decimal("25000"),
    other_revenue=Decimal("10000"),
    salaries=Decimal("120000"),
    facility_rent=Decimal("18000"),
    equipment=Decimal("8000"),
    utilities=Decimal("6000"),
    insurance=Decimal("3000"),
    other_expenses=Decimal("5000"),
)

DEFAULT_PEDAGOGICAL_COSTS = PedagogicalCostData()
