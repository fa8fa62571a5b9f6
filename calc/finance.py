"""Financial formulas: ROI, breakeven, rentability scenarios and pedagogical costs."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List

from formatting import format_number
from models import (
    BusinessPlan,
    PedagogicalCostData,
    PedagogicalSector,
    RentabilityInputs,
    Scenario,
)

NOT_PROFITABLE = "Non rentable"

SCENARIO_MULTIPLIERS: Dict[Scenario, tuple[Decimal, Decimal]] = {
    Scenario.OPTIMISTIC: (Decimal("1.2"), Decimal("0.9")),
    Scenario.REALISTIC: (Decimal("1"), Decimal("1")),
    Scenario.PESSIMISTIC: (Decimal("0.8"), Decimal("1.1")),
}

MARGIN_TIERS: tuple[tuple[Decimal, str, str], ...] = (
    (Decimal("10"), "Excellente rentabilité", "positive"),
    (Decimal("5"), "Bonne rentabilité", "positive"),
    (Decimal("0"), "Rentabilité fragile", "caution"),
)


def _safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator == 0:
        return Decimal("0")
    return numerator / denominator


# --- Business plan ----------------------------------------------------------------


def return_on_investment(plan: BusinessPlan) -> Decimal | None:
    """Year-3 profit as a percentage of the initial investment."""

    if plan.initial_investment == 0:
        return None
    year3 = plan.financial_projections.year3
    return year3.profit / plan.initial_investment * Decimal("100")


def average_annual_profit(plan: BusinessPlan) -> Decimal:
    profits = plan.financial_projections.profits()
    return sum(profits, start=Decimal("0")) / Decimal(len(profits))


def breakeven_years(plan: BusinessPlan) -> Decimal | None:
    """Years needed to recover the investment, ``None`` when not profitable."""

    average = average_annual_profit(plan)
    if average <= 0:
        return None
    return plan.initial_investment / average


def breakeven_label(plan: BusinessPlan) -> str:
    years = breakeven_years(plan)
    if years is None:
        return NOT_PROFITABLE
    return f"{format_number(years, 1)} ans"


# --- Rentability ------------------------------------------------------------------


@dataclass(frozen=True)
class RentabilityMetrics:
    revenue: Decimal
    expenses: Decimal
    profit: Decimal
    margin: Decimal
    cost_per_student: Decimal
    revenue_per_student: Decimal


def scenario_multipliers(scenario: Scenario) -> tuple[Decimal, Decimal]:
    return SCENARIO_MULTIPLIERS.get(scenario, SCENARIO_MULTIPLIERS[Scenario.REALISTIC])


def compute_rentability(inputs: RentabilityInputs, scenario: Scenario | None = None) -> RentabilityMetrics:
    """Scale revenue and expenses by the scenario multipliers and derive margins."""

    revenue_factor, expense_factor = scenario_multipliers(scenario or inputs.scenario)
    revenue = inputs.base_revenue() * revenue_factor
    expenses = inputs.base_expenses() * expense_factor
    profit = revenue - expenses
    margin = profit / revenue * Decimal("100") if revenue > 0 else Decimal("0")
    students = Decimal(inputs.students)
    return RentabilityMetrics(
        revenue=revenue,
        expenses=expenses,
        profit=profit,
        margin=margin,
        cost_per_student=_safe_divide(expenses, students),
        revenue_per_student=_safe_divide(revenue, students),
    )


def compare_scenarios(inputs: RentabilityInputs) -> Dict[Scenario, RentabilityMetrics]:
    return {scenario: compute_rentability(inputs, scenario) for scenario in Scenario}


def margin_status(margin: Decimal) -> tuple[str, str]:
    """Return the qualitative label and tone of a profit margin."""

    for threshold, label, tone in MARGIN_TIERS:
        if margin >= threshold:
            return label, tone
    return "Déficit", "negative"


# --- Pedagogical costs ------------------------------------------------------------


@dataclass(frozen=True)
class SectorCost:
    trainer_costs: Decimal
    direct_costs: Decimal
    overhead_costs: Decimal
    total_cost: Decimal
    cost_per_student: Decimal
    cost_per_hour: Decimal


@dataclass(frozen=True)
class PedagogicalSummary:
    total_students: int
    total_costs: Decimal
    total_hours: int
    avg_cost_per_student: Decimal
    avg_cost_per_hour: Decimal


def sector_cost(sector: PedagogicalSector, overhead_rate: Decimal) -> SectorCost:
    trainer_costs = Decimal(sector.trainers) * sector.trainer_salary
    direct_costs = trainer_costs + sector.equipment + sector.materials + sector.certifications
    overhead_costs = direct_costs * (overhead_rate / Decimal("100"))
    total_cost = direct_costs + overhead_costs
    return SectorCost(
        trainer_costs=trainer_costs,
        direct_costs=direct_costs,
        overhead_costs=overhead_costs,
        total_cost=total_cost,
        cost_per_student=_safe_divide(total_cost, Decimal(sector.students)),
        cost_per_hour=_safe_divide(total_cost, Decimal(sector.hours)),
    )


def total_sector_costs(data: PedagogicalCostData) -> Decimal:
    """Total of sector costs including overhead, excluding admin costs."""

    return sum(
        (sector_cost(sector, data.overhead_rate).total_cost for sector in data.sectors),
        start=Decimal("0"),
    )


def summarize_pedagogical_costs(data: PedagogicalCostData) -> PedagogicalSummary:
    total_students = sum(sector.students for sector in data.sectors)
    total_hours = sum(sector.hours for sector in data.sectors)
    total_costs = total_sector_costs(data)
    loaded = total_costs + data.admin_costs
    return PedagogicalSummary(
        total_students=total_students,
        total_costs=total_costs,
        total_hours=total_hours,
        avg_cost_per_student=_safe_divide(loaded, Decimal(total_students)),
        avg_cost_per_hour=_safe_divide(loaded, Decimal(total_hours)),
    )


def pedagogical_cost_rows(data: PedagogicalCostData) -> List[Dict[str, object]]:
    """Tabular view of every sector's cost breakdown (used for display and export)."""

    rows: List[Dict[str, object]] = []
    for sector in data.sectors:
        cost = sector_cost(sector, data.overhead_rate)
        rows.append(
            {
                "Filière": sector.name,
                "Étudiants": sector.students,
                "Heures": sector.hours,
                "Formateurs": sector.trainers,
                "Coûts formateurs (€)": float(cost.trainer_costs),
                "Coûts directs (€)": float(cost.direct_costs),
                "Charges indirectes (€)": float(cost.overhead_costs),
                "Coût total (€)": float(cost.total_cost),
                "Coût / étudiant (€)": float(cost.cost_per_student),
                "Coût / heure (€)": float(cost.cost_per_hour),
            }
        )
    return rows


__all__ = [
    "MARGIN_TIERS",
    "NOT_PROFITABLE",
    "PedagogicalSummary",
    "RentabilityMetrics",
    "SCENARIO_MULTIPLIERS",
    "SectorCost",
    "average_annual_profit",
    "breakeven_label",
    "breakeven_years",
    "compare_scenarios",
    "compute_rentability",
    "margin_status",
    "pedagogical_cost_rows",
    "return_on_investment",
    "scenario_multipliers",
    "sector_cost",
    "summarize_pedagogical_costs",
    "total_sector_costs",
]
