"""Cross-tool aggregation feeding the dashboard page.

The aggregator only reads the records it is given; loading them from storage
is the caller's job, so the function stays pure and easy to test.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List

from formatting import format_euro
from models import (
    DEFAULT_BUSINESS_PLAN,
    DEFAULT_PEDAGOGICAL_COSTS,
    DEFAULT_RENTABILITY_INPUTS,
    MODULE_STATUS_LABELS,
    PARTNERSHIP_STATUS_LABELS,
    SUBSIDY_STATUS_LABELS,
    BusinessPlan,
    ModuleStatus,
    Partnership,
    PartnershipStatus,
    PedagogicalCostData,
    QuestionnaireState,
    RentabilityInputs,
    SubsidyApplication,
    SubsidyStatus,
    TrainingPlan,
)

from .finance import total_sector_costs
from .scoring import questionnaire_score

ACTIVITY_FEED_LIMIT = 5
RECENT_MODULES = 3
RECENT_PARTNERSHIPS = 2
RECENT_SUBSIDIES = 2

MODULE_TONES = {
    ModuleStatus.PLANNED: "neutral",
    ModuleStatus.IN_PROGRESS: "caution",
    ModuleStatus.COMPLETED: "positive",
    ModuleStatus.CANCELLED: "negative",
}
PARTNERSHIP_TONES = {
    PartnershipStatus.PROSPECT: "neutral",
    PartnershipStatus.CONTACT: "neutral",
    PartnershipStatus.NEGOCIATION: "caution",
    PartnershipStatus.ACTIF: "positive",
    PartnershipStatus.SUSPENDU: "negative",
}
SUBSIDY_TONES = {
    SubsidyStatus.DRAFT: "neutral",
    SubsidyStatus.SUBMITTED: "caution",
    SubsidyStatus.APPROVED: "positive",
    SubsidyStatus.REJECTED: "negative",
}


@dataclass
class DashboardSources:
    """The independently stored records read by the dashboard."""

    business_plan: BusinessPlan = field(default_factory=lambda: DEFAULT_BUSINESS_PLAN.model_copy(deep=True))
    rentability: RentabilityInputs = field(
        default_factory=lambda: DEFAULT_RENTABILITY_INPUTS.model_copy(deep=True)
    )
    training_plan: TrainingPlan = field(default_factory=TrainingPlan)
    pedagogical_costs: PedagogicalCostData = field(
        default_factory=lambda: DEFAULT_PEDAGOGICAL_COSTS.model_copy(deep=True)
    )
    partnerships: List[Partnership] = field(default_factory=list)
    subsidies: List[SubsidyApplication] = field(default_factory=list)
    questionnaire: QuestionnaireState = field(default_factory=QuestionnaireState)


@dataclass(frozen=True)
class ActivityItem:
    id: str
    type: str
    title: str
    description: str
    date: date
    status: str
    tone: str


@dataclass(frozen=True)
class DashboardMetrics:
    total_students: int
    active_modules: int
    completed_modules: int
    total_budget: Decimal
    revenue: Decimal
    active_partnerships: int
    pending_subsidies: int
    pedagogical_costs: Decimal
    avg_cost_per_student: Decimal
    profit_margin: Decimal
    certification_rate: Decimal
    students_per_trainer: Decimal | None
    questionnaire_score: Decimal | None
    activities: List[ActivityItem]


def _module_activities(plan: TrainingPlan, today: date) -> List[ActivityItem]:
    items = []
    for module in plan.modules[-RECENT_MODULES:]:
        items.append(
            ActivityItem(
                id=module.id,
                type="formation",
                title=module.title,
                description=f"Module {module.sector} - {module.students} apprenants",
                date=module.start_date or today,
                status=MODULE_STATUS_LABELS[module.status],
                tone=MODULE_TONES[module.status],
            )
        )
    return items


def _partnership_activities(partnerships: List[Partnership], today: date) -> List[ActivityItem]:
    items = []
    for partnership in partnerships[-RECENT_PARTNERSHIPS:]:
        items.append(
            ActivityItem(
                id=partnership.id,
                type="partenariat",
                title=partnership.company_name,
                description=f"Contact : {partnership.contact_person}",
                date=partnership.last_contact or today,
                status=PARTNERSHIP_STATUS_LABELS[partnership.status],
                tone=PARTNERSHIP_TONES[partnership.status],
            )
        )
    return items


def _subsidy_activities(subsidies: List[SubsidyApplication], today: date) -> List[ActivityItem]:
    items = []
    for application in subsidies[-RECENT_SUBSIDIES:]:
        items.append(
            ActivityItem(
                id=application.id,
                type="subvention",
                title=application.project_title,
                description=f"{application.funding_body} - {format_euro(application.amount)}",
                date=application.submission_date or today,
                status=SUBSIDY_STATUS_LABELS[application.status],
                tone=SUBSIDY_TONES[application.status],
            )
        )
    return items


def build_activity_feed(sources: DashboardSources, today: date | None = None) -> List[ActivityItem]:
    """Most recent activities across trackers, newest first."""

    today = today or date.today()
    items = (
        _module_activities(sources.training_plan, today)
        + _partnership_activities(sources.partnerships, today)
        + _subsidy_activities(sources.subsidies, today)
    )
    # sorted() is stable, so same-day items keep their tracker order.
    items = sorted(items, key=lambda item: item.date, reverse=True)
    return items[:ACTIVITY_FEED_LIMIT]


def aggregate_dashboard(sources: DashboardSources, today: date | None = None) -> DashboardMetrics:
    """Combine every stored dataset into the dashboard counters and activity feed."""

    modules = sources.training_plan.modules
    sectors = sources.pedagogical_costs.sectors

    module_students = sum(module.students for module in modules)
    sector_students = sum(sector.students for sector in sectors)
    total_students = max(module_students, sector_students, sources.rentability.students)

    active_modules = sum(1 for module in modules if module.status == ModuleStatus.IN_PROGRESS)
    completed_modules = sum(1 for module in modules if module.status == ModuleStatus.COMPLETED)
    certification_rate = (
        Decimal(completed_modules) / Decimal(len(modules)) * Decimal("100") if modules else Decimal("0")
    )

    year1_revenue = sources.business_plan.financial_projections.year1.revenue
    revenue = year1_revenue if year1_revenue > 0 else sources.rentability.base_revenue()

    pedagogical_costs = total_sector_costs(sources.pedagogical_costs)
    avg_cost_per_student = pedagogical_costs / Decimal(total_students) if total_students > 0 else Decimal("0")
    # Margin left once the pedagogical costs are paid from the headline revenue.
    profit_margin = (
        (revenue - pedagogical_costs) / revenue * Decimal("100") if revenue > 0 else Decimal("0")
    )

    trainers = sum(sector.trainers for sector in sectors)
    students_per_trainer = (
        Decimal(total_students) / Decimal(trainers) if trainers > 0 and total_students > 0 else None
    )

    questionnaire = sources.questionnaire
    score = questionnaire_score(questionnaire.answers) if questionnaire.is_completed else None

    return DashboardMetrics(
        total_students=total_students,
        active_modules=active_modules,
        completed_modules=completed_modules,
        total_budget=sources.business_plan.initial_investment,
        revenue=revenue,
        active_partnerships=sum(1 for p in sources.partnerships if p.status == PartnershipStatus.ACTIF),
        pending_subsidies=sum(1 for s in sources.subsidies if s.status == SubsidyStatus.SUBMITTED),
        pedagogical_costs=pedagogical_costs,
        avg_cost_per_student=avg_cost_per_student,
        profit_margin=profit_margin,
        certification_rate=certification_rate,
        students_per_trainer=students_per_trainer,
        questionnaire_score=score,
        activities=build_activity_feed(sources, today),
    )


__all__ = [
    "ACTIVITY_FEED_LIMIT",
    "ActivityItem",
    "DashboardMetrics",
    "DashboardSources",
    "aggregate_dashboard",
    "build_activity_feed",
]
