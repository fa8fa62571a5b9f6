"""Calculation helpers for scores, financial indicators and dashboard outputs."""

from .dashboard import (
    ACTIVITY_FEED_LIMIT,
    ActivityItem,
    DashboardMetrics,
    DashboardSources,
    aggregate_dashboard,
    build_activity_feed,
)
from .finance import (
    NOT_PROFITABLE,
    PedagogicalSummary,
    RentabilityMetrics,
    SectorCost,
    average_annual_profit,
    breakeven_label,
    breakeven_years,
    compare_scenarios,
    compute_rentability,
    margin_status,
    pedagogical_cost_rows,
    return_on_investment,
    sector_cost,
    summarize_pedagogical_costs,
    total_sector_costs,
)
from .scoring import (
    QuestionnaireReport,
    ScoreTier,
    questionnaire_assessment,
    questionnaire_report,
    questionnaire_score,
    score_location,
    territorial_score,
    territory_tier,
)
from .trackers import (
    PartnershipStats,
    SubsidyStats,
    TrainingStats,
    group_modules_by_month,
    partnership_stats,
    subsidy_stats,
    training_stats,
)

__all__ = [
    "ACTIVITY_FEED_LIMIT",
    "ActivityItem",
    "DashboardMetrics",
    "DashboardSources",
    "NOT_PROFITABLE",
    "PartnershipStats",
    "PedagogicalSummary",
    "QuestionnaireReport",
    "RentabilityMetrics",
    "ScoreTier",
    "SectorCost",
    "SubsidyStats",
    "TrainingStats",
    "aggregate_dashboard",
    "average_annual_profit",
    "breakeven_label",
    "breakeven_years",
    "build_activity_feed",
    "compare_scenarios",
    "compute_rentability",
    "group_modules_by_month",
    "margin_status",
    "partnership_stats",
    "pedagogical_cost_rows",
    "questionnaire_assessment",
    "questionnaire_report",
    "questionnaire_score",
    "return_on_investment",
    "score_location",
    "sector_cost",
    "subsidy_stats",
    "summarize_pedagogical_costs",
    "territorial_score",
    "territory_tier",
    "total_sector_costs",
    "training_stats",
]
