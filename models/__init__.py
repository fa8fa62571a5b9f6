"""Model package exports."""

from .common import RecordModel, new_record_id
from .documents import STATUTES_REQUIRED_FIELDS, StatutesData
from .finance import (
    DEFAULT_BUSINESS_PLAN,
    DEFAULT_PEDAGOGICAL_COSTS,
    DEFAULT_RENTABILITY_INPUTS,
    PROJECTION_YEARS,
    SCENARIO_LABELS,
    SECTOR_TEMPLATES,
    BudgetInputs,
    BusinessPlan,
    FinancialProjections,
    PedagogicalCostData,
    PedagogicalSector,
    RentabilityInputs,
    Scenario,
    YearProjection,
)
from .questionnaire import (
    QUESTION_COUNT,
    QUESTIONS,
    SECTION_HEADINGS,
    Answer,
    Question,
    QuestionnaireState,
)
from .territory import (
    CRITERIA_LABELS,
    SWOT_FIELDS,
    TARGET_SECTORS,
    LocationAnalysis,
    LocationCriteria,
)
from .tracking import (
    CERTIFICATION_TYPES,
    FUNDING_BODIES,
    MODULE_STATUS_LABELS,
    PARTNERSHIP_STATUS_LABELS,
    PARTNERSHIP_TYPE_LABELS,
    SUBSIDY_STATUS_LABELS,
    TRAINING_SECTORS,
    ModuleStatus,
    Partnership,
    PartnershipStatus,
    PartnershipType,
    SubsidyApplication,
    SubsidyBudget,
    SubsidyStatus,
    TrainingModule,
    TrainingPlan,
)

__all__ = [
    "Answer",
    "BudgetInputs",
    "BusinessPlan",
    "CERTIFICATION_TYPES",
    "CRITERIA_LABELS",
    "DEFAULT_BUSINESS_PLAN",
    "DEFAULT_PEDAGOGICAL_COSTS",
    "DEFAULT_RENTABILITY_INPUTS",
    "FUNDING_BODIES",
    "FinancialProjections",
    "LocationAnalysis",
    "LocationCriteria",
    "MODULE_STATUS_LABELS",
    "ModuleStatus",
    "PARTNERSHIP_STATUS_LABELS",
    "PARTNERSHIP_TYPE_LABELS",
    "PROJECTION_YEARS",
    "Partnership",
    "PartnershipStatus",
    "PartnershipType",
    "PedagogicalCostData",
    "PedagogicalSector",
    "QUESTIONS",
    "QUESTION_COUNT",
    "Question",
    "QuestionnaireState",
    "RecordModel",
    "RentabilityInputs",
    "SCENARIO_LABELS",
    "SECTION_HEADINGS",
    "SECTOR_TEMPLATES",
    "STATUTES_REQUIRED_FIELDS",
    "SUBSIDY_STATUS_LABELS",
    "SWOT_FIELDS",
    "Scenario",
    "StatutesData",
    "SubsidyApplication",
    "SubsidyBudget",
    "SubsidyStatus",
    "TARGET_SECTORS",
    "TRAINING_SECTORS",
    "TrainingModule",
    "TrainingPlan",
    "YearProjection",
    "new_record_id",
]
