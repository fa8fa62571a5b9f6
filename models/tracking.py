"""Partnership, subsidy and training records with their status enums."""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from .common import (
    RecordModel,
    coerce_amount,
    coerce_count,
    coerce_optional_date,
    coerce_text_list,
)


class PartnershipType(str, Enum):
    STAGE = "stage"
    APPRENTISSAGE = "apprentissage"
    EQUIPEMENT = "equipement"
    FINANCEMENT = "financement"
    AUTRE = "autre"


class PartnershipStatus(str, Enum):
    PROSPECT = "prospect"
    CONTACT = "contact"
    NEGOCIATION = "negociation"
    ACTIF = "actif"
    SUSPENDU = "suspendu"


PARTNERSHIP_TYPE_LABELS: Dict[PartnershipType, str] = {
    PartnershipType.STAGE: "Stages",
    PartnershipType.APPRENTISSAGE: "Apprentissage",
    PartnershipType.EQUIPEMENT: "Équipements",
    PartnershipType.FINANCEMENT: "Financement",
    PartnershipType.AUTRE: "Autre",
}

PARTNERSHIP_STATUS_LABELS: Dict[PartnershipStatus, str] = {
    PartnershipStatus.PROSPECT: "Prospect",
    PartnershipStatus.CONTACT: "Premier contact",
    PartnershipStatus.NEGOCIATION: "En négociation",
    PartnershipStatus.ACTIF: "Partenariat actif",
    PartnershipStatus.SUSPENDU: "Suspendu",
}


class Partnership(RecordModel):
    """Relationship with a company hosting or supporting students."""

    company_name: str = Field(min_length=1)
    contact_person: str = Field(min_length=1)
    email: str = ""
    phone: str = ""
    sector: str = ""
    location: str = ""
    partnership_type: PartnershipType = PartnershipType.STAGE
    status: PartnershipStatus = PartnershipStatus.PROSPECT
    students: int = 0
    notes: str = ""
    last_contact: date | None = None
    next_action: str = ""

    @field_validator("students", mode="before")
    @classmethod
    def _coerce_count(cls, value: object) -> int:
        return coerce_count(value)

    @field_validator("last_contact", mode="before")
    @classmethod
    def _coerce_date(cls, value: object) -> object:
        return coerce_optional_date(value)


class SubsidyStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


SUBSIDY_STATUS_LABELS: Dict[SubsidyStatus, str] = {
    SubsidyStatus.DRAFT: "Brouillon",
    SubsidyStatus.SUBMITTED: "Soumis",
    SubsidyStatus.APPROVED: "Approuvé",
    SubsidyStatus.REJECTED: "Rejeté",
}

FUNDING_BODIES: Dict[str, tuple[str, ...]] = {
    "Région": ("Aide à la création", "Fonds formation", "Développement économique"),
    "État": ("Plan de relance", "France 2030", "Fonds social européen"),
    "Europe": ("FSE+", "FEDER", "Erasmus+"),
    "Pôle Emploi": ("Action de formation", "POEI", "AFPR"),
    "OPCO": ("Plan de développement", "Reconversion", "Alternance"),
    "Fondations": ("Fondation de France", "Fondation Total", "Autres fondations"),
}


class SubsidyBudget(BaseModel):
    personnel: Decimal = Decimal("0")
    equipment: Decimal = Decimal("0")
    operations: Decimal = Decimal("0")
    other: Decimal = Decimal("0")

    @field_validator("personnel", "equipment", "operations", "other", mode="before")
    @classmethod
    def _coerce_amount(cls, value: object) -> Decimal:
        return coerce_amount(value)

    def total(self) -> Decimal:
        return self.personnel + self.equipment + self.operations + self.other


class SubsidyApplication(RecordModel):
    """Funding application file prepared for a public or private body."""

    funding_body: str = Field(min_length=1)
    program_name: str = ""
    amount: Decimal = Field(gt=Decimal("0"))
    project_title: str = Field(min_length=1)
    project_description: str = ""
    organization_name: str = ""
    siret_number: str = ""
    contact_person: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    target_audience: str = ""
    expected_students: int = 0
    sectors: List[str] = Field(default_factory=list)
    project_duration: int = 12
    start_date: date | None = None
    objectives: str = ""
    methodology: str = ""
    partner_organizations: str = ""
    budget: SubsidyBudget = Field(default_factory=SubsidyBudget)
    expected_outcomes: str = ""
    evaluation_criteria: str = ""
    sustainability: str = ""
    innovation: str = ""
    social_impact: str = ""
    status: SubsidyStatus = SubsidyStatus.DRAFT
    submission_date: date | None = None
    response_date: date | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: object) -> Decimal:
        return coerce_amount(value)

    @field_validator("expected_students", mode="before")
    @classmethod
    def _coerce_count(cls, value: object) -> int:
        return coerce_count(value)

    @field_validator("project_duration", mode="before")
    @classmethod
    def _coerce_duration(cls, value: object) -> int:
        return coerce_count(value) or 12

    @field_validator("sectors", mode="before")
    @classmethod
    def _coerce_sectors(cls, value: object) -> List[str]:
        return coerce_text_list(value)

    @field_validator("start_date", "submission_date", "response_date", mode="before")
    @classmethod
    def _coerce_date(cls, value: object) -> object:
        return coerce_optional_date(value)


class ModuleStatus(str, Enum):
    PLANNED = "planned"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


MODULE_STATUS_LABELS: Dict[ModuleStatus, str] = {
    ModuleStatus.PLANNED: "Planifié",
    ModuleStatus.IN_PROGRESS: "En cours",
    ModuleStatus.COMPLETED: "Terminé",
    ModuleStatus.CANCELLED: "Annulé",
}

TRAINING_SECTORS: tuple[str, ...] = (
    "Bâtiment",
    "Industrie",
    "Services",
    "Restauration",
    "Automobile",
    "Électricité",
    "Plomberie",
    "Informatique",
    "Commerce",
    "Logistique",
)

CERTIFICATION_TYPES: tuple[str, ...] = (
    "CAP",
    "BAC Pro",
    "BTS",
    "Titre professionnel",
    "Certification interne",
    "Autre",
)


class TrainingModule(RecordModel):
    """A scheduled training module of the annual pedagogical plan."""

    title: str = Field(min_length=1)
    sector: str = Field(min_length=1)
    duration: int = 0
    start_date: date
    end_date: date | None = None
    instructor: str = ""
    students: int = 0
    objectives: str = ""
    skills: List[str] = Field(default_factory=list)
    certification: str = ""
    status: ModuleStatus = ModuleStatus.PLANNED
    prerequisites: str = ""
    resources: str = ""

    @field_validator("duration", "students", mode="before")
    @classmethod
    def _coerce_count(cls, value: object) -> int:
        return coerce_count(value)

    @field_validator("start_date", mode="before")
    @classmethod
    def _coerce_start(cls, value: object) -> object:
        return coerce_optional_date(value)

    @field_validator("end_date", mode="before")
    @classmethod
    def _coerce_end(cls, value: object) -> object:
        return coerce_optional_date(value)

    @field_validator("skills", mode="before")
    @classmethod
    def _coerce_skills(cls, value: object) -> List[str]:
        return coerce_text_list(value)


class TrainingPlan(BaseModel):
    modules: List[TrainingModule] = Field(default_factory=list)
    academic_year: str = "2024-2025"
