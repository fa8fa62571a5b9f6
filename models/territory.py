"""Territorial (geographic) analysis records."""
from __future__ import annotations

from datetime import date
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from formatting import to_int

from .common import RecordModel, coerce_text_list

CRITERIA_LABELS: Dict[str, str] = {
    "population": "Bassin de population",
    "unemployment_rate": "Taux de chômage des jeunes",
    "average_income": "Niveau de revenus",
    "industrial_presence": "Tissu industriel",
    "transport_access": "Accessibilité transports",
    "education_level": "Offre éducative",
    "competition_level": "Concurrence formations",
    "local_support": "Soutien des collectivités",
}

TARGET_SECTORS: tuple[str, ...] = (
    "Bâtiment",
    "Industrie manufacturière",
    "Automobile",
    "Aéronautique",
    "Électronique",
    "Agroalimentaire",
    "Logistique",
    "Services",
    "Numérique",
    "Artisanat",
)

SWOT_FIELDS: Dict[str, str] = {
    "strengths": "Forces",
    "weaknesses": "Faiblesses",
    "opportunities": "Opportunités",
    "threats": "Menaces",
}


class LocationCriteria(BaseModel):
    """Eight territorial criteria, each rated from 0 to 100."""

    population: int = 50
    unemployment_rate: int = 50
    average_income: int = 50
    industrial_presence: int = 50
    transport_access: int = 50
    education_level: int = 50
    competition_level: int = 50
    local_support: int = 50

    @field_validator(*CRITERIA_LABELS.keys(), mode="before")
    @classmethod
    def _clamp_rating(cls, value: object) -> int:
        return min(100, max(0, to_int(value)))


class LocationAnalysis(RecordModel):
    """A named territory with its criteria, SWOT lists and derived score."""

    city_name: str = Field(min_length=1)
    region: str = Field(min_length=1)
    postal_code: str = ""
    target_sectors: List[str] = Field(default_factory=list)
    criteria: LocationCriteria = Field(default_factory=LocationCriteria)
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    opportunities: List[str] = Field(default_factory=list)
    threats: List[str] = Field(default_factory=list)
    overall_score: int = 0
    recommendation: str = ""
    notes: str = ""
    analyzed_date: date = Field(default_factory=date.today)

    @field_validator("target_sectors", *SWOT_FIELDS.keys(), mode="before")
    @classmethod
    def _coerce_lists(cls, value: object) -> List[str]:
        return coerce_text_list(value)
