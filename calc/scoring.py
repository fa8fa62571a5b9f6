"""Weighted scoring of territories and of the self-assessment questionnaire."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Sequence

from formatting import round_half_up
from models import QUESTION_COUNT, Answer, LocationAnalysis, LocationCriteria

# Sum of weights is 1, so a score stays within [0, 100] for ratings in [0, 100].
TERRITORY_WEIGHTS: Dict[str, Decimal] = {
    "population": Decimal("0.15"),
    "unemployment_rate": Decimal("0.20"),
    "average_income": Decimal("0.10"),
    "industrial_presence": Decimal("0.20"),
    "transport_access": Decimal("0.15"),
    "education_level": Decimal("0.05"),
    "competition_level": Decimal("0.10"),
    "local_support": Decimal("0.05"),
}

# Criteria where a low rating is favourable to the school.
INVERTED_CRITERIA = frozenset({"competition_level"})


@dataclass(frozen=True)
class ScoreTier:
    threshold: int
    label: str
    recommendation: str
    tone: str


TERRITORY_TIERS: tuple[ScoreTier, ...] = (
    ScoreTier(
        80,
        "Excellent",
        "Localisation très favorable. Conditions optimales pour l'implantation d'une école de production.",
        "positive",
    ),
    ScoreTier(
        60,
        "Bon",
        "Localisation favorable. Quelques points d'attention à surveiller mais contexte propice.",
        "neutral",
    ),
    ScoreTier(
        40,
        "Moyen",
        "Localisation moyenne. Nécessite des actions spécifiques pour compenser les faiblesses identifiées.",
        "caution",
    ),
    ScoreTier(
        0,
        "Faible",
        "Localisation peu favorable. Recommandation d'étudier d'autres territoires ou de revoir le projet.",
        "negative",
    ),
)

QUESTIONNAIRE_TIERS: tuple[tuple[int, str], ...] = (
    (90, "Excellent - Projet très mature"),
    (75, "Bon - Quelques ajustements nécessaires"),
    (60, "Moyen - Préparation à renforcer"),
    (0, "Insuffisant - Projet à retravailler"),
)


def territorial_score(criteria: LocationCriteria) -> int:
    """Return the weighted attractiveness score, rounded half-up to an integer."""

    total = Decimal("0")
    for field, weight in TERRITORY_WEIGHTS.items():
        rating = Decimal(getattr(criteria, field))
        if field in INVERTED_CRITERIA:
            rating = Decimal("100") - rating
        total += rating * weight
    return int(round_half_up(total))


def territory_tier(score: int) -> ScoreTier:
    for tier in TERRITORY_TIERS:
        if score >= tier.threshold:
            return tier
    return TERRITORY_TIERS[-1]


def score_location(analysis: LocationAnalysis) -> LocationAnalysis:
    """Return a copy of *analysis* with score and recommendation derived from its criteria."""

    score = territorial_score(analysis.criteria)
    tier = territory_tier(score)
    return analysis.model_copy(update={"overall_score": score, "recommendation": tier.recommendation})


@dataclass(frozen=True)
class QuestionnaireReport:
    score: Decimal
    assessment: str
    no_count: int


def questionnaire_score(answers: Sequence[Answer | str | None]) -> Decimal:
    """Percentage of questions not answered ``NON`` (unanswered questions count as passed)."""

    no_count = sum(1 for answer in answers if answer == Answer.NON)
    no_count = min(no_count, QUESTION_COUNT)
    return Decimal(QUESTION_COUNT - no_count) / Decimal(QUESTION_COUNT) * Decimal("100")


def questionnaire_assessment(score: Decimal) -> str:
    for threshold, label in QUESTIONNAIRE_TIERS:
        if score >= threshold:
            return label
    return QUESTIONNAIRE_TIERS[-1][1]


def questionnaire_report(answers: Sequence[Answer | str | None]) -> QuestionnaireReport:
    score = questionnaire_score(answers)
    no_count = sum(1 for answer in answers if answer == Answer.NON)
    return QuestionnaireReport(score=score, assessment=questionnaire_assessment(score), no_count=no_count)


__all__ = [
    "INVERTED_CRITERIA",
    "QUESTIONNAIRE_TIERS",
    "QuestionnaireReport",
    "ScoreTier",
    "TERRITORY_TIERS",
    "TERRITORY_WEIGHTS",
    "questionnaire_assessment",
    "questionnaire_report",
    "questionnaire_score",
    "score_location",
    "territorial_score",
    "territory_tier",
]
