"""Self-assessment questionnaire content and persisted progress."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator


class Answer(str, Enum):
    OUI = "OUI"
    NON = "NON"


@dataclass(frozen=True)
class Question:
    text: str
    advice: str


QUESTIONS: tuple[Question, ...] = (
    Question(
        "Ai-je une motivation forte et pérenne pour porter ce projet dans la durée ?",
        "Réinterroger ses motivations et clarifier sa vision long terme",
    ),
    Question(
        "Est-ce que j'adhère pleinement aux valeurs du modèle EDP ?",
        "Acquérir de l'expérience ou se former aux valeurs EDP",
    ),
    Question(
        "Ai-je des compétences ou une expérience dans les domaines clés ?",
        "Se doter d'un collègue ou équipier en renfort",
    ),
    Question(
        "Suis-je prêt à gérer les difficultés du quotidien avec résilience ?",
        "Travailler sa résilience et ses capacités d'adaptation",
    ),
    Question(
        "Ai-je une capacité à fédérer autour d'un projet ?",
        "Construire une équipe complémentaire et développer son leadership",
    ),
    Question(
        "Ai-je une posture humaine adaptée à des jeunes en fragilité ?",
        "Développer sa posture éducative et ses compétences relationnelles",
    ),
    Question(
        "Suis-je disponible concrètement pour ce projet ?",
        "Revoir sa disponibilité personnelle et professionnelle",
    ),
    Question(
        "Ai-je formalisé une association ou structure juridique ?",
        "Sécuriser le cadre juridique et administratif",
    ),
    Question(
        "Ai-je identifié un ou plusieurs maîtres professionnels potentiels ?",
        "Chercher des référents métiers dans le tissu économique local",
    ),
    Question(
        "Ai-je défini un modèle économique soutenable ?",
        "Affiner le plan de financement initial et les prévisions",
    ),
    Question(
        "Le territoire choisi présente-t-il des opportunités économiques ?",
        "Approfondir l'étude de marché territoriale",
    ),
    Question(
        "Ai-je identifié les filières porteuses localement ?",
        "Analyser les besoins en compétences du territoire",
    ),
    Question(
        "Existe-t-il une demande avérée pour ce type de formation ?",
        "Réaliser une enquête de besoins plus poussée",
    ),
    Question(
        "Ai-je noué des partenariats avec des entreprises locales ?",
        "Développer un réseau d'entreprises partenaires",
    ),
    Question(
        "Les locaux envisagés sont-ils adaptés et conformes ?",
        "Vérifier la conformité réglementaire des locaux",
    ),
    Question(
        "Ai-je prévu un financement pour les 3 premières années ?",
        "Sécuriser le financement pluriannuel",
    ),
    Question(
        "L'équipe pédagogique est-elle constituée ?",
        "Recruter et former l'équipe pédagogique",
    ),
    Question(
        "Ai-je défini un plan de communication et de recrutement ?",
        "Élaborer une stratégie de communication ciblée",
    ),
    Question(
        "Les outils de pilotage sont-ils en place ?",
        "Mettre en place un système de suivi et d'indicateurs",
    ),
    Question(
        "Ai-je préparé l'ouverture et les premiers mois de fonctionnement ?",
        "Planifier la phase de démarrage opérationnel",
    ),
)

QUESTION_COUNT = len(QUESTIONS)

# Index of the first question of each part of the questionnaire.
SECTION_HEADINGS: dict[int, str] = {
    0: "🧠 Volet 1 – Capacités personnelles du porteur de projet",
    10: "🔧 Volet 2 – Maturité du projet d'École de Production",
}


class QuestionnaireState(BaseModel):
    """Progress through the questionnaire; ``answers`` is parallel to ``QUESTIONS``."""

    current_index: int = 0
    answers: List[Answer | None] = Field(default_factory=list)
    is_started: bool = False
    is_completed: bool = False

    @field_validator("current_index", mode="before")
    @classmethod
    def _clamp_index(cls, value: object) -> int:
        try:
            index = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 0
        return min(max(index, 0), QUESTION_COUNT - 1)

    @field_validator("answers", mode="before")
    @classmethod
    def _coerce_answers(cls, value: object) -> List[object]:
        if not isinstance(value, (list, tuple)):
            return []
        cleaned: List[object] = []
        for item in list(value)[:QUESTION_COUNT]:
            cleaned.append(item if item in (Answer.OUI, Answer.NON, "OUI", "NON") else None)
        return cleaned

    def no_count(self) -> int:
        return sum(1 for answer in self.answers if answer == Answer.NON)
