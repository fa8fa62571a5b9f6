"""Validation helpers for user supplied form inputs."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from models import (
    STATUTES_REQUIRED_FIELDS,
    LocationAnalysis,
    Partnership,
    PedagogicalSector,
    StatutesData,
    SubsidyApplication,
    TrainingModule,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

FIELD_LABELS: Dict[str, str] = {
    "city_name": "Ville",
    "region": "Région",
    "company_name": "Nom de l'entreprise",
    "contact_person": "Personne de contact",
    "project_title": "Titre du projet",
    "funding_body": "Organisme financeur",
    "amount": "Montant demandé",
    "title": "Titre du module",
    "sector": "Filière",
    "start_date": "Date de début",
    "name": "Nom de la filière",
    "students": "Nombre d'étudiants",
    "username": "Nom d'utilisateur",
    "password": "Mot de passe",
    **STATUTES_REQUIRED_FIELDS,
}

_REQUIRED_ERROR_TYPES = {"missing", "string_too_short", "date_type", "none_required"}


@dataclass(frozen=True)
class ValidationIssue:
    """Represents a validation error for a specific field."""

    field: str
    message: str


def _message(field: str, detail: Mapping[str, Any]) -> str:
    label = FIELD_LABELS.get(field, field)
    error_type = detail.get("type", "")
    if error_type in _REQUIRED_ERROR_TYPES:
        return f"{label} est obligatoire."
    if error_type == "greater_than":
        limit = (detail.get("ctx") or {}).get("gt", 0)
        return f"{label} doit être supérieur à {limit}."
    return f"{label} : valeur invalide."


def _issues_from_error(error: ValidationError) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for detail in error.errors():
        path = ".".join(str(part) for part in detail.get("loc", ()))
        issues.append(ValidationIssue(field=path, message=_message(path, detail)))
    return issues


def _validate(model: Type[ModelT], data: Mapping[str, Any]) -> Tuple[ModelT | None, List[ValidationIssue]]:
    try:
        return model.model_validate(dict(data)), []
    except ValidationError as exc:
        return None, _issues_from_error(exc)


def validate_location(data: Mapping[str, Any]) -> Tuple[LocationAnalysis | None, List[ValidationIssue]]:
    return _validate(LocationAnalysis, data)


def validate_partnership(data: Mapping[str, Any]) -> Tuple[Partnership | None, List[ValidationIssue]]:
    return _validate(Partnership, data)


def validate_subsidy(data: Mapping[str, Any]) -> Tuple[SubsidyApplication | None, List[ValidationIssue]]:
    return _validate(SubsidyApplication, data)


def validate_training_module(data: Mapping[str, Any]) -> Tuple[TrainingModule | None, List[ValidationIssue]]:
    return _validate(TrainingModule, data)


def validate_sector(data: Mapping[str, Any]) -> Tuple[PedagogicalSector | None, List[ValidationIssue]]:
    return _validate(PedagogicalSector, data)


def validate_statutes(data: StatutesData) -> List[ValidationIssue]:
    """Fields that must be filled before the statutes can be downloaded."""

    return [
        ValidationIssue(field=field, message=f"{FIELD_LABELS[field]} est obligatoire.")
        for field in data.missing_required()
    ]


def validate_login(username: str, password: str) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    if not username.strip():
        issues.append(ValidationIssue("username", f"{FIELD_LABELS['username']} est obligatoire."))
    if not password:
        issues.append(ValidationIssue("password", f"{FIELD_LABELS['password']} est obligatoire."))
    return issues


def collect_error_messages(issues: Iterable[ValidationIssue]) -> str:
    return "\n".join(issue.message for issue in issues)


__all__ = [
    "FIELD_LABELS",
    "ValidationIssue",
    "collect_error_messages",
    "validate_location",
    "validate_login",
    "validate_partnership",
    "validate_sector",
    "validate_statutes",
    "validate_subsidy",
    "validate_training_module",
]
