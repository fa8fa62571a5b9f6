"""Summary counters for the partnership, subsidy and training trackers."""
from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Sequence

from models import (
    ModuleStatus,
    Partnership,
    PartnershipStatus,
    SubsidyApplication,
    SubsidyStatus,
    TrainingModule,
)

FRENCH_MONTHS = (
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
)


@dataclass(frozen=True)
class PartnershipStats:
    total: int
    active: int
    prospects: int
    total_students: int


@dataclass(frozen=True)
class SubsidyStats:
    total: int
    submitted: int
    approved: int
    total_amount: Decimal


@dataclass(frozen=True)
class TrainingStats:
    total: int
    completed: int
    in_progress: int
    total_hours: int
    total_students: int


def partnership_stats(partnerships: Sequence[Partnership]) -> PartnershipStats:
    return PartnershipStats(
        total=len(partnerships),
        active=sum(1 for p in partnerships if p.status == PartnershipStatus.ACTIF),
        prospects=sum(1 for p in partnerships if p.status == PartnershipStatus.PROSPECT),
        total_students=sum(p.students for p in partnerships),
    )


def subsidy_stats(applications: Sequence[SubsidyApplication]) -> SubsidyStats:
    return SubsidyStats(
        total=len(applications),
        submitted=sum(1 for a in applications if a.status == SubsidyStatus.SUBMITTED),
        approved=sum(1 for a in applications if a.status == SubsidyStatus.APPROVED),
        total_amount=sum((a.amount for a in applications), start=Decimal("0")),
    )


def training_stats(modules: Sequence[TrainingModule]) -> TrainingStats:
    return TrainingStats(
        total=len(modules),
        completed=sum(1 for m in modules if m.status == ModuleStatus.COMPLETED),
        in_progress=sum(1 for m in modules if m.status == ModuleStatus.IN_PROGRESS),
        total_hours=sum(m.duration for m in modules),
        total_students=sum(m.students for m in modules),
    )


def group_modules_by_month(modules: Sequence[TrainingModule]) -> Dict[str, List[TrainingModule]]:
    """Group modules under a ``"<mois> <année>"`` label, in chronological order."""

    ordered = sorted(modules, key=lambda module: module.start_date)
    grouped: Dict[str, List[TrainingModule]] = OrderedDict()
    for module in ordered:
        label = f"{FRENCH_MONTHS[module.start_date.month - 1]} {module.start_date.year}"
        grouped.setdefault(label, []).append(module)
    return grouped


__all__ = [
    "PartnershipStats",
    "SubsidyStats",
    "TrainingStats",
    "group_modules_by_month",
    "partnership_stats",
    "subsidy_stats",
    "training_stats",
]
