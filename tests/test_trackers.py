from datetime import date
from decimal import Decimal
import unittest

from calc import group_modules_by_month, partnership_stats, subsidy_stats, training_stats
from models import (
    ModuleStatus,
    Partnership,
    PartnershipStatus,
    SubsidyApplication,
    SubsidyStatus,
    TrainingModule,
)


def _module(title: str, start: date, status: ModuleStatus = ModuleStatus.PLANNED, **extra) -> TrainingModule:
    return TrainingModule(title=title, sector="Bâtiment", start_date=start, status=status, **extra)


class TrackerStatsTests(unittest.TestCase):
    def test_partnership_stats(self) -> None:
        partnerships = [
            Partnership(company_name="Acme", contact_person="A. Martin", status=PartnershipStatus.ACTIF, students=4),
            Partnership(company_name="Béton SA", contact_person="B. Durand", students="2"),
            Partnership(company_name="Ciel", contact_person="C. Petit", status="negociation"),
        ]
        stats = partnership_stats(partnerships)
        self.assertEqual(stats.total, 3)
        self.assertEqual(stats.active, 1)
        self.assertEqual(stats.prospects, 1)
        self.assertEqual(stats.total_students, 6)

    def test_subsidy_stats(self) -> None:
        applications = [
            SubsidyApplication(funding_body="Région", project_title="EDP", amount="50000"),
            SubsidyApplication(
                funding_body="OPCO", project_title="EDP", amount="12500,50", status=SubsidyStatus.SUBMITTED
            ),
            SubsidyApplication(funding_body="État", project_title="EDP", amount="1000", status="approved"),
        ]
        stats = subsidy_stats(applications)
        self.assertEqual(stats.total, 3)
        self.assertEqual(stats.submitted, 1)
        self.assertEqual(stats.approved, 1)
        self.assertEqual(stats.total_amount, Decimal("63500.50"))

    def test_training_stats(self) -> None:
        modules = [
            _module("Maçonnerie", date(2025, 1, 6), ModuleStatus.COMPLETED, duration=40, students=12),
            _module("Coffrage", date(2025, 2, 3), ModuleStatus.IN_PROGRESS, duration=35, students=10),
            _module("Sécurité", date(2025, 3, 3), duration=7),
        ]
        stats = training_stats(modules)
        self.assertEqual(stats.total, 3)
        self.assertEqual(stats.completed, 1)
        self.assertEqual(stats.in_progress, 1)
        self.assertEqual(stats.total_hours, 82)
        self.assertEqual(stats.total_students, 22)

    def test_empty_trackers(self) -> None:
        self.assertEqual(partnership_stats([]).total, 0)
        self.assertEqual(subsidy_stats([]).total_amount, Decimal("0"))
        self.assertEqual(training_stats([]).total_hours, 0)


class CalendarTests(unittest.TestCase):
    def test_modules_grouped_by_month_in_chronological_order(self) -> None:
        modules = [
            _module("Mars", date(2025, 3, 10)),
            _module("Décembre", date(2024, 12, 2)),
            _module("Mars bis", date(2025, 3, 1)),
        ]
        grouped = group_modules_by_month(modules)
        self.assertEqual(list(grouped), ["décembre 2024", "mars 2025"])
        self.assertEqual([module.title for module in grouped["mars 2025"]], ["Mars bis", "Mars"])

    def test_invalid_enum_values_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Partnership(company_name="Acme", contact_person="A", status="inconnu")
