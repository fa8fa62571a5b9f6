from datetime import date
import unittest

from models import StatutesData
from services.security import safe_filename
from validators import (
    collect_error_messages,
    validate_location,
    validate_login,
    validate_partnership,
    validate_sector,
    validate_statutes,
    validate_subsidy,
    validate_training_module,
)


class RecordValidationTests(unittest.TestCase):
    def test_location_requires_city_and_region(self) -> None:
        record, issues = validate_location({"city_name": "", "region": "Bretagne"})
        self.assertIsNone(record)
        self.assertEqual([issue.message for issue in issues], ["Ville est obligatoire."])

    def test_valid_location(self) -> None:
        record, issues = validate_location(
            {"city_name": "Rennes", "region": "Bretagne", "strengths": "Réseau\nTransports"}
        )
        self.assertEqual(issues, [])
        self.assertEqual(record.strengths, ["Réseau", "Transports"])

    def test_partnership_messages(self) -> None:
        _, issues = validate_partnership({"company_name": " ", "contact_person": ""})
        self.assertEqual(
            collect_error_messages(issues),
            "Nom de l'entreprise est obligatoire.\nPersonne de contact est obligatoire.",
        )

    def test_subsidy_amount_must_be_positive(self) -> None:
        _, issues = validate_subsidy({"funding_body": "Région", "project_title": "EDP", "amount": "0"})
        self.assertEqual([issue.field for issue in issues], ["amount"])
        self.assertEqual(issues[0].message, "Montant demandé doit être supérieur à 0.")

    def test_training_module_requires_start_date(self) -> None:
        _, issues = validate_training_module({"title": "Soudure", "sector": "Industrie", "start_date": None})
        self.assertEqual([issue.message for issue in issues], ["Date de début est obligatoire."])

        record, issues = validate_training_module(
            {"title": "Soudure", "sector": "Industrie", "start_date": date(2025, 9, 1), "skills": "TIG; MIG"}
        )
        self.assertEqual(issues, [])
        self.assertEqual(record.skills, ["TIG", "MIG"])

    def test_sector_requires_students(self) -> None:
        _, issues = validate_sector({"name": "Bâtiment", "students": 0})
        self.assertEqual(issues[0].message, "Nombre d'étudiants doit être supérieur à 0.")


class FormValidationTests(unittest.TestCase):
    def test_statutes_required_fields(self) -> None:
        issues = validate_statutes(StatutesData(association_name="EDP", registered_office="Lyon"))
        self.assertEqual([issue.field for issue in issues], ["president_name", "secretary_name"])
        self.assertEqual(issues[0].message, "Président(e) est obligatoire.")

    def test_complete_statutes(self) -> None:
        data = StatutesData(
            association_name="EDP",
            president_name="A",
            secretary_name="B",
            registered_office="Lyon",
        )
        self.assertEqual(validate_statutes(data), [])

    def test_login(self) -> None:
        self.assertEqual(validate_login("admin", "password"), [])
        self.assertEqual(
            [issue.field for issue in validate_login("  ", "")],
            ["username", "password"],
        )


class SafeFilenameTests(unittest.TestCase):
    def test_non_ascii_characters_are_replaced(self) -> None:
        self.assertEqual(safe_filename("Dossier Région été"), "Dossier_R_gion__t")

    def test_empty_name_uses_default(self) -> None:
        self.assertEqual(safe_filename("  ** "), "export")
        self.assertEqual(safe_filename("", default="dossier"), "dossier")
