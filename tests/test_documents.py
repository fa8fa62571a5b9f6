from __future__ import annotations

import io
import unittest

from docx import Document
from openpyxl import load_workbook

from models import (
    DEFAULT_BUSINESS_PLAN,
    QUESTION_COUNT,
    Answer,
    PedagogicalCostData,
    PedagogicalSector,
    QuestionnaireState,
    StatutesData,
    SubsidyApplication,
)
from services.documents import (
    TEMPLATE_SHEETS,
    blank_template_workbook,
    business_plan_pdf,
    pedagogical_costs_excel,
    questionnaire_pdf,
    render_statutes,
    spreadsheet_template_bytes,
    statutes_docx,
    statutes_filename,
    subsidy_pdf,
)


class StatutesTests(unittest.TestCase):
    def test_blank_form_uses_placeholders(self) -> None:
        text = render_statutes(StatutesData())
        self.assertIn("[NOM DE L'ASSOCIATION]", text)
        self.assertIn("[NOM DU PRÉSIDENT]", text)
        self.assertIn("Fait à [VILLE]", text)
        self.assertIn("durée de l'association est de 99 années", text)
        self.assertIn("fixé annuellement par l'assemblée générale", text)

    def test_filled_form(self) -> None:
        data = StatutesData(
            association_name="École de Production de Lyon",
            president_name="Marie Curie",
            secretary_name="Jean Moulin",
            registered_office="Lyon, 12 rue des Ateliers",
            purpose="Former des jeunes par la production",
            duration_years="50",
            membership_fee="30",
        )
        text = render_statutes(data)
        self.assertIn("École de Production de Lyon", text)
        self.assertIn("Un(e) président(e) : Marie Curie", text)
        self.assertIn("Fait à Lyon, le [DATE]", text)
        self.assertIn("La cotisation annuelle est fixée à 30 euros.", text)
        self.assertIn("de 50 années", text)
        self.assertNotIn("[NOM", text)

    def test_filename(self) -> None:
        self.assertEqual(statutes_filename(StatutesData(association_name="EDP Lyon")), "Statuts_EDP_Lyon.txt")
        self.assertEqual(statutes_filename(StatutesData()), "Statuts_association.txt")


class PdfTests(unittest.TestCase):
    def test_questionnaire_pdf(self) -> None:
        state = QuestionnaireState(
            answers=[Answer.NON] + [Answer.OUI] * (QUESTION_COUNT - 1), is_started=True, is_completed=True
        )
        self.assertTrue(questionnaire_pdf(state).startswith(b"%PDF"))

    def test_business_plan_pdf(self) -> None:
        plan = DEFAULT_BUSINESS_PLAN.model_copy(update={"project_name": "EDP <Lyon> & co"})
        self.assertTrue(business_plan_pdf(plan).startswith(b"%PDF"))

    def test_subsidy_pdf(self) -> None:
        application = SubsidyApplication(
            funding_body="Région",
            project_title="Ouverture",
            amount="45000",
            sectors=["Bâtiment", "Industrie"],
            objectives="Former 24 jeunes",
        )
        self.assertTrue(subsidy_pdf(application).startswith(b"%PDF"))


class SpreadsheetTests(unittest.TestCase):
    def test_blank_template_has_one_sheet_per_tool(self) -> None:
        workbook = load_workbook(io.BytesIO(blank_template_workbook()))
        self.assertEqual(workbook.sheetnames, list(TEMPLATE_SHEETS))
        headers = [cell.value for cell in workbook["Plan comptable"][1]]
        self.assertEqual(headers, TEMPLATE_SHEETS["Plan comptable"])

    def test_missing_template_falls_back_to_blank_workbook(self) -> None:
        content = spreadsheet_template_bytes("does/not/exist.xlsx")
        workbook = load_workbook(io.BytesIO(content))
        self.assertEqual(len(workbook.sheetnames), 3)

    def test_pedagogical_costs_export(self) -> None:
        data = PedagogicalCostData(
            sectors=[PedagogicalSector(name="Restauration", students=8, hours=1100, equipment="12000")]
        )
        workbook = load_workbook(io.BytesIO(pedagogical_costs_excel(data)))
        self.assertEqual(workbook.sheetnames, ["Filières", "Synthèse"])
        self.assertEqual(workbook["Filières"]["A2"].value, "Restauration")
        self.assertEqual(workbook["Synthèse"]["B4"].value, 8)


class StatutesWordTests(unittest.TestCase):
    def test_one_heading_per_article(self) -> None:
        document = Document(io.BytesIO(statutes_docx(StatutesData(association_name="EDP Lyon"))))
        headings = [paragraph.text for paragraph in document.paragraphs if paragraph.style.name.startswith("Heading")]
        self.assertEqual(headings[0], "STATUTS DE L'ASSOCIATION")
        self.assertEqual(sum(1 for heading in headings if heading.startswith("ARTICLE ")), 16)
        self.assertIn("EDP Lyon", [paragraph.text for paragraph in document.paragraphs])

    def test_word_filename(self) -> None:
        self.assertEqual(
            statutes_filename(StatutesData(association_name="EDP Lyon"), extension="docx"), "Statuts_EDP_Lyon.docx"
        )
