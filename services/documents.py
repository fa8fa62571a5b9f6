"""Document generators: association statutes (text and Word), PDF dossiers and spreadsheet exports."""
from __future__ import annotations

import io
import logging
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Sequence
from xml.sax.saxutils import escape

import pandas as pd
from docx import Document
from openpyxl import Workbook
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from calc import (
    breakeven_label,
    pedagogical_cost_rows,
    questionnaire_report,
    return_on_investment,
    summarize_pedagogical_costs,
)
from config import settings
from formatting import format_euro, format_number, format_percent
from models import (
    QUESTIONS,
    SUBSIDY_STATUS_LABELS,
    Answer,
    BusinessPlan,
    PedagogicalCostData,
    QuestionnaireState,
    StatutesData,
    SubsidyApplication,
)
from theme import THEME_COLORS

from .security import safe_filename

logger = logging.getLogger(__name__)

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_FONT_NAME = "Helvetica"
PDF_BOLD_FONT_NAME = "Helvetica-Bold"
TEMPLATE_SHEETS: Dict[str, List[str]] = {
    "Plan comptable": ["Compte", "Libellé", "Débit", "Crédit"],
    "Coefficient TVA": ["Activité", "Assujettissement", "Taxation", "Admission", "Coefficient"],
    "Résultat fiscal": ["Poste", "Montant comptable", "Réintégrations", "Déductions", "Résultat fiscal"],
}

# --- Association statutes -----------------------------------------------------------

STATUTES_TEMPLATE = """
STATUTS DE L'ASSOCIATION
{name}


ARTICLE 1 - DÉNOMINATION
Il est fondé entre les adhérents aux présents statuts une association régie par la loi du 1er juillet 1901 et le décret du 16 août 1901, ayant pour titre :
{name}


ARTICLE 2 - OBJET
Cette association a pour objet :
{purpose}

ARTICLE 3 - SIÈGE SOCIAL
Le siège social est fixé à :
{office}

Il pourra être transféré par simple décision du conseil d'administration.

ARTICLE 4 - DURÉE
La durée de l'association est de {duration} années à compter de sa déclaration en préfecture.

ARTICLE 5 - COMPOSITION
L'association se compose de :
- Membres d'honneur
- Membres actifs ou adhérents
- Membres bienfaiteurs

ARTICLE 6 - ADMISSION
Pour faire partie de l'association, il faut être agréé par le bureau qui statue lors de chacune de ses réunions sur les demandes d'admission présentées.

ARTICLE 7 - MEMBRES - COTISATIONS
{fee_clause}

ARTICLE 8 - RADIATIONS
La qualité de membre se perd par :
- La démission
- Le décès
- La radiation prononcée par le conseil d'administration pour non-paiement des cotisations ou pour motif grave

ARTICLE 9 - RESSOURCES
Les ressources de l'association comprennent :
- Le montant des cotisations
- Les subventions qui pourraient lui être accordées
- Les dons et legs
- Toutes autres ressources autorisées par la loi

ARTICLE 10 - CONSEIL D'ADMINISTRATION
L'association est dirigée par un conseil d'administration de 3 membres minimum élus pour 3 années par l'assemblée générale.

ARTICLE 11 - BUREAU
Le conseil d'administration élit parmi ses membres un bureau composé de :
- Un(e) président(e) : {president}
- Un(e) secrétaire : {secretary}
- Un(e) trésorier(ère)

ARTICLE 12 - RÉUNIONS DU CONSEIL D'ADMINISTRATION
Le conseil d'administration se réunit au moins une fois tous les six mois, sur convocation du président, ou sur la demande du quart de ses membres.

ARTICLE 13 - ASSEMBLÉE GÉNÉRALE ORDINAIRE
L'assemblée générale ordinaire comprend tous les membres de l'association à jour de leurs cotisations.
Elle se réunit chaque année au mois de [MOIS].

ARTICLE 14 - ASSEMBLÉE GÉNÉRALE EXTRAORDINAIRE
Si besoin est, ou sur la demande de la moitié plus un des membres inscrits, le président peut convoquer une assemblée générale extraordinaire.

ARTICLE 15 - RÈGLEMENT INTÉRIEUR
Un règlement intérieur peut être établi par le conseil d'administration, qui le fait alors approuver par l'assemblée générale.

ARTICLE 16 - DISSOLUTION
En cas de dissolution prononcée selon les modalités prévues à l'article 14, un ou plusieurs liquidateurs sont nommés, et l'actif net, s'il y a lieu, est dévolu à un organisme ayant un but non lucratif conformément aux décisions de l'assemblée générale extraordinaire.

Fait à {city}, le [DATE]

Le Président,                          Le Secrétaire,
{president}                    {secretary}

Signature :                           Signature :
"""


def render_statutes(data: StatutesData) -> str:
    """Fill the loi 1901 statutes template, with bracketed placeholders for blanks."""

    president = data.president_name or "[NOM DU PRÉSIDENT]"
    secretary = data.secretary_name or "[NOM DU SECRÉTAIRE]"
    city = data.registered_office.split(",")[0].strip() if data.registered_office else ""
    if data.membership_fee:
        fee_clause = f"La cotisation annuelle est fixée à {data.membership_fee} euros."
    else:
        fee_clause = "Le montant des cotisations est fixé annuellement par l'assemblée générale."
    return STATUTES_TEMPLATE.format(
        name=data.association_name or "[NOM DE L'ASSOCIATION]",
        purpose=data.purpose or "[OBJET DE L'ASSOCIATION]",
        office=data.registered_office or "[ADRESSE DU SIÈGE SOCIAL]",
        duration=data.duration_years or "99",
        fee_clause=fee_clause,
        president=president,
        secretary=secretary,
        city=city or "[VILLE]",
    )


def statutes_filename(data: StatutesData, extension: str = "txt") -> str:
    return f"Statuts_{safe_filename(data.association_name, default='association')}.{extension}"


def statutes_docx(data: StatutesData) -> bytes:
    """Word version of :func:`render_statutes`, one heading per article."""

    doc = Document()
    lines = render_statutes(data).strip().splitlines()
    doc.add_heading(lines[0], level=1)
    for line in lines[1:]:
        if not line.strip():
            continue
        if line.startswith("ARTICLE "):
            doc.add_heading(line, level=2)
        elif line.startswith("- "):
            doc.add_paragraph(line[2:], style="List Bullet")
        else:
            doc.add_paragraph(line)
    buffer = io.BytesIO()
    doc.save(buffer)
    buffer.seek(0)
    return buffer.getvalue()


# --- PDF helpers --------------------------------------------------------------------


def _styles() -> Dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "TitleEDP",
            parent=base["Title"],
            fontName=PDF_BOLD_FONT_NAME,
            fontSize=18,
            leading=22,
            textColor=colors.HexColor(THEME_COLORS["primary"]),
        ),
        "subtitle": ParagraphStyle(
            "SubtitleEDP",
            parent=base["Normal"],
            fontName=PDF_FONT_NAME,
            fontSize=11,
            textColor=colors.HexColor(THEME_COLORS["text_subtle"]),
        ),
        "heading": ParagraphStyle(
            "HeadingEDP",
            parent=base["Heading2"],
            fontName=PDF_BOLD_FONT_NAME,
            textColor=colors.HexColor(THEME_COLORS["primary"]),
        ),
        "body": ParagraphStyle(
            "BodyEDP",
            parent=base["Normal"],
            fontName=PDF_FONT_NAME,
            fontSize=10,
            leading=14,
        ),
        "cell": ParagraphStyle(
            "CellEDP",
            parent=base["Normal"],
            fontName=PDF_FONT_NAME,
            fontSize=9,
            leading=11,
        ),
    }


def _table(rows: Sequence[Sequence[str]], col_widths: Optional[List[float]] = None) -> Table:
    cell_style = _styles()["cell"]
    data = [[Paragraph(escape(str(value)), cell_style) for value in row] for row in rows]
    table = Table(data, colWidths=col_widths, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(THEME_COLORS["surface_alt"])),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor(THEME_COLORS["neutral"])),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.whitesmoke, colors.HexColor(THEME_COLORS["surface"])]),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("LEFTPADDING", (0, 0), (-1, -1), 6),
                ("RIGHTPADDING", (0, 0), (-1, -1), 6),
                ("TOPPADDING", (0, 0), (-1, -1), 4),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
            ]
        )
    )
    return table


def _build_pdf(title: str, subtitle: str, story_sections: Sequence[tuple[str, List]]) -> bytes:
    styles = _styles()
    buffer = io.BytesIO()
    document = SimpleDocTemplate(buffer, pagesize=A4, title=title)
    story: List = [
        Paragraph(escape(title), styles["title"]),
        Paragraph(escape(subtitle), styles["subtitle"]),
        Spacer(1, 18),
    ]
    for heading, flowables in story_sections:
        if not flowables:
            continue
        story.append(Paragraph(escape(heading), styles["heading"]))
        story.append(Spacer(1, 6))
        story.extend(flowables)
        story.append(Spacer(1, 14))
    document.build(story)
    buffer.seek(0)
    return buffer.getvalue()


def _paragraphs(*texts: tuple[str, str]) -> List:
    body = _styles()["body"]
    flowables: List = []
    for label, text in texts:
        if not text:
            continue
        flowables.append(Paragraph(f"<b>{escape(label)}</b> : {escape(text)}", body))
        flowables.append(Spacer(1, 4))
    return flowables


def _generated_on() -> str:
    return f"Document généré le {date.today().strftime('%d/%m/%Y')}"


# --- PDF dossiers -------------------------------------------------------------------


def questionnaire_pdf(state: QuestionnaireState) -> bytes:
    """Self-assessment report: score, assessment and the advice of every NON answer."""

    report = questionnaire_report(state.answers)
    summary = [
        ["Indicateur", "Valeur"],
        ["Score", format_percent(report.score, 0)],
        ["Appréciation", report.assessment],
        ["Réponses NON", str(report.no_count)],
    ]
    rows = [["N°", "Question", "Réponse", "Conseil"]]
    for index, question in enumerate(QUESTIONS):
        answer = state.answers[index] if index < len(state.answers) else None
        rows.append(
            [
                str(index + 1),
                question.text,
                answer.value if answer else "—",
                question.advice if answer == Answer.NON else "",
            ]
        )
    pdf = _build_pdf(
        "Questionnaire d'auto-évaluation",
        _generated_on(),
        [
            ("Synthèse", [_table(summary, [200, 260])]),
            ("Détail des réponses", [_table(rows, [30, 220, 55, 190])]),
        ],
    )
    logger.info("Generated questionnaire PDF (%d bytes)", len(pdf))
    return pdf


def business_plan_pdf(plan: BusinessPlan) -> bytes:
    identity = [
        ["Rubrique", "Valeur"],
        ["Projet", plan.project_name or "—"],
        ["Porteur de projet", plan.promoter_name or "—"],
        ["Localisation", plan.location or "—"],
        ["Filières visées", plan.target_sectors or "—"],
        ["Capacité d'accueil", f"{plan.student_capacity} élèves"],
        ["Investissement initial", format_euro(plan.initial_investment)],
    ]
    projections = [["Année", "Recettes", "Charges", "Résultat"]]
    for label, projection in zip(("Année 1", "Année 2", "Année 3"), plan.financial_projections.by_year().values()):
        projections.append(
            [
                label,
                format_euro(projection.revenue),
                format_euro(projection.expenses),
                format_euro(projection.profit),
            ]
        )
    indicators = [
        ["Indicateur", "Valeur"],
        ["Retour sur investissement (année 3)", format_percent(return_on_investment(plan))],
        ["Point mort", breakeven_label(plan)],
    ]
    narrative = _paragraphs(
        ("Partenariats", plan.partnerships),
        ("Analyse de la concurrence", plan.competition_analysis),
        ("Stratégie marketing", plan.marketing_strategy),
    )
    pdf = _build_pdf(
        f"Business plan - {plan.project_name or 'École de Production'}",
        _generated_on(),
        [
            ("Présentation du projet", [_table(identity, [200, 260])]),
            ("Prévisions financières", [_table(projections, [110, 120, 120, 120])]),
            ("Indicateurs", [_table(indicators, [260, 200])]),
            ("Stratégie", narrative),
        ],
    )
    logger.info("Generated business plan PDF (%d bytes)", len(pdf))
    return pdf


def subsidy_pdf(application: SubsidyApplication) -> bytes:
    identity = [
        ["Rubrique", "Valeur"],
        ["Organisme financeur", application.funding_body],
        ["Programme", application.program_name or "—"],
        ["Montant demandé", format_euro(application.amount)],
        ["Structure porteuse", application.organization_name or "—"],
        ["SIRET", application.siret_number or "—"],
        ["Contact", application.contact_person or "—"],
        ["Durée", f"{application.project_duration} mois"],
        ["Public visé", application.target_audience or "—"],
        ["Apprenants attendus", format_number(application.expected_students)],
        ["Filières", ", ".join(application.sectors) or "—"],
        ["Statut", SUBSIDY_STATUS_LABELS[application.status]],
    ]
    budget = application.budget
    budget_rows = [
        ["Poste", "Montant"],
        ["Personnel", format_euro(budget.personnel)],
        ["Équipements", format_euro(budget.equipment)],
        ["Fonctionnement", format_euro(budget.operations)],
        ["Autres", format_euro(budget.other)],
        ["Total", format_euro(budget.total())],
    ]
    narrative = _paragraphs(
        ("Description", application.project_description),
        ("Objectifs", application.objectives),
        ("Méthodologie", application.methodology),
        ("Partenaires", application.partner_organizations),
        ("Résultats attendus", application.expected_outcomes),
        ("Critères d'évaluation", application.evaluation_criteria),
        ("Pérennité", application.sustainability),
        ("Innovation", application.innovation),
        ("Impact social", application.social_impact),
    )
    pdf = _build_pdf(
        f"Demande de subvention - {application.project_title}",
        _generated_on(),
        [
            ("Identification", [_table(identity, [200, 260])]),
            ("Projet", narrative),
            ("Budget prévisionnel", [_table(budget_rows, [260, 200])]),
        ],
    )
    logger.info("Generated subsidy PDF for %s (%d bytes)", application.id, len(pdf))
    return pdf


# --- Spreadsheets -------------------------------------------------------------------


def pedagogical_costs_excel(data: PedagogicalCostData) -> bytes:
    summary = summarize_pedagogical_costs(data)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        pd.DataFrame(pedagogical_cost_rows(data)).to_excel(writer, sheet_name="Filières", index=False)
        summary_df = pd.DataFrame(
            {
                "Indicateur": [
                    "Taux de frais généraux (%)",
                    "Frais administratifs (€)",
                    "Total étudiants",
                    "Total heures",
                    "Coût total des filières (€)",
                    "Coût moyen / étudiant (€)",
                    "Coût moyen / heure (€)",
                ],
                "Valeur": [
                    float(data.overhead_rate),
                    float(data.admin_costs),
                    summary.total_students,
                    summary.total_hours,
                    float(summary.total_costs),
                    float(summary.avg_cost_per_student),
                    float(summary.avg_cost_per_hour),
                ],
            }
        )
        summary_df.to_excel(writer, sheet_name="Synthèse", index=False)
    buffer.seek(0)
    return buffer.getvalue()


def blank_template_workbook() -> bytes:
    workbook = Workbook()
    workbook.remove(workbook.active)
    for sheet_name, headers in TEMPLATE_SHEETS.items():
        sheet = workbook.create_sheet(sheet_name)
        sheet.append(headers)
    buffer = io.BytesIO()
    workbook.save(buffer)
    buffer.seek(0)
    return buffer.getvalue()


def spreadsheet_template_bytes(path: Optional[str] = None) -> bytes:
    """Return the shared accounting workbook, or a blank one when the file is absent."""

    template = Path(path or settings.TEMPLATE_PATH)
    if template.is_file():
        return template.read_bytes()
    logger.warning("Template %s not found, serving a blank workbook", template)
    return blank_template_workbook()


__all__ = [
    "DOCX_MIME",
    "STATUTES_TEMPLATE",
    "TEMPLATE_SHEETS",
    "blank_template_workbook",
    "business_plan_pdf",
    "pedagogical_costs_excel",
    "questionnaire_pdf",
    "render_statutes",
    "spreadsheet_template_bytes",
    "statutes_docx",
    "statutes_filename",
    "subsidy_pdf",
]
