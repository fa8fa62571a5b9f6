"""Accountant tools sharing one downloadable workbook."""
from __future__ import annotations

from dataclasses import dataclass

import streamlit as st

from services.documents import spreadsheet_template_bytes

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
TEMPLATE_FILENAME = "ECOLE_DE_PRODUCTION_MODELE.xlsx"
SHARED_TEMPLATE_NOTICE = (
    "Ce fichier est commun aux outils de plan comptable, coefficient de déduction TVA, et résultat "
    "fiscal. Veuillez le remplir avant de procéder à vos calculs."
)


@dataclass(frozen=True)
class AccountingTool:
    key: str
    tab_label: str
    title: str
    introduction: str
    method_title: str
    method: str


ACCOUNTING_TOOLS: tuple[AccountingTool, ...] = (
    AccountingTool(
        "plan_comptable",
        "Plan comptable",
        "Trame du plan comptable",
        "Cette page présente la structure du plan comptable adaptée à une école de production, "
        "association qui exerce à la fois une activité de formation et une activité de production.",
        "Méthodologie",
        "Le plan comptable associatif reprend le plan comptable général et ses comptes spécifiques "
        "(fonds associatifs, contributions volontaires en nature, subventions d'exploitation). La "
        "trame distingue les comptes de l'activité pédagogique de ceux de l'activité de production "
        "afin de faciliter la sectorisation analytique et le calcul des coefficients fiscaux.",
    ),
    AccountingTool(
        "coefficient_tva",
        "Coefficient TVA",
        "Trame de calcul du coefficient de déduction de TVA",
        "Cette page vous aide à calculer le coefficient de déduction de TVA applicable aux dépenses "
        "mixtes. Ce coefficient est essentiel pour respecter les obligations fiscales et optimiser la "
        "récupération de TVA selon les règles propres aux écoles de production.",
        "Calcul du coefficient de déduction",
        "Le fichier Excel ci-dessous vous permet de réaliser vos calculs en tenant compte de la "
        "proportion d'activités ouvrant droit à déduction. Veillez à l'actualiser annuellement ou à "
        "chaque changement significatif dans votre activité.",
    ),
    AccountingTool(
        "resultat_fiscal",
        "Résultat fiscal",
        "Trame de calcul du résultat fiscal",
        "Cette page vous permet de consulter la méthodologie de calcul du résultat fiscal à partir du "
        "résultat comptable. Le fichier Excel associé est commun aux autres outils.",
        "Méthodologie",
        "Le calcul du résultat fiscal repose sur des retraitements extra-comptables appliqués au "
        "résultat comptable. Ces retraitements peuvent inclure les réintégrations et les déductions "
        "fiscales spécifiques au secteur ou au statut de l'école. Le fichier Excel vous accompagne "
        "dans cette démarche étape par étape.",
    ),
)


def render_accounting_tool(tool: AccountingTool, template: bytes) -> None:
    st.markdown(f"### {tool.title}")
    st.write(tool.introduction)
    with st.container(border=True):
        st.markdown(f"**{tool.method_title}**")
        st.write(tool.method)
    with st.container(border=True):
        st.markdown("**📥 Télécharger le fichier Excel**")
        st.caption(SHARED_TEMPLATE_NOTICE)
        st.download_button(
            "Télécharger",
            data=template,
            file_name=TEMPLATE_FILENAME,
            mime=XLSX_MIME,
            key=f"accounting_template_{tool.key}",
        )


def render_accounting_page() -> None:
    template = spreadsheet_template_bytes()
    tabs = st.tabs([tool.tab_label for tool in ACCOUNTING_TOOLS])
    for tab, tool in zip(tabs, ACCOUNTING_TOOLS):
        with tab:
            render_accounting_tool(tool, template)


__all__ = ["ACCOUNTING_TOOLS", "AccountingTool", "render_accounting_page", "render_accounting_tool"]
