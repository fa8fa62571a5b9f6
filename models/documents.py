"""Inputs of the document generators."""
from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict

STATUTES_REQUIRED_FIELDS: Dict[str, str] = {
    "association_name": "Nom de l'association",
    "president_name": "Président(e)",
    "secretary_name": "Secrétaire",
    "registered_office": "Siège social",
}


class StatutesData(BaseModel):
    """Association (loi 1901) identity used to fill the statutes template.

    Every field may be empty while the form is being filled; the preview
    shows placeholders instead. Downloading requires the fields listed in
    :data:`STATUTES_REQUIRED_FIELDS`.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    association_name: str = ""
    president_name: str = ""
    secretary_name: str = ""
    registered_office: str = ""
    purpose: str = ""
    duration_years: str = "99"
    membership_fee: str = ""

    def missing_required(self) -> List[str]:
        return [field for field in STATUTES_REQUIRED_FIELDS if not getattr(self, field)]
