"""Shared building blocks for the persisted record models."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from formatting import to_decimal, to_int


def new_record_id() -> str:
    """Return a fresh identifier for a collection record."""

    return uuid.uuid4().hex


def coerce_amount(value: Any) -> Decimal:
    return to_decimal(value)


def coerce_count(value: Any) -> int:
    return max(0, to_int(value))


def coerce_optional_date(value: Any) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def coerce_text_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        items = value.replace(";", "\n").splitlines()
    else:
        items = [str(item) for item in value]
    return [item.strip() for item in items if item and item.strip()]


class RecordModel(BaseModel):
    """Base class for records stored in a collection."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=new_record_id)


__all__ = [
    "RecordModel",
    "coerce_amount",
    "coerce_count",
    "coerce_optional_date",
    "coerce_text_list",
    "new_record_id",
]
