"""Sanitisation helpers for user-provided names."""
from __future__ import annotations


def safe_filename(name: str, *, default: str = "export") -> str:
    """Return a filename based on *name* keeping only ASCII letters and digits.

    Every other character (accents and spaces included) becomes ``_``.
    """

    cleaned = "".join(ch if ch.isascii() and ch.isalnum() else "_" for ch in name.strip())
    cleaned = cleaned.strip("_")
    return cleaned or default


__all__ = ["safe_filename"]
