"""Application settings read from the environment (and a local ``.env``)."""
from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


class Settings:
    # Stockage
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///edp_studio.db")

    # Délais d'interface (secondes)
    LOGIN_DELAY_SECONDS: float = _float_env("LOGIN_DELAY_SECONDS", 1.0)
    ADVICE_DELAY_SECONDS: float = _float_env("ADVICE_DELAY_SECONDS", 2.0)

    # Modèle Excel commun (plan comptable, coefficient TVA, résultat fiscal)
    TEMPLATE_PATH: str = os.getenv("TEMPLATE_PATH", "fichiers/ECOLE_DE_PRODUCTION_MODELE.xlsx")

    # Contact affiché en pied de page
    CONTACT_EMAIL: str = os.getenv("CONTACT_EMAIL", "contact@example.com")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()

_LOGGING_CONFIGURED = False


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once per process."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    _LOGGING_CONFIGURED = True


__all__ = ["Settings", "settings", "configure_logging"]
