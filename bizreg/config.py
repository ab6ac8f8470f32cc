"""Environment configuration"""

import logging
import os
from pathlib import Path


PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_RULES_FILE = PACKAGE_DIR / "rules" / "registration_rules_2024.yaml"


class Config:
    """Settings read from the environment

    Values are read at import time; tests override them by passing explicit
    arguments to the objects that use them.
    """

    ANTHROPIC_API_KEY = os.environ.get("ANTHROPIC_API_KEY", "")
    PURPOSE_MODEL = os.environ.get("BIZREG_PURPOSE_MODEL", "claude-3-5-sonnet-20241022")

    DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./bizreg.db")
    DATABASE_ECHO = os.environ.get("DATABASE_ECHO", "false").lower() in ("1", "true", "yes")

    RULES_FILE = os.environ.get("BIZREG_RULES_FILE", str(DEFAULT_RULES_FILE))
    AUDIT_LOG_FILE = os.environ.get("BIZREG_AUDIT_LOG", "")
    LOG_LEVEL = os.environ.get("BIZREG_LOG_LEVEL", "INFO")


def configure_logging(level: str = Config.LOG_LEVEL) -> None:
    """Root logger setup for the API process"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
