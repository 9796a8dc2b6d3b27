"""Configuration management for the budget dashboard.

This module centralizes all configuration values including the remote API
location, local paths, business defaults, and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

# Base project root - assumes this file is in budget_dashboard/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("BUDGET_DATA_DIR", _PROJECT_ROOT / "data"))

# Stored session record (token, pv, commission)
AUTH_FILE = Path(
    os.getenv("BUDGET_AUTH_FILE", DATA_DIR / "auth.json")
).resolve()

# Remote API
API_BASE_URL = os.getenv(
    "BUDGET_API_URL", "https://n8n.hybriun.com.br/webhook/budget/software"
).rstrip("/")
API_TIMEOUT = float(os.getenv("BUDGET_API_TIMEOUT", "15"))

LOGO_URL = os.getenv("BUDGET_LOGO_URL", "https://vendas.hybriun.com.br/logo.png")

LOG_LEVEL = os.getenv("BUDGET_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Business constants. These are pricing policy, not calendar facts.
DEFAULT_TAX_RATE = 0.19
DEFAULT_PROFIT_MARGIN = 1.0
DEFAULT_DEDICATION = 1.0
PRIVILEGED_PV = 9

HOURS_PER_MONTH = 160
DAYS_PER_MONTH = 30
WEEKS_PER_MONTH = 4

_LOGGING_CONFIGURED = False


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once per process.

    Streamlit re-executes page scripts on every interaction, so repeated
    calls are ignored after the first one.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
    _LOGGING_CONFIGURED = True
