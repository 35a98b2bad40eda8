import os
from typing import List

from dotenv import load_dotenv

from app.errors import ConfigurationError

load_dotenv()

DEFAULT_OPERATORS = (
    "SEMESTA VOYAGES",
    "AKASSA CRUISE",
    "DERYA LIVEABOARD",
    "GIONA LIVEABOARD",
)

SPREADSHEET_ID = os.getenv("SPREADSHEET_ID", "")
SHEET_NAME = os.getenv("SHEET_NAME", "2026 OT (Normalized)")
CABIN_DETAIL_SHEET = os.getenv("CABIN_DETAIL_SHEET", "Cabin Detail")
SHIP_DETAIL_SHEET = os.getenv("SHIP_DETAIL_SHEET", "Ship Detail")

CACHE_TTL_SECONDS = float(os.getenv("CACHE_TTL_SECONDS", "300"))

XENDIT_API_URL = os.getenv("XENDIT_API_URL", "https://api.xendit.co")
INVOICE_CURRENCY = os.getenv("INVOICE_CURRENCY", "IDR")
INVOICE_DURATION_SECONDS = int(os.getenv("INVOICE_DURATION_SECONDS", "86400"))


def get_operators() -> List[str]:
    raw = os.getenv("OPERATORS")
    if not raw:
        return list(DEFAULT_OPERATORS)
    return [name.strip().upper() for name in raw.split(",") if name.strip()]


def require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(f"{name} is not configured")
    return value
