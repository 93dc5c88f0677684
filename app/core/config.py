import json
import os
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv

# Same lookup as the EXE build: .env sits next to run_server.exe when frozen,
# otherwise at the project root (<root>/app/core/config.py -> parents[2]).
if getattr(sys, "frozen", False):
    BASE_DIR = Path(sys.executable).parent
else:
    BASE_DIR = Path(__file__).resolve().parents[2]

load_dotenv(dotenv_path=BASE_DIR / ".env")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def parse_baseline(value: str) -> date:
    """'2024-12' -> date(2024, 12, 1)"""
    year, month = value.strip().split("-")[:2]
    return date(int(year), int(month), 1)


def load_user_heads(path) -> dict[str, int]:
    """
    Per-member head count used by the premium arrears formula.

    File format: {"Max": 4, "Vusi": 2, ...}. A missing file means nobody has
    extra heads (everyone defaults to 0).
    """
    path = Path(path)
    if not path.is_absolute():
        path = BASE_DIR / path
    if not path.exists():
        return {}

    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    return {str(k): int(v) for k, v in raw.items()}


# ---------------------
# Database
# ---------------------
DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite:///{BASE_DIR / 'users.db'}"

# ---------------------
# HTTP
# ---------------------
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,https://ebuhlanti-front-end-8ecc8ec58136.herokuapp.com",
    ).split(",")
    if o.strip()
]
PORT = int(os.getenv("PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ---------------------
# Ledger rules
# ---------------------
INTEREST_MULTIPLIER = Decimal(os.getenv("INTEREST_MULTIPLIER", "1.3"))
INSTALLMENT_COUNT = 3

PREMIUM_JOINING_FEE = Decimal(os.getenv("PREMIUM_JOINING_FEE", "1000"))
PREMIUM_PER_HEAD = Decimal(os.getenv("PREMIUM_PER_HEAD", "1000"))
PREMIUM_BASELINE = parse_baseline(os.getenv("PREMIUM_BASELINE", "2024-12"))

USER_HEADS_FILE = os.getenv("USER_HEADS_FILE", "user_heads.json")
USER_HEADS = load_user_heads(USER_HEADS_FILE)

# false -> an empty receivable cascade on delete is only logged
# true  -> it is a 404 and the whole delete is rolled back
STRICT_RECEIVABLE_CASCADE = _env_bool("STRICT_RECEIVABLE_CASCADE", False)
