import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")


def _env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")
WEBHOOK_TIMEOUT = int(os.getenv("WEBHOOK_TIMEOUT", "15"))

# --- Display ---
CURRENCY_LABEL = os.getenv("CURRENCY_LABEL", "Ksh")

# --- Analytics & Import Defaults ---
DEFAULT_TOP_N = int(os.getenv("DEFAULT_TOP_N", "5"))
FIRST_ROW_HEADER = _env_bool("FIRST_ROW_HEADER", True)

# --- Seed Inventory ---
# (name, quantity, unit cost) loaded into a fresh ledger on startup.
SEED_ITEMS = [
    ("Mem card 2gb", 2, 500.0),
    ("Mem card 4gb", 2, 600.0),
    ("Mem card 8GB", 4, 750.0),
    ("Flash Disk 16GB", 6, 850.0),
    ("Oraimo earphones", 11, 300.0),
    ("Extension 4 ways", 7, 400.0),
]
