import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from enums.runtime_environment import RuntimeEnvironment

# Load .env but don't override existing environment variables
# This allows test scripts to set RUNTIME_ENVIRONMENT=TEST before import
load_dotenv(".env", override=False)

PROJECT_ROOT = Path(__file__).parent

# Parse RUNTIME_ENVIRONMENT with clear error message on misconfiguration
try:
    RUNTIME_ENVIRONMENT = RuntimeEnvironment(os.environ.get("RUNTIME_ENVIRONMENT", "DEV"))
except ValueError as e:
    valid_values = [env.value for env in RuntimeEnvironment]
    print(f"\n ERROR: Invalid RUNTIME_ENVIRONMENT configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Valid values: {', '.join(valid_values)}", file=sys.stderr)
    print(f"Current value: {os.environ.get('RUNTIME_ENVIRONMENT', '(not set)')}", file=sys.stderr)
    print(f"\nAdd to .env: RUNTIME_ENVIRONMENT={valid_values[0]}\n", file=sys.stderr)
    sys.exit(1)

# Local session database (SQLite file under data/)
DB_NAME = os.environ.get("DB_NAME", "register.db")
DB_URL = os.environ.get("DB_URL", f"sqlite+aiosqlite:///data/{DB_NAME}")

# Static catalog (products, pricing rules, combo table, modifiers)
CATALOG_PATH = os.environ.get("CATALOG_PATH", str(PROJECT_ROOT / "catalog" / "products.json"))

# Business day boundaries are computed in the stall's local timezone
TIMEZONE = os.environ.get("TIMEZONE", "Asia/Taipei")

# Remote order store / closing ledger (Supabase PostgREST)
# Both are optional: without them the register runs fully local
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")
SUPABASE_ORDERS_TABLE = os.environ.get("SUPABASE_ORDERS_TABLE", "orders")
SUPABASE_CLOSINGS_TABLE = os.environ.get("SUPABASE_CLOSINGS_TABLE", "daily_closings")

# Parse REMOTE_TIMEOUT_SECONDS with error handling
try:
    REMOTE_TIMEOUT_SECONDS = float(os.environ.get("REMOTE_TIMEOUT_SECONDS", "10"))
    if REMOTE_TIMEOUT_SECONDS <= 0:
        raise ValueError(f"REMOTE_TIMEOUT_SECONDS must be positive (got: {REMOTE_TIMEOUT_SECONDS})")
except ValueError as e:
    print(f"\n ERROR: Invalid REMOTE_TIMEOUT_SECONDS configuration\n", file=sys.stderr)
    print(f"Reason: {e}", file=sys.stderr)
    print(f"Expected: Positive number of seconds (e.g., 5, 10, 30)", file=sys.stderr)
    print(f"Current value: {os.environ.get('REMOTE_TIMEOUT_SECONDS', '(not set)')}\n", file=sys.stderr)
    sys.exit(1)

# Business insight summarizer (Gemini REST API), optional
GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")
GEMINI_API_URL = os.environ.get("GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta")

# Logging Configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"  # Mask keys and phone numbers in logs
LOG_DIR = os.environ.get("LOG_DIR", "logs")

# Log Retention: Environment-specific defaults
# Dev: keep a month for debugging, Prod: a week of register logs
if RUNTIME_ENVIRONMENT == RuntimeEnvironment.DEV:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "30"))
else:
    LOG_RETENTION_DAYS = int(os.environ.get("LOG_RETENTION_DAYS", "7"))


def remote_store_configured() -> bool:
    return bool(SUPABASE_URL and SUPABASE_ANON_KEY)
