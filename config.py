"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.

Nothing in here is read implicitly by the store: callers pass
DATABASE_URL into RelationalCatalogStore.open() themselves.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "apollo")
DB_USER: str = os.getenv("DB_USER", "apollo_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = os.getenv(
    "DATABASE_URL",
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

# ── Passwords ─────────────────────────────────────────────
_raw_schemes = os.getenv("PASSWORD_SCHEMES", "pbkdf2_sha256")
PASSWORD_SCHEMES: list[str] = [
    scheme.strip() for scheme in _raw_schemes.split(",") if scheme.strip()
]

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
