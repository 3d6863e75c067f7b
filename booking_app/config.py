# booking_app/config.py

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# SQLite database (file-based) unless overridden
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./bookings.db")
DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"

# Session signing - no default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "jwt")
SESSION_TTL_DAYS = int(os.getenv("SESSION_TTL_DAYS", "7"))
# Cookies are always secure over https; this forces it behind a TLS-terminating proxy
COOKIE_SECURE = os.getenv("COOKIE_SECURE", "false").lower() == "true"

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# Bookings without a business are rejected unless enabled
ALLOW_UNLINKED_APPOINTMENTS = os.getenv("ALLOW_UNLINKED_APPOINTMENTS", "false").lower() == "true"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
