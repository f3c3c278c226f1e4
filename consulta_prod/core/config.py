# consulta_prod/core/config.py
"""Runtime configuration read from the environment (and an optional .env file)."""

import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# ===== DATABASE =====
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./consulta_prod.db")

# ===== AUTHENTICATION =====
JWT_SECRET = os.getenv("JWT_SECRET", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_HOURS = int(os.getenv("JWT_EXPIRES_HOURS", "24"))

# ===== APPLICATION =====
APPLICATION_ID = os.environ.get("APPLICATION_ID", "consulta-prod")
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# ===== SEEDING =====
SEED_SAMPLE_DATA = _as_bool(os.getenv("SEED_SAMPLE_DATA", "false"))
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

# ===== REPORTING =====
EXPORT_MAX_ROWS = 10000
EXPORT_SAMPLE_ROWS = 100
