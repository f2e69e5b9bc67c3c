import os
from dotenv import load_dotenv

# Load environment variables from a .env file if present so that running the
# application locally works without manually exporting variables.
load_dotenv()

REGISTRY_URL = os.getenv("REGISTRY_URL", "https://registry.npmjs.org")
REGISTRY_TIMEOUT = float(os.getenv("REGISTRY_TIMEOUT", "30"))

DB_URL = os.getenv("DB_URL", "sqlite+aiosqlite:///./notices.db")

SESSION_JWT_SECRET = os.getenv("SESSION_JWT_SECRET")

if not SESSION_JWT_SECRET:
    raise RuntimeError("SESSION_JWT_SECRET is not set in environment variables")

FEATURE_ORG_BILLING = os.getenv("FEATURE_ORG_BILLING", "false").lower() in ("1", "true", "yes", "on")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
