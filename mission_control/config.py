"""Runtime configuration for the Mission Control backend."""
import os
from dotenv import load_dotenv

# Load environment variables from a local .env file if present
load_dotenv()

ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")

# Use the DATABASE_URL from environment variable, with fallback to SQLite for local dev
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./mission_control.db")
SQL_ECHO = os.environ.get("SQL_ECHO", "false").lower() == "true"

FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:3000")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

DEV_JWT_SECRET = "dev-only-insecure-secret-change-me"
JWT_SECRET = os.environ.get("JWT_SECRET", "")
JWT_ALGORITHM = "HS256"

# Session tokens expire a fixed 24 hours after issuance
TOKEN_TTL_HOURS = 24


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing at startup."""


def get_jwt_secret() -> str:
    """Return the token signing secret, refusing the development fallback in production."""
    if JWT_SECRET:
        return JWT_SECRET
    if ENVIRONMENT == "production":
        raise ConfigurationError("JWT_SECRET must be set in production")
    return DEV_JWT_SECRET
