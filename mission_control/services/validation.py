"""Input validation shared by the services."""
import re
from typing import Iterable, Optional

from email_validator import EmailNotValidError, validate_email

from mission_control.errors import InvalidInput
from mission_control.models.task import TASK_STATUSES
from mission_control.models.user import ROLES

MIN_PASSWORD_LENGTH = 8
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{3,64}$")


def normalize_email(email: Optional[str]) -> str:
    """Return the canonical (lowercased) form of ``email`` or raise InvalidInput."""
    if not email or not email.strip():
        raise InvalidInput("Email is required")
    try:
        result = validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise InvalidInput(f"Invalid email: {e}")
    return result.normalized.lower()


def normalize_username(username: Optional[str]) -> str:
    if not username or not username.strip():
        raise InvalidInput("Username is required")
    username = username.strip()
    if not USERNAME_PATTERN.match(username):
        raise InvalidInput(
            "Username must be 3-64 characters of letters, digits, '.', '_' or '-'"
        )
    return username


def check_password(password: Optional[str]) -> str:
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInput(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return password


def require_text(value: Optional[str], field: str) -> str:
    """Reject missing or whitespace-only text fields."""
    if value is None or not value.strip():
        raise InvalidInput(f"{field} must not be empty")
    return value.strip()


def check_status(status: Optional[str]) -> str:
    if status not in TASK_STATUSES:
        raise InvalidInput(f"Status must be one of: {', '.join(TASK_STATUSES)}")
    return status


def parse_statuses(raw: Optional[str]) -> Optional[list]:
    """
    Parse a comma-joined status filter such as ``"todo,done"``.

    Returns None (no filtering) for a missing or blank value.
    """
    if raw is None or not raw.strip():
        return None
    statuses = [part.strip() for part in raw.split(",") if part.strip()]
    for status in statuses:
        check_status(status)
    return sorted(set(statuses))


def check_role(role: Optional[str]) -> str:
    if role not in ROLES:
        raise InvalidInput("Role must be 'user' or 'admin'")
    return role


def check_taxonomy_ids(ids: Iterable[Optional[str]]) -> bool:
    """
    Validate a taxonomy reference given as (category_id, type_id, item_id).

    Returns True when all three ids are present, False when all are absent,
    and raises InvalidInput for a partial reference.
    """
    present = [bool(value and value.strip()) for value in ids]
    if all(present):
        return True
    if not any(present):
        return False
    raise InvalidInput("Taxonomy reference needs category_id, type_id and item_id together")
