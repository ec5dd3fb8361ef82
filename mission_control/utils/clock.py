"""Timezone-aware timestamps for stored records."""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time in UTC, always carrying tzinfo."""
    return datetime.now(timezone.utc)
