"""
vibesync.constants — Shared Constants & Helpers
================================================

Single source of truth for reaction defaults, patchable field allow
lists and the UTC time helpers.
"""

from __future__ import annotations

from datetime import UTC, datetime

DEFAULT_REACTION_TYPE = "like"

# ---------------------------------------------------------------------------
# User Service Allow Lists
# ---------------------------------------------------------------------------
ALLOWED_USER_FIELDS: set[str] = {
    "display_name", "avatar", "bio", "spotify_data",
}


# ---------------------------------------------------------------------------
# Time helpers
# ---------------------------------------------------------------------------
def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes.

    SQLite drops tzinfo on the way back out, so every stored timestamp
    is treated as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
