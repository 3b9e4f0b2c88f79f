"""Timezone-aware datetime helpers.

All timestamps handled by Castpress are UTC. Naive values coming from user
input are assumed to already be UTC.
"""

from datetime import datetime, timezone
from email.utils import format_datetime

from castpress.utils.errors import ReleaseDateError


def now_utc() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to UTC, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_rfc822(value: datetime) -> str:
    """Format a datetime the way RSS ``pubDate`` expects.

    Example:
        >>> format_rfc822(datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc))
        'Wed, 01 May 2024 09:30:00 +0000'
    """
    return format_datetime(to_utc(value))


def parse_release_date(value: str) -> datetime:
    """Parse an ISO 8601 date or datetime into an aware UTC datetime.

    Accepts ``2024-05-01``, ``2024-05-01T09:30:00`` and offsets such as
    ``+02:00`` or a trailing ``Z``.

    Raises:
        ReleaseDateError: If the value is not a valid ISO 8601 date
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise ReleaseDateError(
            f"Invalid release date '{value}'. Use ISO 8601, e.g. 2024-05-01 or "
            f"2024-05-01T09:30:00+00:00"
        ) from e

    return to_utc(parsed)
