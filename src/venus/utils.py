from collections.abc import Callable
from datetime import UTC, date, datetime, time

Clock = Callable[[], datetime]


def now() -> datetime:
    return datetime.now(UTC)


def start_of_day(value: date) -> datetime:
    """Midnight UTC of the given calendar date."""
    return datetime.combine(value, time.min, tzinfo=UTC)


def normalize_email(email: str) -> str:
    return email.strip().lower()
