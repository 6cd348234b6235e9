"""Value conversion between domain types and SQLite columns."""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Any


def to_db_timestamp(value: datetime) -> str:
    """UTC, fixed-width ISO text so timestamps compare correctly as strings.

    Naive datetimes are taken as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def from_db_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def to_db_decimal(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def from_db_decimal(value: Any) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value))


def to_db_value(value: Any) -> Any:
    """Convert one field value to something sqlite3 can bind."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return to_db_timestamp(value)
    return value
