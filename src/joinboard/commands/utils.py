"""Argument parsing helpers for commands."""

from datetime import UTC, date, datetime

from joinboard.exceptions import TaskValidationError


def parse_day(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` argument."""
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise TaskValidationError(f"Invalid date '{value}', expected YYYY-MM-DD") from e


def parse_due_date(value: str | None) -> datetime:
    """Parse a due date argument; dates without a time are midnight UTC."""
    if not value:
        return datetime.now(UTC)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise TaskValidationError(f"Invalid due date '{value}'") from e
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
