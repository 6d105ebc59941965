"""
Schedule calculator for LifeOps tasks.

Pure date arithmetic: no database access. Every date written to a task goes
through normalize_to_noon() so the stored instant sits at 12:00 in the
active time zone; a UTC day rollover near midnight can then never move the
calendar day a user sees.

Schedule types:
    FIXED_DATE      one-time; the due date never advances
    EVERY_N_MONTHS  reference date + N months (month-end clamped)
    YEARLY          next occurrence of a month/day stored as MMDD
"""
import calendar
from datetime import date, datetime, time
from typing import Optional, Tuple, Union

from dateutil.relativedelta import relativedelta
from django.utils import timezone

from apps.core.errors import ValidationFailed
from .models import ScheduleType, TaskState

DateLike = Union[date, datetime]

NOON = time(12, 0)

# Ten years
MAX_INTERVAL_MONTHS = 120

MONTH_ABBREVIATIONS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

# Friendly names for common month intervals
INTERVAL_LABELS = {
    1: "Monthly",
    3: "Quarterly",
    6: "Every 6 months",
    12: "Yearly",
}


def to_local_date(value: DateLike) -> date:
    """Calendar date of a value as seen in the active time zone."""
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    return value


def normalize_to_noon(value: DateLike) -> datetime:
    """Aware datetime at 12:00 local time on the value's calendar date."""
    return timezone.make_aware(datetime.combine(to_local_date(value), NOON))


def local_today() -> date:
    return timezone.localdate()


# =============================================================================
# Month-day (MMDD) helpers
# =============================================================================

def _validate_month_day(month: int, day: int) -> None:
    if not 1 <= month <= 12:
        raise ValidationFailed("Month must be between 1 and 12")
    # Feb 29 is allowed; it clamps to Feb 28 in non-leap years
    max_day = 29 if month == 2 else calendar.monthrange(2001, month)[1]
    if not 1 <= day <= max_day:
        raise ValidationFailed(f"Invalid day {day} for month {month}")


def encode_month_day(month: int, day: int) -> int:
    """(12, 25) -> 1225"""
    _validate_month_day(month, day)
    return month * 100 + day


def decode_month_day(value: int) -> Tuple[int, int]:
    """1225 -> (12, 25)"""
    month, day = divmod(int(value), 100)
    _validate_month_day(month, day)
    return month, day


def format_month_day(value: int) -> str:
    """1225 -> '12-25'"""
    month, day = decode_month_day(value)
    return f"{month:02d}-{day:02d}"


def parse_month_day(text: str) -> int:
    """'12-25' -> 1225"""
    try:
        month_text, day_text = text.strip().split('-')
        month, day = int(month_text), int(day_text)
    except (AttributeError, ValueError):
        raise ValidationFailed("Month-day must use the MM-DD format")
    return encode_month_day(month, day)


# =============================================================================
# Date arithmetic
# =============================================================================

def add_months(value: date, months: int) -> date:
    """Add calendar months; Jan 31 + 1 month is the last day of February."""
    return value + relativedelta(months=months)


def _occurrence(year: int, month: int, day: int) -> date:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def next_yearly_occurrence(month: int, day: int, after: date) -> date:
    """First occurrence of month/day strictly after ``after``."""
    candidate = _occurrence(after.year, month, day)
    if candidate <= after:
        candidate = _occurrence(after.year + 1, month, day)
    return candidate


def validate_schedule(schedule_type: str, schedule_value: Optional[int]) -> Optional[int]:
    """
    Check a schedule definition and return the value to store.

    FIXED_DATE ignores the value. EVERY_N_MONTHS takes 1..MAX_INTERVAL_MONTHS
    and YEARLY requires a valid MMDD.
    """
    if schedule_type == ScheduleType.FIXED_DATE:
        return None

    if schedule_type == ScheduleType.EVERY_N_MONTHS:
        if not schedule_value or schedule_value < 1:
            raise ValidationFailed("EVERY_N_MONTHS requires a positive schedule value")
        if schedule_value > MAX_INTERVAL_MONTHS:
            raise ValidationFailed(f"EVERY_N_MONTHS allows at most {MAX_INTERVAL_MONTHS} months")
        return schedule_value

    if schedule_type == ScheduleType.YEARLY:
        if not schedule_value:
            raise ValidationFailed("YEARLY requires a schedule value (MMDD format)")
        decode_month_day(schedule_value)
        return schedule_value

    raise ValidationFailed(f"Unknown schedule type: {schedule_type}")


def calculate_next_due_date(
    schedule_type: str,
    schedule_value: Optional[int],
    current_due_date: Optional[DateLike],
    from_date: Optional[DateLike] = None,
) -> datetime:
    """
    Next due date for a task, normalised to local noon.

    Args:
        schedule_type: one of ScheduleType
        schedule_value: N months, or MMDD for YEARLY
        current_due_date: the task's present due date
        from_date: reference date (the completion date); defaults to today

    FIXED_DATE returns the current due date unchanged. For YEARLY the next
    occurrence is taken after the later of the reference date and the
    current due date, so completing early never leaves the same occurrence
    due again.
    """
    if schedule_type == ScheduleType.FIXED_DATE:
        if current_due_date is None:
            raise ValidationFailed("FIXED_DATE requires a due date")
        return normalize_to_noon(current_due_date)

    validate_schedule(schedule_type, schedule_value)
    reference = to_local_date(from_date) if from_date is not None else local_today()

    if schedule_type == ScheduleType.EVERY_N_MONTHS:
        return normalize_to_noon(add_months(reference, schedule_value))

    month, day = decode_month_day(schedule_value)
    anchor = reference
    if current_due_date is not None:
        anchor = max(reference, to_local_date(current_due_date))
    return normalize_to_noon(next_yearly_occurrence(month, day, anchor))


def describe_schedule(schedule_type: str, schedule_value: Optional[int]) -> str:
    """Human-readable schedule label, e.g. 'Quarterly' or 'Yearly on Dec 25'."""
    if schedule_type == ScheduleType.FIXED_DATE:
        return "One-time"

    if schedule_type == ScheduleType.EVERY_N_MONTHS:
        if not schedule_value:
            return "Recurring"
        return INTERVAL_LABELS.get(schedule_value, f"Every {schedule_value} months")

    if schedule_type == ScheduleType.YEARLY:
        if not schedule_value:
            return "Yearly"
        month, day = decode_month_day(schedule_value)
        return f"Yearly on {MONTH_ABBREVIATIONS[month - 1]} {day}"

    return "Unknown"


def derive_state(
    next_due_date: DateLike,
    last_completed_date: Optional[DateLike],
    today: Optional[date] = None,
) -> str:
    """
    PENDING / COMPLETED_TODAY / OVERDUE for display.

    Completed-today wins over overdue.
    """
    today = today or local_today()
    if last_completed_date is not None and to_local_date(last_completed_date) == today:
        return TaskState.COMPLETED_TODAY
    if to_local_date(next_due_date) < today:
        return TaskState.OVERDUE
    return TaskState.PENDING
