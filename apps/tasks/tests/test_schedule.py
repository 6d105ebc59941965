"""
Unit tests for the schedule calculator.
Pure date arithmetic; no database access.
"""
from datetime import date, datetime, timezone as dt_timezone
from zoneinfo import ZoneInfo

from django.test import SimpleTestCase
from django.utils import timezone

from apps.core.errors import ValidationFailed
from apps.tasks.models import ScheduleType, TaskState
from apps.tasks.schedule import (
    calculate_next_due_date,
    decode_month_day,
    derive_state,
    describe_schedule,
    encode_month_day,
    format_month_day,
    normalize_to_noon,
    parse_month_day,
    validate_schedule,
)


def local_noon(year, month, day):
    return timezone.make_aware(datetime(year, month, day, 12, 0))


class NormalizeToNoonTest(SimpleTestCase):
    """Stored dates always sit at 12:00 in the active zone."""

    def test_date_becomes_local_noon(self):
        for zone in ('UTC', 'America/Los_Angeles', 'Asia/Tokyo', 'Pacific/Kiritimati'):
            with timezone.override(ZoneInfo(zone)):
                result = normalize_to_noon(date(2024, 1, 15))
                local = timezone.localtime(result)
                self.assertEqual(local.date(), date(2024, 1, 15))
                self.assertEqual((local.hour, local.minute), (12, 0))

    def test_aware_datetime_uses_local_calendar_day(self):
        # 23:30 UTC on Jan 15 is already Jan 16 in Tokyo
        late_utc = datetime(2024, 1, 15, 23, 30, tzinfo=dt_timezone.utc)
        with timezone.override(ZoneInfo('Asia/Tokyo')):
            result = normalize_to_noon(late_utc)
            self.assertEqual(timezone.localtime(result).date(), date(2024, 1, 16))
        with timezone.override(ZoneInfo('America/New_York')):
            result = normalize_to_noon(late_utc)
            self.assertEqual(timezone.localtime(result).date(), date(2024, 1, 15))

    def test_idempotent(self):
        with timezone.override(ZoneInfo('Europe/Berlin')):
            once = normalize_to_noon(date(2024, 3, 31))
            self.assertEqual(normalize_to_noon(once), once)


class EveryNMonthsTest(SimpleTestCase):

    def test_adds_months_from_reference_date(self):
        result = calculate_next_due_date(
            ScheduleType.EVERY_N_MONTHS, 3, local_noon(2024, 1, 15), from_date=date(2024, 1, 15)
        )
        self.assertEqual(result, local_noon(2024, 4, 15))

    def test_reference_date_not_due_date(self):
        # Completed late: the interval restarts from the completion day
        result = calculate_next_due_date(
            ScheduleType.EVERY_N_MONTHS, 1, local_noon(2024, 1, 15), from_date=date(2024, 2, 3)
        )
        self.assertEqual(result, local_noon(2024, 3, 3))

    def test_month_end_is_clamped(self):
        self.assertEqual(
            calculate_next_due_date(ScheduleType.EVERY_N_MONTHS, 1, None, from_date=date(2024, 1, 31)),
            local_noon(2024, 2, 29),
        )
        self.assertEqual(
            calculate_next_due_date(ScheduleType.EVERY_N_MONTHS, 1, None, from_date=date(2023, 1, 31)),
            local_noon(2023, 2, 28),
        )

    def test_result_is_noon_in_every_zone(self):
        for zone in ('UTC', 'America/Los_Angeles', 'Australia/Sydney'):
            with timezone.override(ZoneInfo(zone)):
                result = calculate_next_due_date(
                    ScheduleType.EVERY_N_MONTHS, 6, None, from_date=date(2024, 8, 31)
                )
                local = timezone.localtime(result)
                self.assertEqual(local.date(), date(2025, 2, 28))
                self.assertEqual(local.hour, 12)

    def test_missing_or_non_positive_interval_rejected(self):
        for value in (None, 0, -2):
            with self.assertRaises(ValidationFailed):
                calculate_next_due_date(ScheduleType.EVERY_N_MONTHS, value, None, from_date=date(2024, 1, 1))

    def test_interval_is_capped_at_ten_years(self):
        self.assertEqual(validate_schedule(ScheduleType.EVERY_N_MONTHS, 120), 120)
        with self.assertRaises(ValidationFailed) as ctx:
            validate_schedule(ScheduleType.EVERY_N_MONTHS, 200000)
        self.assertEqual(ctx.exception.message, "EVERY_N_MONTHS allows at most 120 months")


class YearlyTest(SimpleTestCase):

    def test_completed_on_due_day_moves_one_year(self):
        result = calculate_next_due_date(
            ScheduleType.YEARLY, 1225, local_noon(2024, 12, 25), from_date=date(2024, 12, 25)
        )
        self.assertEqual(result, local_noon(2025, 12, 25))

    def test_completed_early_skips_current_occurrence(self):
        result = calculate_next_due_date(
            ScheduleType.YEARLY, 1225, local_noon(2024, 12, 25), from_date=date(2024, 3, 1)
        )
        self.assertEqual(result, local_noon(2025, 12, 25))

    def test_completed_late_lands_on_next_occurrence(self):
        result = calculate_next_due_date(
            ScheduleType.YEARLY, 1225, local_noon(2023, 12, 25), from_date=date(2024, 3, 1)
        )
        self.assertEqual(result, local_noon(2024, 12, 25))

    def test_feb_29_clamps_in_non_leap_year(self):
        result = calculate_next_due_date(
            ScheduleType.YEARLY, 229, local_noon(2024, 2, 29), from_date=date(2024, 2, 29)
        )
        self.assertEqual(result, local_noon(2025, 2, 28))

    def test_requires_valid_month_day(self):
        for value in (None, 1332, 230, 1):
            with self.assertRaises(ValidationFailed):
                calculate_next_due_date(ScheduleType.YEARLY, value, None, from_date=date(2024, 1, 1))


class FixedDateTest(SimpleTestCase):

    def test_returns_current_due_date(self):
        due = local_noon(2024, 6, 1)
        result = calculate_next_due_date(ScheduleType.FIXED_DATE, None, due, from_date=date(2024, 7, 1))
        self.assertEqual(result, due)

    def test_schedule_value_is_dropped(self):
        self.assertIsNone(validate_schedule(ScheduleType.FIXED_DATE, 12))


class MonthDayTest(SimpleTestCase):

    def test_encode_decode(self):
        self.assertEqual(encode_month_day(12, 25), 1225)
        self.assertEqual(decode_month_day(1225), (12, 25))
        self.assertEqual(decode_month_day(704), (7, 4))

    def test_format_and_parse(self):
        self.assertEqual(format_month_day(704), "07-04")
        self.assertEqual(parse_month_day("07-04"), 704)

    def test_invalid_values(self):
        with self.assertRaises(ValidationFailed):
            encode_month_day(4, 31)
        with self.assertRaises(ValidationFailed):
            parse_month_day("July 4")


class DescribeScheduleTest(SimpleTestCase):

    def test_labels(self):
        cases = [
            (ScheduleType.FIXED_DATE, None, "One-time"),
            (ScheduleType.EVERY_N_MONTHS, 1, "Monthly"),
            (ScheduleType.EVERY_N_MONTHS, 3, "Quarterly"),
            (ScheduleType.EVERY_N_MONTHS, 6, "Every 6 months"),
            (ScheduleType.EVERY_N_MONTHS, 12, "Yearly"),
            (ScheduleType.EVERY_N_MONTHS, 18, "Every 18 months"),
            (ScheduleType.EVERY_N_MONTHS, None, "Recurring"),
            (ScheduleType.YEARLY, 1225, "Yearly on Dec 25"),
            (ScheduleType.YEARLY, None, "Yearly"),
        ]
        for schedule_type, value, expected in cases:
            self.assertEqual(describe_schedule(schedule_type, value), expected)


class DeriveStateTest(SimpleTestCase):

    def test_states(self):
        today = date(2024, 5, 10)
        self.assertEqual(derive_state(local_noon(2024, 5, 20), None, today), TaskState.PENDING)
        self.assertEqual(derive_state(local_noon(2024, 5, 9), None, today), TaskState.OVERDUE)
        self.assertEqual(derive_state(local_noon(2024, 5, 10), None, today), TaskState.PENDING)

    def test_completed_today_wins_over_overdue(self):
        today = date(2024, 5, 10)
        state = derive_state(local_noon(2024, 5, 1), local_noon(2024, 5, 10), today)
        self.assertEqual(state, TaskState.COMPLETED_TODAY)
