import uuid
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Category(models.TextChoices):
    FINANCE = 'FINANCE', 'Finance'
    LEGAL = 'LEGAL', 'Legal'
    HOME = 'HOME', 'Home'
    HEALTH = 'HEALTH', 'Health'
    DIGITAL = 'DIGITAL', 'Digital'
    OTHER = 'OTHER', 'Other'


class ScheduleType(models.TextChoices):
    FIXED_DATE = 'FIXED_DATE', 'One-time'
    EVERY_N_MONTHS = 'EVERY_N_MONTHS', 'Every N months'
    YEARLY = 'YEARLY', 'Yearly on specific date'


class TaskState(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    COMPLETED_TODAY = 'COMPLETED_TODAY', 'Completed today'
    OVERDUE = 'OVERDUE', 'Overdue'


class Task(models.Model):
    """
    A recurring (or one-time) piece of life admin.

    next_due_date and last_completed_date are always stored at 12:00 local
    time (see apps.tasks.schedule.normalize_to_noon) so the calendar day
    never shifts across a UTC midnight.

    schedule_value meaning depends on schedule_type:
    - FIXED_DATE: unused (null)
    - EVERY_N_MONTHS: the interval N in months
    - YEARLY: the month/day encoded as MMDD (e.g. 1225)
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='tasks'
    )
    household = models.ForeignKey(
        'households.Household',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='tasks'
    )

    title = models.CharField(max_length=200)
    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        default=Category.OTHER
    )
    schedule_type = models.CharField(
        max_length=20,
        choices=ScheduleType.choices,
        default=ScheduleType.FIXED_DATE
    )
    schedule_value = models.PositiveIntegerField(null=True, blank=True)

    next_due_date = models.DateTimeField(db_index=True)
    last_completed_date = models.DateTimeField(null=True, blank=True)
    completion_count = models.PositiveIntegerField(default=0)

    notes = models.TextField(max_length=1000, blank=True, null=True)
    cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['next_due_date']

    def __str__(self):
        return f"{self.title} ({self.schedule_type})"
