"""
Analytics services for LifeOps.

Summaries over the tasks a user can see (own plus household-shared):
overview counts, annualised cost, category and schedule breakdowns, a six
month completion history and the Life Admin Score.

Life Admin Score (0-100) is a weighted blend of:
    50%  on-time completions  share of tasks completed at least once
    30%  task coverage        share of categories with at least one task
    20%  reminder setup       100 when email or SMS reminders are on
"""
from collections import OrderedDict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from apps.identity.models import User
from apps.tasks.models import Category, ScheduleType, Task
from apps.tasks.schedule import MONTH_ABBREVIATIONS, local_today, to_local_date
from apps.tasks.services import visible_tasks
from .dtos import (
    AnalyticsDTO,
    CategoryCostDTO,
    CategoryCountDTO,
    MonthlyCompletionDTO,
    ScheduleTypeCountDTO,
    ScoreBreakdownDTO,
)

UPCOMING_WINDOW_DAYS = 30
HISTORY_MONTHS = 6

SCORE_WEIGHTS = {
    'on_time': Decimal('0.5'),
    'coverage': Decimal('0.3'),
    'reminders': Decimal('0.2'),
}

SCHEDULE_TYPE_LABELS = {
    ScheduleType.FIXED_DATE: "One-time",
    ScheduleType.YEARLY: "Yearly",
    ScheduleType.EVERY_N_MONTHS: "Recurring",
}


def _round(value) -> int:
    """Round half up, as shown to users."""
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def _percentage(part: int, whole: int) -> int:
    if not whole:
        return 0
    return _round(Decimal(part) * 100 / Decimal(whole))


def annualized_cost(task: Task) -> Decimal:
    """Yearly spend for a task: interval tasks recur 12/N times a year."""
    cost = Decimal(task.cost or 0)
    if task.schedule_type == ScheduleType.EVERY_N_MONTHS and task.schedule_value:
        return cost * 12 / task.schedule_value
    return cost


def build_analytics(
    tasks: Iterable[Task],
    reminders_enabled: bool,
    today: date,
) -> AnalyticsDTO:
    tasks = list(tasks)
    total_tasks = len(tasks)
    month_start = today.replace(day=1)

    overdue_count = 0
    upcoming_count = 0
    completed_this_month = 0
    for task in tasks:
        due = to_local_date(task.next_due_date)
        completed = to_local_date(task.last_completed_date) if task.last_completed_date else None
        if due < today and completed is None:
            overdue_count += 1
        if 0 <= (due - today).days <= UPCOMING_WINDOW_DAYS:
            upcoming_count += 1
        if completed is not None and completed >= month_start:
            completed_this_month += 1

    # Cost
    costs = OrderedDict((category, [Decimal('0'), 0]) for category in Category.values)
    total_annual_cost = Decimal('0')
    for task in tasks:
        if not task.cost or task.cost <= 0:
            continue
        yearly = annualized_cost(task)
        total_annual_cost += yearly
        costs[task.category][0] += yearly
        costs[task.category][1] += 1

    cost_by_category = sorted(
        (
            CategoryCostDTO(category=category, cost=float(round(cost, 2)), task_count=count)
            for category, (cost, count) in costs.items()
            if cost > 0
        ),
        key=lambda item: item.cost,
        reverse=True,
    )

    # Breakdowns
    category_counts = OrderedDict((category, 0) for category in Category.values)
    schedule_counts = OrderedDict()
    for task in tasks:
        category_counts[task.category] += 1
        label = SCHEDULE_TYPE_LABELS.get(task.schedule_type, "Recurring")
        schedule_counts[label] = schedule_counts.get(label, 0) + 1

    tasks_by_category = sorted(
        (
            CategoryCountDTO(category=category, count=count)
            for category, count in category_counts.items()
            if count > 0
        ),
        key=lambda item: item.count,
        reverse=True,
    )
    tasks_by_schedule_type = sorted(
        (ScheduleTypeCountDTO(type=label, count=count) for label, count in schedule_counts.items()),
        key=lambda item: item.count,
        reverse=True,
    )

    # Completion history, oldest month first
    completion_history = []
    for offset in range(HISTORY_MONTHS - 1, -1, -1):
        start = month_start - relativedelta(months=offset)
        end = start + relativedelta(months=1)
        completions = sum(
            1 for task in tasks
            if task.last_completed_date
            and start <= to_local_date(task.last_completed_date) < end
        )
        completion_history.append(MonthlyCompletionDTO(
            month=MONTH_ABBREVIATIONS[start.month - 1],
            completions=completions,
        ))

    # Life Admin Score
    used_categories = len({task.category for task in tasks})
    on_time = _percentage(sum(1 for task in tasks if task.completion_count > 0), total_tasks)
    coverage = _percentage(used_categories, len(Category.values))
    reminders = 100 if reminders_enabled else 0
    score = _round(
        on_time * SCORE_WEIGHTS['on_time']
        + coverage * SCORE_WEIGHTS['coverage']
        + reminders * SCORE_WEIGHTS['reminders']
    )

    return AnalyticsDTO(
        total_tasks=total_tasks,
        completed_this_month=completed_this_month,
        overdue_count=overdue_count,
        upcoming_count=upcoming_count,
        total_annual_cost=float(round(total_annual_cost, 2)),
        cost_by_category=cost_by_category,
        tasks_by_category=tasks_by_category,
        tasks_by_schedule_type=tasks_by_schedule_type,
        completion_history=completion_history,
        life_admin_score=score,
        score_breakdown=ScoreBreakdownDTO(
            on_time_completions=on_time,
            task_coverage=coverage,
            reminder_setup=reminders,
        ),
    )


def get_analytics(user: User, today: Optional[date] = None) -> AnalyticsDTO:
    return build_analytics(
        visible_tasks(user),
        reminders_enabled=user.email_reminders or user.sms_reminders,
        today=today or local_today(),
    )
