"""
Services for the Tasks app.

Visibility rules:
- a user sees their own tasks plus tasks shared with their household
- household members may complete a shared task
- only the owner may edit, delete or un-complete it

Any task the caller may not act on is reported as not found.
"""
import logging
from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import F, Q, QuerySet
from django.utils import timezone

from apps.core.errors import Forbidden, NotFound
from apps.households.services import get_household_id
from apps.identity.models import User
from apps.identity.permissions import (
    FEATURE_DENIED_MESSAGES,
    FREE_TASK_LIMIT,
    Features,
    has_feature,
    require_feature,
)
from .dtos import TaskDTO, TaskIn, TaskOwnerDTO, TemplateDTO, TemplateTaskDTO
from .models import ScheduleType, Task
from . import schedule, template_catalog

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"


# =============================================================================
# Queries
# =============================================================================

def to_task_dto(task: Task, today: Optional[date] = None) -> TaskDTO:
    return TaskDTO(
        id=task.id,
        title=task.title,
        category=str(task.category),
        schedule_type=str(task.schedule_type),
        schedule_value=task.schedule_value,
        schedule_description=schedule.describe_schedule(task.schedule_type, task.schedule_value),
        next_due_date=task.next_due_date,
        last_completed_date=task.last_completed_date,
        completion_count=task.completion_count,
        notes=task.notes,
        cost=float(task.cost) if task.cost is not None else None,
        status=schedule.derive_state(task.next_due_date, task.last_completed_date, today),
        household_id=task.household_id,
        owner=TaskOwnerDTO(
            id=task.user.id,
            name=task.user.name or None,
            email=task.user.email,
        ),
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


def visible_tasks(user: User) -> QuerySet:
    """Own tasks plus tasks shared with the user's household."""
    household_id = get_household_id(user)
    condition = Q(user=user)
    if household_id:
        condition |= Q(household_id=household_id)
    return Task.objects.filter(condition).select_related('user').order_by('next_due_date')


def _get_visible(user: User, task_id: UUID) -> Task:
    task = visible_tasks(user).filter(id=task_id).first()
    if task is None:
        raise NotFound(TASK_NOT_FOUND)
    return task


def _get_owned(user: User, task_id: UUID) -> Task:
    task = Task.objects.select_related('user').filter(id=task_id, user=user).first()
    if task is None:
        raise NotFound(TASK_NOT_FOUND)
    return task


def list_tasks(user: User, today: Optional[date] = None) -> List[TaskDTO]:
    today = today or schedule.local_today()
    return [to_task_dto(task, today) for task in visible_tasks(user)]


def get_task(user: User, task_id: UUID) -> TaskDTO:
    return to_task_dto(_get_visible(user, task_id))


# =============================================================================
# Mutations
# =============================================================================

def _apply_payload(task: Task, user: User, payload: TaskIn) -> None:
    task.title = payload.title
    task.category = payload.category
    task.schedule_type = payload.schedule_type
    task.schedule_value = schedule.validate_schedule(payload.schedule_type, payload.schedule_value)
    task.next_due_date = schedule.normalize_to_noon(payload.next_due_date)
    task.notes = payload.notes or None
    task.cost = payload.cost
    task.household_id = get_household_id(user) if payload.share_with_household else None


def create_task(user: User, payload: TaskIn) -> TaskDTO:
    """
    Create a task for the user.

    FREE accounts are capped at FREE_TASK_LIMIT own tasks.
    """
    if not has_feature(user, Features.UNLIMITED_TASKS):
        if Task.objects.filter(user=user).count() >= FREE_TASK_LIMIT:
            raise Forbidden(FEATURE_DENIED_MESSAGES[Features.UNLIMITED_TASKS])

    task = Task(user=user)
    _apply_payload(task, user, payload)
    task.save()

    logger.info(f"User {user.id} created task {task.id} ({task.schedule_type})")
    return to_task_dto(task)


def update_task(user: User, task_id: UUID, payload: TaskIn) -> TaskDTO:
    task = _get_owned(user, task_id)
    _apply_payload(task, user, payload)
    task.save()
    return to_task_dto(task)


def delete_task(user: User, task_id: UUID) -> None:
    task = _get_owned(user, task_id)
    task.delete()
    logger.info(f"User {user.id} deleted task {task_id}")


def complete_task(user: User, task_id: UUID, today: Optional[date] = None) -> TaskDTO:
    """
    Mark a task done for today.

    completion_count is incremented in the database so concurrent
    completions are never lost. Interval schedules move next_due_date
    forward from today; FIXED_DATE tasks keep their date.
    """
    task = _get_visible(user, task_id)
    today = today or schedule.local_today()

    updates = {
        'last_completed_date': schedule.normalize_to_noon(today),
        'completion_count': F('completion_count') + 1,
        'updated_at': timezone.now(),
    }
    if task.schedule_type != ScheduleType.FIXED_DATE:
        updates['next_due_date'] = schedule.calculate_next_due_date(
            task.schedule_type,
            task.schedule_value,
            task.next_due_date,
            from_date=today,
        )

    Task.objects.filter(pk=task.pk).update(**updates)
    task.refresh_from_db()

    logger.info(f"User {user.id} completed task {task.id}; next due {task.next_due_date}")
    return to_task_dto(task, today)


def uncomplete_task(user: User, task_id: UUID) -> TaskDTO:
    """Clear today's completion. The count and due date are left as they are."""
    task = _get_owned(user, task_id)
    task.last_completed_date = None
    task.save(update_fields=['last_completed_date', 'updated_at'])
    return to_task_dto(task)


# =============================================================================
# Templates
# =============================================================================

def list_templates() -> List[TemplateDTO]:
    return [
        TemplateDTO(
            id=template.id,
            name=template.name,
            description=template.description,
            tasks=[
                TemplateTaskDTO(
                    title=item.title,
                    category=str(item.category),
                    schedule_type=str(item.schedule_type),
                    schedule_value=item.schedule_value,
                    schedule_description=schedule.describe_schedule(item.schedule_type, item.schedule_value),
                    notes=item.notes,
                )
                for item in template.tasks
            ],
        )
        for template in template_catalog.TEMPLATES
    ]


def _template_due_date(item: template_catalog.TemplateTask, today: date) -> datetime:
    # One-time tasks default to a month from today
    if item.schedule_type == ScheduleType.FIXED_DATE:
        return schedule.normalize_to_noon(schedule.add_months(today, 1))
    return schedule.calculate_next_due_date(
        item.schedule_type, item.schedule_value, today, from_date=today
    )


@transaction.atomic
def add_template(user: User, template_id: str, today: Optional[date] = None) -> List[TaskDTO]:
    """
    Create every task of a built-in template for the user (Pro only).

    Interval tasks get their first due date from the schedule, counted from
    today; the template tasks are private to the user.
    """
    require_feature(user, Features.TEMPLATES)

    template = template_catalog.get_template(template_id)
    if template is None:
        raise NotFound("Template not found")

    today = today or schedule.local_today()
    tasks = Task.objects.bulk_create([
        Task(
            user=user,
            title=item.title,
            category=item.category,
            schedule_type=item.schedule_type,
            schedule_value=item.schedule_value,
            next_due_date=_template_due_date(item, today),
            notes=item.notes,
        )
        for item in template.tasks
    ])

    logger.info(f"User {user.id} added template {template.id} ({len(tasks)} tasks)")
    return [to_task_dto(task, today) for task in tasks]
