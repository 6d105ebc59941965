"""DTOs and request/response schemas for the Tasks app."""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import field_validator

from apps.core.schemas import CamelSchema
from .models import Category, ScheduleType

# Bounds of Task.cost (max_digits=10, decimal_places=2)
CENT = Decimal("0.01")
MAX_COST = Decimal("99999999.99")

MAX_DUE_YEAR = 3000


@dataclass(frozen=True)
class TaskOwnerDTO:
    id: UUID
    name: Optional[str]
    email: str


@dataclass(frozen=True)
class TaskDTO:
    """Task as returned to clients, including derived display fields."""
    id: UUID
    title: str
    category: str
    schedule_type: str
    schedule_value: Optional[int]
    schedule_description: str
    next_due_date: datetime
    last_completed_date: Optional[datetime]
    completion_count: int
    notes: Optional[str]
    cost: Optional[float]
    status: str
    household_id: Optional[UUID]
    owner: TaskOwnerDTO
    created_at: datetime
    updated_at: datetime


class TaskIn(CamelSchema):
    title: str
    category: Category
    schedule_type: ScheduleType
    schedule_value: Optional[int] = None
    next_due_date: date
    notes: Optional[str] = None
    cost: Optional[Decimal] = None
    share_with_household: bool = False

    @field_validator('title')
    @classmethod
    def title_length(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        if len(value) > 200:
            raise ValueError("Title too long")
        return value

    @field_validator('schedule_value')
    @classmethod
    def schedule_value_positive(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise ValueError("Schedule value must be a positive number")
        return value

    @field_validator('next_due_date')
    @classmethod
    def due_date_in_range(cls, value: date) -> date:
        if value.year >= MAX_DUE_YEAR:
            raise ValueError(f"Due date must be before {MAX_DUE_YEAR}")
        return value

    @field_validator('notes')
    @classmethod
    def notes_length(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and len(value) > 1000:
            raise ValueError("Notes too long")
        return value or None

    @field_validator('cost')
    @classmethod
    def cost_in_range(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        if value is None:
            return None
        if value > MAX_COST:
            raise ValueError("Cost is too large")
        value = value.quantize(CENT, rounding=ROUND_HALF_UP)
        if value <= 0:
            raise ValueError("Cost must be a positive number")
        return value


# Response schemas

class TaskOwnerOut(CamelSchema):
    id: UUID
    name: Optional[str]
    email: str


class TaskOut(CamelSchema):
    id: UUID
    title: str
    category: str
    schedule_type: str
    schedule_value: Optional[int]
    schedule_description: str
    next_due_date: datetime
    last_completed_date: Optional[datetime]
    completion_count: int
    notes: Optional[str]
    cost: Optional[float]
    status: str
    household_id: Optional[UUID]
    owner: TaskOwnerOut
    created_at: datetime
    updated_at: datetime


class TaskEnvelope(CamelSchema):
    task: TaskOut


class TaskListEnvelope(CamelSchema):
    tasks: List[TaskOut]


# Templates

@dataclass(frozen=True)
class TemplateTaskDTO:
    title: str
    category: str
    schedule_type: str
    schedule_value: Optional[int]
    schedule_description: str
    notes: Optional[str]


@dataclass(frozen=True)
class TemplateDTO:
    id: str
    name: str
    description: str
    tasks: List[TemplateTaskDTO]


class TemplateTaskOut(CamelSchema):
    title: str
    category: str
    schedule_type: str
    schedule_value: Optional[int]
    schedule_description: str
    notes: Optional[str]


class TemplateOut(CamelSchema):
    id: str
    name: str
    description: str
    tasks: List[TemplateTaskOut]


class TemplateListEnvelope(CamelSchema):
    templates: List[TemplateOut]


class TemplateAddedEnvelope(CamelSchema):
    added_count: int
    tasks: List[TaskOut]
