"""DTOs and response schemas for the Analytics app."""
from dataclasses import dataclass
from typing import List

from apps.core.schemas import CamelSchema


@dataclass(frozen=True)
class CategoryCostDTO:
    category: str
    cost: float
    task_count: int


@dataclass(frozen=True)
class CategoryCountDTO:
    category: str
    count: int


@dataclass(frozen=True)
class ScheduleTypeCountDTO:
    type: str
    count: int


@dataclass(frozen=True)
class MonthlyCompletionDTO:
    month: str
    completions: int


@dataclass(frozen=True)
class ScoreBreakdownDTO:
    on_time_completions: int
    task_coverage: int
    reminder_setup: int


@dataclass(frozen=True)
class AnalyticsDTO:
    total_tasks: int
    completed_this_month: int
    overdue_count: int
    upcoming_count: int
    total_annual_cost: float
    cost_by_category: List[CategoryCostDTO]
    tasks_by_category: List[CategoryCountDTO]
    tasks_by_schedule_type: List[ScheduleTypeCountDTO]
    completion_history: List[MonthlyCompletionDTO]
    life_admin_score: int
    score_breakdown: ScoreBreakdownDTO


class CategoryCostOut(CamelSchema):
    category: str
    cost: float
    task_count: int


class CategoryCountOut(CamelSchema):
    category: str
    count: int


class ScheduleTypeCountOut(CamelSchema):
    type: str
    count: int


class MonthlyCompletionOut(CamelSchema):
    month: str
    completions: int


class ScoreBreakdownOut(CamelSchema):
    on_time_completions: int
    task_coverage: int
    reminder_setup: int


class AnalyticsOut(CamelSchema):
    total_tasks: int
    completed_this_month: int
    overdue_count: int
    upcoming_count: int
    total_annual_cost: float
    cost_by_category: List[CategoryCostOut]
    tasks_by_category: List[CategoryCountOut]
    tasks_by_schedule_type: List[ScheduleTypeCountOut]
    completion_history: List[MonthlyCompletionOut]
    life_admin_score: int
    score_breakdown: ScoreBreakdownOut


class AnalyticsEnvelope(CamelSchema):
    analytics: AnalyticsOut
