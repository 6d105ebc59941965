"""
Built-in task templates.

A template is a named bundle of recurring tasks a Pro user can add to their
account in one step. YEARLY schedule values use the MMDD encoding.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from .models import Category, ScheduleType


@dataclass(frozen=True)
class TemplateTask:
    title: str
    category: str
    schedule_type: str
    schedule_value: Optional[int]
    notes: Optional[str] = None


@dataclass(frozen=True)
class TaskTemplate:
    id: str
    name: str
    description: str
    tasks: Tuple[TemplateTask, ...]


TEMPLATES: Tuple[TaskTemplate, ...] = (
    TaskTemplate(
        id="annual-life-admin",
        name="Annual Life Admin Checklist",
        description="Essential yearly tasks for keeping your life organized",
        tasks=(
            TemplateTask("Review and update insurance policies", Category.FINANCE, ScheduleType.YEARLY, 115,
                         "Review home, auto, health, and life insurance coverage"),
            TemplateTask("File taxes", Category.FINANCE, ScheduleType.YEARLY, 401,
                         "Gather documents and file federal/state taxes"),
            TemplateTask("Review retirement contributions", Category.FINANCE, ScheduleType.YEARLY, 101,
                         "Maximize 401k/IRA contributions for the year"),
            TemplateTask("Annual health checkup", Category.HEALTH, ScheduleType.YEARLY, 301,
                         "Schedule and complete annual physical"),
            TemplateTask("Dental cleaning", Category.HEALTH, ScheduleType.EVERY_N_MONTHS, 6,
                         "Regular dental checkup and cleaning"),
            TemplateTask("Update emergency contacts", Category.OTHER, ScheduleType.YEARLY, 101,
                         "Review and update emergency contact information everywhere"),
        ),
    ),
    TaskTemplate(
        id="freelancer-admin",
        name="Freelancer Admin Checklist",
        description="Stay on top of your freelance business admin",
        tasks=(
            TemplateTask("Quarterly estimated tax payment", Category.FINANCE, ScheduleType.EVERY_N_MONTHS, 3,
                         "Pay federal and state estimated taxes"),
            TemplateTask("Review business expenses", Category.FINANCE, ScheduleType.EVERY_N_MONTHS, 1,
                         "Categorize and track all business expenses"),
            TemplateTask("Invoice follow-up", Category.FINANCE, ScheduleType.EVERY_N_MONTHS, 1,
                         "Follow up on unpaid invoices"),
            TemplateTask("Update portfolio/website", Category.DIGITAL, ScheduleType.EVERY_N_MONTHS, 3,
                         "Add recent work and update testimonials"),
            TemplateTask("Review contracts and rates", Category.LEGAL, ScheduleType.YEARLY, 101,
                         "Review contract templates and consider rate increases"),
            TemplateTask("Backup client files", Category.DIGITAL, ScheduleType.EVERY_N_MONTHS, 1,
                         "Ensure all client work is properly backed up"),
        ),
    ),
    TaskTemplate(
        id="digital-life",
        name="Digital Life Checklist",
        description="Keep your digital life secure and organized",
        tasks=(
            TemplateTask("Review and update passwords", Category.DIGITAL, ScheduleType.EVERY_N_MONTHS, 6,
                         "Rotate important passwords and review password manager"),
            TemplateTask("Review app subscriptions", Category.DIGITAL, ScheduleType.EVERY_N_MONTHS, 3,
                         "Cancel unused subscriptions and review spending"),
            TemplateTask("Backup important data", Category.DIGITAL, ScheduleType.EVERY_N_MONTHS, 1,
                         "Backup photos, documents, and important files"),
            TemplateTask("Review privacy settings", Category.DIGITAL, ScheduleType.EVERY_N_MONTHS, 6,
                         "Check privacy settings on social media and accounts"),
            TemplateTask("Clean up email inbox", Category.DIGITAL, ScheduleType.EVERY_N_MONTHS, 3,
                         "Unsubscribe from newsletters and organize folders"),
            TemplateTask("Update devices and software", Category.DIGITAL, ScheduleType.EVERY_N_MONTHS, 1,
                         "Install updates on all devices"),
        ),
    ),
)


def get_template(template_id: str) -> Optional[TaskTemplate]:
    for template in TEMPLATES:
        if template.id == template_id:
            return template
    return None
