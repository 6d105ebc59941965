"""
Task API endpoints, served to both the web dashboard and the mobile app.
"""
from dataclasses import asdict
from uuid import UUID

from django.http import HttpRequest

from apps.core.routing import DualRouter
from apps.core.schemas import DeletedOut
from .dtos import (
    TaskEnvelope,
    TaskIn,
    TaskListEnvelope,
    TemplateAddedEnvelope,
    TemplateListEnvelope,
)
from . import services

routers = DualRouter(tags=["Tasks"])
template_routers = DualRouter(tags=["Templates"])


@routers.get("", response=TaskListEnvelope)
def list_tasks(request: HttpRequest):
    """Own tasks plus household-shared tasks, soonest due first."""
    return {"tasks": [asdict(task) for task in services.list_tasks(request.auth)]}


@routers.post("", response={201: TaskEnvelope})
def create_task(request: HttpRequest, payload: TaskIn):
    task = services.create_task(request.auth, payload)
    return 201, {"task": asdict(task)}


@routers.get("/{task_id}", response=TaskEnvelope)
def get_task(request: HttpRequest, task_id: UUID):
    return {"task": asdict(services.get_task(request.auth, task_id))}


@routers.put("/{task_id}", response=TaskEnvelope)
def update_task(request: HttpRequest, task_id: UUID, payload: TaskIn):
    return {"task": asdict(services.update_task(request.auth, task_id, payload))}


@routers.delete("/{task_id}", response=DeletedOut)
def delete_task(request: HttpRequest, task_id: UUID):
    services.delete_task(request.auth, task_id)
    return {"deleted": True}


@routers.post("/{task_id}/complete", response=TaskEnvelope)
def complete_task(request: HttpRequest, task_id: UUID):
    return {"task": asdict(services.complete_task(request.auth, task_id))}


@routers.post("/{task_id}/uncomplete", response=TaskEnvelope)
def uncomplete_task(request: HttpRequest, task_id: UUID):
    return {"task": asdict(services.uncomplete_task(request.auth, task_id))}


# =============================================================================
# Templates
# =============================================================================

@template_routers.get("", response=TemplateListEnvelope)
def list_templates(request: HttpRequest):
    return {"templates": [asdict(template) for template in services.list_templates()]}


@template_routers.post("/{template_id}", response={201: TemplateAddedEnvelope})
def add_template(request: HttpRequest, template_id: str):
    """Add every task of a template to the caller's account (Pro only)."""
    tasks = services.add_template(request.auth, template_id)
    return 201, {"added_count": len(tasks), "tasks": [asdict(task) for task in tasks]}
