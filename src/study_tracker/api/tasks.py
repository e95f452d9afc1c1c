from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional
from uuid import uuid4

from ..domain import Task
from .registry import register_api
from .serializers import serialize_task
from .state import api_state


@register_api(
    "list_tasks",
    description="List tasks, open ones first.",
    category="tasks",
    tags=("list",),
)
def list_tasks() -> Dict[str, List[dict]]:
    tasks = sorted(api_state.study.state.tasks, key=lambda task: task.done)
    return {"tasks": [serialize_task(task) for task in tasks]}


@register_api(
    "add_task",
    description="Add a task, optionally linked to a subject.",
    category="tasks",
    tags=("create",),
)
def add_task(title: str, subject_id: Optional[str] = None) -> Dict[str, object]:
    if not title.strip():
        raise ValueError("Task title must not be empty.")
    task = Task(id=uuid4().hex, title=title.strip(), subject_id=subject_id)
    api_state.study.replace_tasks([*api_state.study.state.tasks, task])
    return {"task": serialize_task(task)}


@register_api(
    "set_task_done",
    description="Mark a task as done or reopen it.",
    category="tasks",
    tags=("status",),
)
def set_task_done(task_id: str, done: bool = True) -> Dict[str, object]:
    updated: Optional[Task] = None
    tasks: List[Task] = []
    for task in api_state.study.state.tasks:
        if task.id == task_id:
            task = updated = replace(task, done=done)
        tasks.append(task)
    if updated is not None:
        api_state.study.replace_tasks(tasks)
    return {"task": serialize_task(updated) if updated else None}


@register_api(
    "delete_task",
    description="Delete a task by its identifier.",
    category="tasks",
    tags=("delete",),
)
def delete_task(task_id: str) -> Dict[str, object]:
    tasks = api_state.study.state.tasks
    remaining = [task for task in tasks if task.id != task_id]
    deleted = len(remaining) != len(tasks)
    if deleted:
        api_state.study.replace_tasks(remaining)
    return {"deleted": deleted, "task_id": task_id}
