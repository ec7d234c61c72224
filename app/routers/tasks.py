# app/routers/tasks.py
import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlmodel import Session

from app.core.auth import require_auth
from app.database import get_session
from app.repositories.task_repo import TaskRepository
from app.schemas.envelope import Envelope
from app.schemas.task import TaskRead
from app.services.task_service import TaskService

router = APIRouter(prefix="/users/tasks", tags=["Tasks"])

repo = TaskRepository()
service = TaskService(repo)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[TaskRead],
    response_model_exclude_unset=True,
)
def create_task(
    payload: dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_auth),
):
    """
    Create a task for the authenticated user.

    Body: {title, description?, dueDate?, priority?}.
    """
    task = service.create_task(session, user_id, payload)
    return Envelope[TaskRead](
        success=True,
        message="Task created successfully",
        data=TaskRead.model_validate(task),
    )


@router.get(
    "",
    response_model=Envelope[list[TaskRead]],
    response_model_exclude_unset=True,
)
def list_tasks(
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_auth),
):
    """
    List the authenticated user's tasks.

    Sorted by due date (undated last), then newest first.
    """
    tasks = service.list_tasks(session, user_id)
    return Envelope[list[TaskRead]](
        success=True,
        data=[TaskRead.model_validate(t) for t in tasks],
    )


@router.get(
    "/{task_id}",
    response_model=Envelope[TaskRead],
    response_model_exclude_unset=True,
)
def get_task(
    task_id: str,
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_auth),
):
    """
    Get one of the authenticated user's tasks.

    404 if the task does not exist or belongs to someone else.
    """
    task = service.get_task(session, user_id, task_id)
    return Envelope[TaskRead](success=True, data=TaskRead.model_validate(task))


@router.put(
    "/{task_id}",
    response_model=Envelope[TaskRead],
    response_model_exclude_unset=True,
)
def update_task(
    task_id: str,
    payload: dict[str, Any] | None = Body(None),
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_auth),
):
    """
    Partially update a task; only the fields present in the body change.
    """
    task = service.update_task(session, user_id, task_id, payload or {})
    return Envelope[TaskRead](
        success=True,
        message="Task updated successfully",
        data=TaskRead.model_validate(task),
    )


@router.delete(
    "/{task_id}",
    response_model=Envelope,
    response_model_exclude_unset=True,
)
def delete_task(
    task_id: str,
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_auth),
):
    """Delete one of the authenticated user's tasks."""
    service.delete_task(session, user_id, task_id)
    return Envelope(success=True, message="Task deleted successfully")
