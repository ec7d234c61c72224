# app/services/task_service.py
import uuid
from typing import Any

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.errors import raise_for_invalid
from app.core.validation import parse_due_date, validate_task
from app.models.task import Task
from app.models.user import utcnow
from app.repositories.task_repo import TaskRepository


class TaskService:
    """
    Business logic for tasks.

    Every operation is scoped to the caller (`user_id` from the auth gate).
    A task owned by someone else is reported exactly like a missing one.
    """

    def __init__(self, repo: TaskRepository):
        self.repo = repo

    # ---- internal helpers ----

    @staticmethod
    def _parse_task_id(task_id: str) -> uuid.UUID:
        try:
            return uuid.UUID(task_id)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid Task ID",
            )

    def _get_owned_task(
        self, session: Session, user_id: uuid.UUID, task_id: str
    ) -> Task:
        task = self.repo.get_for_user(session, self._parse_task_id(task_id), user_id)
        if not task:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Task not found",
            )
        return task

    @staticmethod
    def _apply(task: Task, payload: dict[str, Any]) -> None:
        """Copy only the supplied fields onto the task."""
        if "title" in payload:
            task.title = payload["title"].strip()
        if "description" in payload:
            task.description = payload["description"].strip()
        if "dueDate" in payload:
            task.due_date = parse_due_date(payload["dueDate"])
        if "priority" in payload:
            task.priority = payload["priority"]
        if "completed" in payload:
            task.completed = payload["completed"]

    # ---- public operations ----

    def create_task(self, session: Session, user_id: uuid.UUID, payload: Any) -> Task:
        """
        Create a task owned by the caller.
        New tasks always start with completed=False.
        """
        raise_for_invalid(validate_task(payload))

        task = Task(user_id=user_id, title=payload["title"].strip())
        self._apply(task, payload)
        task.completed = False
        return self.repo.create(session, task)

    def list_tasks(self, session: Session, user_id: uuid.UUID) -> list[Task]:
        """Caller's tasks, soonest due first, undated last, newest first on ties."""
        return self.repo.list_for_user(session, user_id)

    def get_task(self, session: Session, user_id: uuid.UUID, task_id: str) -> Task:
        return self._get_owned_task(session, user_id, task_id)

    def update_task(
        self,
        session: Session,
        user_id: uuid.UUID,
        task_id: str,
        payload: Any,
    ) -> Task:
        """
        Partial update: fields missing from the payload keep their values.
        `updated_at` is refreshed on every successful call.
        """
        raise_for_invalid(validate_task(payload, is_update=True))
        task = self._get_owned_task(session, user_id, task_id)

        self._apply(task, payload)
        task.updated_at = utcnow()
        return self.repo.update(session, task)

    def delete_task(self, session: Session, user_id: uuid.UUID, task_id: str) -> None:
        task = self._get_owned_task(session, user_id, task_id)
        self.repo.delete(session, task)
