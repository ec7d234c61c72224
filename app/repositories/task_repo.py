# app/repositories/task_repo.py
import uuid

from sqlmodel import Session, select

from app.models.task import Task


class TaskRepository:
    """
    Data access layer for Task.

    Every read/write that targets a single task is owner-scoped:
    it takes both the task id and the owner's user id.
    """

    def list_for_user(self, session: Session, user_id: uuid.UUID) -> list[Task]:
        """
        All tasks of one user.

        Order: due_date ascending with undated tasks last,
        then newest created first.
        """
        stmt = (
            select(Task)
            .where(Task.user_id == user_id)
            .order_by(
                Task.due_date.is_(None),
                Task.due_date.asc(),
                Task.created_at.desc(),
            )
        )
        return list(session.exec(stmt).all())

    def get_for_user(
        self, session: Session, task_id: uuid.UUID, user_id: uuid.UUID
    ) -> Task | None:
        stmt = select(Task).where(Task.id == task_id, Task.user_id == user_id)
        return session.exec(stmt).first()

    # CRUD
    def create(self, session: Session, task: Task) -> Task:
        session.add(task)
        session.commit()
        session.refresh(task)
        return task

    def update(self, session: Session, task: Task) -> Task:
        session.add(task)
        session.commit()
        session.refresh(task)
        return task

    def delete(self, session: Session, task: Task) -> None:
        session.delete(task)
        session.commit()

    def delete_all_for_user(
        self, session: Session, user_id: uuid.UUID, *, commit: bool = True
    ) -> int:
        """Remove every task of a user. Returns the number of rows removed."""
        rows = self.list_for_user(session, user_id)
        for row in rows:
            session.delete(row)
        if commit:
            session.commit()
        return len(rows)
