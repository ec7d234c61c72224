# app/models/task.py
import uuid
from datetime import datetime
from typing import Literal

from sqlmodel import SQLModel, Field

from app.models.user import utcnow

Priority = Literal["low", "medium", "high"]
PRIORITIES: tuple[str, ...] = ("low", "medium", "high")


class Task(SQLModel, table=True):
    """
    A single to-do item.
    Every task belongs to exactly one user (`user_id`), set at creation.
    """

    __tablename__ = "tasks"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    title: str = Field(max_length=100)

    description: str = Field(default="", max_length=500)

    due_date: datetime | None = Field(default=None, index=True)

    priority: str = Field(
        default="medium",
        max_length=10,
        description="low | medium | high",
    )

    completed: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow)

    updated_at: datetime = Field(default_factory=utcnow)
