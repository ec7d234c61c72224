# app/schemas/task.py
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.task import Priority


class TaskRead(BaseModel):
    """
    Read model for a single task.

    Keys are camelCase on the wire (dueDate, createdAt, ...);
    the owner id is exposed as `user`.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: uuid.UUID
    user_id: uuid.UUID = Field(alias="user")
    title: str
    description: str
    due_date: datetime | None
    priority: Priority
    completed: bool
    created_at: datetime
    updated_at: datetime
