# app/schemas/user.py
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UserRead(BaseModel):
    """
    Response schema returned to clients.

    There is deliberately no password field: a User row can be validated
    into this model without ever exposing the hash.
    Serialized with camelCase keys (createdAt, updatedAt).
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: uuid.UUID
    email: str
    name: str
    bio: str
    avatar: str
    created_at: datetime
    updated_at: datetime
