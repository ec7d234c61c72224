# app/schemas/envelope.py
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """
    Uniform response wrapper used by every endpoint:

        {"success": true, "message": "...", "data": {...}}

    Routes are declared with `response_model_exclude_unset=True`, so
    `message`/`data` are only present when set.
    """

    success: bool = True
    message: str | None = None
    data: T | None = None


class TokenData(BaseModel):
    token: str
