# app/routers/users.py
import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlmodel import Session

from app.core.auth import require_auth
from app.database import get_session
from app.routers.auth import get_account_service
from app.schemas.envelope import Envelope
from app.schemas.user import UserRead
from app.services.account_service import AccountService

router = APIRouter(prefix="/users", tags=["Users"])


# -------- Self profile --------


@router.put(
    "/profile",
    response_model=Envelope[UserRead],
    response_model_exclude_unset=True,
)
def update_profile(
    payload: dict[str, Any] | None = Body(None),
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_auth),
    service: AccountService = Depends(get_account_service),
):
    """
    Update the authenticated user's profile (partial update).

    Editable fields: `name`, `bio`.
    """
    user = service.update_profile(session, user_id, payload or {})
    return Envelope[UserRead](
        success=True,
        message="Profile updated successfully",
        data=UserRead.model_validate(user),
    )


@router.put(
    "/change-password",
    response_model=Envelope,
    response_model_exclude_unset=True,
)
def change_password(
    payload: dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_auth),
    service: AccountService = Depends(get_account_service),
):
    """
    Change password. Body: {currentPassword, newPassword}.

    Existing tokens are not revoked.
    """
    service.change_password(session, user_id, payload)
    return Envelope(success=True, message="Password changed successfully")


@router.delete(
    "/delete-account",
    response_model=Envelope,
    response_model_exclude_unset=True,
)
def delete_account(
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_auth),
    service: AccountService = Depends(get_account_service),
):
    """
    Delete the authenticated user's account together with all their tasks.
    """
    service.delete_account(session, user_id)
    return Envelope(success=True, message="Account deleted successfully")
