# app/routers/auth.py
import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlmodel import Session

from app.core.auth import require_auth
from app.core.security import Authenticator, get_authenticator
from app.database import get_session
from app.repositories.task_repo import TaskRepository
from app.repositories.user_repo import UserRepository
from app.schemas.envelope import Envelope, TokenData
from app.schemas.user import UserRead
from app.services.account_service import AccountService

router = APIRouter(prefix="/auth", tags=["Auth"])

user_repo = UserRepository()
task_repo = TaskRepository()


def get_account_service(
    authenticator: Authenticator = Depends(get_authenticator),
) -> AccountService:
    return AccountService(user_repo, task_repo, authenticator)


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[TokenData],
    response_model_exclude_unset=True,
)
def signup(
    payload: dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
    service: AccountService = Depends(get_account_service),
):
    """
    Register a new user and return an access token.

    Body: {email, password, name?}. `name` defaults to the email local part.
    """
    token = service.signup(session, payload)
    return Envelope[TokenData](
        success=True,
        message="User registered successfully",
        data=TokenData(token=token),
    )


@router.post(
    "/login",
    response_model=Envelope[TokenData],
    response_model_exclude_unset=True,
)
def login(
    payload: dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
    service: AccountService = Depends(get_account_service),
):
    """
    Authenticate with email + password and get a 1-hour access token.
    """
    token = service.login(session, payload)
    return Envelope[TokenData](
        success=True,
        message="Logged in successfully",
        data=TokenData(token=token),
    )


@router.get(
    "/me",
    response_model=Envelope[UserRead],
    response_model_exclude_unset=True,
)
def read_me(
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_auth),
    service: AccountService = Depends(get_account_service),
):
    """
    Return the authenticated user's profile (never the password hash).

    Auth:
      - Requires a valid bearer token.
    """
    user = service.fetch_self(session, user_id)
    return Envelope[UserRead](success=True, data=UserRead.model_validate(user))
