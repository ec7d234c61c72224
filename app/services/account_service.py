# app/services/account_service.py
import logging
import uuid
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.errors import raise_for_invalid
from app.core.security import Authenticator
from app.core.validation import (
    normalize_email,
    validate_login,
    validate_password_change,
    validate_profile_update,
    validate_register,
)
from app.models.user import User, utcnow
from app.repositories.task_repo import TaskRepository
from app.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 50


def _default_name_from_email(email: str) -> str:
    """
    Derive a default display name from email when signup did not
    provide one.
    """
    return email.split("@", 1)[0][:NAME_MAX_LENGTH]


class AccountService:
    """
    Business logic for accounts.

    Responsibilities:
      - signup / login (token issuance)
      - self profile read and partial update
      - password change (explicit re-hash, no token revocation)
      - account deletion cascading to the user's tasks
    """

    def __init__(
        self,
        user_repo: UserRepository,
        task_repo: TaskRepository,
        authenticator: Authenticator,
    ):
        self.user_repo = user_repo
        self.task_repo = task_repo
        self.authenticator = authenticator

    # ---- internal helpers ----

    def _get_user(self, session: Session, user_id: uuid.UUID) -> User:
        user = self.user_repo.get_by_id(session, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return user

    @staticmethod
    def _user_exists_error() -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        )

    # ---- public (unauthenticated) ----

    def signup(self, session: Session, payload: Any) -> str:
        """
        Register a new account and return an access token.

        Rules:
          - email is stored trimmed + lowercased and must be unique
          - name defaults to the email local part; if that is shorter
            than 3 characters the client must send `name` (400 otherwise)
          - only the bcrypt hash of the password is stored
        """
        raise_for_invalid(validate_register(payload))

        email = normalize_email(payload["email"])
        if self.user_repo.get_by_email(session, email):
            raise self._user_exists_error()

        name = payload["name"].strip() if "name" in payload else _default_name_from_email(email)
        if len(name) < NAME_MIN_LENGTH:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail='"Name" is required when the email name is shorter than 3 characters',
            )

        user = User(
            email=email,
            password_hash=self.authenticator.hash_password(payload["password"]),
            name=name,
        )

        try:
            user = self.user_repo.create(session, user)
        except IntegrityError:
            # Lost a race against a concurrent signup with the same email.
            session.rollback()
            raise self._user_exists_error()

        logger.info("Registered user %s", user.id)
        return self.authenticator.create_access_token(user.id)

    def login(self, session: Session, payload: Any) -> str:
        """
        Check credentials and return an access token.

        Unknown email and wrong password produce the same 401 so callers
        cannot tell which one was wrong.
        """
        raise_for_invalid(validate_login(payload))

        user = self.user_repo.get_by_email(session, normalize_email(payload["email"]))
        if not user or not self.authenticator.verify_password(
            payload["password"], user.password_hash
        ):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid Credentials",
            )

        return self.authenticator.create_access_token(user.id)

    # ----- Self profile -----

    def fetch_self(self, session: Session, user_id: uuid.UUID) -> User:
        """Return the caller's account."""
        return self._get_user(session, user_id)

    def update_profile(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: Any,
    ) -> User:
        """
        Partial update for profile edits.
        Only `name` and `bio` are editable; omitted fields are kept.
        """
        raise_for_invalid(validate_profile_update(payload))
        user = self._get_user(session, user_id)

        if "name" in payload:
            user.name = payload["name"].strip()
        if "bio" in payload:
            user.bio = payload["bio"].strip()
        user.updated_at = utcnow()

        return self.user_repo.update(session, user)

    def change_password(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: Any,
    ) -> None:
        """
        Replace the password after checking the current one.

        Tokens issued before the change stay valid until they expire.

        Raises:
            HTTPException(400): validation failure or wrong current password.
            HTTPException(404): account no longer exists.
        """
        raise_for_invalid(validate_password_change(payload))
        user = self._get_user(session, user_id)

        if not self.authenticator.verify_password(
            payload["currentPassword"], user.password_hash
        ):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Current password is incorrect",
            )

        user.password_hash = self.authenticator.hash_password(payload["newPassword"])
        user.updated_at = utcnow()
        self.user_repo.update(session, user)
        logger.info("Password changed for user %s", user.id)

    def delete_account(self, session: Session, user_id: uuid.UUID) -> None:
        """
        Delete the caller's account and all of their tasks.

        Both deletions are committed together: either the user and every
        task are gone, or nothing changed. Missing user => 404 and no
        task is touched.
        """
        user = self._get_user(session, user_id)

        removed = self.task_repo.delete_all_for_user(session, user_id, commit=False)
        # Tasks reference users.id; flush them before the user row.
        session.flush()
        self.user_repo.delete(session, user, commit=False)
        session.commit()

        logger.info("Deleted user %s and %d task(s)", user_id, removed)
