"""User management service for administrators."""
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from mission_control.errors import Conflict, Forbidden, NotFound
from mission_control.models.user import User
from mission_control.schemas.user import UserPublic
from mission_control.services.validation import check_role, normalize_email, normalize_username
from mission_control.utils.clock import utc_now
from mission_control.utils.logger import get_logger

logger = get_logger("mission_control.users")


class UserService:
    """Privileged CRUD over user accounts. Callers are expected to be admins."""

    def __init__(self, session: Session):
        self.session = session

    def _get(self, user_id: str) -> User:
        user = self.session.get(User, user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def get_role(self, user_id: str) -> Optional[str]:
        """Current role of ``user_id``, or None if the account is gone."""
        user = self.session.get(User, user_id)
        return user.role if user else None

    def list_users(self) -> List[UserPublic]:
        users = self.session.exec(select(User).order_by(User.created_at, User.id)).all()
        return [UserPublic.model_validate(user) for user in users]

    def count_users(self) -> int:
        return self.session.exec(select(func.count()).select_from(User)).one()

    def set_role(self, caller_id: str, user_id: str, role: str) -> UserPublic:
        """
        Change another account's role.

        Setting the role an account already has is a successful no-op.

        Raises:
            Forbidden: If the caller targets their own account
            InvalidInput: If role is not 'user' or 'admin'
            NotFound: If the target account does not exist
        """
        if caller_id == user_id:
            raise Forbidden("Cannot change your own role")
        role = check_role(role)
        user = self._get(user_id)

        if user.role != role:
            user.role = role
            user.updated_at = utc_now()
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
            logger.info("Role changed", user_id=user_id, role=role, changed_by=caller_id)
        return UserPublic.model_validate(user)

    def update_profile(
        self,
        user_id: str,
        email: Optional[str] = None,
        username: Optional[str] = None,
    ) -> UserPublic:
        """Change email and/or username, keeping both unique across accounts."""
        user = self._get(user_id)

        # Every check runs before the record is touched
        values = {}
        if email is not None:
            values["email"] = normalize_email(email)
        if username is not None:
            values["username"] = normalize_username(username)

        if "email" in values and self.session.exec(
            select(User).where(User.email == values["email"], User.id != user_id)
        ).first():
            raise Conflict("Email already registered")
        if "username" in values and self.session.exec(
            select(User).where(User.username == values["username"], User.id != user_id)
        ).first():
            raise Conflict("Username already taken")

        for field, value in values.items():
            setattr(user, field, value)
        user.updated_at = utc_now()
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.error("Profile update hit a unique constraint", user_id=user_id)
            raise Conflict("Email or username already taken")
        self.session.refresh(user)
        return UserPublic.model_validate(user)

    def delete_user(self, caller_id: str, user_id: str) -> None:
        """Delete another account. Tasks assigned to it keep the stale id."""
        if caller_id == user_id:
            raise Forbidden("Cannot delete your own account")
        user = self._get(user_id)
        self.session.delete(user)
        self.session.commit()
        logger.info("User deleted", user_id=user_id, deleted_by=caller_id)
