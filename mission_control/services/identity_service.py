"""Identity service: registration, login and session tokens."""
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from mission_control.config import JWT_ALGORITHM, TOKEN_TTL_HOURS, get_jwt_secret
from mission_control.errors import Conflict, NotFound, Unauthorized
from mission_control.models.user import User
from mission_control.schemas.auth import AuthResponse
from mission_control.schemas.user import UserPublic
from mission_control.services.validation import check_password, normalize_email, normalize_username
from mission_control.utils.logger import get_logger

logger = get_logger("mission_control.identity")

# Argon2id with a fresh random salt per hash
password_hasher = PasswordHasher()

INVALID_CREDENTIALS = "Invalid email or password"

# Verified against when the email is unknown so both login failures cost the same
_DUMMY_HASH = password_hasher.hash("mission-control-dummy-password")


def hash_password(password: str) -> str:
    return password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    try:
        return password_hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def issue_token(user_id: str, secret: Optional[str] = None, issued_at: Optional[datetime] = None) -> str:
    """
    Sign a session token for ``user_id``.

    Args:
        user_id: Subject of the token
        secret: Signing secret, defaults to the configured JWT secret
        issued_at: Issue instant, defaults to now

    Returns:
        Encoded JWT whose expiry is fixed at issued_at + 24 hours
    """
    issued_at = issued_at or datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=TOKEN_TTL_HOURS),
    }
    return jwt.encode(payload, secret or get_jwt_secret(), algorithm=JWT_ALGORITHM)


def verify_token(token: str, secret: Optional[str] = None) -> str:
    """
    Verify a session token and return its subject.

    Raises:
        Unauthorized: If the token is malformed, badly signed or expired
    """
    if not token:
        raise Unauthorized("Missing token")
    try:
        payload = jwt.decode(
            token,
            secret or get_jwt_secret(),
            algorithms=[JWT_ALGORITHM],
            options={"require": ["sub", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token has expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token")

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise Unauthorized("Invalid token: missing user ID")
    return user_id


class IdentityService:
    """Registers and authenticates users against the credential store."""

    def __init__(self, session: Session, secret: Optional[str] = None):
        self.session = session
        self.secret = secret

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.username == username)).first()

    def register(self, email: str, username: str, password: str) -> AuthResponse:
        """Create a ``user``-role account and return a token for it."""
        email = normalize_email(email)
        username = normalize_username(username)
        check_password(password)

        if self.get_by_email(email):
            raise Conflict("Email already registered")
        if self.get_by_username(username):
            raise Conflict("Username already taken")

        user = User(
            email=email,
            username=username,
            password_hash=hash_password(password),
            role="user",
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration
            self.session.rollback()
            logger.error("Registration hit a unique constraint", username=username)
            raise Conflict("Email or username already taken")
        self.session.refresh(user)

        logger.info("User registered", user_id=user.id, username=user.username)
        return AuthResponse(
            token=issue_token(user.id, self.secret),
            user=UserPublic.model_validate(user),
        )

    def login(self, email: str, password: str) -> AuthResponse:
        """Authenticate by email and password and return a fresh token."""
        user = self.get_by_email((email or "").strip().lower())
        if not user:
            verify_password(password or "", _DUMMY_HASH)
            logger.warning("Login failed")
            raise Unauthorized(INVALID_CREDENTIALS)
        if not verify_password(password or "", user.password_hash):
            logger.warning("Login failed")
            raise Unauthorized(INVALID_CREDENTIALS)

        if password_hasher.check_needs_rehash(user.password_hash):
            user.password_hash = hash_password(password)
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)

        return AuthResponse(
            token=issue_token(user.id, self.secret),
            user=UserPublic.model_validate(user),
        )

    def verify_token(self, token: str) -> str:
        return verify_token(token, self.secret)

    def current_user(self, user_id: str) -> UserPublic:
        """Return the public view of the token's subject."""
        user = self.session.get(User, user_id)
        if not user:
            # The token outlived the account
            raise NotFound("User no longer exists")
        return UserPublic.model_validate(user)
