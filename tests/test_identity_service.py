# tests/test_identity_service.py

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from mission_control.errors import Conflict, InvalidInput, NotFound, Unauthorized
from mission_control.models.user import User
from mission_control.services.identity_service import (
    IdentityService,
    hash_password,
    issue_token,
    verify_password,
    verify_token,
)


def test_register_then_login_resolves_same_user(session) -> None:
    service = IdentityService(session)
    registered = service.register("Alice@Example.com", "alice", "s3cret-pass")

    assert registered.user.email == "alice@example.com"
    assert registered.user.role == "user"
    assert service.verify_token(registered.token) == registered.user.id

    logged_in = service.login("alice@example.com", "s3cret-pass")
    assert logged_in.user.id == registered.user.id
    assert verify_token(logged_in.token) == registered.user.id


def test_public_view_never_carries_password_hash(session) -> None:
    result = IdentityService(session).register("bob@example.com", "bob", "s3cret-pass")
    assert "password_hash" not in result.user.model_dump()

    stored = session.get(User, result.user.id)
    assert stored.password_hash.startswith("$argon2id$")
    assert "s3cret-pass" not in stored.password_hash


def test_duplicate_email_conflicts(session) -> None:
    service = IdentityService(session)
    service.register("carol@example.com", "carol", "s3cret-pass")
    with pytest.raises(Conflict):
        service.register("CAROL@example.com", "carol2", "s3cret-pass")


def test_duplicate_username_conflicts(session) -> None:
    service = IdentityService(session)
    service.register("dave@example.com", "dave", "s3cret-pass")
    with pytest.raises(Conflict):
        service.register("dave2@example.com", "dave", "s3cret-pass")


@pytest.mark.parametrize(
    "email, username, password",
    [
        ("erin@example.com", "erin", "short"),
        ("not-an-email", "erin", "s3cret-pass"),
        ("", "erin", "s3cret-pass"),
        ("erin@example.com", "", "s3cret-pass"),
        ("erin@example.com", "has space", "s3cret-pass"),
    ],
)
def test_register_rejects_invalid_input(session, email, username, password) -> None:
    with pytest.raises(InvalidInput):
        IdentityService(session).register(email, username, password)


def test_login_failures_are_indistinguishable(session) -> None:
    service = IdentityService(session)
    service.register("frank@example.com", "frank", "s3cret-pass")

    with pytest.raises(Unauthorized) as wrong_password:
        service.login("frank@example.com", "wrong-password")
    with pytest.raises(Unauthorized) as unknown_email:
        service.login("nobody@example.com", "s3cret-pass")

    assert wrong_password.value.message == unknown_email.value.message


def test_password_hashes_are_salted_per_call() -> None:
    first = hash_password("same-password")
    second = hash_password("same-password")
    assert first != second
    assert verify_password("same-password", first)
    assert verify_password("same-password", second)
    assert not verify_password("other-password", first)
    assert not verify_password("same-password", "not-a-hash")


def test_token_expires_after_24_hours() -> None:
    issued = datetime.now(timezone.utc) - timedelta(hours=24, minutes=1)
    token = issue_token("user-1", issued_at=issued)
    with pytest.raises(Unauthorized):
        verify_token(token)

    fresh = issue_token("user-1", issued_at=datetime.now(timezone.utc) - timedelta(hours=23))
    assert verify_token(fresh) == "user-1"


def test_token_expiry_is_fixed_at_issuance() -> None:
    token = issue_token("user-1")
    claims = jwt.decode(token, options={"verify_signature": False})
    assert set(claims) == {"sub", "iat", "exp"}
    assert claims["exp"] - claims["iat"] == 24 * 3600


@pytest.mark.parametrize(
    "token",
    [
        "",
        "garbage",
        issue_token("user-1", secret="some-other-secret"),
        jwt.encode({"sub": "user-1"}, "test-signing-secret", algorithm="HS256"),
    ],
)
def test_invalid_tokens_are_rejected(token) -> None:
    with pytest.raises(Unauthorized):
        verify_token(token)


def test_current_user_after_account_deletion(session) -> None:
    service = IdentityService(session)
    result = service.register("gina@example.com", "gina", "s3cret-pass")
    assert service.current_user(result.user.id).username == "gina"

    session.delete(session.get(User, result.user.id))
    session.commit()

    # The token is still valid, the account is not
    assert service.verify_token(result.token) == result.user.id
    with pytest.raises(NotFound):
        service.current_user(result.user.id)
