"""
Tests for auth providers — anonymous, local password and session token.
"""

import pytest

from riskpro.auth.passwords import hash_password, verify_password
from riskpro.auth.providers import (
    AnonymousProvider,
    LocalPasswordProvider,
    SessionTokenProvider,
    build_auth_provider,
)
from riskpro.errors import AuthError
from riskpro.models.auth_models import Credential, UserRole
from riskpro.storage.memory_store import MemoryStore


@pytest.fixture
def store():
    s = MemoryStore()
    s.create_user(
        "admin",
        "Admin User",
        "admin@riskpro.com",
        role=UserRole.ADMIN,
        password_hash=hash_password("admin123"),
    )
    return s


def test_password_hashing():
    hashed = hash_password("secret")
    assert hashed != "secret"
    assert verify_password("secret", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret", "")
    assert not verify_password("secret", "not-a-bcrypt-hash")


def test_anonymous_returns_default_user(store):
    user = AnonymousProvider(store, default_user_id=1).identify_user(Credential())
    assert user.username == "admin"


def test_anonymous_without_stored_default_user_acts_as_system(store):
    user = AnonymousProvider(store, default_user_id=99).identify_user(Credential())
    assert user.id == 99
    assert user.username == "system"
    assert user.role == UserRole.ADMIN


def test_anonymous_on_empty_store_never_refuses():
    user = AnonymousProvider(MemoryStore(), default_user_id=1).identify_user(Credential())
    assert user.id == 1


def test_local_accepts_correct_password(store):
    provider = LocalPasswordProvider(store)
    user = provider.identify_user(Credential(username="admin", password="admin123"))
    assert user.id == 1
    assert provider.issue_token(user) is None


@pytest.mark.parametrize(
    "credential",
    [
        Credential(username="admin", password="nope"),
        Credential(username="ghost", password="admin123"),
        Credential(username="admin"),
        Credential(),
    ],
)
def test_local_rejects_bad_credentials(store, credential):
    with pytest.raises(AuthError):
        LocalPasswordProvider(store).identify_user(credential)


def test_unknown_user_and_bad_password_share_message(store):
    provider = LocalPasswordProvider(store)
    with pytest.raises(AuthError) as unknown:
        provider.identify_user(Credential(username="ghost", password="x"))
    with pytest.raises(AuthError) as wrong:
        provider.identify_user(Credential(username="admin", password="x"))
    assert str(unknown.value) == str(wrong.value)


def test_session_token_round_trip(store):
    provider = SessionTokenProvider(store, secret="test-secret")
    user = provider.identify_user(Credential(username="admin", password="admin123"))
    token = provider.issue_token(user)
    assert token

    again = provider.identify_user(Credential(token=token))
    assert again.id == user.id


def test_session_rejects_tampered_token(store):
    provider = SessionTokenProvider(store, secret="test-secret")
    token = provider.issue_token(store.get_user(1))
    with pytest.raises(AuthError):
        provider.identify_user(Credential(token=token + "x"))


def test_session_rejects_token_from_other_secret(store):
    issuer = SessionTokenProvider(store, secret="one")
    verifier = SessionTokenProvider(store, secret="two")
    token = issuer.issue_token(store.get_user(1))
    with pytest.raises(AuthError):
        verifier.identify_user(Credential(token=token))


def test_session_rejects_expired_token(store):
    provider = SessionTokenProvider(store, secret="test-secret", max_age=-1)
    token = provider.issue_token(store.get_user(1))
    with pytest.raises(AuthError, match="expired"):
        provider.identify_user(Credential(token=token))


def test_build_auth_provider(store):
    assert isinstance(build_auth_provider("anonymous", store), AnonymousProvider)
    assert isinstance(build_auth_provider("local", store), LocalPasswordProvider)
    assert isinstance(build_auth_provider("session", store), SessionTokenProvider)
    with pytest.raises(ValueError):
        build_auth_provider("google", store)
