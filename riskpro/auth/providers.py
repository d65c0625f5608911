"""
Auth Providers — One capability, several interchangeable strategies.

Every provider answers `identify_user(credential) -> User` or raises
AuthError. The active variant is picked by `settings.auth_provider`:

    anonymous → every request acts as the configured default user,
                or a built-in system user when that user is not stored
    local     → username + bcrypt-verified password on each call
    session   → password login issues a signed bearer token, later
                calls present only the token
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from riskpro.auth.passwords import verify_password
from riskpro.config import settings
from riskpro.errors import AuthError
from riskpro.models.auth_models import Credential, User, UserRole
from riskpro.storage.memory_store import MemoryStore

logger = logging.getLogger("riskpro.auth")


def system_user(user_id: int) -> User:
    """Unstored admin identity used when anonymous mode has no default user."""
    return User(
        id=user_id,
        username="system",
        name="System",
        email="system@riskpro.local",
        role=UserRole.ADMIN,
        created_at=datetime.now(timezone.utc),
    )


class AuthProvider(ABC):
    """Resolves a presented credential to a stored user."""

    name: str = ""

    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    @abstractmethod
    def identify_user(self, credential: Credential) -> User:
        """Return the user behind `credential` or raise AuthError."""

    def issue_token(self, user: User) -> str | None:
        """Token to hand back after login; stateless providers return None."""
        return None


class AnonymousProvider(AuthProvider):
    """Ignores credentials; everyone is the default user."""

    name = "anonymous"

    def __init__(self, store: MemoryStore, default_user_id: int | None = None) -> None:
        super().__init__(store)
        self.default_user_id = (
            default_user_id if default_user_id is not None else settings.default_user_id
        )

    def identify_user(self, credential: Credential) -> User:
        user = self.store.get_user(self.default_user_id)
        if user is None:
            # Empty register (demo seeding off): act as a built-in system user
            logger.debug(f"Default user {self.default_user_id} not stored, using system user")
            return system_user(self.default_user_id)
        return user


class LocalPasswordProvider(AuthProvider):
    """Username/password checked against the stored bcrypt hash."""

    name = "local"

    def identify_user(self, credential: Credential) -> User:
        return self._check_password(credential)

    def _check_password(self, credential: Credential) -> User:
        if not credential.username or not credential.password:
            raise AuthError("Username and password are required")

        user = self.store.get_user_by_username(credential.username)
        # Same message for unknown user and bad password
        if user is None or not verify_password(credential.password, user.password_hash):
            logger.info(f"Failed login for '{credential.username}'")
            raise AuthError("Invalid username or password")
        return user


class SessionTokenProvider(LocalPasswordProvider):
    """Password login, then a time-limited signed token carrying the user id."""

    name = "session"

    def __init__(
        self,
        store: MemoryStore,
        secret: str | None = None,
        max_age: int | None = None,
    ) -> None:
        super().__init__(store)
        self.max_age = max_age if max_age is not None else settings.session_max_age
        self._serializer = URLSafeTimedSerializer(secret or settings.session_secret)

    def identify_user(self, credential: Credential) -> User:
        if credential.token:
            return self._check_token(credential.token)
        return self._check_password(credential)

    def issue_token(self, user: User) -> str | None:
        return self._serializer.dumps({"uid": user.id})

    def _check_token(self, token: str) -> User:
        try:
            data = self._serializer.loads(token, max_age=self.max_age)
        except SignatureExpired:
            raise AuthError("Session token has expired")
        except BadSignature:
            raise AuthError("Invalid session token")

        user_id = data.get("uid") if isinstance(data, dict) else None
        user = self.store.get_user(user_id) if isinstance(user_id, int) else None
        if user is None:
            raise AuthError("Session token refers to an unknown user")
        return user


AUTH_PROVIDERS: dict[str, type[AuthProvider]] = {
    AnonymousProvider.name: AnonymousProvider,
    LocalPasswordProvider.name: LocalPasswordProvider,
    SessionTokenProvider.name: SessionTokenProvider,
}


def build_auth_provider(kind: str, store: MemoryStore) -> AuthProvider:
    """Instantiate the provider registered under `kind`."""
    provider_cls = AUTH_PROVIDERS.get(kind)
    if provider_cls is None:
        raise ValueError(
            f"Unknown auth provider '{kind}'. Expected one of {sorted(AUTH_PROVIDERS)}"
        )
    logger.info(f"Using '{kind}' auth provider")
    return provider_cls(store)
