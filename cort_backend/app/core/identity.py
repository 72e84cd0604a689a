"""
Identity provider client.

Wraps Supabase Auth behind a small interface: verify an access token, sign a
user up, sign a user in. One instance is created at application startup,
stored on ``app.state`` and closed at shutdown.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from supabase import Client, create_client

from cort_backend.app.core.config import Settings
from cort_backend.app.core.jwt import decode_access_token

logger = logging.getLogger("cort.identity")


class IdentityProviderError(Exception):
    """Raised when the identity provider rejects a request or is unreachable."""


@dataclass
class IdentityResult:
    """Outcome of a successful sign-up or sign-in."""
    subject_id: str
    session: Optional[Dict[str, Any]] = field(default=None)


class IdentityProvider(ABC):
    """Interface for the external identity provider."""

    @abstractmethod
    async def verify_token(self, token: str) -> str:
        """Return the subject id for a valid token, raise IdentityProviderError otherwise."""

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> IdentityResult:
        """Create an identity for the given credentials."""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> IdentityResult:
        """Exchange credentials for a session."""

    async def close(self) -> None:
        """Release provider resources."""


def _dump_session(session: Any) -> Optional[Dict[str, Any]]:
    if session is None:
        return None
    return session.model_dump(mode="json")


class SupabaseIdentityProvider(IdentityProvider):
    """
    Supabase Auth implementation.
    
    The Supabase SDK is synchronous, so every call runs in a worker thread.
    If a JWT secret is configured, tokens are verified locally with python-jose
    and the provider is only contacted for sign-up and sign-in.
    """

    def __init__(self, client: Client, jwt_secret: Optional[str] = None, jwt_audience: str = "authenticated"):
        self._client = client
        self._jwt_secret = jwt_secret
        self._jwt_audience = jwt_audience

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseIdentityProvider":
        missing = [
            name for name, value in (
                ("SUPABASE_URL", settings.supabase_url),
                ("SUPABASE_ANON_KEY", settings.supabase_anon_key),
            ) if not value
        ]
        if missing:
            raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")

        client = create_client(settings.supabase_url, settings.supabase_anon_key)
        logger.info("Supabase identity client initialized for %s", settings.supabase_url)
        return cls(client, jwt_secret=settings.supabase_jwt_secret, jwt_audience=settings.jwt_audience)

    @property
    def client(self) -> Client:
        if self._client is None:
            raise IdentityProviderError("Identity provider client is closed")
        return self._client

    async def verify_token(self, token: str) -> str:
        if self._jwt_secret:
            payload = decode_access_token(token, secret=self._jwt_secret, audience=self._jwt_audience)
            if not payload or not payload.get("sub"):
                raise IdentityProviderError("Invalid token")
            return payload["sub"]

        try:
            response = await asyncio.to_thread(self.client.auth.get_user, token)
        except Exception as e:
            raise IdentityProviderError(str(e)) from e

        if response is None or response.user is None:
            raise IdentityProviderError("Invalid token")
        return response.user.id

    async def sign_up(self, email: str, password: str) -> IdentityResult:
        try:
            response = await asyncio.to_thread(
                self.client.auth.sign_up, {"email": email, "password": password}
            )
        except Exception as e:
            raise IdentityProviderError(str(e)) from e

        if response.user is None:
            raise IdentityProviderError("Failed to create user")
        return IdentityResult(subject_id=response.user.id, session=_dump_session(response.session))

    async def sign_in(self, email: str, password: str) -> IdentityResult:
        try:
            response = await asyncio.to_thread(
                self.client.auth.sign_in_with_password, {"email": email, "password": password}
            )
        except Exception as e:
            raise IdentityProviderError(str(e)) from e

        if response.user is None:
            raise IdentityProviderError("Invalid credentials")
        return IdentityResult(subject_id=response.user.id, session=_dump_session(response.session))

    async def close(self) -> None:
        """Sign the client out, dropping any cached session, and release it."""
        if self._client is None:
            return

        client, self._client = self._client, None
        try:
            await asyncio.to_thread(client.auth.sign_out)
        except Exception as e:
            raise IdentityProviderError(str(e)) from e
        finally:
            logger.info("Supabase identity client closed")
