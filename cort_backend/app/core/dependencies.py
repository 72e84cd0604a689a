"""
Request dependencies for FastAPI.

The identity provider is created once in the application lifespan and kept
on ``app.state``; handlers receive it through ``get_identity_provider`` so
tests can override it.
"""

from typing import Optional
from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from cort_backend.app.core.authentication import authenticate_request
from cort_backend.app.core.identity import IdentityProvider
from cort_backend.app.db.session import get_db
from cort_backend.app.schemas.auth import AuthenticatedUser


def get_identity_provider(request: Request) -> IdentityProvider:
    """Return the process-wide identity provider client."""
    provider = getattr(request.app.state, "identity_provider", None)
    if provider is None:
        raise RuntimeError("Identity provider has not been initialized")
    return provider


async def get_current_user(
    authorization: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db),
    identity_provider: IdentityProvider = Depends(get_identity_provider),
) -> AuthenticatedUser:
    """
    FastAPI dependency for bearer-token authentication.
    
    Returns:
        AuthenticatedUser built fresh for this request
        
    Raises:
        AuthenticationError: 401 if authentication fails for any reason
    """
    return await authenticate_request(authorization, db, identity_provider)
