"""
Authentication gate.

Turns the Authorization header of a request into an AuthenticatedUser:

1. Extract the bearer token
2. Verify it with the identity provider
3. Look the subject up in the local user directory
4. Reject accounts that are not ACTIVE

Known failures raise AuthenticationError with a specific message. Anything
unexpected is logged and normalized to a generic "Authentication failed" so
internal details never reach the client.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cort_backend.app.core.exceptions import AuthenticationError
from cort_backend.app.core.identity import IdentityProvider, IdentityProviderError
from cort_backend.app.models.user import User
from cort_backend.app.schemas.auth import AuthenticatedUser
from cort_backend.app.services.auth_service import AuthService, is_account_active
from cort_backend.app.utils.messages import AuthMessages

logger = logging.getLogger("cort.auth")

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token from a ``Bearer <token>`` header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError(AuthMessages.NO_TOKEN)

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthenticationError(AuthMessages.NO_TOKEN)
    return token


def build_authenticated_user(subject_id: str, user: User) -> AuthenticatedUser:
    return AuthenticatedUser(
        id=subject_id,
        email=user.email,
        phone=user.phone,
        full_name=user.full_name,
        role=user.role,
        company_id=user.company_id,
        account_status=user.status,
    )


async def authenticate_request(
    authorization: Optional[str],
    db: AsyncSession,
    identity_provider: IdentityProvider,
) -> AuthenticatedUser:
    """
    Run the authentication gate for one request.
    
    Args:
        authorization: Raw Authorization header value (may be None)
        db: Database session for the directory lookup
        identity_provider: Token verifier
        
    Returns:
        AuthenticatedUser for the caller
        
    Raises:
        AuthenticationError: for every rejection
    """
    try:
        token = extract_bearer_token(authorization)

        try:
            subject_id = await identity_provider.verify_token(token)
        except IdentityProviderError as e:
            raise AuthenticationError(AuthMessages.TOKEN_INVALID) from e

        if not subject_id:
            raise AuthenticationError(AuthMessages.TOKEN_INVALID)

        user = await AuthService.find_user(db, subject_id)
        if user is None:
            raise AuthenticationError(AuthMessages.USER_NOT_IN_DIRECTORY)

        if not is_account_active(user.status):
            raise AuthenticationError(AuthMessages.ACCOUNT_INACTIVE)

        return build_authenticated_user(subject_id, user)

    except AuthenticationError as e:
        logger.warning("Authentication rejected: %s", e.message)
        raise
    except Exception:
        logger.exception("Unexpected failure during authentication")
        raise AuthenticationError(AuthMessages.AUTHENTICATION_FAILED)
