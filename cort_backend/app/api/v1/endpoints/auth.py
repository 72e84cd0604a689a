"""
Authentication API endpoints.

Signup and login are public and delegate credentials to the identity
provider; the profile endpoint requires a valid bearer token.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from cort_backend.app.db.session import get_db
from cort_backend.app.core.dependencies import get_identity_provider
from cort_backend.app.core.guards import authorize
from cort_backend.app.core.identity import IdentityProvider
from cort_backend.app.core.policy import AUTHENTICATED, PUBLIC
from cort_backend.app.schemas.auth import AuthenticatedUser, AuthResult, UserLogin, UserProfile, UserSignup
from cort_backend.app.schemas.common import ApiResponse
from cort_backend.app.services.auth_service import AuthService
from cort_backend.app.utils.messages import AuthMessages
from cort_backend.app.utils.response import serialize_response

router = APIRouter(prefix="/auth", tags=["Authentication"])

SIGNUP_POLICY = PUBLIC
# Possibly superseded by client-side sign-in with the provider
LOGIN_POLICY = PUBLIC
PROFILE_POLICY = AUTHENTICATED


@router.post(
    "/signup",
    response_model=ApiResponse[AuthResult],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(authorize(SIGNUP_POLICY))],
)
async def signup(
    signup_data: UserSignup,
    db: AsyncSession = Depends(get_db),
    identity_provider: IdentityProvider = Depends(get_identity_provider),
):
    """
    Register a new user.
    
    Creates the identity with the provider and the local directory record.
    New users are always ACTIVE EMPLOYEEs.
    """
    result = await AuthService.signup(db, identity_provider, signup_data)
    return serialize_response(result, status.HTTP_201_CREATED, AuthMessages.SIGNUP_SUCCESS)


@router.post(
    "/login",
    response_model=ApiResponse[AuthResult],
    dependencies=[Depends(authorize(LOGIN_POLICY))],
)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db),
    identity_provider: IdentityProvider = Depends(get_identity_provider),
):
    """
    Authenticate with email and password.
    
    Returns the user profile and the provider session.
    """
    result = await AuthService.login(db, identity_provider, credentials.email, credentials.password)
    return serialize_response(result, status.HTTP_200_OK, AuthMessages.LOGIN_SUCCESS)


@router.get("/profile", response_model=ApiResponse[UserProfile])
async def get_profile(
    current_user: AuthenticatedUser = Depends(authorize(PROFILE_POLICY)),
    db: AsyncSession = Depends(get_db),
):
    """Get the authenticated user's profile."""
    profile = await AuthService.get_profile(db, current_user)
    return serialize_response(profile, status.HTTP_200_OK, AuthMessages.PROFILE_RETRIEVED)
