"""
Authentication service.

Signup, login and profile lookups against the identity provider and the
local user directory.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cort_backend.app.core.exceptions import AuthenticationError, ConflictError, InvalidInputError
from cort_backend.app.core.identity import IdentityProvider, IdentityProviderError
from cort_backend.app.models.enums import UserRole, UserStatus
from cort_backend.app.models.user import User
from cort_backend.app.schemas.auth import AuthenticatedUser, AuthResult, UserProfile, UserSignup
from cort_backend.app.utils.messages import AuthMessages

logger = logging.getLogger("cort.auth")


def is_account_active(status: Optional[str]) -> bool:
    """Only ACTIVE accounts pass; a missing status counts as inactive."""
    return status == UserStatus.ACTIVE.value


def to_profile(user: User) -> UserProfile:
    return UserProfile(
        id=user.id,
        email=user.email,
        phone=user.phone,
        full_name=user.full_name,
        role=user.role,
        company_id=user.company_id,
        account_status=user.status,
    )


class AuthService:

    @staticmethod
    async def find_user(db: AsyncSession, user_id: str) -> Optional[User]:
        """Directory lookup by identity-provider subject id."""
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def signup(db: AsyncSession, identity_provider: IdentityProvider, signup_data: UserSignup) -> AuthResult:
        """
        Register a new user.
        
        Local uniqueness checks run before the provider call so a duplicate
        email or phone never leaves an orphaned identity behind.
        
        Raises:
            ConflictError: email or phone already registered
            InvalidInputError: provider rejected the signup
        """
        result = await db.execute(select(User).where(User.email == signup_data.email))
        if result.scalar_one_or_none():
            raise ConflictError(AuthMessages.EMAIL_ALREADY_EXISTS, field="email")

        if signup_data.phone:
            result = await db.execute(select(User).where(User.phone == signup_data.phone))
            if result.scalar_one_or_none():
                raise ConflictError(AuthMessages.PHONE_ALREADY_EXISTS, field="phone")

        try:
            identity = await identity_provider.sign_up(signup_data.email, signup_data.password)
        except IdentityProviderError as e:
            raise InvalidInputError(str(e) or AuthMessages.SIGNUP_FAILED)

        new_user = User(
            id=identity.subject_id,
            email=signup_data.email,
            full_name=signup_data.full_name,
            phone=signup_data.phone,
            role=UserRole.EMPLOYEE,
            status=UserStatus.ACTIVE.value,
        )
        db.add(new_user)
        await db.commit()
        await db.refresh(new_user)

        logger.info("User %s signed up", new_user.id)
        return AuthResult(user=to_profile(new_user), session=identity.session)

    @staticmethod
    async def login(db: AsyncSession, identity_provider: IdentityProvider, email: str, password: str) -> AuthResult:
        """
        Sign in with email and password.
        
        Note: client applications may sign in with the provider directly;
        this endpoint mirrors that flow server-side.
        """
        try:
            identity = await identity_provider.sign_in(email, password)
        except IdentityProviderError:
            raise AuthenticationError(AuthMessages.INVALID_CREDENTIALS)

        user = await AuthService.find_user(db, identity.subject_id)
        if user is None:
            raise AuthenticationError(AuthMessages.USER_NOT_FOUND)

        if not is_account_active(user.status):
            raise AuthenticationError(AuthMessages.USER_INACTIVE)

        return AuthResult(user=to_profile(user), session=identity.session)

    @staticmethod
    async def get_profile(db: AsyncSession, current_user: AuthenticatedUser) -> UserProfile:
        user = await AuthService.find_user(db, current_user.id)
        if user is None:
            raise AuthenticationError(AuthMessages.USER_NOT_FOUND)
        return to_profile(user)
