"""
JWT token utilities for identity-provider access tokens.

Supabase Auth signs its access tokens with the project's JWT secret. When that
secret is configured the backend can verify tokens locally instead of calling
the provider on every request.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from cort_backend.app.core.config import settings


def create_access_token(
    data: Dict[str, Any],
    secret: Optional[str] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a provider-compatible access token.
    
    Only used for local development and tests; production tokens are issued
    by the identity provider.
    
    Args:
        data: Claims to encode (should include: sub, aud)
        secret: Signing secret (defaults to settings.supabase_jwt_secret)
        expires_delta: Optional custom expiration time
        
    Returns:
        Encoded JWT token string
        
    Example payload:
        {
            "sub": "2f0c7c1e-4d7a-4b53-9f0e-3c1f8f9c6a11",
            "aud": "authenticated",
            "exp": 1234567890
        }
    """
    to_encode = data.copy()
    
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(
        to_encode,
        secret or settings.supabase_jwt_secret,
        algorithm=settings.jwt_algorithm
    )
    
    return encoded_jwt


def decode_access_token(
    token: str,
    secret: Optional[str] = None,
    audience: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    """
    Decode and validate an access token.
    
    Args:
        token: JWT token string to decode
        secret: Verification secret (defaults to settings.supabase_jwt_secret)
        audience: Expected audience (defaults to settings.jwt_audience)
        
    Returns:
        Decoded token payload if valid (includes: sub, aud, exp), None otherwise
    """
    try:
        payload = jwt.decode(
            token,
            secret or settings.supabase_jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=audience or settings.jwt_audience,
        )
        return payload
    except JWTError:
        return None
