"""
Bearer token authentication for the FastAPI API.

Tokens are JWTs signed with the configured secret; the ``sub`` claim is the
caller identity that owns the summaries it creates.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from api.config import config
from summaries.errors import Unauthenticated

logger = structlog.get_logger(__name__)

# Security scheme
security = HTTPBearer(auto_error=False)


def create_access_token(subject: str, expires_minutes: Optional[int] = None) -> str:
    """
    Issue a signed access token for a caller.

    Args:
        subject: Caller identity stored in the ``sub`` claim
        expires_minutes: Minutes until expiration (defaults to config)

    Returns:
        Encoded JWT
    """
    if expires_minutes is None:
        expires_minutes = config.access_token_expire_minutes

    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    return jwt.encode({"sub": str(subject), "exp": expire}, config.secret_key, algorithm=config.algorithm)


def decode_access_token(token: str) -> str:
    """
    Resolve a caller identity from an access token.

    Args:
        token: Encoded JWT

    Returns:
        Caller identity

    Raises:
        Unauthenticated: If the token is invalid, expired or has no subject
    """
    try:
        payload = jwt.decode(token, config.secret_key, algorithms=[config.algorithm])
    except JWTError as e:
        logger.warning("Invalid access token", error=str(e))
        raise Unauthenticated("Not authorized, token failed")

    subject = payload.get("sub")
    if not subject:
        logger.warning("Access token without subject")
        raise Unauthenticated("Not authorized, token failed")

    return str(subject)


async def get_caller_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """
    Resolve the verified caller identity for a request.

    Args:
        credentials: HTTP authorization credentials

    Returns:
        Caller identity

    Raises:
        Unauthenticated: If no valid bearer token was supplied
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Not authorized, no token")

    return decode_access_token(credentials.credentials)
