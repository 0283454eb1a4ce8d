"""
Session Token Service

Issues and verifies the signed session token stored in the httpOnly
``token`` cookie. Tokens are stateless HS256 JWTs carrying the user's
email; there is no server-side revocation, so logging out only clears
the cookie.

Usage:
    from app.core.security import issue_token, verify_token

    token = issue_token({"email": "guest@bistro.com"})
    result = verify_token(token)
    if result.is_valid:
        print(result.claims.email)
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

from fastapi import Response
from jose import ExpiredSignatureError, JWTError, jwt

from app.core.config import get_settings

logger = logging.getLogger(__name__)


@dataclass
class TokenClaims:
    """
    Decoded payload of a session token.

    Attributes:
        email: Identity claim of the signed-in user
        issued_at: Token creation time (UTC)
        expires_at: Token expiry time (UTC)
    """
    email: str
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None


@dataclass
class TokenVerificationResult:
    """
    Outcome of verifying a session token.

    Exactly one of ``claims`` / ``error_message`` is set.
    """
    is_valid: bool
    claims: Optional[TokenClaims] = None
    error_message: Optional[str] = None


def _timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def issue_token(claims: Mapping[str, Any]) -> str:
    """
    Sign a session token for the given claims.

    Args:
        claims: Identity claims; must contain ``email``

    Returns:
        str: Encoded JWT

    Raises:
        ValueError: If ``email`` is missing or empty
    """
    email = claims.get("email")
    if not email:
        raise ValueError("Token claims must include an email")

    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "email": email,
        "iat": now,
        "exp": now + timedelta(days=settings.access_token_expire_days),
    }
    return jwt.encode(
        payload,
        settings.access_token_secret,
        algorithm=settings.access_token_algorithm,
    )


def verify_token(token: Optional[str]) -> TokenVerificationResult:
    """
    Verify signature and expiry of a session token.

    Never raises; failures are reported through the result.

    Args:
        token: Encoded JWT, or None when the cookie is absent

    Returns:
        TokenVerificationResult: Decoded claims or the failure reason
    """
    if not token:
        return TokenVerificationResult(is_valid=False, error_message="missing token")

    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.access_token_secret,
            algorithms=[settings.access_token_algorithm],
        )
    except ExpiredSignatureError:
        return TokenVerificationResult(is_valid=False, error_message="token expired")
    except JWTError as e:
        return TokenVerificationResult(is_valid=False, error_message=f"invalid token: {e}")

    email = payload.get("email")
    if not email:
        return TokenVerificationResult(is_valid=False, error_message="token has no email claim")

    return TokenVerificationResult(
        is_valid=True,
        claims=TokenClaims(
            email=email,
            issued_at=_timestamp(payload.get("iat")),
            expires_at=_timestamp(payload.get("exp")),
        ),
    )


def set_token_cookie(response: Response, token: str) -> None:
    """Attach the session token as an httpOnly cookie."""
    settings = get_settings()
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.access_token_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
    )


def clear_token_cookie(response: Response) -> None:
    """Tell the client to drop the session cookie. The token itself stays valid."""
    settings = get_settings()
    response.delete_cookie(
        key=settings.cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
    )
