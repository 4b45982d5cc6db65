"""Access and refresh tokens for staff sessions (python-jose, HS256 by default)."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from lodgedesk.config import settings

ACCESS = "access"
REFRESH = "refresh"


def _encode(subject: str, token_type: str, lifetime: timedelta, extra: dict | None = None) -> str:
    now = datetime.now(timezone.utc)
    claims = {**(extra or {}), "sub": subject, "type": token_type, "iat": now, "exp": now + lifetime}
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: str, username: str | None = None, expires_delta: timedelta | None = None) -> str:
    lifetime = expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes)
    return _encode(user_id, ACCESS, lifetime, {"username": username} if username else None)


def create_refresh_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    lifetime = expires_delta or timedelta(days=settings.jwt_refresh_token_expire_days)
    return _encode(user_id, REFRESH, lifetime)


def decode_token(token: str, expected_type: str | None = None) -> dict:
    """Verify signature and expiry and return the claims.

    Raises:
        jose.JWTError: invalid, expired, or not of ``expected_type``.
    """
    claims = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    if expected_type is not None and claims.get("type") != expected_type:
        raise JWTError(f"Expected a {expected_type} token")
    return claims


def create_token_pair(user_id: str, username: str | None = None) -> dict[str, str]:
    return {
        "access_token": create_access_token(user_id, username),
        "refresh_token": create_refresh_token(user_id),
        "token_type": "bearer",
    }
