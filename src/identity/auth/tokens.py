"""Bearer-token identity resolution.

Tokens are signed JWTs whose ``sub`` claim is the username. Resolution fails closed:
a missing, malformed, expired or wrongly-signed token, or a username that no longer
maps to a user, is always ``UnauthenticatedError``. There is no anonymous fallback.
"""

from datetime import UTC, datetime, timedelta

import jwt
import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from identity.customer.user import UserRecord
from shared.config import Settings
from shared.errors import UnauthenticatedError

logger = structlog.get_logger(__name__)


def issue_token(username: str, settings: Settings, expires_in: timedelta | None = None) -> str:
    now = datetime.now(UTC)
    ttl = expires_in if expires_in is not None else timedelta(minutes=settings.token_ttl_minutes)
    payload = {"sub": username, "iat": now, "exp": now + ttl}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str | None, settings: Settings) -> str:
    """Verify the token and return the username it was issued for."""
    if not token:
        raise UnauthenticatedError({"token": ["Authentication required"]})

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthenticatedError({"token": ["Token has expired"]}) from None
    except jwt.InvalidTokenError as exc:
        logger.info("auth.invalid_token", reason=str(exc))
        raise UnauthenticatedError({"token": ["Invalid token"]}) from None

    username = payload.get("sub")
    if not isinstance(username, str) or not username:
        raise UnauthenticatedError({"token": ["Invalid token"]})
    return username


def resolve_identity(token: str | None, session: Session, settings: Settings) -> int:
    """Map a bearer token to the caller's user id."""
    username = decode_token(token, settings)
    user_id = session.scalar(select(UserRecord.user_id).where(UserRecord.username == username))
    if user_id is None:
        logger.info("auth.unknown_user", username=username)
        raise UnauthenticatedError({"token": ["Unknown user"]})
    return user_id
