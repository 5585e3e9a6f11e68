"""
Record Shop Backend — Security Primitives
===========================================

What:  Password hashing, session-token signing and the authenticated-principal
       dependency that guards catalog writes.
How:   bcrypt for password hashes; PyJWT (HS256) for the token carried in the
       HTTP-only `token` cookie.
Who:   UserService (hash/verify/issue) and the /records write routes
       (get_current_user_id).

Token claims:
    user_id   integer id of the signed-in user
    exp       expiry, now + settings.token_ttl_hours
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Cookie, Request

from recordshop.config import settings
from recordshop.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

TOKEN_COOKIE_NAME = "token"
JWT_ALGORITHM = "HS256"
BCRYPT_ROUNDS = 10


# ── Passwords ─────────────────────────────────────────────────────────────

def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


# ── Tokens ────────────────────────────────────────────────────────────────

def create_access_token(user_id: int, now: Optional[datetime] = None) -> str:
    issued = now or datetime.now(timezone.utc)
    claims = {
        "user_id": user_id,
        "exp": issued + timedelta(hours=settings.token_ttl_hours),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """
    Verify a session token and return its user id.

    Raises:
        UnauthorizedError: bad signature, expired, malformed, or no user_id claim
    """
    try:
        claims = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError(message="Session expired. Please log in again.")
    except jwt.InvalidTokenError as e:
        logger.warning("Rejected session token: %s", type(e).__name__)
        raise UnauthorizedError()

    user_id = claims.get("user_id")
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise UnauthorizedError()
    return user_id


# ── FastAPI Dependency ────────────────────────────────────────────────────

async def get_current_user_id(
    request: Request,
    token: Optional[str] = Cookie(default=None, alias=TOKEN_COOKIE_NAME),
) -> int:
    """
    Resolve the signed-in user from the `token` cookie.

    Declared as a dependency on the create/update/delete routes, so a missing
    or invalid token becomes a 401 before RecordService is called. The id is
    also left on request.state for the access log.
    """
    if not token:
        raise UnauthorizedError()
    user_id = decode_access_token(token)
    request.state.user_id = user_id
    return user_id
