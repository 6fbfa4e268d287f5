"""
Security helpers: bcrypt password hashing and JWT access tokens.

Tokens carry the user's primary key in ``sub`` plus the ``username`` and
``rol`` claims used by the front end to decide which actions to show.
Secrets and lifetimes come from ``cooperacion.config``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from cooperacion.config import get_settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Check *plain* against a stored bcrypt hash.

    A malformed hash (e.g. a row loaded by hand) counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


# ---------------------------------------------------------------------------
# JWT
# ---------------------------------------------------------------------------


def token_claims(user: Any) -> dict[str, Any]:
    """Build the claim set embedded in a user's token.

    Args:
        user: A ``Usuario`` instance (or anything with ``id``,
              ``username`` and ``rol`` attributes).

    Returns:
        Claims dictionary ready for :func:`create_access_token`.
    """
    return {"sub": str(user.id), "username": user.username, "rol": user.rol}


def create_access_token(data: dict[str, Any]) -> str:
    """Sign a JWT with ``exp``/``iat`` set from ``JWT_EXPIRATION_MINUTES``.

    Args:
        data: Claims to embed. ``exp`` and ``iat`` are overwritten.

    Returns:
        Compact JWT string.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        **data,
        "iat": now,
        "exp": now + timedelta(minutes=settings.JWT_EXPIRATION_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> dict[str, Any]:
    """Decode *token*, validating signature and expiry.

    Raises:
        ValueError: If the token cannot be trusted. The auth dependency
                    maps this to HTTP 401.
    """
    settings = get_settings()
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        logger.debug("JWT rejected: %s", exc)
        raise ValueError("Token inválido o expirado") from exc
