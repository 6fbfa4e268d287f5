"""
Authentication business logic.

Provides:
- ``authenticate_user`` — credential check against the ``usuario`` table.
- ``get_current_user`` — dependency resolving the Bearer JWT to a user.
- ``require_role`` — dependency factory enforcing role-based access.
- ``ensure_admin_user`` — startup hook guaranteeing an administrator account.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from cooperacion.database import get_db
from cooperacion.models.usuario import Usuario
from cooperacion.utils.security import hash_password, verify_password, verify_token

logger = logging.getLogger(__name__)

# tokenUrl must match the login endpoint path
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


def authenticate_user(db: Session, username: str, password: str) -> Usuario | None:
    """Verify username/password credentials.

    Returns ``None`` (instead of raising) so the router decides the HTTP
    error.  A successful login stamps ``ultimo_acceso``.

    Args:
        db: Active SQLAlchemy session.
        username: Login name submitted by the client.
        password: Plain-text password submitted by the client.

    Returns:
        The ``Usuario`` on success; ``None`` for an unknown or inactive
        user or a wrong password.
    """
    user: Usuario | None = (
        db.query(Usuario)
        .filter(Usuario.username == username, Usuario.activo.is_(True))
        .first()
    )
    if user is None or not verify_password(password, user.password_hash):
        logger.debug("authenticate_user: rejected credentials for '%s'", username)
        return None

    user.ultimo_acceso = datetime.now(timezone.utc).replace(tzinfo=None)
    db.commit()
    return user


def ensure_admin_user(db: Session, username: str, password: str) -> Usuario:
    """Create the administrator account if it does not exist yet.

    An existing account is reactivated and given the ADMIN role, but its
    password is left alone.
    """
    admin: Usuario | None = db.query(Usuario).filter(Usuario.username == username).first()
    if admin is None:
        admin = Usuario(
            username=username,
            email=f"{username}@cooperacion.local",
            password_hash=hash_password(password),
            nombre_completo="Administrador",
            rol="ADMIN",
            activo=True,
        )
        db.add(admin)
        logger.info("ensure_admin_user: created admin user '%s'", username)
    else:
        admin.rol = "ADMIN"
        admin.activo = True
        logger.debug("ensure_admin_user: admin user '%s' already present", username)
    db.commit()
    db.refresh(admin)
    return admin


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------


def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[Session, Depends(get_db)],
) -> Usuario:
    """Resolve the caller from the ``Authorization: Bearer`` token.

    Raises:
        HTTPException 401: If the token is invalid or expired, or the user
                           no longer exists or is inactive.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="No se pudo validar las credenciales",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = verify_token(token)
        user_id = int(payload["sub"])
    except (ValueError, KeyError, TypeError):
        raise credentials_exception

    user: Usuario | None = (
        db.query(Usuario)
        .filter(Usuario.id == user_id, Usuario.activo.is_(True))
        .first()
    )
    if user is None:
        raise credentials_exception
    return user


def require_role(*roles: str):
    """Return a dependency that admits only users whose role is in *roles*.

    .. code-block:: python

        @router.post("/")
        def create(current_user: Usuario = Depends(require_role("ADMIN", "EDITOR"))):
            ...

    Raises:
        HTTPException 403: If the authenticated user's role is not allowed.
    """
    allowed = frozenset(roles)

    def _check_role(
        current_user: Annotated[Usuario, Depends(get_current_user)],
    ) -> Usuario:
        if current_user.rol not in allowed:
            logger.warning(
                "Forbidden: user '%s' rol=%s needs one of %s",
                current_user.username, current_user.rol, sorted(allowed),
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Acceso denegado. Se requiere uno de los roles: {sorted(allowed)}",
            )
        return current_user

    return _check_role
