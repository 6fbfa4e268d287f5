"""
Authentication router.

Mounts under ``/api/auth`` (prefix set in ``main.py``).

Endpoints:
    POST /login   — Authenticate with username + password, receive JWT.
    POST /refresh — Exchange a valid token for a fresh one.
    GET  /me      — Profile of the authenticated user.

Logging out is client-side: the client discards its token.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from cooperacion.database import get_db
from cooperacion.models.usuario import Usuario
from cooperacion.schemas.auth import TokenResponse, UserResponse
from cooperacion.services.auth_service import authenticate_user, get_current_user
from cooperacion.utils.security import create_access_token, token_claims

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


# ---------------------------------------------------------------------------
# POST /login
# ---------------------------------------------------------------------------


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Iniciar sesión",
    description=(
        "Autentica al usuario (formulario OAuth2 ``username``/``password``) y "
        "retorna un JWT válido por ``JWT_EXPIRATION_MINUTES``."
    ),
    responses={
        200: {"description": "Autenticación exitosa."},
        401: {"description": "Credenciales incorrectas o cuenta inactiva."},
    },
)
def login(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """Authenticate a user and issue a JWT access token.

    Raises:
        HTTPException 401: If credentials are invalid or the account is inactive.
    """
    user = authenticate_user(db, form_data.username, form_data.password)
    if user is None:
        logger.warning("Failed login attempt for username='%s'", form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciales incorrectas o cuenta inactiva",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info("Successful login for username='%s' rol='%s'", user.username, user.rol)
    return TokenResponse(access_token=create_access_token(token_claims(user)))


# ---------------------------------------------------------------------------
# POST /refresh
# ---------------------------------------------------------------------------


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Renovar token",
    description="Emite un nuevo JWT a partir de un token válido (no expirado).",
    responses={
        200: {"description": "Token renovado."},
        401: {"description": "Token inválido o expirado."},
    },
)
def refresh_token(
    current_user: Annotated[Usuario, Depends(get_current_user)],
) -> TokenResponse:
    logger.info("Token refreshed for username='%s'", current_user.username)
    return TokenResponse(access_token=create_access_token(token_claims(current_user)))


# ---------------------------------------------------------------------------
# GET /me
# ---------------------------------------------------------------------------


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Perfil del usuario autenticado",
    responses={
        200: {"description": "Perfil del usuario."},
        401: {"description": "Token ausente, inválido o expirado."},
    },
)
def get_me(
    current_user: Annotated[Usuario, Depends(get_current_user)],
) -> UserResponse:
    return UserResponse.model_validate(current_user)
