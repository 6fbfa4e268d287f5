"""
Pydantic v2 schemas for the authentication endpoints.

Covers the JWT token response and the public user representation
returned by ``GET /api/auth/me``. Login itself reads an OAuth2 form.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TokenResponse(BaseModel):
    """Signed JWT returned after login or refresh.

    Attributes:
        access_token: Value for the ``Authorization: Bearer`` header.
        token_type: Always ``"bearer"``.
    """

    access_token: str = Field(..., description="JWT de acceso firmado")
    token_type: str = Field(default="bearer", description="Tipo de token OAuth2")


class UserResponse(BaseModel):
    """Public profile of an authenticated user (no password hash)."""

    id: int
    username: str
    email: str
    nombre_completo: str | None = None
    rol: str | None = None
    activo: bool

    model_config = ConfigDict(from_attributes=True)
