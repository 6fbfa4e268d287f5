"""
Áreas router — catalogue of organisational areas that own projects.

Mounts under ``/api/areas`` (prefix set in ``main.py``).

Endpoints
---------
GET  /  — All areas ordered by name.
POST /  — Register a new area (ADMIN / EDITOR); names are unique
          ignoring case.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cooperacion.database import get_db
from cooperacion.models.usuario import Usuario
from cooperacion.schemas.area import AreaCreate, AreaResponse
from cooperacion.services import area_service
from cooperacion.services.auth_service import get_current_user, require_role
from cooperacion.utils.constants import ROLES_ESCRITURA

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Áreas"])


@router.get(
    "/",
    response_model=list[AreaResponse],
    summary="Listar áreas",
    responses={
        200: {"description": "Áreas ordenadas por nombre."},
        401: {"description": "Token JWT ausente o inválido."},
    },
)
def list_areas(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> list[AreaResponse]:
    return [AreaResponse.model_validate(a) for a in area_service.list_areas(db)]


@router.post(
    "/",
    response_model=AreaResponse,
    status_code=201,
    summary="Crear área",
    responses={
        201: {"description": "Área creada."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        409: {"description": "Ya existe un área con ese nombre."},
        422: {"description": "Nombre vacío."},
    },
)
def create_area(
    body: AreaCreate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(require_role(*ROLES_ESCRITURA))],
) -> AreaResponse:
    logger.info("POST /areas nombre=%s user=%s", body.nombre_area, _current_user.username)
    return AreaResponse.model_validate(area_service.create_area(db, body))
