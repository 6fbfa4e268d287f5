"""
Observaciones router — follow-up log entries of trips abroad.

Mounts under ``/api/observaciones_viajes`` (prefix set in ``main.py``).

Endpoints
---------
GET    /?viaje_id=  — Log of one trip ordered by fecha, hora, id.
POST   /            — Append an entry (ADMIN / EDITOR).
DELETE /{id}        — Remove an entry (ADMIN / EDITOR).
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from cooperacion.database import get_db
from cooperacion.models.usuario import Usuario
from cooperacion.schemas.observacion import ObservacionCreate, ObservacionResponse
from cooperacion.services import observacion_service
from cooperacion.services.auth_service import get_current_user, require_role
from cooperacion.utils.constants import ROLES_ESCRITURA

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Observaciones de viajes"])


@router.get(
    "/",
    response_model=list[ObservacionResponse],
    summary="Listar observaciones de un viaje",
    responses={
        200: {"description": "Observaciones en orden cronológico."},
        401: {"description": "Token JWT ausente o inválido."},
        404: {"description": "Viaje no encontrado."},
    },
)
def list_observaciones(
    viaje_id: Annotated[int, Query(description="ID del viaje.", ge=1)],
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> list[ObservacionResponse]:
    rows = observacion_service.list_observaciones(db, viaje_id)
    return [ObservacionResponse.model_validate(o) for o in rows]


@router.post(
    "/",
    response_model=ObservacionResponse,
    status_code=201,
    summary="Registrar observación",
    description=(
        "``observacion``, ``quien_envia`` y ``quien_recibe`` no pueden estar "
        "vacíos; ``fecha`` acepta ``YYYY-MM-DD`` o ``dd/mm/yyyy`` y ``hora`` "
        "usa el formato ``HH:MM``."
    ),
    responses={
        201: {"description": "Observación registrada."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        404: {"description": "Viaje no encontrado."},
        422: {"description": "Datos inválidos."},
    },
)
def create_observacion(
    body: ObservacionCreate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(require_role(*ROLES_ESCRITURA))],
) -> ObservacionResponse:
    logger.info(
        "POST /observaciones_viajes viaje_id=%d user=%s", body.viaje_id, _current_user.username
    )
    return ObservacionResponse.model_validate(observacion_service.create_observacion(db, body))


@router.delete(
    "/{observacion_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Eliminar observación",
    responses={
        204: {"description": "Observación eliminada."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        404: {"description": "Observación no encontrada."},
    },
)
def delete_observacion(
    observacion_id: Annotated[int, Path(description="ID de la observación.", ge=1)],
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(require_role(*ROLES_ESCRITURA))],
) -> Response:
    logger.info(
        "DELETE /observaciones_viajes/%d user=%s", observacion_id, _current_user.username
    )
    observacion_service.delete_observacion(db, observacion_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
