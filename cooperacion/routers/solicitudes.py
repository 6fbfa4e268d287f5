"""
Solicitudes router — purchase orders charged against a budget line.

Mounts under ``/api/solicitud_presupuesto`` (prefix set in ``main.py``).

Endpoints
---------
GET    /       — List orders, optionally of one budget line.
GET    /{id}   — One order.
POST   /       — Create an order (ADMIN / EDITOR).
PUT    /{id}   — Replace an order (ADMIN / EDITOR).
DELETE /{id}   — Delete an order (ADMIN / EDITOR).

An order must reference an existing line and carry a positive
``total_factura``; otherwise the write is rejected with 422.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from cooperacion.database import get_db
from cooperacion.models.usuario import Usuario
from cooperacion.schemas.solicitud import (
    SolicitudCreate,
    SolicitudResponse,
    SolicitudUpdate,
)
from cooperacion.services import solicitud_service
from cooperacion.services.auth_service import get_current_user, require_role
from cooperacion.utils.constants import ROLES_ESCRITURA

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Solicitudes de presupuesto"])

_EscrituraUser = Annotated[Usuario, Depends(require_role(*ROLES_ESCRITURA))]
_SolicitudId = Annotated[int, Path(description="ID de la solicitud.", ge=1)]


# ---------------------------------------------------------------------------
# GET /
# ---------------------------------------------------------------------------


@router.get(
    "/",
    response_model=list[SolicitudResponse],
    summary="Listar solicitudes de presupuesto",
    responses={
        200: {"description": "Solicitudes ordenadas por ID."},
        401: {"description": "Token JWT ausente o inválido."},
    },
)
def list_solicitudes(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    subpartida_contratacion_id: Annotated[
        int | None,
        Query(description="ID de la línea presupuestaria.", ge=1),
    ] = None,
) -> list[SolicitudResponse]:
    logger.debug(
        "GET /solicitud_presupuesto subpartida_contratacion_id=%s", subpartida_contratacion_id
    )
    solicitudes = solicitud_service.list_solicitudes(
        db, subpartida_contratacion_id=subpartida_contratacion_id
    )
    return [SolicitudResponse.model_validate(s) for s in solicitudes]


# ---------------------------------------------------------------------------
# GET /{id}
# ---------------------------------------------------------------------------


@router.get(
    "/{solicitud_id}",
    response_model=SolicitudResponse,
    summary="Obtener una solicitud",
    responses={
        200: {"description": "Solicitud encontrada."},
        401: {"description": "Token JWT ausente o inválido."},
        404: {"description": "Solicitud no encontrada."},
    },
)
def get_solicitud(
    solicitud_id: _SolicitudId,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> SolicitudResponse:
    return SolicitudResponse.model_validate(solicitud_service.get_solicitud(db, solicitud_id))


# ---------------------------------------------------------------------------
# POST /
# ---------------------------------------------------------------------------


@router.post(
    "/",
    response_model=SolicitudResponse,
    status_code=201,
    summary="Crear solicitud de presupuesto",
    description=(
        "Registra una solicitud contra una línea presupuestaria existente. "
        "``total_factura`` debe interpretarse como un monto mayor que cero. "
        "Requiere rol ADMIN o EDITOR."
    ),
    responses={
        201: {"description": "Solicitud creada."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        422: {"description": "Línea inexistente, monto no positivo o datos inválidos."},
    },
)
def create_solicitud(
    body: SolicitudCreate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: _EscrituraUser,
) -> SolicitudResponse:
    """Create a purchase order.

    Args:
        body: Order fields; ``subpartida_contratacion_id`` and
              ``total_factura`` are required.
        db: Database session.
        _current_user: ADMIN or EDITOR user.

    Returns:
        The created order.

    Raises:
        HTTPException 422: If the line does not exist or the amount is not positive.
    """
    logger.info(
        "POST /solicitud_presupuesto subpartida_contratacion_id=%d user=%s",
        body.subpartida_contratacion_id, _current_user.username,
    )
    return SolicitudResponse.model_validate(solicitud_service.create_solicitud(db, body))


# ---------------------------------------------------------------------------
# PUT /{id}
# ---------------------------------------------------------------------------


@router.put(
    "/{solicitud_id}",
    response_model=SolicitudResponse,
    summary="Actualizar solicitud de presupuesto",
    description=(
        "Reemplazo completo: los campos omitidos quedan vacíos. "
        "Requiere rol ADMIN o EDITOR."
    ),
    responses={
        200: {"description": "Solicitud actualizada."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        404: {"description": "Solicitud no encontrada."},
        422: {"description": "Línea inexistente o datos inválidos."},
    },
)
def update_solicitud(
    solicitud_id: _SolicitudId,
    body: SolicitudUpdate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: _EscrituraUser,
) -> SolicitudResponse:
    logger.info("PUT /solicitud_presupuesto/%d user=%s", solicitud_id, _current_user.username)
    solicitud = solicitud_service.update_solicitud(db, solicitud_id, body)
    return SolicitudResponse.model_validate(solicitud)


# ---------------------------------------------------------------------------
# DELETE /{id}
# ---------------------------------------------------------------------------


@router.delete(
    "/{solicitud_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Eliminar solicitud de presupuesto",
    responses={
        204: {"description": "Solicitud eliminada."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        404: {"description": "Solicitud no encontrada."},
    },
)
def delete_solicitud(
    solicitud_id: _SolicitudId,
    db: Annotated[Session, Depends(get_db)],
    _current_user: _EscrituraUser,
) -> Response:
    logger.info("DELETE /solicitud_presupuesto/%d user=%s", solicitud_id, _current_user.username)
    solicitud_service.delete_solicitud(db, solicitud_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
