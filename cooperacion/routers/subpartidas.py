"""
Subpartidas router — budget lines (``subpartida_contratacion``).

Mounts under ``/api/subpartida_contratacion`` (prefix set in ``main.py``).

Endpoints
---------
GET  /       — List budget lines, optionally for one contract year.
GET  /{id}   — One line with consumed amount and balance.
POST /       — Create a line (ADMIN / EDITOR).
PUT  /{id}   — Replace a line (ADMIN / EDITOR).

Lines are never deleted through the API: orders keep pointing at them.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from cooperacion.database import get_db
from cooperacion.models.usuario import Usuario
from cooperacion.schemas.subpartida import (
    SubpartidaCreate,
    SubpartidaDetalle,
    SubpartidaResponse,
    SubpartidaUpdate,
)
from cooperacion.services import subpartida_service
from cooperacion.services.auth_service import get_current_user, require_role
from cooperacion.utils.constants import ROLES_ESCRITURA

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Subpartidas"])


# ---------------------------------------------------------------------------
# GET /
# ---------------------------------------------------------------------------


@router.get(
    "/",
    response_model=list[SubpartidaResponse],
    summary="Listar líneas presupuestarias",
    responses={
        200: {"description": "Líneas ordenadas por año y subpartida."},
        401: {"description": "Token JWT ausente o inválido."},
    },
)
def list_subpartidas(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    ano_contrato: Annotated[
        str | None,
        Query(description="Año de contrato, ej. '2025'.", pattern=r"^\d{4}$"),
    ] = None,
) -> list[SubpartidaResponse]:
    logger.debug("GET /subpartida_contratacion ano_contrato=%s", ano_contrato)
    lineas = subpartida_service.list_subpartidas(db, ano_contrato=ano_contrato)
    return [SubpartidaResponse.model_validate(linea) for linea in lineas]


# ---------------------------------------------------------------------------
# GET /{id}
# ---------------------------------------------------------------------------


@router.get(
    "/{subpartida_id}",
    response_model=SubpartidaDetalle,
    summary="Detalle de una línea presupuestaria",
    description=(
        "Retorna la línea con el monto consumido (suma de ``total_factura`` de "
        "sus solicitudes), el saldo y los importes formateados en colones."
    ),
    responses={
        200: {"description": "Línea encontrada."},
        401: {"description": "Token JWT ausente o inválido."},
        404: {"description": "Línea no encontrada."},
    },
)
def get_subpartida(
    subpartida_id: Annotated[int, Path(description="ID de la línea.", ge=1)],
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> SubpartidaDetalle:
    logger.debug("GET /subpartida_contratacion/%d", subpartida_id)
    return subpartida_service.get_detalle(db, subpartida_id)


# ---------------------------------------------------------------------------
# POST /
# ---------------------------------------------------------------------------


@router.post(
    "/",
    response_model=SubpartidaResponse,
    status_code=201,
    summary="Crear línea presupuestaria",
    description="Requiere rol ADMIN o EDITOR. ``presupuesto_asignado`` debe ser mayor que cero.",
    responses={
        201: {"description": "Línea creada."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        422: {"description": "Datos inválidos."},
    },
)
def create_subpartida(
    body: SubpartidaCreate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(require_role(*ROLES_ESCRITURA))],
) -> SubpartidaResponse:
    """Create a new budget line.

    Args:
        body: Validated line fields.
        db: Database session.
        _current_user: ADMIN or EDITOR user.

    Returns:
        The created line.
    """
    logger.info(
        "POST /subpartida_contratacion subpartida=%s ano=%s user=%s",
        body.subpartida, body.ano_contrato, _current_user.username,
    )
    linea = subpartida_service.create_subpartida(db, body)
    return SubpartidaResponse.model_validate(linea)


# ---------------------------------------------------------------------------
# PUT /{id}
# ---------------------------------------------------------------------------


@router.put(
    "/{subpartida_id}",
    response_model=SubpartidaResponse,
    summary="Actualizar línea presupuestaria",
    description="Reemplaza todos los campos editables de la línea. Requiere rol ADMIN o EDITOR.",
    responses={
        200: {"description": "Línea actualizada."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        404: {"description": "Línea no encontrada."},
        422: {"description": "Datos inválidos."},
    },
)
def update_subpartida(
    subpartida_id: Annotated[int, Path(description="ID de la línea.", ge=1)],
    body: SubpartidaUpdate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(require_role(*ROLES_ESCRITURA))],
) -> SubpartidaResponse:
    logger.info(
        "PUT /subpartida_contratacion/%d user=%s", subpartida_id, _current_user.username
    )
    linea = subpartida_service.update_subpartida(db, subpartida_id, body)
    return SubpartidaResponse.model_validate(linea)
