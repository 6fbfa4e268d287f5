"""
Viajes al exterior router — official trips abroad.

Mounts under ``/api/viajes_al_exterior`` (prefix set in ``main.py``).

Endpoints
---------
GET    /                 — List trips (filters: ano, estado, q).
GET    /{id}             — One trip with its follow-up log.
GET    /{id}/reporte.pdf — Printable trip report.
POST   /                 — Register a trip (ADMIN / EDITOR).
PUT    /{id}             — Replace a trip (ADMIN / EDITOR).
PUT    /{id}/gaceta      — Set the official gazette link.
DELETE /{id}/documento   — Remove the attached document.
DELETE /{id}             — Delete a trip and its observations.
"""

from __future__ import annotations

import io
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from cooperacion.database import get_db
from cooperacion.models.usuario import Usuario
from cooperacion.schemas.viaje import (
    GacetaUpdate,
    ViajeCreate,
    ViajeDetalleResponse,
    ViajeResponse,
    ViajeUpdate,
)
from cooperacion.services import exportacion_service, viaje_service
from cooperacion.services.auth_service import get_current_user, require_role
from cooperacion.utils.constants import ROLES_ESCRITURA

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Viajes al exterior"])

_EscrituraUser = Annotated[Usuario, Depends(require_role(*ROLES_ESCRITURA))]
_ViajeId = Annotated[int, Path(description="ID del viaje.", ge=1)]


# ---------------------------------------------------------------------------
# GET /
# ---------------------------------------------------------------------------


@router.get(
    "/",
    response_model=list[ViajeResponse],
    summary="Listar viajes al exterior",
    description=(
        "Filtros opcionales: año del viaje, estado y un término libre buscado en "
        "actividad, participante, funcionario a cargo, destino y organizador."
    ),
    responses={
        200: {"description": "Viajes ordenados por ID."},
        401: {"description": "Token JWT ausente o inválido."},
    },
)
def list_viajes(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    ano: Annotated[
        str | None, Query(description="Año del viaje, ej. '2025'.", pattern=r"^\d{4}$")
    ] = None,
    estado: Annotated[str | None, Query(description="Estado del trámite.", max_length=50)] = None,
    q: Annotated[str | None, Query(description="Búsqueda libre.", max_length=200)] = None,
) -> list[ViajeResponse]:
    viajes = viaje_service.list_viajes(db, ano=ano, estado=estado, q=q)
    return [ViajeResponse.model_validate(v) for v in viajes]


# ---------------------------------------------------------------------------
# GET /{id}
# ---------------------------------------------------------------------------


@router.get(
    "/{viaje_id}",
    response_model=ViajeDetalleResponse,
    summary="Obtener un viaje",
    description="Incluye el registro de seguimiento ordenado por fecha y hora.",
    responses={
        200: {"description": "Viaje encontrado."},
        401: {"description": "Token JWT ausente o inválido."},
        404: {"description": "Viaje no encontrado."},
    },
)
def get_viaje(
    viaje_id: _ViajeId,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> ViajeDetalleResponse:
    logger.debug("GET /viajes_al_exterior/%d", viaje_id)
    return viaje_service.get_detalle(db, viaje_id)


# ---------------------------------------------------------------------------
# GET /{id}/reporte.pdf
# ---------------------------------------------------------------------------


@router.get(
    "/{viaje_id}/reporte.pdf",
    summary="Reporte PDF del viaje",
    description=(
        "Genera el 'Reporte de Viaje al Exterior': información general, detalles "
        "de vacaciones (si aplica) y registro de seguimiento."
    ),
    response_class=StreamingResponse,
    responses={
        200: {"description": "PDF generado.", "content": {"application/pdf": {}}},
        401: {"description": "Token JWT ausente o inválido."},
        404: {"description": "Viaje no encontrado."},
        500: {"description": "Error generando el archivo."},
    },
)
def get_reporte_pdf(
    viaje_id: _ViajeId,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> StreamingResponse:
    """Generate and stream the trip report.

    Args:
        viaje_id: Trip primary key.
        db: Database session.
        _current_user: Authenticated user guard.

    Returns:
        A ``StreamingResponse`` with the PDF attached.

    Raises:
        HTTPException 404: If the trip does not exist.
        HTTPException 500: If PDF generation fails unexpectedly.
    """
    logger.info("GET /viajes_al_exterior/%d/reporte.pdf user=%s", viaje_id, _current_user.username)

    try:
        filename, file_bytes = exportacion_service.reporte_viaje_pdf(db, viaje_id)
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("reporte_viaje_pdf failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error generando el reporte PDF: {exc}",
        ) from exc

    return StreamingResponse(
        io.BytesIO(file_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Content-Length": str(len(file_bytes)),
        },
    )


# ---------------------------------------------------------------------------
# POST /
# ---------------------------------------------------------------------------


@router.post(
    "/",
    response_model=ViajeResponse,
    status_code=201,
    summary="Registrar viaje al exterior",
    description=(
        "``nombre_actividad`` y las cuatro fechas (actividad y viaje, inicio y "
        "final) son obligatorias. El estado inicial es 'Pendiente'. "
        "Requiere rol ADMIN o EDITOR."
    ),
    responses={
        201: {"description": "Viaje registrado."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        422: {"description": "Datos inválidos."},
    },
)
def create_viaje(
    body: ViajeCreate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: _EscrituraUser,
) -> ViajeResponse:
    logger.info(
        "POST /viajes_al_exterior actividad=%s user=%s",
        body.nombre_actividad, _current_user.username,
    )
    return ViajeResponse.model_validate(viaje_service.create_viaje(db, body))


# ---------------------------------------------------------------------------
# PUT /{id}
# ---------------------------------------------------------------------------


@router.put(
    "/{viaje_id}",
    response_model=ViajeResponse,
    summary="Actualizar viaje al exterior",
    responses={
        200: {"description": "Viaje actualizado."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        404: {"description": "Viaje no encontrado."},
        422: {"description": "Datos inválidos."},
    },
)
def update_viaje(
    viaje_id: _ViajeId,
    body: ViajeUpdate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: _EscrituraUser,
) -> ViajeResponse:
    logger.info("PUT /viajes_al_exterior/%d user=%s", viaje_id, _current_user.username)
    return ViajeResponse.model_validate(viaje_service.update_viaje(db, viaje_id, body))


# ---------------------------------------------------------------------------
# PUT /{id}/gaceta
# ---------------------------------------------------------------------------


@router.put(
    "/{viaje_id}/gaceta",
    response_model=ViajeResponse,
    summary="Registrar publicación en La Gaceta",
    responses={
        200: {"description": "Enlace guardado."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        404: {"description": "Viaje no encontrado."},
        422: {"description": "Enlace vacío."},
    },
)
def update_gaceta(
    viaje_id: _ViajeId,
    body: GacetaUpdate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: _EscrituraUser,
) -> ViajeResponse:
    logger.info("PUT /viajes_al_exterior/%d/gaceta user=%s", viaje_id, _current_user.username)
    return ViajeResponse.model_validate(viaje_service.set_gaceta(db, viaje_id, body.gaceta_url))


# ---------------------------------------------------------------------------
# DELETE /{id}/documento
# ---------------------------------------------------------------------------


@router.delete(
    "/{viaje_id}/documento",
    response_model=ViajeResponse,
    summary="Eliminar documento del viaje",
    responses={
        200: {"description": "Documento eliminado; retorna el viaje."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        404: {"description": "Viaje no encontrado."},
    },
)
def delete_documento(
    viaje_id: _ViajeId,
    db: Annotated[Session, Depends(get_db)],
    _current_user: _EscrituraUser,
) -> ViajeResponse:
    logger.info(
        "DELETE /viajes_al_exterior/%d/documento user=%s", viaje_id, _current_user.username
    )
    return ViajeResponse.model_validate(viaje_service.delete_documento(db, viaje_id))


# ---------------------------------------------------------------------------
# DELETE /{id}
# ---------------------------------------------------------------------------


@router.delete(
    "/{viaje_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Eliminar viaje al exterior",
    description="Elimina también sus observaciones de seguimiento y el documento adjunto.",
    responses={
        204: {"description": "Viaje eliminado."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        404: {"description": "Viaje no encontrado."},
    },
)
def delete_viaje(
    viaje_id: _ViajeId,
    db: Annotated[Session, Depends(get_db)],
    _current_user: _EscrituraUser,
) -> Response:
    logger.info("DELETE /viajes_al_exterior/%d user=%s", viaje_id, _current_user.username)
    viaje_service.delete_viaje(db, viaje_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
