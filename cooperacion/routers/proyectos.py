"""
Proyectos router — international cooperation projects.

Mounts under ``/api/proyectos`` (prefix set in ``main.py``).

Endpoints
---------
GET    /                         — List projects (filters: ano, area_id, q).
GET    /anios                    — Distinct project years.
GET    /estadisticas             — Projects grouped by one field.
GET    /estadisticas/montos      — Amount totals per year.
GET    /estadisticas/sectores    — Actors per normalised sector.
GET    /{num_proyecto}           — One project.
POST   /                         — Create a project (ADMIN / EDITOR).
PUT    /{num_proyecto}           — Replace a project (ADMIN / EDITOR).
DELETE /{num_proyecto}           — Delete a project and its document.
DELETE /{num_proyecto}/documento — Remove only the attached document.

The fixed paths are declared before ``/{num_proyecto}`` so they are not
captured by the path parameter.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from cooperacion.database import get_db
from cooperacion.models.usuario import Usuario
from cooperacion.schemas.estadistica import EstadisticaResponse, MontosAnio, SectorGrupo
from cooperacion.schemas.proyecto import ProyectoCreate, ProyectoResponse, ProyectoUpdate
from cooperacion.services import proyecto_service
from cooperacion.services.auth_service import get_current_user, require_role
from cooperacion.utils.constants import CAMPOS_ESTADISTICA, ROLES_ESCRITURA

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Proyectos"])

_EscrituraUser = Annotated[Usuario, Depends(require_role(*ROLES_ESCRITURA))]
_NumProyecto = Annotated[int, Path(description="Número del proyecto.", ge=1)]
_AnoFiltro = Annotated[
    str | None,
    Query(description="Año del proyecto, ej. '2025'.", pattern=r"^\d{4}$"),
]


# ---------------------------------------------------------------------------
# GET /
# ---------------------------------------------------------------------------


@router.get(
    "/",
    response_model=list[ProyectoResponse],
    summary="Listar proyectos de cooperación",
    description=(
        "Filtra opcionalmente por año, área y un término libre que se busca en "
        "nombre del proyecto, actor, institución solicitante y región."
    ),
    responses={
        200: {"description": "Proyectos ordenados por número."},
        401: {"description": "Token JWT ausente o inválido."},
    },
)
def list_proyectos(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    ano: _AnoFiltro = None,
    area_id: Annotated[int | None, Query(description="ID del área.", ge=1)] = None,
    q: Annotated[str | None, Query(description="Búsqueda libre.", max_length=200)] = None,
) -> list[ProyectoResponse]:
    logger.debug("GET /proyectos ano=%s area_id=%s q=%s", ano, area_id, q)
    proyectos = proyecto_service.list_proyectos(db, ano=ano, area_id=area_id, q=q)
    return [ProyectoResponse.model_validate(p) for p in proyectos]


# ---------------------------------------------------------------------------
# GET /anios
# ---------------------------------------------------------------------------


@router.get(
    "/anios",
    response_model=list[str],
    summary="Años con proyectos registrados",
    responses={200: {"description": "Años en orden ascendente."}},
)
def list_anios(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> list[str]:
    return proyecto_service.list_anios(db)


# ---------------------------------------------------------------------------
# GET /estadisticas
# ---------------------------------------------------------------------------


@router.get(
    "/estadisticas",
    response_model=EstadisticaResponse,
    summary="Proyectos agrupados por campo",
    description=(
        "Agrupa los proyectos por el campo indicado. Valores vacíos se cuentan "
        "como 'Sin datos'; ``dependencias_solicitantes`` se separa por comas y "
        "``area`` usa el nombre del área o 'Sin área'. "
        f"Campos válidos: {', '.join(CAMPOS_ESTADISTICA)}."
    ),
    responses={
        200: {"description": "Grupos con cantidad y porcentaje."},
        400: {"description": "Campo no soportado."},
        401: {"description": "Token JWT ausente o inválido."},
    },
)
def get_estadisticas(
    campo: Annotated[str, Query(description="Campo por el cual agrupar.")],
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    ano: _AnoFiltro = None,
) -> EstadisticaResponse:
    """Group projects by a categorical field.

    Args:
        campo: Field name to group by.
        db: Database session.
        _current_user: Authenticated user guard.
        ano: Optional year filter.

    Returns:
        ``EstadisticaResponse`` with one entry per label.

    Raises:
        HTTPException 400: If *campo* is not groupable.
    """
    logger.info("GET /proyectos/estadisticas campo=%s ano=%s", campo, ano)
    return proyecto_service.get_estadisticas(db, campo, ano=ano)


# ---------------------------------------------------------------------------
# GET /estadisticas/montos
# ---------------------------------------------------------------------------


@router.get(
    "/estadisticas/montos",
    response_model=list[MontosAnio],
    summary="Montos de proyectos por año",
    description=(
        "Suma contrapartida de la institución, contrapartida del cooperante y "
        "costo total por año. Montos ilegibles cuentan como 0."
    ),
    responses={
        200: {"description": "Totales ordenados por año."},
        401: {"description": "Token JWT ausente o inválido."},
    },
)
def get_montos(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    ano: _AnoFiltro = None,
) -> list[MontosAnio]:
    logger.debug("GET /proyectos/estadisticas/montos ano=%s", ano)
    return proyecto_service.get_montos_por_anio(db, ano=ano)


# ---------------------------------------------------------------------------
# GET /estadisticas/sectores
# ---------------------------------------------------------------------------


@router.get(
    "/estadisticas/sectores",
    response_model=list[SectorGrupo],
    summary="Actores por sector",
    responses={
        200: {"description": "Los ocho sectores del catálogo con sus actores."},
        401: {"description": "Token JWT ausente o inválido."},
    },
)
def get_sectores(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    ano: _AnoFiltro = None,
) -> list[SectorGrupo]:
    logger.debug("GET /proyectos/estadisticas/sectores ano=%s", ano)
    return proyecto_service.get_sectores(db, ano=ano)


# ---------------------------------------------------------------------------
# GET /{num_proyecto}
# ---------------------------------------------------------------------------


@router.get(
    "/{num_proyecto}",
    response_model=ProyectoResponse,
    summary="Obtener un proyecto",
    responses={
        200: {"description": "Proyecto encontrado."},
        401: {"description": "Token JWT ausente o inválido."},
        404: {"description": "Proyecto no encontrado."},
    },
)
def get_proyecto(
    num_proyecto: _NumProyecto,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> ProyectoResponse:
    return ProyectoResponse.model_validate(proyecto_service.get_proyecto(db, num_proyecto))


# ---------------------------------------------------------------------------
# POST /
# ---------------------------------------------------------------------------


@router.post(
    "/",
    response_model=ProyectoResponse,
    status_code=201,
    summary="Crear proyecto",
    description=(
        "``nombre_proyecto`` y ``fecha_aprobacion`` son obligatorios; la fecha "
        "acepta ``YYYY-MM-DD`` o ``dd/mm/yyyy``. Requiere rol ADMIN o EDITOR."
    ),
    responses={
        201: {"description": "Proyecto creado."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        422: {"description": "Datos inválidos o área inexistente."},
    },
)
def create_proyecto(
    body: ProyectoCreate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: _EscrituraUser,
) -> ProyectoResponse:
    logger.info(
        "POST /proyectos nombre=%s user=%s", body.nombre_proyecto, _current_user.username
    )
    return ProyectoResponse.model_validate(proyecto_service.create_proyecto(db, body))


# ---------------------------------------------------------------------------
# PUT /{num_proyecto}
# ---------------------------------------------------------------------------


@router.put(
    "/{num_proyecto}",
    response_model=ProyectoResponse,
    summary="Actualizar proyecto",
    description=(
        "Reemplaza los campos del proyecto. Si ``documentos`` no se envía, se "
        "conserva el documento adjunto. Requiere rol ADMIN o EDITOR."
    ),
    responses={
        200: {"description": "Proyecto actualizado."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        404: {"description": "Proyecto no encontrado."},
        422: {"description": "Datos inválidos o área inexistente."},
    },
)
def update_proyecto(
    num_proyecto: _NumProyecto,
    body: ProyectoUpdate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: _EscrituraUser,
) -> ProyectoResponse:
    logger.info("PUT /proyectos/%d user=%s", num_proyecto, _current_user.username)
    proyecto = proyecto_service.update_proyecto(db, num_proyecto, body)
    return ProyectoResponse.model_validate(proyecto)


# ---------------------------------------------------------------------------
# DELETE /{num_proyecto}/documento
# ---------------------------------------------------------------------------


@router.delete(
    "/{num_proyecto}/documento",
    response_model=ProyectoResponse,
    summary="Eliminar documento del proyecto",
    description="Quita el enlace al PDF adjunto y borra el archivo almacenado.",
    responses={
        200: {"description": "Documento eliminado; retorna el proyecto."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        404: {"description": "Proyecto no encontrado."},
    },
)
def delete_documento(
    num_proyecto: _NumProyecto,
    db: Annotated[Session, Depends(get_db)],
    _current_user: _EscrituraUser,
) -> ProyectoResponse:
    logger.info("DELETE /proyectos/%d/documento user=%s", num_proyecto, _current_user.username)
    return ProyectoResponse.model_validate(proyecto_service.delete_documento(db, num_proyecto))


# ---------------------------------------------------------------------------
# DELETE /{num_proyecto}
# ---------------------------------------------------------------------------


@router.delete(
    "/{num_proyecto}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Eliminar proyecto",
    responses={
        204: {"description": "Proyecto eliminado."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        404: {"description": "Proyecto no encontrado."},
    },
)
def delete_proyecto(
    num_proyecto: _NumProyecto,
    db: Annotated[Session, Depends(get_db)],
    _current_user: _EscrituraUser,
) -> Response:
    logger.info("DELETE /proyectos/%d user=%s", num_proyecto, _current_user.username)
    proyecto_service.delete_proyecto(db, num_proyecto)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
