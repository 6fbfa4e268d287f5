"""
Cooperation projects service layer.

All database access for ``/api/proyectos`` lives here, including the
statistics endpoints that feed the project charts.

Design notes
------------
- Statistics are computed in Python over the loaded projects.  Grouping
  rules (blank values, comma-separated offices, sector normalisation) are
  text rules that would not translate cleanly to portable SQL.
- Buckets keep the order in which their label first appears, except the
  per-year amounts, which are sorted by year, and the sector catalogue,
  which always lists its eight labels in catalogue order.
- Deleting a project or its document also removes the stored PDF.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from cooperacion.config import get_settings
from cooperacion.models.area import Area
from cooperacion.models.proyecto import Proyecto
from cooperacion.schemas.estadistica import (
    EstadisticaResponse,
    GrupoEstadistica,
    MontosAnio,
    SectorGrupo,
)
from cooperacion.schemas.proyecto import ProyectoCreate, ProyectoUpdate
from cooperacion.services import file_storage
from cooperacion.utils.constants import (
    CAMPOS_ESTADISTICA,
    ETIQUETA_SIN_ANO,
    ETIQUETA_SIN_AREA,
    ETIQUETA_SIN_DATOS,
    SECTOR_NORMALIZADO,
    SECTORES,
)
from cooperacion.utils.formato import ZERO, parse_monto_proyecto

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _get_or_404(db: Session, num_proyecto: int) -> Proyecto:
    proyecto: Proyecto | None = db.get(Proyecto, num_proyecto)
    if proyecto is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Proyecto {num_proyecto} no encontrado.",
        )
    return proyecto


def _ensure_area_exists(db: Session, area_id: int | None) -> None:
    if area_id is not None and db.get(Area, area_id) is None:
        raise HTTPException(
            status_code=422,
            detail=f"Área con ID {area_id} no existe.",
        )


def _proyectos_del_ano(db: Session, ano: str | None) -> list[Proyecto]:
    query = db.query(Proyecto)
    if ano:
        query = query.filter(Proyecto.ano == ano)
    return query.order_by(Proyecto.num_proyecto).all()


def _safe_pct(numerator: int, denominator: int) -> float:
    """Return numerator / denominator × 100 with one decimal; 0.0 if denom is zero."""
    if denominator == 0:
        return 0.0
    return round(numerator / denominator * 100, 1)


def _etiquetas(proyecto: Proyecto, campo: str) -> list[str]:
    """Bucket labels of *proyecto* for the grouped field.

    ``dependencias_solicitantes`` yields one label per comma-separated
    office and none at all when blank; every other field yields exactly one.
    """
    if campo == "area":
        return [proyecto.nombre_area or ETIQUETA_SIN_AREA]

    valor = getattr(proyecto, campo)
    if campo == "dependencias_solicitantes":
        return [d.strip() for d in (valor or "").split(",") if d.strip()]

    return [str(valor).strip() if valor is not None and str(valor).strip() else ETIQUETA_SIN_DATOS]


def agrupar_proyectos(proyectos: Iterable[Proyecto], campo: str) -> list[GrupoEstadistica]:
    """Group projects by *campo*, keeping first-appearance order."""
    grupos: dict[str, list[str]] = {}
    for proyecto in proyectos:
        for etiqueta in _etiquetas(proyecto, campo):
            grupos.setdefault(etiqueta, []).append(proyecto.nombre_proyecto)

    suma = sum(len(nombres) for nombres in grupos.values())
    return [
        GrupoEstadistica(
            etiqueta=etiqueta,
            cantidad=len(nombres),
            porcentaje=_safe_pct(len(nombres), suma),
            proyectos=nombres,
        )
        for etiqueta, nombres in grupos.items()
    ]


def normalizar_sector(sector: str | None) -> str:
    """Map a free-text sector to the catalogue; unknown or blank → ``"Otro"``."""
    return SECTOR_NORMALIZADO.get((sector or "").strip().lower(), "Otro")


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def list_proyectos(
    db: Session,
    ano: str | None = None,
    area_id: int | None = None,
    q: str | None = None,
) -> list[Proyecto]:
    query = db.query(Proyecto)
    if ano:
        query = query.filter(Proyecto.ano == ano)
    if area_id is not None:
        query = query.filter(Proyecto.area_id == area_id)
    if q and q.strip():
        patron = f"%{q.strip()}%"
        query = query.filter(
            or_(
                Proyecto.nombre_proyecto.ilike(patron),
                Proyecto.nombre_actor.ilike(patron),
                Proyecto.institucion_solicitante.ilike(patron),
                Proyecto.region.ilike(patron),
            )
        )
    rows = query.order_by(Proyecto.num_proyecto).all()
    logger.debug("list_proyectos: ano=%s area_id=%s q=%r rows=%d", ano, area_id, q, len(rows))
    return rows


def get_proyecto(db: Session, num_proyecto: int) -> Proyecto:
    return _get_or_404(db, num_proyecto)


def list_anios(db: Session) -> list[str]:
    rows = db.query(Proyecto.ano).filter(Proyecto.ano.isnot(None)).distinct().all()
    return sorted({ano for (ano,) in rows if ano and ano.strip()})


def get_estadisticas(db: Session, campo: str, ano: str | None = None) -> EstadisticaResponse:
    """Group projects by one categorical field.

    Args:
        db: Active SQLAlchemy session.
        campo: One of ``constants.CAMPOS_ESTADISTICA``.
        ano: Optional year filter.

    Raises:
        HTTPException 400: If *campo* is not groupable.
    """
    if campo not in CAMPOS_ESTADISTICA:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Campo '{campo}' no soportado. Valores válidos: {CAMPOS_ESTADISTICA}.",
        )

    proyectos = _proyectos_del_ano(db, ano)
    grupos = agrupar_proyectos(proyectos, campo)
    logger.debug("get_estadisticas: campo=%s ano=%s grupos=%d", campo, ano, len(grupos))
    return EstadisticaResponse(campo=campo, total=len(proyectos), grupos=grupos)


def get_montos_por_anio(db: Session, ano: str | None = None) -> list[MontosAnio]:
    """Sum the three amount fields per project year, sorted by year."""
    acumulado: dict[str, dict[str, Decimal]] = {}
    for proyecto in _proyectos_del_ano(db, ano):
        clave = (proyecto.ano or "").strip() or ETIQUETA_SIN_ANO
        montos = acumulado.setdefault(
            clave,
            {"contrapartida_institucion": ZERO, "contrapartida_cooperante": ZERO, "costo_total": ZERO},
        )
        for campo in montos:
            montos[campo] += parse_monto_proyecto(getattr(proyecto, campo))

    return [
        MontosAnio(ano=clave, **{campo: float(valor) for campo, valor in acumulado[clave].items()})
        for clave in sorted(acumulado)
    ]


def get_sectores(db: Session, ano: str | None = None) -> list[SectorGrupo]:
    """Projects per catalogue sector, listing the cooperating actors."""
    actores: dict[str, list[str]] = {sector: [] for sector in SECTORES}
    for proyecto in _proyectos_del_ano(db, ano):
        actores[normalizar_sector(proyecto.sector)].append(
            proyecto.nombre_actor or ETIQUETA_SIN_DATOS
        )
    return [
        SectorGrupo(sector=sector, cantidad=len(nombres), actores=nombres)
        for sector, nombres in actores.items()
    ]


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def create_proyecto(db: Session, data: ProyectoCreate) -> Proyecto:
    _ensure_area_exists(db, data.area_id)

    proyecto = Proyecto(**data.model_dump())
    db.add(proyecto)
    db.commit()
    db.refresh(proyecto)

    logger.info(
        "create_proyecto: num_proyecto=%d nombre=%s", proyecto.num_proyecto, proyecto.nombre_proyecto
    )
    return proyecto


def update_proyecto(db: Session, num_proyecto: int, data: ProyectoUpdate) -> Proyecto:
    """Replace every field of a project.

    An omitted ``documentos`` keeps the current link so that editing the
    project form does not drop an attached PDF.

    Raises:
        HTTPException 404: If the project does not exist.
        HTTPException 422: If ``area_id`` does not exist.
    """
    proyecto = _get_or_404(db, num_proyecto)
    _ensure_area_exists(db, data.area_id)

    valores = data.model_dump()
    if "documentos" not in data.model_fields_set:
        valores.pop("documentos")
    for field, value in valores.items():
        setattr(proyecto, field, value)

    db.commit()
    db.refresh(proyecto)

    logger.info("update_proyecto: num_proyecto=%d", num_proyecto)
    return proyecto


def set_documento(db: Session, num_proyecto: int, url: str) -> Proyecto:
    """Link an uploaded PDF; a replaced document's file is deleted."""
    settings = get_settings()
    proyecto = _get_or_404(db, num_proyecto)
    anterior = proyecto.documentos

    proyecto.documentos = url
    db.commit()
    db.refresh(proyecto)

    if anterior and anterior != url:
        file_storage.delete_upload(anterior, settings.UPLOADS_DIR, settings.FILES_BASE_URL)
    logger.info(
        "set_documento: num_proyecto=%d url=%s anterior=%s", num_proyecto, url, anterior
    )
    return proyecto


def delete_documento(db: Session, num_proyecto: int) -> Proyecto:
    """Clear the document link and delete the stored file.

    Raises:
        HTTPException 404: If the project does not exist.
    """
    settings = get_settings()
    proyecto = _get_or_404(db, num_proyecto)
    url = proyecto.documentos

    proyecto.documentos = None
    db.commit()
    db.refresh(proyecto)

    file_storage.delete_upload(url, settings.UPLOADS_DIR, settings.FILES_BASE_URL)
    logger.info("delete_documento: num_proyecto=%d url=%s", num_proyecto, url)
    return proyecto


def delete_proyecto(db: Session, num_proyecto: int) -> None:
    settings = get_settings()
    proyecto = _get_or_404(db, num_proyecto)
    url = proyecto.documentos

    db.delete(proyecto)
    db.commit()

    file_storage.delete_upload(url, settings.UPLOADS_DIR, settings.FILES_BASE_URL)
    logger.info("delete_proyecto: num_proyecto=%d", num_proyecto)
