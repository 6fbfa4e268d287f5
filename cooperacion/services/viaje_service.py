"""
Travel abroad (viajes al exterior) service layer.

Design notes
------------
- ``PUT`` replaces the trip's fields; ``estado`` and ``documento`` keep
  their stored value when the payload leaves them out, since both are
  normally maintained through their own actions (status tracking, upload).
- Follow-up observations are deleted together with their trip by the ORM
  cascade on ``ViajeExterior.observaciones_seguimiento``.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from cooperacion.config import get_settings
from cooperacion.models.observacion_viaje import ObservacionViaje
from cooperacion.models.viaje_exterior import ViajeExterior
from cooperacion.schemas.observacion import ObservacionResponse
from cooperacion.schemas.viaje import ViajeCreate, ViajeDetalleResponse, ViajeUpdate
from cooperacion.services import file_storage
from cooperacion.utils.constants import ESTADO_VIAJE_INICIAL

logger = logging.getLogger(__name__)

# Fields kept from the stored trip when a PUT omits them
_CAMPOS_CONSERVADOS: tuple[str, ...] = ("estado", "documento")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def get_viaje_or_404(db: Session, viaje_id: int) -> ViajeExterior:
    viaje: ViajeExterior | None = db.get(ViajeExterior, viaje_id)
    if viaje is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Viaje con ID {viaje_id} no encontrado.",
        )
    return viaje


def observaciones_ordenadas(db: Session, viaje_id: int) -> list[ObservacionViaje]:
    """Follow-up log of a trip ordered by fecha, hora and id."""
    return (
        db.query(ObservacionViaje)
        .filter(ObservacionViaje.viaje_id == viaje_id)
        .order_by(ObservacionViaje.fecha, ObservacionViaje.hora, ObservacionViaje.id)
        .all()
    )


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def list_viajes(
    db: Session,
    ano: str | None = None,
    estado: str | None = None,
    q: str | None = None,
) -> list[ViajeExterior]:
    query = db.query(ViajeExterior)
    if ano:
        query = query.filter(ViajeExterior.ano_viaje == ano)
    if estado:
        query = query.filter(ViajeExterior.estado == estado)
    if q and q.strip():
        patron = f"%{q.strip()}%"
        query = query.filter(
            or_(
                ViajeExterior.nombre_actividad.ilike(patron),
                ViajeExterior.nombre_funcionario.ilike(patron),
                ViajeExterior.funcionario_a_cargo.ilike(patron),
                ViajeExterior.lugar_destino.ilike(patron),
                ViajeExterior.organizador_evento.ilike(patron),
            )
        )
    rows = query.order_by(ViajeExterior.id).all()
    logger.debug("list_viajes: ano=%s estado=%s q=%r rows=%d", ano, estado, q, len(rows))
    return rows


def get_detalle(db: Session, viaje_id: int) -> ViajeDetalleResponse:
    """Trip with its ordered follow-up log.

    Raises:
        HTTPException 404: If the trip does not exist.
    """
    viaje = get_viaje_or_404(db, viaje_id)
    detalle = ViajeDetalleResponse.model_validate(viaje)
    detalle.observaciones_seguimiento = [
        ObservacionResponse.model_validate(o) for o in observaciones_ordenadas(db, viaje_id)
    ]
    return detalle


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def create_viaje(db: Session, data: ViajeCreate) -> ViajeExterior:
    valores = data.model_dump()
    valores["estado"] = valores["estado"] or ESTADO_VIAJE_INICIAL

    viaje = ViajeExterior(**valores)
    db.add(viaje)
    db.commit()
    db.refresh(viaje)

    logger.info("create_viaje: id=%d actividad=%s", viaje.id, viaje.nombre_actividad)
    return viaje


def update_viaje(db: Session, viaje_id: int, data: ViajeUpdate) -> ViajeExterior:
    """Replace a trip's fields.

    Raises:
        HTTPException 404: If the trip does not exist.
    """
    viaje = get_viaje_or_404(db, viaje_id)

    valores = data.model_dump()
    for campo in _CAMPOS_CONSERVADOS:
        if valores[campo] is None:
            valores.pop(campo)
    for field, value in valores.items():
        setattr(viaje, field, value)

    db.commit()
    db.refresh(viaje)

    logger.info("update_viaje: id=%d estado=%s", viaje.id, viaje.estado)
    return viaje


def set_gaceta(db: Session, viaje_id: int, gaceta_url: str) -> ViajeExterior:
    viaje = get_viaje_or_404(db, viaje_id)
    viaje.gaceta_url = gaceta_url
    db.commit()
    db.refresh(viaje)
    logger.info("set_gaceta: id=%d url=%s", viaje_id, gaceta_url)
    return viaje


def set_documento(db: Session, viaje_id: int, url: str) -> ViajeExterior:
    settings = get_settings()
    viaje = get_viaje_or_404(db, viaje_id)
    anterior = viaje.documento

    viaje.documento = url
    db.commit()
    db.refresh(viaje)

    if anterior and anterior != url:
        file_storage.delete_upload(anterior, settings.UPLOADS_DIR, settings.FILES_BASE_URL)
    logger.info("set_documento: viaje_id=%d url=%s anterior=%s", viaje_id, url, anterior)
    return viaje


def delete_documento(db: Session, viaje_id: int) -> ViajeExterior:
    """Clear the trip's document link and delete the stored file."""
    settings = get_settings()
    viaje = get_viaje_or_404(db, viaje_id)
    url = viaje.documento

    viaje.documento = None
    db.commit()
    db.refresh(viaje)

    file_storage.delete_upload(url, settings.UPLOADS_DIR, settings.FILES_BASE_URL)
    logger.info("delete_documento: viaje_id=%d url=%s", viaje_id, url)
    return viaje


def delete_viaje(db: Session, viaje_id: int) -> None:
    settings = get_settings()
    viaje = get_viaje_or_404(db, viaje_id)
    url = viaje.documento

    db.delete(viaje)
    db.commit()

    file_storage.delete_upload(url, settings.UPLOADS_DIR, settings.FILES_BASE_URL)
    logger.info("delete_viaje: id=%d", viaje_id)
