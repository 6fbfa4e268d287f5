"""Follow-up observations of trips: list, add and remove log entries."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from cooperacion.models.observacion_viaje import ObservacionViaje
from cooperacion.schemas.observacion import ObservacionCreate
from cooperacion.services.viaje_service import get_viaje_or_404, observaciones_ordenadas

logger = logging.getLogger(__name__)


def list_observaciones(db: Session, viaje_id: int) -> list[ObservacionViaje]:
    """Observations of one trip ordered by fecha, hora and id.

    Raises:
        HTTPException 404: If the trip does not exist.
    """
    get_viaje_or_404(db, viaje_id)
    rows = observaciones_ordenadas(db, viaje_id)
    logger.debug("list_observaciones: viaje_id=%d rows=%d", viaje_id, len(rows))
    return rows


def create_observacion(db: Session, data: ObservacionCreate) -> ObservacionViaje:
    get_viaje_or_404(db, data.viaje_id)

    observacion = ObservacionViaje(**data.model_dump())
    db.add(observacion)
    db.commit()
    db.refresh(observacion)

    logger.info(
        "create_observacion: id=%d viaje_id=%d envia=%s recibe=%s",
        observacion.id, observacion.viaje_id, observacion.quien_envia, observacion.quien_recibe,
    )
    return observacion


def delete_observacion(db: Session, observacion_id: int) -> None:
    observacion: ObservacionViaje | None = db.get(ObservacionViaje, observacion_id)
    if observacion is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Observación con ID {observacion_id} no encontrada.",
        )
    db.delete(observacion)
    db.commit()
    logger.info("delete_observacion: id=%d", observacion_id)
