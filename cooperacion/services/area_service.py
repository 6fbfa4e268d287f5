"""Area lookup service: list and create organisational areas."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from cooperacion.models.area import Area
from cooperacion.schemas.area import AreaCreate

logger = logging.getLogger(__name__)


def list_areas(db: Session) -> list[Area]:
    return db.query(Area).order_by(Area.nombre_area).all()


def create_area(db: Session, data: AreaCreate) -> Area:
    """Create an area.

    Raises:
        HTTPException 409: If an area with the same name (ignoring case)
                           already exists.
    """
    existente = (
        db.query(Area)
        .filter(func.lower(Area.nombre_area) == data.nombre_area.lower())
        .first()
    )
    if existente is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"El área '{data.nombre_area}' ya existe.",
        )

    area = Area(nombre_area=data.nombre_area)
    db.add(area)
    db.commit()
    db.refresh(area)

    logger.info("create_area: id=%d nombre_area=%s", area.id, area.nombre_area)
    return area
