"""
Budget order (solicitud de presupuesto) service layer.

Design notes
------------
- Creation requires an existing budget line and a ``total_factura`` that
  parses to a positive amount.  Updates are full replacements and keep any
  ``total_factura`` text, since the value is audit data once recorded.
- Nothing is cached: the ledger view recomputes balances on every request,
  so no write here touches the budget line.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from cooperacion.models.solicitud_presupuesto import SolicitudPresupuesto
from cooperacion.models.subpartida_contratacion import SubpartidaContratacion
from cooperacion.schemas.solicitud import SolicitudCreate, SolicitudUpdate
from cooperacion.utils.formato import parse_monto

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _ensure_subpartida_exists(db: Session, subpartida_id: int) -> None:
    if db.get(SubpartidaContratacion, subpartida_id) is None:
        raise HTTPException(
            status_code=422,
            detail=f"Subpartida con ID {subpartida_id} no existe.",
        )


def _get_or_404(db: Session, solicitud_id: int) -> SolicitudPresupuesto:
    solicitud: SolicitudPresupuesto | None = db.get(SolicitudPresupuesto, solicitud_id)
    if solicitud is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Solicitud de presupuesto con ID {solicitud_id} no encontrada.",
        )
    return solicitud


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def list_solicitudes(
    db: Session, subpartida_contratacion_id: int | None = None
) -> list[SolicitudPresupuesto]:
    query = db.query(SolicitudPresupuesto)
    if subpartida_contratacion_id is not None:
        query = query.filter(
            SolicitudPresupuesto.subpartida_contratacion_id == subpartida_contratacion_id
        )
    rows = query.order_by(SolicitudPresupuesto.id).all()
    logger.debug(
        "list_solicitudes: subpartida_contratacion_id=%s rows=%d",
        subpartida_contratacion_id, len(rows),
    )
    return rows


def get_solicitud(db: Session, solicitud_id: int) -> SolicitudPresupuesto:
    return _get_or_404(db, solicitud_id)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def create_solicitud(db: Session, data: SolicitudCreate) -> SolicitudPresupuesto:
    """Register a new order against a budget line.

    Args:
        db: Active SQLAlchemy session.
        data: Validated creation payload.

    Returns:
        The persisted ``SolicitudPresupuesto``.

    Raises:
        HTTPException 422: If the budget line does not exist, or if
                           ``total_factura`` is not an amount above zero.
    """
    _ensure_subpartida_exists(db, data.subpartida_contratacion_id)

    if parse_monto(data.total_factura) <= 0:
        raise HTTPException(
            status_code=422,
            detail="El total de la factura debe ser un monto mayor que cero.",
        )

    solicitud = SolicitudPresupuesto(**data.model_dump())
    db.add(solicitud)
    db.commit()
    db.refresh(solicitud)

    logger.info(
        "create_solicitud: id=%d subpartida_contratacion_id=%d total_factura=%s",
        solicitud.id, solicitud.subpartida_contratacion_id, solicitud.total_factura,
    )
    return solicitud


def update_solicitud(
    db: Session,
    solicitud_id: int,
    data: SolicitudUpdate,
) -> SolicitudPresupuesto:
    """Replace an order with the submitted record.

    Omitted fields become null (or their default).

    Raises:
        HTTPException 404: If the order does not exist.
        HTTPException 422: If the new budget line does not exist.
    """
    solicitud = _get_or_404(db, solicitud_id)
    if data.subpartida_contratacion_id != solicitud.subpartida_contratacion_id:
        _ensure_subpartida_exists(db, data.subpartida_contratacion_id)

    for field, value in data.model_dump().items():
        setattr(solicitud, field, value)

    db.commit()
    db.refresh(solicitud)

    logger.info("update_solicitud: id=%d", solicitud.id)
    return solicitud


def delete_solicitud(db: Session, solicitud_id: int) -> None:
    solicitud = _get_or_404(db, solicitud_id)
    db.delete(solicitud)
    db.commit()
    logger.info("delete_solicitud: id=%d", solicitud_id)
