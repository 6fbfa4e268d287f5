"""
Budget line (subpartida de contratación) service layer.

All database access for ``/api/subpartida_contratacion`` lives here.

Design notes
------------
- Lines are listed in ascending ``id`` order, which is also the order the
  ledger view uses to pick the "first" line for a code.
- ``PUT`` replaces every editable field; there is intentionally no delete.
- The detail endpoint derives ``monto_consumido``/``saldo`` from all of the
  line's orders through ``balance_service``.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from cooperacion.models.solicitud_presupuesto import SolicitudPresupuesto
from cooperacion.models.subpartida_contratacion import SubpartidaContratacion
from cooperacion.schemas.subpartida import (
    SubpartidaCreate,
    SubpartidaDetalle,
    SubpartidaResponse,
    SubpartidaUpdate,
)
from cooperacion.services.balance_service import ResultadoBalance, balance_de_linea

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def get_subpartida_or_404(db: Session, subpartida_id: int) -> SubpartidaContratacion:
    linea: SubpartidaContratacion | None = db.get(SubpartidaContratacion, subpartida_id)
    if linea is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Subpartida con ID {subpartida_id} no encontrada.",
        )
    return linea


def build_detalle(resultado: ResultadoBalance) -> SubpartidaDetalle:
    """Serialise a balance result as a ``SubpartidaDetalle``.

    Args:
        resultado: Output of the balance calculator for one line.

    Returns:
        The line's stored fields merged with the derived amounts.
    """
    base = SubpartidaResponse.model_validate(resultado.linea).model_dump()
    return SubpartidaDetalle(**base, **resultado.montos())


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def list_subpartidas(
    db: Session, ano_contrato: str | None = None
) -> list[SubpartidaContratacion]:
    query = db.query(SubpartidaContratacion)
    if ano_contrato:
        query = query.filter(SubpartidaContratacion.ano_contrato == ano_contrato)
    rows = query.order_by(SubpartidaContratacion.id).all()
    logger.debug("list_subpartidas: ano_contrato=%s rows=%d", ano_contrato, len(rows))
    return rows


def get_detalle(db: Session, subpartida_id: int) -> SubpartidaDetalle:
    """Return one line with the amounts derived from all of its orders.

    Raises:
        HTTPException 404: If the line does not exist.
    """
    linea = get_subpartida_or_404(db, subpartida_id)
    solicitudes = (
        db.query(SolicitudPresupuesto)
        .filter(SolicitudPresupuesto.subpartida_contratacion_id == linea.id)
        .order_by(SolicitudPresupuesto.id)
        .all()
    )
    logger.debug("get_detalle: subpartida_id=%d solicitudes=%d", linea.id, len(solicitudes))
    return build_detalle(balance_de_linea(linea, solicitudes))


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def create_subpartida(db: Session, data: SubpartidaCreate) -> SubpartidaContratacion:
    linea = SubpartidaContratacion(**data.model_dump())
    db.add(linea)
    db.commit()
    db.refresh(linea)

    logger.info(
        "create_subpartida: id=%d subpartida=%s ano=%s",
        linea.id, linea.subpartida, linea.ano_contrato,
    )
    return linea


def update_subpartida(
    db: Session,
    subpartida_id: int,
    data: SubpartidaUpdate,
) -> SubpartidaContratacion:
    """Replace every editable field of an existing line.

    Raises:
        HTTPException 404: If the line does not exist.
    """
    linea = get_subpartida_or_404(db, subpartida_id)

    for field, value in data.model_dump().items():
        setattr(linea, field, value)

    db.commit()
    db.refresh(linea)

    logger.info("update_subpartida: id=%d subpartida=%s", linea.id, linea.subpartida)
    return linea
