"""
Budget ledger ("ficha de presupuesto") service layer.

Feeds ``/api/presupuesto``: loads every budget line and every order, hands
them to the balance calculator and shapes the result for the client.

Design notes
------------
- The whole collection is read on every request; there is no stored or
  cached aggregate, so a refetch after any write always shows fresh totals.
- The text search ``q`` only narrows the order list returned to the client.
  ``monto_consumido`` is always computed over the unfiltered order set.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from cooperacion.models.solicitud_presupuesto import SolicitudPresupuesto
from cooperacion.models.subpartida_contratacion import SubpartidaContratacion
from cooperacion.schemas.presupuesto import (
    FichaPresupuestoResponse,
    OpcionesPresupuestoResponse,
)
from cooperacion.schemas.solicitud import SolicitudResponse
from cooperacion.services.balance_service import ResultadoBalance, calcular_balance
from cooperacion.services.subpartida_service import build_detalle

logger = logging.getLogger(__name__)

_CAMPOS_BUSQUEDA: tuple[str, ...] = ("descripcion", "numero_factura", "oficio_solicitud")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _coincide(solicitud: SolicitudPresupuesto, termino: str) -> bool:
    """Case-insensitive "contains" over the searchable text fields."""
    return any(
        termino in (getattr(solicitud, campo) or "").lower()
        for campo in _CAMPOS_BUSQUEDA
    )


def _distinct(values: list[str]) -> list[str]:
    """Unique non-empty values, preserving first-seen order."""
    return list(dict.fromkeys(v for v in values if v))


def calcular_ficha(
    db: Session,
    subpartida: str,
    ano: str | None = None,
) -> ResultadoBalance:
    """Run the balance calculator over the full ledger.

    Raises:
        HTTPException 404: If no budget line has the code *subpartida*.
    """
    lineas = db.query(SubpartidaContratacion).order_by(SubpartidaContratacion.id).all()
    solicitudes = db.query(SolicitudPresupuesto).order_by(SolicitudPresupuesto.id).all()

    resultado = calcular_balance(lineas, solicitudes, subpartida, ano)
    if resultado is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No existe la subpartida {subpartida}.",
        )
    return resultado


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_ficha(
    db: Session,
    subpartida: str,
    ano: str | None = None,
    q: str | None = None,
) -> FichaPresupuestoResponse:
    """Return the ledger of one budget line.

    Args:
        db: Active SQLAlchemy session.
        subpartida: Budget code selected by the user.
        ano: Optional contract year.
        q: Optional free-text search over the returned orders.

    Returns:
        ``FichaPresupuestoResponse`` with the line, its derived amounts and
        the (optionally searched) order list.

    Raises:
        HTTPException 404: If no budget line has the code *subpartida*.
    """
    resultado = calcular_ficha(db, subpartida, ano)

    solicitudes = resultado.solicitudes
    termino = (q or "").strip().lower()
    if termino:
        solicitudes = [s for s in solicitudes if _coincide(s, termino)]

    logger.debug(
        "get_ficha: subpartida=%s ano=%s q=%r linea_id=%d solicitudes=%d/%d saldo=%s",
        subpartida, ano, q, resultado.linea.id,
        len(solicitudes), len(resultado.solicitudes), resultado.saldo,
    )

    return FichaPresupuestoResponse(
        ficha=build_detalle(resultado),
        solicitudes=[SolicitudResponse.model_validate(s) for s in solicitudes],
    )


def get_opciones(db: Session) -> OpcionesPresupuestoResponse:
    """Distinct budget codes and contract years, in first-seen order."""
    lineas = db.query(SubpartidaContratacion).order_by(SubpartidaContratacion.id).all()
    return OpcionesPresupuestoResponse(
        subpartidas=_distinct([linea.subpartida for linea in lineas]),
        anos=_distinct([linea.ano_contrato for linea in lineas]),
    )
