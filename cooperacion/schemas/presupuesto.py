"""
Pydantic v2 schemas for the budget ledger view (``/api/presupuesto``).

The ledger ("ficha") shows one budget line with its consumed amount and
balance, followed by the orders drawn against it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from cooperacion.schemas.solicitud import SolicitudResponse
from cooperacion.schemas.subpartida import SubpartidaDetalle


class FichaPresupuestoResponse(BaseModel):
    """Response of ``GET /api/presupuesto/ficha``.

    Attributes:
        ficha: Selected budget line with ``monto_consumido`` and ``saldo``.
        solicitudes: Orders of the line, after the optional text search.
    """

    ficha: SubpartidaDetalle
    solicitudes: list[SolicitudResponse] = Field(default_factory=list)


class OpcionesPresupuestoResponse(BaseModel):
    """Dropdown sources for the ledger view.

    Attributes:
        subpartidas: Distinct budget codes, in first-seen order.
        anos: Distinct contract years, in first-seen order.
    """

    subpartidas: list[str] = Field(default_factory=list)
    anos: list[str] = Field(default_factory=list)
