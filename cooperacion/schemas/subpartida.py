"""
Pydantic v2 schemas for contract budget lines (``subpartida_contratacion``).

A budget line is identified for humans by its ``subpartida`` code plus the
contract year; the same code repeats from one year to the next.  Consumed
amount and balance are derived values and only appear in responses.
"""

from __future__ import annotations

import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from cooperacion.schemas.common import Ano, TextoRequerido, texto_opcional


# ---------------------------------------------------------------------------
# Input schemas
# ---------------------------------------------------------------------------


class SubpartidaCreate(BaseModel):
    """Payload for ``POST /api/subpartida_contratacion``.

    Attributes:
        subpartida: Budget code, e.g. ``"10503"``.
        ano_contrato: Four-digit contract year.
        nombre_subpartida: Display name.
        numero_contratacion: Procurement process number.
        presupuesto_asignado: Ceiling for draws; must be positive.
    """

    subpartida: TextoRequerido = Field(..., max_length=20, description="Código de subpartida.")
    ano_contrato: Ano = Field(..., description="Año del contrato (4 dígitos).")
    nombre_subpartida: TextoRequerido = Field(..., max_length=300, description="Nombre de la subpartida.")
    descripcion_contratacion: texto_opcional(1000) = None
    numero_contratacion: TextoRequerido = Field(..., max_length=100, description="Número de contratación.")
    numero_contrato: texto_opcional(100) = None
    numero_orden_compra: texto_opcional(100) = None
    orden_pedido_sicop: texto_opcional(100) = None
    presupuesto_asignado: Decimal = Field(
        ...,
        gt=0,
        max_digits=18,
        decimal_places=2,
        description="Presupuesto asignado en colones (mayor que cero).",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "subpartida": "10503",
                "ano_contrato": "2025",
                "nombre_subpartida": "Transporte en el exterior",
                "descripcion_contratacion": "Servicio de agencia de viajes",
                "numero_contratacion": "2024LD-000012-0001000001",
                "numero_contrato": "0432024000100011-00",
                "numero_orden_compra": "4600081234",
                "orden_pedido_sicop": "7024000123",
                "presupuesto_asignado": 1000000,
            }
        }
    )


class SubpartidaUpdate(SubpartidaCreate):
    """Payload for ``PUT /api/subpartida_contratacion/{id}`` (full replacement)."""


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class SubpartidaResponse(BaseModel):
    """Stored budget line as returned by list endpoints."""

    id: int
    subpartida: str
    ano_contrato: str
    nombre_subpartida: str
    descripcion_contratacion: str | None = None
    numero_contratacion: str
    numero_contrato: str | None = None
    numero_orden_compra: str | None = None
    orden_pedido_sicop: str | None = None
    presupuesto_asignado: float
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class SubpartidaDetalle(SubpartidaResponse):
    """Budget line augmented with the amounts derived from its orders.

    Attributes:
        monto_consumido: Sum of the parsed ``total_factura`` of the orders.
        saldo: ``presupuesto_asignado - monto_consumido``; may be negative.
        sobregirado: ``True`` when ``saldo < 0``.
        presupuesto_formateado / consumido_formateado / saldo_formateado:
            Display strings, e.g. ``"₡ 1,234.50"``.
    """

    monto_consumido: float = Field(..., description="Monto consumido por las solicitudes.")
    saldo: float = Field(..., description="Saldo disponible (puede ser negativo).")
    sobregirado: bool = Field(..., description="Indica saldo negativo.")
    presupuesto_formateado: str
    consumido_formateado: str
    saldo_formateado: str
