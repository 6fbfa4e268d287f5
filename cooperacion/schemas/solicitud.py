"""
Pydantic v2 schemas for budget draw-down orders (``solicitud_presupuesto``).

Domain context
--------------
An order moves through five optional phases, each a flat group of fields:

1. Solicitud    — ticket request, official letter, response, compliance.
2. Emisión      — issuance request, official letter, response, compliance.
3. Recepción    — received-in-conformity date/time and letter.
4. Facturación  — invoice number and invoice total.
5. Entrega      — delivery date to the directorate.

Phases can be filled in any order.  ``total_factura`` travels as text: the
creation endpoint checks that it parses to a positive amount, while updates
keep whatever the user typed.
"""

from __future__ import annotations

import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from cooperacion.schemas.common import FechaOpcional, MontoTexto, TextoRequerido, texto_opcional

Cumple = Literal["Sí", "No", "Pendiente"]


class _SolicitudCampos(BaseModel):
    subpartida_contratacion_id: int = Field(
        ..., ge=1, description="ID de la subpartida de la que se consume."
    )
    descripcion: TextoRequerido = Field(..., description="Descripción de la solicitud.")

    # Fase 1: Solicitud
    fecha_solicitud_boleto: FechaOpcional = None
    hora_solicitud_boleto: texto_opcional(10) = None
    oficio_solicitud: texto_opcional(100) = None
    fecha_respuesta_solicitud: FechaOpcional = None
    hora_respuesta_solicitud: texto_opcional(10) = None
    cumple_solicitud: Cumple = "Pendiente"

    # Fase 2: Emisión
    fecha_solicitud_emision: FechaOpcional = None
    hora_solicitud_emision: texto_opcional(10) = None
    oficio_emision: texto_opcional(100) = None
    fecha_respuesta_emision: FechaOpcional = None
    hora_respuesta_emision: texto_opcional(10) = None
    cumple_emision: Cumple = "Pendiente"

    # Fase 3: Recepción
    fecha_recibido_conforme: FechaOpcional = None
    hora_recibido_conforme: texto_opcional(10) = None
    oficio_recepcion: texto_opcional(100) = None

    # Fase 4: Facturación
    numero_factura: texto_opcional(100) = None
    total_factura: MontoTexto = Field(default=None, description="Total de la factura en colones.")

    # Fase 5: Entrega
    fecha_entrega_direccion: FechaOpcional = None

    estado: texto_opcional(100) = None
    activo: bool = True


class SolicitudCreate(_SolicitudCampos):
    """Payload for ``POST /api/solicitud_presupuesto``.

    ``total_factura`` is required here; the service rejects values that do
    not parse to an amount greater than zero.
    """

    total_factura: MontoTexto = Field(..., description="Total de la factura en colones (> 0).")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "subpartida_contratacion_id": 1,
                "descripcion": "Boleto aéreo San José - Madrid, reunión OEI",
                "fecha_solicitud_boleto": "2025-03-03",
                "hora_solicitud_boleto": "09:30",
                "oficio_solicitud": "DRI-0123-2025",
                "cumple_solicitud": "Sí",
                "numero_factura": "00100001010000004567",
                "total_factura": "450000",
            }
        }
    )


class SolicitudUpdate(_SolicitudCampos):
    """Payload for ``PUT /api/solicitud_presupuesto/{id}``.

    Full replacement: fields left out are stored as null (or their default).
    """


class SolicitudResponse(BaseModel):
    """Stored order, phase fields included."""

    id: int
    subpartida_contratacion_id: int
    descripcion: str

    fecha_solicitud_boleto: datetime.date | None = None
    hora_solicitud_boleto: str | None = None
    oficio_solicitud: str | None = None
    fecha_respuesta_solicitud: datetime.date | None = None
    hora_respuesta_solicitud: str | None = None
    cumple_solicitud: str

    fecha_solicitud_emision: datetime.date | None = None
    hora_solicitud_emision: str | None = None
    oficio_emision: str | None = None
    fecha_respuesta_emision: datetime.date | None = None
    hora_respuesta_emision: str | None = None
    cumple_emision: str

    fecha_recibido_conforme: datetime.date | None = None
    hora_recibido_conforme: str | None = None
    oficio_recepcion: str | None = None

    numero_factura: str | None = None
    total_factura: str | None = None

    fecha_entrega_direccion: datetime.date | None = None

    estado: str | None = None
    activo: bool
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None

    model_config = ConfigDict(from_attributes=True)
