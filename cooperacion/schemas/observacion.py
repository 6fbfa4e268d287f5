"""Pydantic v2 schemas for trip follow-up observations."""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict, Field

from cooperacion.schemas.common import Fecha, TextoRequerido


class ObservacionCreate(BaseModel):
    """Payload for ``POST /api/observaciones_viajes``.

    ``fecha`` accepts ``dd/mm/yyyy`` (as sent by the follow-up form) or ISO.
    """

    viaje_id: int = Field(..., ge=1, description="ID del viaje.")
    observacion: TextoRequerido = Field(..., description="Texto de la observación.")
    quien_envia: TextoRequerido = Field(..., max_length=200)
    quien_recibe: TextoRequerido = Field(..., max_length=200)
    fecha: Fecha
    hora: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$", description="Hora HH:MM.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "viaje_id": 3,
                "observacion": "Se remite oficio de solicitud de permiso con goce de salario.",
                "quien_envia": "DRI",
                "quien_recibe": "Despacho Ministerial",
                "fecha": "14/03/2025",
                "hora": "10:45",
            }
        }
    )


class ObservacionResponse(BaseModel):
    id: int
    viaje_id: int
    observacion: str
    quien_envia: str
    quien_recibe: str
    fecha: datetime.date
    hora: str
    created_at: datetime.datetime | None = None

    model_config = ConfigDict(from_attributes=True)
