"""
Pydantic v2 schemas for official travel abroad (``viaje_exterior``).

The four activity/travel dates are required.  ``estado`` starts as
``"Pendiente"`` and is updated by the office as the trip is processed.
"""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict, Field

from cooperacion.schemas.common import AnoOpcional, Fecha, TextoOpcional, TextoRequerido, texto_opcional
from cooperacion.schemas.observacion import ObservacionResponse


class ViajeCreate(BaseModel):
    """Payload for ``POST /api/viajes_al_exterior`` and full-replacement ``PUT``."""

    ano_viaje: AnoOpcional = None
    funcionario_a_cargo: texto_opcional(300) = None
    nombre_funcionario: texto_opcional(300) = None
    cargo_funcionario_dependencia: texto_opcional(300) = None
    nombre_actividad: TextoRequerido = Field(..., max_length=500, description="Nombre de la actividad.")
    organizador_evento: texto_opcional(300) = None
    lugar_destino: texto_opcional(200) = None
    sector: texto_opcional(100) = None
    tema: texto_opcional(300) = None
    numero_acuerdo: texto_opcional(100) = None
    autoridad_delegado: texto_opcional(50) = None
    modalidad: texto_opcional(50) = None
    fuente_financiamiento: texto_opcional(300) = None
    fecha_actividad_inicio: Fecha
    fecha_actividad_final: Fecha
    fecha_viaje_inicio: Fecha
    fecha_viaje_final: Fecha
    vacaciones: texto_opcional(20) = None
    detalle_vacaciones: TextoOpcional = None
    observaciones: TextoOpcional = None
    estado: texto_opcional(50) = None
    documento: texto_opcional(500) = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ano_viaje": "2025",
                "funcionario_a_cargo": "María Rojas",
                "nombre_funcionario": "Luis Vargas",
                "cargo_funcionario_dependencia": "Asesor, Despacho Ministerial",
                "nombre_actividad": "Reunión de Ministros de Educación OEI",
                "organizador_evento": "OEI",
                "lugar_destino": "Madrid, España",
                "sector": "Multilateral Regional",
                "numero_acuerdo": "AC-045-2025",
                "autoridad_delegado": "Delegado",
                "modalidad": "Presencial",
                "fuente_financiamiento": "Organizador",
                "fecha_actividad_inicio": "2025-04-07",
                "fecha_actividad_final": "2025-04-09",
                "fecha_viaje_inicio": "2025-04-05",
                "fecha_viaje_final": "2025-04-11",
                "vacaciones": "No",
            }
        }
    )


class ViajeUpdate(ViajeCreate):
    """Full replacement payload; an omitted ``estado`` keeps the stored one."""


class GacetaUpdate(BaseModel):
    gaceta_url: TextoRequerido = Field(
        ..., max_length=500, description="Enlace a la publicación en La Gaceta."
    )


class ViajeResponse(BaseModel):
    id: int
    ano_viaje: str | None = None
    funcionario_a_cargo: str | None = None
    nombre_funcionario: str | None = None
    cargo_funcionario_dependencia: str | None = None
    nombre_actividad: str
    organizador_evento: str | None = None
    lugar_destino: str | None = None
    sector: str | None = None
    tema: str | None = None
    numero_acuerdo: str | None = None
    autoridad_delegado: str | None = None
    modalidad: str | None = None
    fuente_financiamiento: str | None = None
    fecha_actividad_inicio: datetime.date
    fecha_actividad_final: datetime.date
    fecha_viaje_inicio: datetime.date
    fecha_viaje_final: datetime.date
    vacaciones: str | None = None
    detalle_vacaciones: str | None = None
    observaciones: str | None = None
    estado: str
    documento: str | None = None
    gaceta_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ViajeDetalleResponse(ViajeResponse):
    """Trip with its follow-up log, ordered by fecha and hora."""

    observaciones_seguimiento: list[ObservacionResponse] = Field(default_factory=list)
