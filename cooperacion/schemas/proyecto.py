"""
Pydantic v2 schemas for the cooperation projects module.

Amount fields (``costo_total`` and the two contrapartidas) are kept as the
text the user typed, e.g. ``"$1,500,000"``; JSON numbers are accepted and
stored as their string form.  ``dependencias_solicitantes`` is a
comma-separated list of requesting offices.
"""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict, Field

from cooperacion.schemas.common import (
    AnoOpcional,
    Fecha,
    MontoTexto,
    TextoOpcional,
    TextoRequerido,
    texto_opcional,
)


# ---------------------------------------------------------------------------
# Input schemas
# ---------------------------------------------------------------------------


class ProyectoCreate(BaseModel):
    """Payload for ``POST /api/proyectos`` and ``PUT /api/proyectos/{num_proyecto}``.

    Only ``nombre_proyecto`` and ``fecha_aprobacion`` are required.
    ``documentos`` is normally set through ``/api/upload``.
    """

    nombre_proyecto: TextoRequerido = Field(..., max_length=500, description="Nombre del proyecto.")
    fecha_aprobacion: Fecha = Field(..., description="Fecha de aprobación (ISO o dd/mm/yyyy).")
    actor_cooperacion: texto_opcional(200) = None
    nombre_actor: texto_opcional(300) = None
    etapa_proyecto: texto_opcional(100) = None
    tipo_proyecto: texto_opcional(100) = None
    tipo_cooperacion: texto_opcional(100) = None
    modalidad: texto_opcional(100) = None
    sector: texto_opcional(100) = None
    region: texto_opcional(100) = None
    autoridad_a_cargo: texto_opcional(200) = None
    ano: AnoOpcional = None
    costo_total: MontoTexto = None
    contrapartida_institucion: MontoTexto = None
    contrapartida_cooperante: MontoTexto = None
    dependencias_solicitantes: texto_opcional(1000) = None
    institucion_solicitante: texto_opcional(300) = None
    objetivos: TextoOpcional = None
    resultados: TextoOpcional = None
    productos: TextoOpcional = None
    tematicas: texto_opcional(500) = None
    observaciones: TextoOpcional = None
    documentos: texto_opcional(500) = None
    area_id: int | None = Field(default=None, ge=1, description="ID del área.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "nombre_proyecto": "Fortalecimiento de la educación técnica dual",
                "fecha_aprobacion": "2024-05-20",
                "actor_cooperacion": "Cooperante",
                "nombre_actor": "GIZ",
                "etapa_proyecto": "Ejecución",
                "tipo_cooperacion": "Técnica",
                "modalidad": "Bilateral",
                "sector": "Bilateral",
                "region": "Europa",
                "ano": "2024",
                "costo_total": "$1,500,000",
                "contrapartida_institucion": "$250,000",
                "contrapartida_cooperante": "$1,250,000",
                "dependencias_solicitantes": "DETCE, Dirección de Desarrollo Curricular",
                "area_id": 1,
            }
        }
    )


class ProyectoUpdate(ProyectoCreate):
    """Full replacement payload for ``PUT /api/proyectos/{num_proyecto}``."""


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ProyectoResponse(BaseModel):
    """Stored project.  ``nombre_area`` is resolved from the related area."""

    num_proyecto: int
    nombre_proyecto: str
    fecha_aprobacion: datetime.date
    actor_cooperacion: str | None = None
    nombre_actor: str | None = None
    etapa_proyecto: str | None = None
    tipo_proyecto: str | None = None
    tipo_cooperacion: str | None = None
    modalidad: str | None = None
    sector: str | None = None
    region: str | None = None
    autoridad_a_cargo: str | None = None
    ano: str | None = None
    costo_total: str | None = None
    contrapartida_institucion: str | None = None
    contrapartida_cooperante: str | None = None
    dependencias_solicitantes: str | None = None
    institucion_solicitante: str | None = None
    objetivos: str | None = None
    resultados: str | None = None
    productos: str | None = None
    tematicas: str | None = None
    observaciones: str | None = None
    documentos: str | None = None
    area_id: int | None = None
    nombre_area: str | None = None

    model_config = ConfigDict(from_attributes=True)
