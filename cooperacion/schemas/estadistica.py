"""
Pydantic v2 schemas for project statistics.

Every endpoint returns plain data series; charts are drawn client-side.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class GrupoEstadistica(BaseModel):
    """One bucket of projects sharing the same value of the grouped field.

    Attributes:
        etiqueta: Field value, or ``"Sin datos"`` / ``"Sin área"``.
        cantidad: Projects in the bucket.
        porcentaje: Share of ``cantidad`` in the sum of all bucket counts,
                    0-100 with one decimal.  With ``dependencias_solicitantes``
                    a project may sit in several buckets.
        proyectos: Names of the projects in the bucket.
    """

    etiqueta: str
    cantidad: int
    porcentaje: float
    proyectos: list[str] = Field(default_factory=list)


class EstadisticaResponse(BaseModel):
    """Response of ``GET /api/proyectos/estadisticas``."""

    campo: str = Field(..., description="Campo por el que se agrupó.")
    total: int = Field(..., description="Cantidad de proyectos considerados.")
    grupos: list[GrupoEstadistica] = Field(default_factory=list)


class MontosAnio(BaseModel):
    """Amounts of the projects approved in one year."""

    ano: str
    contrapartida_institucion: float
    contrapartida_cooperante: float
    costo_total: float


class SectorGrupo(BaseModel):
    """Projects of one catalogue sector.

    Attributes:
        sector: Normalised sector label.
        cantidad: Number of projects.
        actores: Cooperating actors of those projects (one entry per project).
    """

    sector: str
    cantidad: int
    actores: list[str] = Field(default_factory=list)
