"""Pydantic v2 schemas for organisational areas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cooperacion.schemas.common import TextoRequerido


class AreaCreate(BaseModel):
    nombre_area: TextoRequerido = Field(..., max_length=200, description="Nombre del área.")

    model_config = ConfigDict(
        json_schema_extra={"example": {"nombre_area": "Cooperación Multilateral"}}
    )


class AreaResponse(BaseModel):
    id: int
    nombre_area: str

    model_config = ConfigDict(from_attributes=True)
