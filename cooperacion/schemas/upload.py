"""Pydantic v2 schema for the file upload endpoint."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UploadResponse(BaseModel):
    """Public URL of a stored file.

    Attributes:
        url: Value to store in a record's document field, e.g.
             ``"/files/2025/03/admin/5f0c..._acuerdo.pdf"``.
    """

    url: str = Field(..., description="URL pública del archivo almacenado.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"url": "/files/2025/03/admin/1b9d6bcd_acuerdo_oei.pdf"}
        }
    )
