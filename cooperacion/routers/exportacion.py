"""
Exportación router.

Mounts under ``/api/exportar`` (prefix set in ``main.py``).

All endpoints require a valid JWT token and stream their response with
``StreamingResponse``.  ``Content-Disposition: attachment`` makes browsers
download the file instead of displaying it.

Endpoints
---------
GET /presupuesto/excel — Budget ledger of one subpartida as .xlsx
GET /presupuesto/pdf   — Budget ledger of one subpartida as .pdf
GET /proyectos/excel   — Project list as .xlsx
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from cooperacion.database import get_db
from cooperacion.models.usuario import Usuario
from cooperacion.services import exportacion_service
from cooperacion.services.auth_service import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Exportación"])

_XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_Subpartida = Annotated[
    str,
    Query(description="Código de subpartida, ej. '10503'.", min_length=1, max_length=20),
]
_Ano = Annotated[
    str | None,
    Query(description="Año, ej. '2025'.", pattern=r"^\d{4}$"),
]


def _make_filename(*parts: str | None, ext: str) -> str:
    """Build a safe, timestamped filename for the exported file.

    Returns:
        Filename string, e.g. ``"cooperacion_presupuesto_10503_2025_2025-03-04.xlsx"``.
    """
    today = date.today().isoformat()
    safe = "_".join(p.replace(" ", "_").lower() for p in parts if p)
    return f"cooperacion_{safe}_{today}.{ext}"


def _stream(
    generar: Callable[[], bytes],
    filename: str,
    media_type: str,
    label: str,
) -> StreamingResponse:
    """Run an export builder and wrap its bytes in a download response.

    Raises:
        HTTPException: Re-raised as-is from the builder (e.g. 404).
        HTTPException 500: If file generation fails unexpectedly.
    """
    try:
        file_bytes = generar()
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("%s failed: %s", label, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error generando el archivo: {exc}",
        ) from exc

    headers = {
        "Content-Disposition": f'attachment; filename="{filename}"',
        "Content-Length": str(len(file_bytes)),
    }
    return StreamingResponse(io.BytesIO(file_bytes), media_type=media_type, headers=headers)


# ---------------------------------------------------------------------------
# GET /presupuesto/excel
# ---------------------------------------------------------------------------


@router.get(
    "/presupuesto/excel",
    summary="Exportar ficha de presupuesto a Excel (.xlsx)",
    description=(
        "Genera la ficha de una subpartida: datos de la línea, KPIs (asignado, "
        "consumido, saldo) y la tabla de solicitudes. Requiere autenticación."
    ),
    response_class=StreamingResponse,
    responses={
        200: {"description": "Archivo Excel generado.", "content": {_XLSX_MEDIA_TYPE: {}}},
        401: {"description": "Token JWT ausente o inválido."},
        404: {"description": "Subpartida no encontrada."},
        500: {"description": "Error generando el archivo."},
    },
)
def export_presupuesto_excel(
    subpartida: _Subpartida,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    ano: _Ano = None,
) -> StreamingResponse:
    """Generate and stream the budget ledger workbook.

    Args:
        subpartida: Subpartida code.
        db: Database session.
        _current_user: Authenticated user guard.
        ano: Optional contract year.

    Returns:
        A ``StreamingResponse`` with the ``.xlsx`` file attached.
    """
    logger.info("GET /exportar/presupuesto/excel subpartida=%s ano=%s", subpartida, ano)
    return _stream(
        lambda: exportacion_service.export_presupuesto_excel(db, subpartida, ano),
        _make_filename("presupuesto", subpartida, ano, ext="xlsx"),
        _XLSX_MEDIA_TYPE,
        "export_presupuesto_excel",
    )


# ---------------------------------------------------------------------------
# GET /presupuesto/pdf
# ---------------------------------------------------------------------------


@router.get(
    "/presupuesto/pdf",
    summary="Exportar ficha de presupuesto a PDF",
    description=(
        "Misma información que la exportación Excel, en A4 horizontal con "
        "numeración de páginas. Requiere autenticación."
    ),
    response_class=StreamingResponse,
    responses={
        200: {"description": "Archivo PDF generado.", "content": {"application/pdf": {}}},
        401: {"description": "Token JWT ausente o inválido."},
        404: {"description": "Subpartida no encontrada."},
        500: {"description": "Error generando el archivo."},
    },
)
def export_presupuesto_pdf(
    subpartida: _Subpartida,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    ano: _Ano = None,
) -> StreamingResponse:
    logger.info("GET /exportar/presupuesto/pdf subpartida=%s ano=%s", subpartida, ano)
    return _stream(
        lambda: exportacion_service.export_presupuesto_pdf(db, subpartida, ano),
        _make_filename("presupuesto", subpartida, ano, ext="pdf"),
        "application/pdf",
        "export_presupuesto_pdf",
    )


# ---------------------------------------------------------------------------
# GET /proyectos/excel
# ---------------------------------------------------------------------------


@router.get(
    "/proyectos/excel",
    summary="Exportar proyectos a Excel (.xlsx)",
    response_class=StreamingResponse,
    responses={
        200: {"description": "Archivo Excel generado.", "content": {_XLSX_MEDIA_TYPE: {}}},
        401: {"description": "Token JWT ausente o inválido."},
        500: {"description": "Error generando el archivo."},
    },
)
def export_proyectos_excel(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    ano: _Ano = None,
) -> StreamingResponse:
    logger.info("GET /exportar/proyectos/excel ano=%s", ano)
    return _stream(
        lambda: exportacion_service.export_proyectos_excel(db, ano),
        _make_filename("proyectos", ano, ext="xlsx"),
        _XLSX_MEDIA_TYPE,
        "export_proyectos_excel",
    )
