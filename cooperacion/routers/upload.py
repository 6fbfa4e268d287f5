"""
Upload router — PDF documents attached to projects and trips.

Mounts under ``/api/upload`` (prefix set in ``main.py``).

Endpoints
---------
POST / — Store a PDF and return its public URL.  With ``entidad`` and
         ``id`` the URL is also written to that record's document field.

Stored files are served read-only by the ``/files`` static mount.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from cooperacion.config import get_settings
from cooperacion.database import get_db
from cooperacion.models.usuario import Usuario
from cooperacion.schemas.upload import UploadResponse
from cooperacion.services import file_storage, proyecto_service, viaje_service
from cooperacion.services.auth_service import require_role
from cooperacion.utils.constants import ENTIDADES_DOCUMENTO, ROLES_ESCRITURA

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Archivos"])


def _rechazar(detail: str, filename: str | None, username: str) -> HTTPException:
    logger.warning("Upload rejected: user='%s' file='%s': %s", username, filename, detail)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


@router.post(
    "/",
    response_model=UploadResponse,
    status_code=status.HTTP_200_OK,
    summary="Subir documento PDF",
    description=(
        "Acepta únicamente archivos PDF no vacíos de hasta ``MAX_UPLOAD_MB`` MB. "
        "Si se indican ``entidad`` ('proyecto' o 'viaje') e ``id``, el enlace "
        "queda registrado en ese registro. Requiere rol ADMIN o EDITOR."
    ),
    responses={
        200: {"description": "Archivo almacenado; retorna su URL pública."},
        400: {"description": "Archivo vacío, demasiado grande, no PDF o entidad inválida."},
        401: {"description": "Token JWT ausente o inválido."},
        403: {"description": "Rol sin permisos de escritura."},
        404: {"description": "El proyecto o viaje indicado no existe."},
    },
)
async def upload_documento(
    file: Annotated[UploadFile, File(description="Documento PDF")],
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Usuario, Depends(require_role(*ROLES_ESCRITURA))],
    entidad: Annotated[str | None, Form(description="'proyecto' o 'viaje'.")] = None,
    id: Annotated[int | None, Form(description="ID del registro a vincular.", ge=1)] = None,
) -> UploadResponse:
    """Validate, store and optionally link an uploaded PDF.

    Args:
        file: The PDF submitted as multipart/form-data.
        db: Database session.
        current_user: ADMIN or EDITOR user; its username partitions storage.
        entidad: Optional kind of record to link.
        id: Primary key of the record to link.

    Returns:
        ``UploadResponse`` with the public URL of the stored file.

    Raises:
        HTTPException 400: Empty, oversized or non-PDF file, or unknown *entidad*.
        HTTPException 404: If the record to link does not exist.
    """
    settings = get_settings()

    if entidad is not None and entidad not in ENTIDADES_DOCUMENTO:
        raise _rechazar(
            f"Entidad '{entidad}' no soportada. Valores válidos: {ENTIDADES_DOCUMENTO}.",
            file.filename, current_user.username,
        )

    raw_bytes = await file.read()
    if not raw_bytes:
        raise _rechazar("El archivo está vacío.", file.filename, current_user.username)

    max_bytes = settings.MAX_UPLOAD_MB * 1024 * 1024
    if len(raw_bytes) > max_bytes:
        raise _rechazar(
            f"El archivo supera el tamaño máximo de {settings.MAX_UPLOAD_MB} MB.",
            file.filename, current_user.username,
        )

    if not file_storage.is_pdf(raw_bytes, file.filename, file.content_type):
        raise _rechazar("Solo se permiten archivos PDF.", file.filename, current_user.username)

    # the record must exist before anything is written to disk
    if entidad == "proyecto" and id is not None:
        proyecto_service.get_proyecto(db, id)
    elif entidad == "viaje" and id is not None:
        viaje_service.get_viaje_or_404(db, id)

    full_path = file_storage.save_upload(
        raw_bytes, file.filename or "documento.pdf", settings.UPLOADS_DIR, current_user.username
    )
    url = file_storage.public_url(full_path, settings.UPLOADS_DIR, settings.FILES_BASE_URL)

    if entidad == "proyecto" and id is not None:
        proyecto_service.set_documento(db, id, url)
    elif entidad == "viaje" and id is not None:
        viaje_service.set_documento(db, id, url)

    logger.info(
        "POST /upload user='%s' file='%s' bytes=%d entidad=%s id=%s url=%s",
        current_user.username, file.filename, len(raw_bytes), entidad, id, url,
    )
    return UploadResponse(url=url)
