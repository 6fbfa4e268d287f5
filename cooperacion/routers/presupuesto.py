"""
Presupuesto router — budget ledger view.

Mounts under ``/api/presupuesto`` (prefix set in ``main.py``).

Endpoints
---------
GET /ficha     — Ledger of one subpartida: the selected line with its derived
                 balance plus the orders that feed it.
GET /opciones  — Distinct subpartida codes and contract years for the
                 selectors of the ledger screen.

The balance is always computed over every order of the selected line; the
``q`` search term only narrows the list returned next to it.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cooperacion.database import get_db
from cooperacion.models.usuario import Usuario
from cooperacion.schemas.presupuesto import (
    FichaPresupuestoResponse,
    OpcionesPresupuestoResponse,
)
from cooperacion.services import presupuesto_service
from cooperacion.services.auth_service import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Presupuesto"])


# ---------------------------------------------------------------------------
# GET /ficha
# ---------------------------------------------------------------------------


@router.get(
    "/ficha",
    response_model=FichaPresupuestoResponse,
    summary="Ficha de presupuesto de una subpartida",
    description=(
        "Selecciona la línea presupuestaria por código de subpartida (y año de "
        "contrato, si se indica) y retorna presupuesto asignado, monto consumido, "
        "saldo y las solicitudes asociadas. Si no existe la combinación exacta "
        "código+año se usa la primera línea con ese código."
    ),
    responses={
        200: {"description": "Ficha calculada."},
        401: {"description": "Token JWT ausente o inválido."},
        404: {"description": "No existe una línea con ese código de subpartida."},
    },
)
def get_ficha(
    subpartida: Annotated[
        str,
        Query(description="Código de subpartida, ej. '10503'.", min_length=1, max_length=20),
    ],
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    ano: Annotated[
        str | None,
        Query(description="Año de contrato, ej. '2025'.", pattern=r"^\d{4}$"),
    ] = None,
    q: Annotated[
        str | None,
        Query(description="Filtra la lista de solicitudes (no afecta el saldo).", max_length=200),
    ] = None,
) -> FichaPresupuestoResponse:
    """Return the ledger view of one subpartida.

    Args:
        subpartida: Subpartida code to select.
        db: Database session.
        _current_user: Authenticated user guard.
        ano: Optional contract year; also gates which orders count.
        q: Optional free-text filter for the displayed orders.

    Returns:
        ``FichaPresupuestoResponse`` with the derived amounts and the orders.

    Raises:
        HTTPException 404: If no line has the given code.
    """
    logger.info("GET /presupuesto/ficha subpartida=%s ano=%s q=%s", subpartida, ano, q)
    return presupuesto_service.get_ficha(db, subpartida, ano=ano, q=q)


# ---------------------------------------------------------------------------
# GET /opciones
# ---------------------------------------------------------------------------


@router.get(
    "/opciones",
    response_model=OpcionesPresupuestoResponse,
    summary="Opciones de subpartida y año",
    responses={
        200: {"description": "Códigos y años disponibles."},
        401: {"description": "Token JWT ausente o inválido."},
    },
)
def get_opciones(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> OpcionesPresupuestoResponse:
    logger.debug("GET /presupuesto/opciones")
    return presupuesto_service.get_opciones(db)
