"""
Shared Pydantic v2 building blocks reused across modules.

Forms on the client send empty strings for untouched inputs and mix ISO and
``dd/mm/yyyy`` dates.  The annotated types below normalise those values
before field validation so each domain schema can declare plain types.
"""

from __future__ import annotations

import datetime
from typing import Annotated, Any

from pydantic import BeforeValidator, StringConstraints

from cooperacion.utils.formato import parse_fecha


def _fecha_formulario(value: Any) -> Any:
    """Map ``""`` to ``None`` and ``dd/mm/yyyy`` to a date.

    Anything else is passed through so Pydantic reports malformed input.
    """
    if isinstance(value, str):
        if not value.strip():
            return None
        return parse_fecha(value) or value
    return value


def _vacio_a_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _entero_a_texto(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _monto_a_texto(value: Any) -> Any:
    """Amounts are stored as typed; numbers sent as JSON become text."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


FechaOpcional = Annotated[datetime.date | None, BeforeValidator(_fecha_formulario)]
Fecha = Annotated[datetime.date, BeforeValidator(_fecha_formulario)]
TextoOpcional = Annotated[str | None, BeforeValidator(_vacio_a_none)]
TextoRequerido = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
# Amount columns are String(50)
MontoTexto = Annotated[
    Annotated[str, StringConstraints(max_length=50)] | None, BeforeValidator(_monto_a_texto)
]
Ano = Annotated[
    str, StringConstraints(pattern=r"^\d{4}$"), BeforeValidator(_entero_a_texto)
]
AnoOpcional = Annotated[Ano | None, BeforeValidator(_vacio_a_none)]


def texto_opcional(max_length: int) -> Any:
    """``TextoOpcional`` bounded by the width of its ``String(N)`` column.

    .. code-block:: python

        oficio_solicitud: texto_opcional(100) = None
    """
    return Annotated[
        Annotated[str, StringConstraints(max_length=max_length)] | None,
        BeforeValidator(_vacio_a_none),
    ]
