"""
Lenient parsing and display helpers shared by services and exporters.

Amounts and dates reach the API as whatever the user typed in a form.
These helpers never raise: unparseable amounts become ``Decimal("0")``
and unparseable dates become ``None``.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from cooperacion.utils.constants import SIMBOLO_MONEDA

_NO_NUMERICO = re.compile(r"[^0-9.\-]")
_SIMBOLOS_MONTO = re.compile(r"[$,\s]")
_NUMERO_INICIAL = re.compile(r"[-+]?(\d+(\.\d*)?|\.\d+)")

ZERO = Decimal("0")


def parse_monto(value: object) -> Decimal:
    """Parse an invoice total.

    Every character other than digits, ``.`` and ``-`` is stripped before
    parsing, so ``"₡ 1,234.50"`` gives ``Decimal("1234.50")``.

    >>> parse_monto("abc")
    Decimal('0')
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    limpio = _NO_NUMERICO.sub("", str(value))
    if not limpio:
        return ZERO
    try:
        resultado = Decimal(limpio)
    except InvalidOperation:
        return ZERO
    return resultado if resultado.is_finite() else ZERO


def parse_monto_proyecto(value: object) -> Decimal:
    """Parse a project amount string (``"$1,500,000"``).

    ``$``, ``,`` and whitespace are removed and the leading number is read;
    trailing text is ignored (``"25000 aprox"`` gives 25000).  No leading
    number means zero.
    """
    if value is None:
        return ZERO
    coincidencia = _NUMERO_INICIAL.match(_SIMBOLOS_MONTO.sub("", str(value)))
    if coincidencia is None:
        return ZERO
    return Decimal(coincidencia.group(0))


def formato_colones(value: Decimal | int | float | None) -> str:
    """Format an amount for display: ``₡ 1,234.50``."""
    monto = Decimal(str(value)) if value is not None else ZERO
    signo = "-" if monto < 0 else ""
    return f"{signo}{SIMBOLO_MONEDA} {abs(monto):,.2f}"


def parse_fecha(value: object) -> date | None:
    """Read a form date: ISO (``2025-03-14``) or ``dd/mm/yyyy``.

    Empty strings are treated as "no date".
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    texto = str(value).strip()
    if not texto:
        return None
    for fmt in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(texto, fmt).date()
        except ValueError:
            continue
    # ISO datetimes sent by the browser ("2025-03-14T00:00:00.000Z")
    try:
        return datetime.fromisoformat(texto.replace("Z", "+00:00")).date()
    except ValueError:
        return None
