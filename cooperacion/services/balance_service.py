"""
Budget balance calculator.

Pure functions over in-memory collections: no database session, no I/O and
no mutation of the inputs.  The ledger view, the line detail endpoint and
the exporters all go through :func:`calcular_balance` so that the consumed
amount and the balance are derived the same way everywhere.

Design notes
------------
- Line selection is "first match" over the collection in the order it is
  given.  Callers pass lines sorted by ascending ``id``.
- A year filter that matches no line for the code falls back to the first
  line with that code.  When the fallback line belongs to another year the
  order set is empty, so the ledger shows the line with nothing consumed.
- Amounts are ``Decimal``.  A ``total_factura`` that does not parse counts
  as zero; the stored text is never rewritten.
- A negative balance is reported (``sobregirado``), never clamped.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from cooperacion.utils.formato import ZERO, formato_colones, parse_monto

# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResultadoBalance:
    """Selected budget line plus its derived amounts and orders.

    Attributes:
        linea: The selected line object, untouched.
        presupuesto_asignado: Ceiling of the line.
        monto_consumido: Sum of the parsed invoice totals of ``solicitudes``.
        saldo: ``presupuesto_asignado - monto_consumido``.
        solicitudes: Orders of the line, in input order.
    """

    linea: Any
    presupuesto_asignado: Decimal
    monto_consumido: Decimal
    saldo: Decimal
    solicitudes: list[Any] = field(default_factory=list)

    @property
    def sobregirado(self) -> bool:
        return self.saldo < 0

    def montos(self) -> dict[str, Any]:
        """Derived fields merged into the line when it is serialised."""
        return {
            "monto_consumido": float(self.monto_consumido),
            "saldo": float(self.saldo),
            "sobregirado": self.sobregirado,
            "presupuesto_formateado": formato_colones(self.presupuesto_asignado),
            "consumido_formateado": formato_colones(self.monto_consumido),
            "saldo_formateado": formato_colones(self.saldo),
        }


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


def seleccionar_linea(
    lineas: Sequence[Any],
    subpartida: str,
    ano: str | None = None,
) -> Any | None:
    """Return the first line for *subpartida* (and *ano* when given).

    Falls back to the first line with the code alone when no line matches
    both code and year.

    Args:
        lineas: Candidate lines, already in the order that decides "first".
        subpartida: Budget code to look for.
        ano: Optional contract year filter.

    Returns:
        The selected line, or ``None`` when no line has that code.
    """
    if ano:
        for linea in lineas:
            if linea.subpartida == subpartida and linea.ano_contrato == ano:
                return linea
    for linea in lineas:
        if linea.subpartida == subpartida:
            return linea
    return None


def filtrar_solicitudes(
    linea: Any,
    solicitudes: Iterable[Any],
    ano: str | None = None,
) -> list[Any]:
    """Orders drawn against *linea*.

    With an active year filter that differs from the line's contract year
    the result is empty.
    """
    if ano and linea.ano_contrato != ano:
        return []
    return [s for s in solicitudes if s.subpartida_contratacion_id == linea.id]


def sumar_consumido(solicitudes: Iterable[Any]) -> Decimal:
    return sum((parse_monto(s.total_factura) for s in solicitudes), ZERO)


def balance_de_linea(linea: Any, solicitudes: Iterable[Any]) -> ResultadoBalance:
    """Compute consumed amount and balance for a line and its own orders.

    *solicitudes* must already belong to *linea*; no filtering happens here.
    """
    propias = list(solicitudes)
    asignado = parse_monto(linea.presupuesto_asignado)
    consumido = sumar_consumido(propias)
    return ResultadoBalance(
        linea=linea,
        presupuesto_asignado=asignado,
        monto_consumido=consumido,
        saldo=asignado - consumido,
        solicitudes=propias,
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def calcular_balance(
    lineas: Sequence[Any],
    solicitudes: Iterable[Any],
    subpartida: str,
    ano: str | None = None,
) -> ResultadoBalance | None:
    """Select a budget line and derive its consumed amount and balance.

    Args:
        lineas: Every budget line, in ascending ``id`` order.
        solicitudes: Every order, regardless of line.
        subpartida: Selected budget code.
        ano: Optional contract year filter.

    Returns:
        A :class:`ResultadoBalance`, or ``None`` if no line has the code.

    Example::

        >>> resultado = calcular_balance(lineas, solicitudes, "10503", "2025")
        >>> resultado.saldo
        Decimal('550000.00')
    """
    linea = seleccionar_linea(lineas, subpartida, ano)
    if linea is None:
        return None
    return balance_de_linea(linea, filtrar_solicitudes(linea, solicitudes, ano))
