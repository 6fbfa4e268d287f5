"""
Excel export helper wrapping xlsxwriter.

``ExcelExporter`` builds a single-sheet workbook in memory (institutional
header, KPI strip, data table) and returns its bytes for streaming.

Usage example::

    exporter = ExcelExporter(title="Ficha de presupuesto 10503", filters={"Año": "2025"})
    exporter.add_header()
    exporter.add_kpi_row({"Asignado": 1_000_000, "Consumido": 450_000, "Saldo": 550_000})
    exporter.add_data_table(headers, rows, numeric_cols={4})
    file_bytes = exporter.finalize()

Design notes
------------
- Monetary cells use ``#,##0.00`` and negative amounts render in red, so an
  overdrawn balance stands out without extra logic in callers.
- Dates are written as ``dd/mm/yyyy`` text, matching the forms.
- Column widths follow the longest value in each column, capped at 60.
"""

from __future__ import annotations

import datetime
import io
from decimal import Decimal
from typing import Any, Sequence

import xlsxwriter

_COLOR_NAVY = "#182951"
_COLOR_GOLD = "#CFAC65"
_COLOR_WHITE = "#FFFFFF"
_COLOR_ROW_ALT = "#F3F4F6"
_COLOR_BORDER = "#E5E7EB"

_MONEY = "#,##0.00;[Red]-#,##0.00"

_MAX_COL_WIDTH = 60
_MIN_COL_WIDTH = 8

_INSTITUCION = "Ministerio de Educación Pública · Dirección de Relaciones Internacionales"


def _cell(value: Any) -> Any:
    """Normalise a Python value into something xlsxwriter writes nicely."""
    if isinstance(value, datetime.datetime):
        return value.strftime("%d/%m/%Y %H:%M")
    if isinstance(value, datetime.date):
        return value.strftime("%d/%m/%Y")
    if isinstance(value, Decimal):
        return float(value)
    if value is None:
        return ""
    return value


class ExcelExporter:
    """Stateful Excel workbook builder.

    Args:
        title: Report title, shown in the merged header row.
        filters: Applied filters, rendered as key/value rows under the title.
        sheet_name: Worksheet tab name.
    """

    def __init__(
        self,
        title: str,
        filters: dict[str, str] | None = None,
        sheet_name: str = "Datos",
    ) -> None:
        self._title = title
        self._filters = filters or {}

        self._buffer = io.BytesIO()
        self._workbook = xlsxwriter.Workbook(self._buffer, {"in_memory": True})
        self._worksheet = self._workbook.add_worksheet(sheet_name[:31])

        self._current_row = 0
        self._num_cols = 6
        self._formats = self._build_formats()

    # -----------------------------------------------------------------------
    # Format factory
    # -----------------------------------------------------------------------

    def _build_formats(self) -> dict[str, Any]:
        wb = self._workbook
        base_cell = {
            "font_size": 9,
            "valign": "vcenter",
            "border": 1,
            "border_color": _COLOR_BORDER,
        }
        return {
            "header_main": wb.add_format({
                "bold": True, "font_size": 15, "font_color": _COLOR_WHITE,
                "bg_color": _COLOR_NAVY, "align": "center", "valign": "vcenter",
            }),
            "header_sub": wb.add_format({
                "font_size": 9, "font_color": _COLOR_NAVY, "bg_color": _COLOR_GOLD,
                "align": "center", "valign": "vcenter",
            }),
            "filter_key": wb.add_format({
                "bold": True, "font_size": 9, "bg_color": "#E5E7EB", "align": "right",
            }),
            "filter_value": wb.add_format({"font_size": 9, "align": "left"}),
            "kpi_label": wb.add_format({
                "bold": True, "font_size": 10, "font_color": _COLOR_NAVY,
                "bg_color": "#F5EFE0", "align": "center", "border": 1,
                "border_color": _COLOR_GOLD,
            }),
            "kpi_value": wb.add_format({
                "bold": True, "font_size": 12, "font_color": _COLOR_NAVY,
                "bg_color": "#F5EFE0", "align": "center", "num_format": _MONEY,
                "border": 1, "border_color": _COLOR_GOLD,
            }),
            "col_header": wb.add_format({
                "bold": True, "font_size": 10, "font_color": _COLOR_WHITE,
                "bg_color": _COLOR_NAVY, "align": "center", "valign": "vcenter",
                "border": 1, "text_wrap": True,
            }),
            "data_plain": wb.add_format({**base_cell, "bg_color": _COLOR_WHITE}),
            "data_alt": wb.add_format({**base_cell, "bg_color": _COLOR_ROW_ALT}),
            "data_number": wb.add_format({
                **base_cell, "bg_color": _COLOR_WHITE, "align": "right", "num_format": _MONEY,
            }),
            "data_number_alt": wb.add_format({
                **base_cell, "bg_color": _COLOR_ROW_ALT, "align": "right", "num_format": _MONEY,
            }),
        }

    # -----------------------------------------------------------------------
    # Public builder methods
    # -----------------------------------------------------------------------

    def add_header(self, num_cols: int | None = None) -> "ExcelExporter":
        """Write the title, institution/timestamp row and filter rows.

        Args:
            num_cols: Width of the merged header; defaults to six columns.
        """
        ws = self._worksheet
        if num_cols:
            self._num_cols = num_cols
        last_col = max(self._num_cols, 2) - 1

        ws.set_row(self._current_row, 30)
        ws.merge_range(self._current_row, 0, self._current_row, last_col,
                       self._title, self._formats["header_main"])
        self._current_row += 1

        generado = datetime.datetime.now().strftime("%d/%m/%Y %H:%M")
        ws.merge_range(self._current_row, 0, self._current_row, last_col,
                       f"{_INSTITUCION} · Generado: {generado}", self._formats["header_sub"])
        self._current_row += 1

        for key, value in self._filters.items():
            ws.write(self._current_row, 0, key, self._formats["filter_key"])
            ws.merge_range(self._current_row, 1, self._current_row, last_col,
                           str(value), self._formats["filter_value"])
            self._current_row += 1

        self._current_row += 1
        return self

    def add_kpi_row(self, kpis: dict[str, Any]) -> "ExcelExporter":
        """Write labels on one row and their amounts on the next.

        Args:
            kpis: Ordered ``{label: amount}``, e.g. ``{"Saldo": -200000}``.
        """
        ws = self._worksheet
        for col, (label, value) in enumerate(kpis.items()):
            ws.write(self._current_row, col, label, self._formats["kpi_label"])
            ws.write(self._current_row + 1, col, _cell(value), self._formats["kpi_value"])
        ws.set_row(self._current_row + 1, 22)

        self._current_row += 3
        return self

    def add_data_table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
        numeric_cols: set[int] | None = None,
    ) -> "ExcelExporter":
        """Write a table with alternating row shading and auto-sized columns.

        Args:
            headers: Column titles.
            rows: Data rows, each as long as ``headers``.
            numeric_cols: Zero-based indices of amount columns.
        """
        ws = self._worksheet
        numeric_cols = numeric_cols or set()
        col_widths = [len(str(h)) for h in headers]

        ws.set_row(self._current_row, 20)
        for ci, hdr in enumerate(headers):
            ws.write(self._current_row, ci, hdr, self._formats["col_header"])
        self._current_row += 1

        for ri, data_row in enumerate(rows):
            alt = ri % 2 == 1
            for ci, raw in enumerate(data_row):
                value = _cell(raw)
                if ci in numeric_cols and isinstance(value, (int, float)):
                    fmt = self._formats["data_number_alt" if alt else "data_number"]
                else:
                    fmt = self._formats["data_alt" if alt else "data_plain"]
                ws.write(self._current_row, ci, value, fmt)
                col_widths[ci] = min(_MAX_COL_WIDTH, max(col_widths[ci], len(str(value))))
            self._current_row += 1

        for ci, width in enumerate(col_widths):
            ws.set_column(ci, ci, max(width + 2, _MIN_COL_WIDTH))
        ws.freeze_panes(self._current_row - len(rows), 0)
        return self

    def finalize(self) -> bytes:
        """Close the workbook and return the ``.xlsx`` bytes."""
        self._workbook.close()
        return self._buffer.getvalue()
