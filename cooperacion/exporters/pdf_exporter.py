"""
PDF export helper wrapping reportlab.

``PdfExporter`` is a stateful builder over reportlab Platypus: callers add
an institutional header, KPI cards, key/value tables, text boxes and data
tables, then ``build()`` returns the document bytes for streaming.

Usage example::

    exporter = PdfExporter(title="Reporte de Viaje al Exterior")
    exporter.add_header(meta_left="ID Viaje: 7")
    exporter.add_key_value_table(rows, section_title="INFORMACIÓN GENERAL")
    exporter.add_table(headers, rows, section_title="REGISTRO DE SEGUIMIENTO")
    file_bytes = exporter.build()

Design notes
------------
- A4 portrait by default; the budget ledger uses landscape for its wide
  order table.
- Every page gets a "Página N de M" footer, computed with a two-pass
  canvas so the total is known when the footer is drawn.
- Cell text is wrapped in ``Paragraph`` objects and escaped, so free text
  typed by users never breaks the reportlab markup parser.
"""

from __future__ import annotations

import io
from datetime import datetime
from typing import Any, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import cm, mm
from reportlab.pdfgen import canvas as rl_canvas
from reportlab.platypus import (
    HRFlowable,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

_NAVY = colors.HexColor("#172951")
_GOLD = colors.HexColor("#CDA95F")
_LIGHT_BLUE = colors.HexColor("#EFF6FF")
_LIGHT_GREY = colors.HexColor("#F3F4F6")
_MID_GREY = colors.HexColor("#9CA3AF")
_TEXT = colors.HexColor("#111827")
_RED = colors.HexColor("#B91C1C")

_INSTITUCION = "MINISTERIO DE EDUCACIÓN PÚBLICA"
_VACIO = "—"


def _texto(value: Any) -> str:
    """Render a cell value as escaped Paragraph markup."""
    if value is None or value == "":
        return _VACIO
    if isinstance(value, datetime):
        value = value.strftime("%d/%m/%Y %H:%M")
    elif hasattr(value, "strftime"):
        value = value.strftime("%d/%m/%Y")
    return escape(str(value)).replace("\n", "<br/>")


class _NumberedCanvas(rl_canvas.Canvas):
    """Canvas that defers page output to stamp "Página N de M" footers."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._saved_pages: list[dict[str, Any]] = []

    def showPage(self) -> None:  # noqa: N802 (reportlab API)
        self._saved_pages.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        total = len(self._saved_pages)
        for state in self._saved_pages:
            self.__dict__.update(state)
            self.setFont("Helvetica", 7)
            self.setFillColor(_MID_GREY)
            self.drawCentredString(
                self._pagesize[0] / 2, 1.2 * cm, f"Página {self._pageNumber} de {total}"
            )
            super().showPage()
        super().save()


class PdfExporter:
    """Stateful PDF document builder.

    Args:
        title: Report title shown under the institution name.
        filters: Applied filters, listed under the header.
        landscape_mode: Use A4 landscape instead of portrait.
    """

    def __init__(
        self,
        title: str,
        filters: dict[str, str] | None = None,
        landscape_mode: bool = False,
    ) -> None:
        self._title = title
        self._filters = filters or {}
        self._buffer = io.BytesIO()
        self._doc = SimpleDocTemplate(
            self._buffer,
            pagesize=landscape(A4) if landscape_mode else A4,
            rightMargin=1.5 * cm,
            leftMargin=1.5 * cm,
            topMargin=1.8 * cm,
            bottomMargin=2 * cm,
            title=title,
            author="Dirección de Relaciones Internacionales",
        )
        self._story: list[Any] = []
        self._styles = self._build_styles()

    # -----------------------------------------------------------------------
    # Style factory
    # -----------------------------------------------------------------------

    @staticmethod
    def _build_styles() -> dict[str, ParagraphStyle]:
        return {
            "institucion": ParagraphStyle(
                "institucion", fontName="Helvetica-Bold", fontSize=16,
                textColor=_NAVY, alignment=TA_CENTER, spaceAfter=4,
            ),
            "title": ParagraphStyle(
                "title", fontName="Helvetica-Bold", fontSize=13,
                textColor=_NAVY, alignment=TA_CENTER, spaceAfter=4,
            ),
            "meta_left": ParagraphStyle(
                "meta_left", fontName="Helvetica", fontSize=8, textColor=_MID_GREY,
                alignment=TA_LEFT,
            ),
            "meta_right": ParagraphStyle(
                "meta_right", fontName="Helvetica", fontSize=8, textColor=_MID_GREY,
                alignment=TA_RIGHT,
            ),
            "section_heading": ParagraphStyle(
                "section_heading", fontName="Helvetica-Bold", fontSize=11,
                textColor=_NAVY, spaceBefore=8, spaceAfter=4,
            ),
            "note": ParagraphStyle(
                "note", fontName="Helvetica", fontSize=8, textColor=_MID_GREY, spaceAfter=4,
            ),
            "kpi_label": ParagraphStyle(
                "kpi_label", fontName="Helvetica-Bold", fontSize=8, textColor=_NAVY,
                alignment=TA_CENTER,
            ),
            "kpi_value": ParagraphStyle(
                "kpi_value", fontName="Helvetica-Bold", fontSize=12, textColor=_NAVY,
                alignment=TA_CENTER,
            ),
            "kpi_value_negative": ParagraphStyle(
                "kpi_value_negative", fontName="Helvetica-Bold", fontSize=12,
                textColor=_RED, alignment=TA_CENTER,
            ),
            "table_header": ParagraphStyle(
                "table_header", fontName="Helvetica-Bold", fontSize=8,
                textColor=colors.white, alignment=TA_CENTER,
            ),
            "cell": ParagraphStyle(
                "cell", fontName="Helvetica", fontSize=8, textColor=_TEXT, alignment=TA_LEFT,
            ),
            "cell_bold": ParagraphStyle(
                "cell_bold", fontName="Helvetica-Bold", fontSize=8, textColor=_TEXT,
            ),
            "cell_right": ParagraphStyle(
                "cell_right", fontName="Helvetica", fontSize=8, textColor=_TEXT,
                alignment=TA_RIGHT,
            ),
            "box": ParagraphStyle(
                "box", fontName="Helvetica", fontSize=9, textColor=_TEXT, leading=12,
            ),
        }

    def _section(self, title: str) -> None:
        self._story.append(Paragraph(escape(title), self._styles["section_heading"]))

    # -----------------------------------------------------------------------
    # Public builder methods
    # -----------------------------------------------------------------------

    def add_header(self, meta_left: str = "") -> "PdfExporter":
        """Institution name, report title, gold rule, generation line, filters.

        Args:
            meta_left: Optional text shown left of the generation timestamp,
                       e.g. ``"ID Viaje: 7"``.
        """
        width = self._doc.width
        generado = datetime.now().strftime("%d/%m/%Y %H:%M")

        self._story += [
            Paragraph(_INSTITUCION, self._styles["institucion"]),
            Paragraph(escape(self._title), self._styles["title"]),
            HRFlowable(width="100%", thickness=0.8, color=_GOLD),
            Spacer(1, 2 * mm),
        ]
        meta = Table(
            [[Paragraph(escape(meta_left), self._styles["meta_left"]),
              Paragraph(f"Generado: {generado}", self._styles["meta_right"])]],
            colWidths=[width / 2, width / 2],
        )
        meta.setStyle(TableStyle([("LEFTPADDING", (0, 0), (-1, -1), 0),
                                  ("RIGHTPADDING", (0, 0), (-1, -1), 0)]))
        self._story.append(meta)

        if self._filters:
            self._story.append(Spacer(1, 2 * mm))
            self.add_key_value_table(list(self._filters.items()), key_width=3.5 * cm)
        self._story.append(Spacer(1, 4 * mm))
        return self

    def add_kpi_section(
        self,
        kpis: dict[str, str],
        negative: set[str] | None = None,
    ) -> "PdfExporter":
        """Single-row KPI cards.

        Args:
            kpis: Ordered ``{label: formatted value}``.
            negative: Labels whose value is rendered in red.
        """
        if not kpis:
            return self
        negative = negative or set()
        labels = [Paragraph(escape(k), self._styles["kpi_label"]) for k in kpis]
        values = [
            Paragraph(
                escape(v),
                self._styles["kpi_value_negative" if k in negative else "kpi_value"],
            )
            for k, v in kpis.items()
        ]
        table = Table([labels, values], colWidths=[self._doc.width / len(kpis)] * len(kpis))
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), _LIGHT_BLUE),
            ("BOX", (0, 0), (-1, -1), 0.5, _GOLD),
            ("INNERGRID", (0, 0), (-1, -1), 0.25, _GOLD),
            ("TOPPADDING", (0, 0), (-1, -1), 5),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
        ]))
        self._story += [table, Spacer(1, 5 * mm)]
        return self

    def add_key_value_table(
        self,
        rows: Sequence[tuple[str, Any]],
        section_title: str | None = None,
        key_width: float = 5 * cm,
    ) -> "PdfExporter":
        """Two-column "Campo / Valor" table with a navy header and stripes."""
        if section_title:
            self._section(section_title)
        data: list[list[Any]] = [[
            Paragraph("Campo", self._styles["table_header"]),
            Paragraph("Valor", self._styles["table_header"]),
        ]]
        data += [
            [Paragraph(escape(k), self._styles["cell_bold"]), Paragraph(_texto(v), self._styles["cell"])]
            for k, v in rows
        ]
        table = Table(data, colWidths=[key_width, self._doc.width - key_width], repeatRows=1)
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), _NAVY),
            ("GRID", (0, 0), (-1, -1), 0.25, _LIGHT_GREY),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]
        style += [("BACKGROUND", (0, ri), (-1, ri), _LIGHT_GREY) for ri in range(2, len(data), 2)]
        table.setStyle(TableStyle(style))
        self._story += [table, Spacer(1, 4 * mm)]
        return self

    def add_text_box(self, section_title: str, text: str) -> "PdfExporter":
        """Heading followed by a shaded box of free text."""
        self._section(section_title)
        box = Table([[Paragraph(_texto(text), self._styles["box"])]], colWidths=[self._doc.width])
        box.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), _LIGHT_BLUE),
            ("TOPPADDING", (0, 0), (-1, -1), 6),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
        ]))
        self._story += [box, Spacer(1, 4 * mm)]
        return self

    def add_table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
        col_widths: Sequence[float] | None = None,
        numeric_cols: set[int] | None = None,
        section_title: str = "Detalle",
        note: str | None = None,
        accent: bool = False,
    ) -> "PdfExporter":
        """Data table with a coloured header row and alternating stripes.

        Args:
            headers: Column titles.
            rows: Data rows; values are rendered with ``str`` after escaping.
            col_widths: Column widths in cm; evenly split when omitted.
            numeric_cols: Zero-based indices of right-aligned columns.
            section_title: Heading above the table.
            note: Optional grey line between heading and table.
            accent: Gold header row instead of navy.
        """
        self._section(section_title)
        if note:
            self._story.append(Paragraph(escape(note), self._styles["note"]))

        numeric_cols = numeric_cols or set()
        widths = (
            [w * cm for w in col_widths]
            if col_widths is not None
            else [self._doc.width / len(headers)] * len(headers)
        )
        data: list[list[Any]] = [
            [Paragraph(escape(str(h)), self._styles["table_header"]) for h in headers]
        ]
        for row in rows:
            data.append([
                Paragraph(_texto(v), self._styles["cell_right" if ci in numeric_cols else "cell"])
                for ci, v in enumerate(row)
            ])

        table = Table(data, colWidths=widths, repeatRows=1)
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), _GOLD if accent else _NAVY),
            ("GRID", (0, 0), (-1, -1), 0.25, _MID_GREY),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ]
        style += [("BACKGROUND", (0, ri), (-1, ri), _LIGHT_GREY) for ri in range(2, len(data), 2)]
        table.setStyle(TableStyle(style))
        self._story += [table, Spacer(1, 4 * mm)]
        return self

    def build(self) -> bytes:
        """Render the story and return the ``.pdf`` bytes."""
        self._doc.build(self._story, canvasmaker=_NumberedCanvas)
        return self._buffer.getvalue()

