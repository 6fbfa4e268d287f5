"""
Export service layer.

Coordinates data retrieval and format conversion for the export endpoints.
Data comes from the domain services (so balances are derived exactly as in
the ledger view) and is handed to the ``ExcelExporter`` / ``PdfExporter``
builders.

Supported exports
-----------------
- Budget ledger of one subpartida: Excel and PDF.
- Project list: Excel.
- Trip report: PDF ("Reporte de Viaje al Exterior").

Design notes
------------
- The budget Excel and PDF share ``_datos_presupuesto`` so both formats
  always show the same columns and KPIs.
- Amount columns are identified by index so the exporters can right-align
  and money-format them.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from sqlalchemy.orm import Session

from cooperacion.exporters.excel_exporter import ExcelExporter
from cooperacion.exporters.pdf_exporter import PdfExporter
from cooperacion.models.viaje_exterior import ViajeExterior
from cooperacion.services import presupuesto_service, proyecto_service, viaje_service
from cooperacion.services.balance_service import ResultadoBalance
from cooperacion.utils.formato import formato_colones, parse_monto

logger = logging.getLogger(__name__)

_HEADERS_PRESUPUESTO: list[str] = [
    "ID",
    "Descripción",
    "Oficio solicitud",
    "Cumple solicitud",
    "Cumple emisión",
    "N° factura",
    "Total factura",
    "Entrega a Dirección",
    "Estado",
]
_MONTO_COL_PRESUPUESTO = 6

_HEADERS_PROYECTOS: list[str] = [
    "N°",
    "Proyecto",
    "Año",
    "Fecha aprobación",
    "Actor",
    "Sector",
    "Modalidad",
    "Etapa",
    "Área",
    "Costo total",
    "Contrapartida institución",
    "Contrapartida cooperante",
]


# ---------------------------------------------------------------------------
# Data helpers
# ---------------------------------------------------------------------------


def _datos_presupuesto(
    resultado: ResultadoBalance,
) -> tuple[str, dict[str, str], list[list[Any]]]:
    """Title, header filters and order rows for a budget ledger export."""
    linea = resultado.linea
    title = f"Ficha de presupuesto · Subpartida {linea.subpartida} ({linea.ano_contrato})"
    filtros = {
        "Subpartida": f"{linea.subpartida} · {linea.nombre_subpartida}",
        "Año contrato": linea.ano_contrato,
        "N° contratación": linea.numero_contratacion or "",
        "N° contrato": linea.numero_contrato or "",
        "Orden de compra": linea.numero_orden_compra or "",
        "Orden pedido SICOP": linea.orden_pedido_sicop or "",
    }
    rows = [
        [
            s.id,
            s.descripcion,
            s.oficio_solicitud,
            s.cumple_solicitud,
            s.cumple_emision,
            s.numero_factura,
            parse_monto(s.total_factura),
            s.fecha_entrega_direccion,
            s.estado,
        ]
        for s in resultado.solicitudes
    ]
    return title, filtros, rows


def _kpis(resultado: ResultadoBalance) -> dict[str, Any]:
    return {
        "Presupuesto asignado": resultado.presupuesto_asignado,
        "Monto consumido": resultado.monto_consumido,
        "Saldo": resultado.saldo,
    }


def _nombre_archivo_seguro(texto: str, limite: int = 30) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "_", texto[:limite])


# ---------------------------------------------------------------------------
# Budget ledger
# ---------------------------------------------------------------------------


def export_presupuesto_excel(db: Session, subpartida: str, ano: str | None = None) -> bytes:
    """Budget ledger of one subpartida as ``.xlsx``.

    Raises:
        HTTPException 404: If no budget line has the code.
    """
    resultado = presupuesto_service.calcular_ficha(db, subpartida, ano)
    title, filtros, rows = _datos_presupuesto(resultado)

    exporter = ExcelExporter(title=title, filters=filtros, sheet_name=f"Subpartida {subpartida}")
    exporter.add_header(num_cols=len(_HEADERS_PRESUPUESTO))
    exporter.add_kpi_row(_kpis(resultado))
    exporter.add_data_table(_HEADERS_PRESUPUESTO, rows, numeric_cols={_MONTO_COL_PRESUPUESTO})
    file_bytes = exporter.finalize()

    logger.info(
        "export_presupuesto_excel: subpartida=%s ano=%s rows=%d bytes=%d",
        subpartida, ano, len(rows), len(file_bytes),
    )
    return file_bytes


def export_presupuesto_pdf(db: Session, subpartida: str, ano: str | None = None) -> bytes:
    """Budget ledger of one subpartida as PDF (A4 landscape).

    Raises:
        HTTPException 404: If no budget line has the code.
    """
    resultado = presupuesto_service.calcular_ficha(db, subpartida, ano)
    title, filtros, rows = _datos_presupuesto(resultado)
    for row in rows:
        row[_MONTO_COL_PRESUPUESTO] = formato_colones(row[_MONTO_COL_PRESUPUESTO])

    kpis = {label: formato_colones(valor) for label, valor in _kpis(resultado).items()}
    exporter = PdfExporter(title=title, filters=filtros, landscape_mode=True)
    exporter.add_header()
    exporter.add_kpi_section(kpis, negative={"Saldo"} if resultado.sobregirado else set())
    exporter.add_table(
        _HEADERS_PRESUPUESTO,
        rows,
        col_widths=[1.2, 7.0, 3.0, 2.2, 2.2, 3.2, 3.0, 2.6, 2.2],
        numeric_cols={_MONTO_COL_PRESUPUESTO},
        section_title="Solicitudes de presupuesto",
        note=f"Total de solicitudes: {len(rows)}",
    )
    file_bytes = exporter.build()

    logger.info(
        "export_presupuesto_pdf: subpartida=%s ano=%s rows=%d bytes=%d",
        subpartida, ano, len(rows), len(file_bytes),
    )
    return file_bytes


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


def export_proyectos_excel(db: Session, ano: str | None = None) -> bytes:
    proyectos = proyecto_service.list_proyectos(db, ano=ano)
    rows = [
        [
            p.num_proyecto,
            p.nombre_proyecto,
            p.ano,
            p.fecha_aprobacion,
            p.nombre_actor,
            p.sector,
            p.modalidad,
            p.etapa_proyecto,
            p.nombre_area,
            p.costo_total,
            p.contrapartida_institucion,
            p.contrapartida_cooperante,
        ]
        for p in proyectos
    ]

    exporter = ExcelExporter(
        title="Proyectos de cooperación internacional",
        filters={"Año": ano or "Todos"},
        sheet_name="Proyectos",
    )
    exporter.add_header(num_cols=len(_HEADERS_PROYECTOS))
    exporter.add_kpi_row({"Proyectos": len(rows)})
    exporter.add_data_table(_HEADERS_PROYECTOS, rows)
    file_bytes = exporter.finalize()

    logger.info("export_proyectos_excel: ano=%s rows=%d", ano, len(rows))
    return file_bytes


# ---------------------------------------------------------------------------
# Trip report
# ---------------------------------------------------------------------------


def nombre_reporte_viaje(viaje: ViajeExterior) -> str:
    """File name such as ``Viaje_0007_Reunion_de_Ministros_OEI_2025.pdf``."""
    corto = _nombre_archivo_seguro(viaje.nombre_actividad or "Viaje")
    return f"Viaje_{viaje.id:04d}_{corto}_{viaje.ano_viaje or 'sin_ano'}.pdf"


def reporte_viaje_pdf(db: Session, viaje_id: int) -> tuple[str, bytes]:
    """Printable report of a trip: general data, vacation details and log.

    Returns:
        ``(filename, pdf_bytes)``.

    Raises:
        HTTPException 404: If the trip does not exist.
    """
    viaje = viaje_service.get_viaje_or_404(db, viaje_id)
    observaciones = viaje_service.observaciones_ordenadas(db, viaje_id)

    exporter = PdfExporter(title="Reporte de Viaje al Exterior")
    exporter.add_header(meta_left=f"ID Viaje: {viaje.id}")
    exporter.add_key_value_table(
        [
            ("Nombre de la actividad", viaje.nombre_actividad),
            ("Lugar de destino", viaje.lugar_destino),
            ("Año", viaje.ano_viaje),
            ("Funcionario a cargo", viaje.funcionario_a_cargo),
            ("Sector", viaje.sector),
            ("Tema", viaje.tema),
            ("Acuerdo N°", viaje.numero_acuerdo),
            ("Autoridad/Delegado", viaje.autoridad_delegado),
            ("Nombre del participante", viaje.nombre_funcionario),
            ("Cargo/Dependencia", viaje.cargo_funcionario_dependencia),
            ("Organizador", viaje.organizador_evento),
            ("Modalidad", viaje.modalidad),
            ("Fuente financiamiento", viaje.fuente_financiamiento),
            ("Fecha actividad (inicio)", viaje.fecha_actividad_inicio),
            ("Fecha actividad (final)", viaje.fecha_actividad_final),
            ("Fecha viaje (inicio)", viaje.fecha_viaje_inicio),
            ("Fecha viaje (final)", viaje.fecha_viaje_final),
            ("Vacaciones", viaje.vacaciones),
            ("Estado", viaje.estado),
            ("Publicación en La Gaceta", viaje.gaceta_url),
        ],
        section_title="INFORMACIÓN GENERAL",
    )

    if (viaje.vacaciones or "").strip().lower() in {"si", "sí"} and viaje.detalle_vacaciones:
        exporter.add_text_box("DETALLES DE VACACIONES", viaje.detalle_vacaciones)

    if observaciones:
        exporter.add_table(
            ["#", "Fecha/Hora", "Observación", "Quién envía", "Quién recibe"],
            [
                [
                    f"#{i}",
                    f"{o.fecha.strftime('%d/%m/%Y')}\n{o.hora}",
                    o.observacion,
                    o.quien_envia,
                    o.quien_recibe,
                ]
                for i, o in enumerate(observaciones, start=1)
            ],
            col_widths=[1.0, 2.5, 7.5, 3.5, 3.5],
            section_title="REGISTRO DE SEGUIMIENTO",
            note=f"Total de observaciones: {len(observaciones)}",
            accent=True,
        )

    file_bytes = exporter.build()
    logger.info(
        "reporte_viaje_pdf: viaje_id=%d observaciones=%d bytes=%d",
        viaje_id, len(observaciones), len(file_bytes),
    )
    return nombre_reporte_viaje(viaje), file_bytes
