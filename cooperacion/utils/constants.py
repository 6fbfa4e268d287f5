"""
Application-wide constants for the cooperation backend.

Defines domain enumerations, business rule thresholds, and
lookup lists used across routers, services, and schemas.
"""

from typing import Final

# ---------------------------------------------------------------------------
# User roles
# ---------------------------------------------------------------------------

# ADMIN and EDITOR write; CONSULTA only reads
ROLES_ESCRITURA: Final[tuple[str, ...]] = ("ADMIN", "EDITOR")

# ---------------------------------------------------------------------------
# Cooperation sectors (normalised labels)
# ---------------------------------------------------------------------------

SECTORES: Final[list[str]] = [
    "Público",
    "Privado",
    "Sociedad Civil",
    "Bilateral",
    "Academia",
    "Multilateral Regional",
    "Multilateral Naciones Unidas",
    "Otro",
]

# Lower-cased raw value -> normalised label
SECTOR_NORMALIZADO: Final[dict[str, str]] = {
    "público": "Público",
    "privado": "Privado",
    "sociedad civil": "Sociedad Civil",
    "bilateral": "Bilateral",
    "academia": "Academia",
    "multilateral regional": "Multilateral Regional",
    "multilateral naciones unidas": "Multilateral Naciones Unidas",
    "otro": "Otro",
}

# ---------------------------------------------------------------------------
# Project statistics: groupable fields
# ---------------------------------------------------------------------------

CAMPOS_ESTADISTICA: Final[list[str]] = [
    "nombre_actor",
    "etapa_proyecto",
    "dependencias_solicitantes",
    "modalidad",
    "sector",
    "region",
    "tipo_cooperacion",
    "autoridad_a_cargo",
    "area",
]

ETIQUETA_SIN_DATOS: Final[str] = "Sin datos"
ETIQUETA_SIN_AREA: Final[str] = "Sin área"
ETIQUETA_SIN_ANO: Final[str] = "Sin año"

# ---------------------------------------------------------------------------
# Travel records
# ---------------------------------------------------------------------------

ESTADO_VIAJE_INICIAL: Final[str] = "Pendiente"

# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------

PDF_CONTENT_TYPES: Final[frozenset[str]] = frozenset({"application/pdf"})
PDF_MAGIC: Final[bytes] = b"%PDF"
ENTIDADES_DOCUMENTO: Final[list[str]] = ["proyecto", "viaje"]

# ---------------------------------------------------------------------------
# Currency display
# ---------------------------------------------------------------------------

SIMBOLO_MONEDA: Final[str] = "₡"
