"""SQLAlchemy models package for the cooperation backend.

Importing all models here ensures that SQLAlchemy's mapper registry is
populated before ``Base.metadata.create_all()`` or Alembic migrations run.
The import order follows the foreign-key dependency graph so that parent
tables are always registered before their children.

Usage from other modules:
    from cooperacion.models import SubpartidaContratacion, SolicitudPresupuesto
"""

# Budget ledger
from cooperacion.models.subpartida_contratacion import SubpartidaContratacion  # noqa: F401
from cooperacion.models.solicitud_presupuesto import SolicitudPresupuesto  # noqa: F401

# Cooperation projects
from cooperacion.models.area import Area  # noqa: F401
from cooperacion.models.proyecto import Proyecto  # noqa: F401

# Travel abroad
from cooperacion.models.viaje_exterior import ViajeExterior  # noqa: F401
from cooperacion.models.observacion_viaje import ObservacionViaje  # noqa: F401

# Cross-cutting concerns
from cooperacion.models.usuario import Usuario  # noqa: F401

__all__ = [
    "SubpartidaContratacion",
    "SolicitudPresupuesto",
    "Area",
    "Proyecto",
    "ViajeExterior",
    "ObservacionViaje",
    "Usuario",
]
