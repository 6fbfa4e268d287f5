"""SolicitudPresupuesto model — budget draw-down order against a subpartida."""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from cooperacion.database import Base


class SolicitudPresupuesto(Base):
    """One order drawing funds from a ``SubpartidaContratacion``.

    The five phases (solicitud, emisión, recepción, facturación, entrega)
    are flat groups of optional columns.  They may be filled in any order.
    Only ``total_factura`` takes part in budget arithmetic; it is kept as
    text so the value typed by the user survives even when it does not
    parse as a number.

    Attributes:
        id: Primary key.
        subpartida_contratacion_id: FK to the owning budget line.
        descripcion: Free-text description of the order.
        cumple_solicitud / cumple_emision: "Sí", "No" or "Pendiente".
        numero_factura: Invoice number (phase 4).
        total_factura: Invoice total as entered (phase 4).
        fecha_entrega_direccion: Delivery date to the directorate (phase 5).
        estado: Free-text status label.
        activo: Visibility flag.
    """

    __tablename__ = "solicitud_presupuesto"

    id = Column(Integer, primary_key=True, autoincrement=True)
    subpartida_contratacion_id = Column(
        Integer, ForeignKey("subpartida_contratacion.id"), nullable=False, index=True
    )
    descripcion = Column(Text, nullable=False)

    # Fase 1: Solicitud
    fecha_solicitud_boleto = Column(Date, nullable=True)
    hora_solicitud_boleto = Column(String(10), nullable=True)
    oficio_solicitud = Column(String(100), nullable=True)
    fecha_respuesta_solicitud = Column(Date, nullable=True)
    hora_respuesta_solicitud = Column(String(10), nullable=True)
    cumple_solicitud = Column(String(10), default="Pendiente", nullable=False)

    # Fase 2: Emisión
    fecha_solicitud_emision = Column(Date, nullable=True)
    hora_solicitud_emision = Column(String(10), nullable=True)
    oficio_emision = Column(String(100), nullable=True)
    fecha_respuesta_emision = Column(Date, nullable=True)
    hora_respuesta_emision = Column(String(10), nullable=True)
    cumple_emision = Column(String(10), default="Pendiente", nullable=False)

    # Fase 3: Recepción
    fecha_recibido_conforme = Column(Date, nullable=True)
    hora_recibido_conforme = Column(String(10), nullable=True)
    oficio_recepcion = Column(String(100), nullable=True)

    # Fase 4: Facturación
    numero_factura = Column(String(100), nullable=True)
    total_factura = Column(String(50), nullable=True)

    # Fase 5: Entrega
    fecha_entrega_direccion = Column(Date, nullable=True)

    estado = Column(String(100), nullable=True)
    activo = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    subpartida_contratacion = relationship(
        "SubpartidaContratacion", back_populates="solicitudes", lazy="select"
    )
