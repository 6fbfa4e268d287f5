"""ViajeExterior model — official travel abroad."""

from sqlalchemy import Column, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from cooperacion.database import Base


class ViajeExterior(Base):
    """Official trip of a public servant to an international activity.

    Attributes:
        id: Primary key.
        ano_viaje: Four-digit year string.
        nombre_actividad: Name of the event (required).
        lugar_destino: Destination country/city.
        fecha_actividad_inicio / fecha_actividad_final: Event dates.
        fecha_viaje_inicio / fecha_viaje_final: Travel dates.
        estado: Free-text status, "Pendiente" on creation.
        documento: Public URL of the attached PDF, if any.
        gaceta_url: Link to the publication in the official gazette.
    """

    __tablename__ = "viaje_exterior"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ano_viaje = Column(String(4), nullable=True, index=True)
    funcionario_a_cargo = Column(String(300), nullable=True)
    nombre_funcionario = Column(String(300), nullable=True)
    cargo_funcionario_dependencia = Column(String(300), nullable=True)
    nombre_actividad = Column(String(500), nullable=False)
    organizador_evento = Column(String(300), nullable=True)
    lugar_destino = Column(String(200), nullable=True)
    sector = Column(String(100), nullable=True)
    tema = Column(String(300), nullable=True)
    numero_acuerdo = Column(String(100), nullable=True)
    autoridad_delegado = Column(String(50), nullable=True)  # "Autoridad", "Delegado"
    modalidad = Column(String(50), nullable=True)  # "Presencial", "Virtual"
    fuente_financiamiento = Column(String(300), nullable=True)
    fecha_actividad_inicio = Column(Date, nullable=False)
    fecha_actividad_final = Column(Date, nullable=False)
    fecha_viaje_inicio = Column(Date, nullable=False)
    fecha_viaje_final = Column(Date, nullable=False)
    vacaciones = Column(String(20), nullable=True)
    detalle_vacaciones = Column(Text, nullable=True)
    observaciones = Column(Text, nullable=True)
    estado = Column(String(50), default="Pendiente", nullable=False)
    documento = Column(String(500), nullable=True)
    gaceta_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    observaciones_seguimiento = relationship(
        "ObservacionViaje",
        back_populates="viaje",
        order_by="ObservacionViaje.id",
        lazy="select",
        cascade="all, delete-orphan",
    )
