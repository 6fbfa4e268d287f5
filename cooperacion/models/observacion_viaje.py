"""ObservacionViaje model — follow-up log entry of a trip."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from cooperacion.database import Base


class ObservacionViaje(Base):
    """One message exchanged while processing a trip.

    Attributes:
        id: Primary key.
        viaje_id: FK to ViajeExterior.
        observacion: Message body.
        quien_envia: Sender.
        quien_recibe: Recipient.
        fecha: Date of the message.
        hora: "HH:MM" time of the message.
    """

    __tablename__ = "observacion_viaje"

    id = Column(Integer, primary_key=True, autoincrement=True)
    viaje_id = Column(Integer, ForeignKey("viaje_exterior.id"), nullable=False, index=True)
    observacion = Column(Text, nullable=False)
    quien_envia = Column(String(200), nullable=False)
    quien_recibe = Column(String(200), nullable=False)
    fecha = Column(Date, nullable=False)
    hora = Column(String(5), nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    # Relationships
    viaje = relationship(
        "ViajeExterior", back_populates="observaciones_seguimiento", lazy="select"
    )
