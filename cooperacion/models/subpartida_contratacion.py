"""SubpartidaContratacion model — contract budget line (ledger line)."""

from sqlalchemy import Column, DateTime, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from cooperacion.database import Base


class SubpartidaContratacion(Base):
    """Budget line tied to a contract and year, with an assigned ceiling.

    The consumed amount and the balance are never stored: they are derived
    on every read from the linked ``SolicitudPresupuesto`` rows.  There is
    no delete path for this entity.

    Attributes:
        id: Primary key.
        subpartida: Budget code, e.g. "10503". Repeats across years.
        ano_contrato: Four-digit contract year as a string.
        nombre_subpartida: Display name of the line.
        descripcion_contratacion: Description of the contracted service.
        numero_contratacion: Procurement process number.
        numero_contrato: Contract number.
        numero_orden_compra: Purchase order number.
        orden_pedido_sicop: SICOP request order reference.
        presupuesto_asignado: Ceiling for draws against this line.
    """

    __tablename__ = "subpartida_contratacion"

    id = Column(Integer, primary_key=True, autoincrement=True)
    subpartida = Column(String(20), nullable=False, index=True)
    ano_contrato = Column(String(4), nullable=False)
    nombre_subpartida = Column(String(300), nullable=False)
    descripcion_contratacion = Column(String(1000), nullable=True)
    numero_contratacion = Column(String(100), nullable=False)
    numero_contrato = Column(String(100), nullable=True)
    numero_orden_compra = Column(String(100), nullable=True)
    orden_pedido_sicop = Column(String(100), nullable=True)
    presupuesto_asignado = Column(Numeric(18, 2), nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    solicitudes = relationship(
        "SolicitudPresupuesto",
        back_populates="subpartida_contratacion",
        order_by="SolicitudPresupuesto.id",
        lazy="select",
    )
