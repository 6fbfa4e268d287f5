"""Proyecto model — international cooperation project."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from cooperacion.database import Base


class Proyecto(Base):
    """Cooperation project registered by the international relations office.

    Amount fields (``costo_total`` and both contrapartidas) are stored as the
    text the user typed; statistics parse them leniently.

    Attributes:
        num_proyecto: Primary key.
        nombre_proyecto: Project name (required).
        fecha_aprobacion: Approval date (required).
        actor_cooperacion: Kind of cooperating actor.
        nombre_actor: Name of the cooperating actor.
        etapa_proyecto: Current stage label.
        tipo_proyecto: Project type.
        tipo_cooperacion: Cooperation type (technical, financial, ...).
        modalidad: Delivery modality.
        sector: Cooperation sector, see ``constants.SECTORES``.
        region: Region of the cooperating actor.
        autoridad_a_cargo: Responsible authority.
        ano: Four-digit year string.
        dependencias_solicitantes: Comma-separated requesting offices.
        documentos: Public URL of the attached PDF, if any.
        area_id: FK to Area.
    """

    __tablename__ = "proyecto"

    num_proyecto = Column(Integer, primary_key=True, autoincrement=True)
    nombre_proyecto = Column(String(500), nullable=False)
    fecha_aprobacion = Column(Date, nullable=False)
    actor_cooperacion = Column(String(200), nullable=True)
    nombre_actor = Column(String(300), nullable=True)
    etapa_proyecto = Column(String(100), nullable=True)
    tipo_proyecto = Column(String(100), nullable=True)
    tipo_cooperacion = Column(String(100), nullable=True)
    modalidad = Column(String(100), nullable=True)
    sector = Column(String(100), nullable=True)
    region = Column(String(100), nullable=True)
    autoridad_a_cargo = Column(String(200), nullable=True)
    ano = Column(String(4), nullable=True, index=True)
    costo_total = Column(String(50), nullable=True)
    contrapartida_institucion = Column(String(50), nullable=True)
    contrapartida_cooperante = Column(String(50), nullable=True)
    dependencias_solicitantes = Column(String(1000), nullable=True)
    institucion_solicitante = Column(String(300), nullable=True)
    objetivos = Column(Text, nullable=True)
    resultados = Column(Text, nullable=True)
    productos = Column(Text, nullable=True)
    tematicas = Column(String(500), nullable=True)
    observaciones = Column(Text, nullable=True)
    documentos = Column(String(500), nullable=True)
    area_id = Column(Integer, ForeignKey("area.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    area = relationship("Area", back_populates="proyectos", lazy="select")

    @property
    def nombre_area(self) -> str | None:
        return self.area.nombre_area if self.area is not None else None
