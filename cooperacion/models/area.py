"""Area model — organisational area used to classify projects."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from cooperacion.database import Base


class Area(Base):
    """Lookup table of areas.

    Attributes:
        id: Primary key.
        nombre_area: Unique display name.
    """

    __tablename__ = "area"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nombre_area = Column(String(200), unique=True, nullable=False)

    # Relationships
    proyectos = relationship("Proyecto", back_populates="area", lazy="select")
