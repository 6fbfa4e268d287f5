"""Usuario model — application user with role-based access control."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from cooperacion.database import Base


class Usuario(Base):
    """System user with a role that controls write access.

    Roles:
        - ADMIN: Full access.
        - EDITOR: Create, edit and delete records in every module.
        - CONSULTA: Read-only access.

    Attributes:
        id: Primary key.
        username: Unique login username.
        email: Contact email.
        password_hash: Bcrypt-hashed password (never store plain text).
        nombre_completo: Full display name.
        rol: Role identifier controlling permissions.
        activo: Whether the account is active.
        ultimo_acceso: Timestamp of the last successful login.
    """

    __tablename__ = "usuario"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False)
    email = Column(String(200), unique=True, nullable=False)
    password_hash = Column(String(200), nullable=False)
    nombre_completo = Column(String(300), nullable=True)
    rol = Column(String(50), nullable=True)
    # "ADMIN", "EDITOR", "CONSULTA"
    activo = Column(Boolean, default=True, nullable=False)
    ultimo_acceso = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
