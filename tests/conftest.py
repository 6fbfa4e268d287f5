"""
Fixtures compartidos de la suite.

La aplicación se prueba contra SQLite en memoria (un solo ``StaticPool`` para
que todas las sesiones vean las mismas tablas) y con los archivos subidos en
un directorio temporal.  Las variables de entorno se fijan antes de importar
``cooperacion`` porque la configuración se lee una sola vez.
"""

import os
import tempfile
from datetime import date
from decimal import Decimal

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["UPLOADS_DIR"] = tempfile.mkdtemp(prefix="cooperacion-uploads-")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import cooperacion.models  # noqa: E402,F401
from cooperacion.database import Base, get_db  # noqa: E402
from cooperacion.main import app  # noqa: E402
from cooperacion.models import (  # noqa: E402
    Area,
    ObservacionViaje,
    Proyecto,
    SolicitudPresupuesto,
    SubpartidaContratacion,
    Usuario,
    ViajeExterior,
)
from cooperacion.utils.security import create_access_token, hash_password, token_claims  # noqa: E402

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# =============================================================================
# Base de datos y cliente HTTP
# =============================================================================


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def _get_db_override():
        yield db

    app.dependency_overrides[get_db] = _get_db_override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# =============================================================================
# Usuarios y tokens
# =============================================================================


def _crear_usuario(db, username: str, rol: str, password: str = "Secreto123!") -> Usuario:
    usuario = Usuario(
        username=username,
        email=f"{username}@cooperacion.local",
        password_hash=hash_password(password),
        nombre_completo=username.capitalize(),
        rol=rol,
        activo=True,
    )
    db.add(usuario)
    db.commit()
    db.refresh(usuario)
    return usuario


def _headers(usuario: Usuario) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(token_claims(usuario))}"}


@pytest.fixture
def admin(db):
    return _crear_usuario(db, "admin", "ADMIN")


@pytest.fixture
def admin_headers(admin):
    return _headers(admin)


@pytest.fixture
def editor_headers(db):
    return _headers(_crear_usuario(db, "editor", "EDITOR"))


@pytest.fixture
def consulta_headers(db):
    return _headers(_crear_usuario(db, "consulta", "CONSULTA"))


# =============================================================================
# Fábricas de registros
# =============================================================================


@pytest.fixture
def crear_linea(db):
    def _crear(subpartida="10503", ano_contrato="2025", presupuesto="1000000", **extra):
        linea = SubpartidaContratacion(
            subpartida=subpartida,
            ano_contrato=ano_contrato,
            nombre_subpartida=extra.pop("nombre_subpartida", "Transporte en el exterior"),
            numero_contratacion=extra.pop("numero_contratacion", "2024LD-000012"),
            presupuesto_asignado=Decimal(presupuesto),
            **extra,
        )
        db.add(linea)
        db.commit()
        db.refresh(linea)
        return linea

    return _crear


@pytest.fixture
def crear_solicitud(db):
    def _crear(linea, total_factura="100000", descripcion="Boleto aéreo", **extra):
        solicitud = SolicitudPresupuesto(
            subpartida_contratacion_id=linea.id,
            descripcion=descripcion,
            total_factura=total_factura,
            **extra,
        )
        db.add(solicitud)
        db.commit()
        db.refresh(solicitud)
        return solicitud

    return _crear


@pytest.fixture
def crear_area(db):
    def _crear(nombre_area="Cooperación Bilateral"):
        area = Area(nombre_area=nombre_area)
        db.add(area)
        db.commit()
        db.refresh(area)
        return area

    return _crear


@pytest.fixture
def crear_proyecto(db):
    def _crear(nombre_proyecto="Proyecto de prueba", **extra):
        extra.setdefault("fecha_aprobacion", date(2025, 1, 15))
        proyecto = Proyecto(nombre_proyecto=nombre_proyecto, **extra)
        db.add(proyecto)
        db.commit()
        db.refresh(proyecto)
        return proyecto

    return _crear


@pytest.fixture
def crear_viaje(db):
    def _crear(nombre_actividad="Reunión de Ministros OEI", **extra):
        extra.setdefault("ano_viaje", "2025")
        extra.setdefault("fecha_actividad_inicio", date(2025, 4, 7))
        extra.setdefault("fecha_actividad_final", date(2025, 4, 9))
        extra.setdefault("fecha_viaje_inicio", date(2025, 4, 5))
        extra.setdefault("fecha_viaje_final", date(2025, 4, 11))
        viaje = ViajeExterior(nombre_actividad=nombre_actividad, **extra)
        db.add(viaje)
        db.commit()
        db.refresh(viaje)
        return viaje

    return _crear


@pytest.fixture
def crear_observacion(db):
    def _crear(viaje, fecha, hora, observacion="Se envía oficio", **extra):
        obs = ObservacionViaje(
            viaje_id=viaje.id,
            observacion=observacion,
            quien_envia=extra.pop("quien_envia", "DRI"),
            quien_recibe=extra.pop("quien_recibe", "Despacho"),
            fecha=fecha,
            hora=hora,
        )
        db.add(obs)
        db.commit()
        db.refresh(obs)
        return obs

    return _crear
