import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from cooperacion.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def _seed_admin_user() -> None:
    """Ensure the configured administrator account exists."""
    from cooperacion.database import SessionLocal
    from cooperacion.services.auth_service import ensure_admin_user

    db = SessionLocal()
    try:
        ensure_admin_user(db, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
    except Exception as exc:
        db.rollback()
        logger.error("Could not seed admin user '%s': %s", settings.ADMIN_USERNAME, exc)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables when running without migrations
    if settings.AUTO_CREATE_TABLES:
        from cooperacion.database import init_db

        init_db()
        logger.info("Database tables created (AUTO_CREATE_TABLES=true).")

    _seed_admin_user()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "app": settings.APP_NAME}


# Uploaded PDFs, read-only
settings.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/files", StaticFiles(directory=settings.UPLOADS_DIR), name="files")


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

import cooperacion.models  # noqa: E402,F401

from cooperacion.routers import auth  # noqa: E402

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])

# Budget ledger
from cooperacion.routers import presupuesto, solicitudes, subpartidas  # noqa: E402

app.include_router(
    presupuesto.router,
    prefix="/api/presupuesto",
    tags=["Presupuesto"],
)
app.include_router(
    subpartidas.router,
    prefix="/api/subpartida_contratacion",
    tags=["Subpartidas"],
)
app.include_router(
    solicitudes.router,
    prefix="/api/solicitud_presupuesto",
    tags=["Solicitudes de presupuesto"],
)

# Cooperation projects
from cooperacion.routers import areas, proyectos  # noqa: E402

app.include_router(
    proyectos.router,
    prefix="/api/proyectos",
    tags=["Proyectos"],
)
app.include_router(
    areas.router,
    prefix="/api/areas",
    tags=["Áreas"],
)

# Travel abroad
from cooperacion.routers import observaciones, viajes  # noqa: E402

app.include_router(
    viajes.router,
    prefix="/api/viajes_al_exterior",
    tags=["Viajes al exterior"],
)
app.include_router(
    observaciones.router,
    prefix="/api/observaciones_viajes",
    tags=["Observaciones de viajes"],
)

# Documents
from cooperacion.routers import upload  # noqa: E402

app.include_router(
    upload.router,
    prefix="/api/upload",
    tags=["Archivos"],
)

# Exportación (Excel + PDF)
from cooperacion.routers import exportacion  # noqa: E402

app.include_router(
    exportacion.router,
    prefix="/api/exportar",
    tags=["Exportación"],
)
