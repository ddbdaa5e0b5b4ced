"""
Point d'entrée principal de l'API CourseTrack.
Démarrage : uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import app.models  # noqa: F401 — enregistre tous les modèles dans Base.metadata avant create_all
from app.config import settings
from app.database import Base, engine
from app.routers import attendance, courses, events, overview, students

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie de l'application : journalisation et création de la table des enregistrements."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s — %(message)s",
    )
    if settings.STORAGE_BACKEND == "sql":
        Base.metadata.create_all(bind=engine)
        logger.info("Stockage SQL prêt (%s).", engine.url.render_as_string(hide_password=True))
    else:
        logger.info("Stockage en mémoire : les données seront perdues à l'arrêt.")
    yield


app = FastAPI(
    title="CourseTrack API",
    description="API de gestion des cours, des élèves et des présences (séances achetées)",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS — autorise tous les ports localhost en développement (à restreindre en production).
# allow_origin_regex est nécessaire pour les requêtes preflight POST avec Content-Type JSON.
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


app.include_router(courses.router)
app.include_router(students.router)
app.include_router(events.router)
app.include_router(attendance.router)
app.include_router(overview.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées (erreurs de stockage comprises)
    pour renvoyer une réponse 500 JSON qui passe par CORSMiddleware.
    """
    logger.error("Exception non gérée : %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Une erreur interne est survenue."},
    )


@app.get("/api/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "CourseTrack API", "version": "0.1.0"}
