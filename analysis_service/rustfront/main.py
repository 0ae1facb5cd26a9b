"""
Punto de entrada del servicio de análisis de Rust.

Expone el pipeline léxico → sintáctico → CST → AST → DOT sobre HTTP.

Usage:
    uvicorn rustfront.main:app --reload --port 7070
    python -m rustfront.main
"""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.routes import router
from .config import settings


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Crea y configura la aplicación FastAPI.

    - Configura CORS con los orígenes de `settings`.
    - Registra las rutas de análisis.

    Returns:
        Instancia configurada de `FastAPI`.
    """
    app = FastAPI(
        title="Rust Analysis Service",
        description="Análisis léxico y sintáctico de Rust con CST, AST y grafos DOT.",
        version=__version__,
    )

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Rutas ---
    app.include_router(router, tags=["analysis"])

    logger.info("%s %s iniciado (env=%s)", settings.APP_NAME, __version__, settings.ENV)
    logger.info("CORS: %s", settings.cors_origins)
    logger.info(
        "Volcado de depuración: %s",
        settings.DEBUG_DUMP_DIR if settings.DEBUG_DUMP else "desactivado",
    )

    return app


# Instancia por defecto utilizada por Uvicorn
app = create_app()


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
