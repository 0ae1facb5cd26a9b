"""
Configuración del servicio de análisis de Rust.

Se carga con `pydantic-settings` desde variables de entorno y/o un archivo
`.env`; cada atributo de `Settings` puede sobreescribirse con una variable
del mismo nombre.

Ejemplo de `.env`:
    ENV=prod
    PORT=7070
    LOG_LEVEL=debug
    CORS_ALLOW_ORIGINS=http://localhost:5173,http://localhost:3000
    DEBUG_DUMP=true
    DEBUG_DUMP_DIR=/tmp/rust_debug
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuración central del servicio.

    Atributos principales:
        APP_NAME:
            Nombre del servicio (aparece en /health y en la documentación).
        HOST, PORT:
            Dirección de escucha al lanzar con `python -m rustfront.main`.
        LOG_LEVEL:
            Nivel de logging ("debug", "info", "warning", ...).
        CORS_ALLOW_ORIGINS:
            Orígenes permitidos separados por coma ("*" = todos).
        DEBUG_DUMP:
            Si es True, cada análisis se vuelca a JSON en DEBUG_DUMP_DIR.
    """

    APP_NAME: str = "rust_analysis_service"
    ENV: str = "dev"

    HOST: str = "0.0.0.0"
    PORT: int = 7070
    LOG_LEVEL: str = "info"

    CORS_ALLOW_ORIGINS: str = "*"

    # Volcado de depuración
    DEBUG_DUMP: bool = False
    DEBUG_DUMP_DIR: str = "debug_output"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ALLOW_ORIGINS.split(",") if origin.strip()]


# Instancia única de configuración usada en el resto de la app
settings = Settings()
