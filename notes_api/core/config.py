"""Configuración central de la aplicación (Pydantic Settings).

- Carga variables desde .env en la raíz del proyecto.
- Agrupa ajustes por área: App, CORS, Mongo, Auth/JWT, Logging.
- El objeto se construye explícitamente en `create_app()` y viaja en
  `app.state.settings`; no hay instancia global.
"""
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resuelve el .env ubicado en la raíz del proyecto (independiente del CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Variables de configuración con valores por defecto razonables.

    Nota: los valores pueden sobreescribirse vía variables de entorno (.env).
    """
    # App
    app_name: str = "Notes API"
    api_prefix: str = ""

    # CORS (por defecto acepta cualquier origen)
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    cors_allow_any: bool = True

    # Mongo
    mongo_uri: str = Field(
        "mongodb://localhost:27017",
        validation_alias=AliasChoices("MONGO_URI", "CONNECTION_STRING"),
    )
    mongo_db: str = "notes_db"
    mongo_tls: bool = False
    # TLS relax options (dev only)
    mongo_tls_insecure: bool = False
    mongo_tls_allow_invalid_hostnames: bool = False
    mongo_timeout_ms: int = 15000

    # Auth / JWT
    jwt_secret: str | None = Field(
        None,
        validation_alias=AliasChoices("JWT_SECRET", "ACCESS_TOKEN_SECRET"),
    )
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 3600

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # no fallar si hay variables no usadas
        populate_by_name=True,
    )

    # --- Utilidades derivadas / helpers ---
    @property
    def api_prefix_normalized(self) -> str:
        """Devuelve `api_prefix` con formato consistente.

        - Siempre inicia con '/'
        - Sin '/' final
        - Si está vacío (o es solo '/'), devuelve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref or pref == "/":
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if pref.endswith('/'):
            pref = pref[:-1]
        return pref

    @property
    def jwt_configured(self) -> bool:
        return bool(self.jwt_secret)
