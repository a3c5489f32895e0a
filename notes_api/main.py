"""Entrada principal de la app FastAPI (configura middlewares, excepciones y routers)."""
import logging
from typing import Optional

from fastapi import FastAPI
from pymongo.errors import PyMongoError

from notes_api.api.router import api_router
from notes_api.core.config import Settings
from notes_api.core.exceptions import register_exception_handlers
from notes_api.core.logging import setup_logging
from notes_api.core.middleware import add_middlewares
from notes_api.infrastructure.db.bootstrap import ensure_collections
from notes_api.infrastructure.db.mongo import close_mongo, init_mongo

_log = logging.getLogger("notes.startup")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.log_level)
    if not settings.jwt_configured:
        _log.warning("JWT_SECRET no configurado; login y rutas protegidas fallarán")

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.mongo_client = None
    app.state.db = None

    add_middlewares(app, settings)
    register_exception_handlers(app)

    @app.on_event("startup")
    def on_startup():
        client, db = init_mongo(settings)
        app.state.mongo_client, app.state.db = client, db
        # Garantiza colecciones/índices/validadores mínimos si hay conexión
        if db is None:
            _log.warning("Mongo no listo; omitiendo ensure_collections()")
            return
        try:
            ensure_collections(db)
        except PyMongoError as e:
            # No impedir el arranque si fallan validadores/índices
            _log.warning("ensure_collections() falló: %s", e)

    @app.on_event("shutdown")
    def on_shutdown():
        close_mongo(app.state.mongo_client)
        app.state.mongo_client = None
        app.state.db = None

    # Monta routers bajo el prefijo configurado
    app.include_router(api_router, prefix=settings.api_prefix_normalized)
    return app


app = create_app()
