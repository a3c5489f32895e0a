"""Configuración de logging (stdlib) compartida por la app."""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configura el logger raíz una sola vez; llamadas repetidas solo ajustan el nivel."""
    lvl = logging.getLevelName(str(level).upper())
    if not isinstance(lvl, int):
        lvl = logging.INFO
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=lvl, format=LOG_FORMAT)
    root.setLevel(lvl)
    # uvicorn trae sus propios handlers; solo alineamos el nivel
    logging.getLogger("notes").setLevel(lvl)
