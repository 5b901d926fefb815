import logging
from medreminder.core.engine_config import LOG_LEVEL

LOGGER = logging.getLogger("medreminder")

def configure_logging(level: str = LOG_LEVEL) -> None:
    """
    Attach a stream handler to the package logger once.
    Safe to call repeatedly (uvicorn reload, tests).
    """
    LOGGER.setLevel(getattr(logging, level, logging.INFO))
    if LOGGER.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    LOGGER.addHandler(handler)
