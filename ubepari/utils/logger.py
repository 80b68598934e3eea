"""Logger utility. Level comes from LOG_LEVEL (default INFO)."""
import logging
import os

logger = logging.getLogger("ubepari")
if not logger.handlers:
    h = logging.StreamHandler()
    fmt = logging.Formatter("%(asctime)s %(levelname)s [%(threadName)s] %(message)s")
    h.setFormatter(fmt)
    logger.addHandler(h)
    logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    logger.propagate = False

def get_logger(name: str = None):
    """Return the app logger, or a child of it (``ubepari.<name>``)."""
    return logger.getChild(name) if name else logger
