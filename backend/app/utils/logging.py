import logging
import sys

from app.config import settings


def get_logger(area: str) -> logging.Logger:
    """
    Return the named logger for an area of the app ("catalog", "orders", ...).
    Handlers are attached once, so calling this at import time in every module is fine.
    """
    log = logging.getLogger(f"storefront.{area}")
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(
            logging.Formatter(f"[{area.upper()}] %(levelname)s %(message)s")
        )
        log.addHandler(h)
        log.setLevel(settings.LOG_LEVEL.upper())
        log.propagate = False
    return log
