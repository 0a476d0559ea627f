import logging
import sys

from . import config


def get_logger():
    logger = logging.getLogger("pemkeys")
    if not logger.handlers or all(isinstance(h, logging.NullHandler) for h in logger.handlers):
        h = logging.StreamHandler(sys.stdout)
        fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s %(message)s")
        h.setFormatter(fmt)
        logger.addHandler(h)
        logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.WARNING))
    return logger
