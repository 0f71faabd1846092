"""Logging configuration for scripts and examples."""

import logging
import sys


def setup_logging(level: str = "INFO", format_type: str = "structured") -> logging.Logger:
    """
    Attach a stdout handler to the package logger.

    Parameters
    ----------
    level : str
        Logging level name ('DEBUG', 'INFO', ...). Unknown names fall back to INFO.
    format_type : str
        'structured' adds timestamp and logger name, anything else prints
        level and message only.

    Returns
    -------
    logger : logging.Logger
        The 'tblattice' logger
    """
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL
    }
    log_level = level_map.get(level.upper(), logging.INFO)

    if format_type == "structured":
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    else:
        formatter = logging.Formatter('%(levelname)s - %(message)s')

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logger = logging.getLogger('tblattice')
    logger.setLevel(log_level)
    logger.handlers.clear()
    logger.addHandler(handler)

    return logger
