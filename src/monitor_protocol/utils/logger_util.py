import logging
from pathlib import Path
from typing import Optional

from monitor_protocol.config import get_settings


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a named logger with standard formatting.

    Level and log directory default to the values from
    ``monitor_protocol.config``; a file handler is only attached when a log
    directory is configured.

    Example:
        logger = get_logger(__name__)
        logger.debug("decoded %s message", msg.type)

    Returns:
        logging.Logger: Configured logger instance.
    """
    settings = get_settings()
    if level is None:
        level = settings.log_level
    logger = logging.getLogger(name)

    # avoid adding duplicate handlers if called repeatedly (common in tests)
    if logger.handlers:
        logger.setLevel(level)
        return logger

    logs_dir = Path(settings.log_dir) if settings.log_dir else None
    if logs_dir is not None:
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            # fall back to streaming only
            logs_dir = None

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        '%(asctime)s     || %(name)s \n%(levelname)s   || %(message)s \n',
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    if logs_dir is not None:
        filehandler = logging.FileHandler(str(logs_dir / f"{name}.log"), encoding="utf-8")
        filehandler.setFormatter(formatter)
        logger.addHandler(filehandler)

    logger.setLevel(level)
    # stop passing records to the root logger (avoid duplicated messages)
    logger.propagate = False

    logger.debug("'%s' initialized with level %s", name, logging.getLevelName(level))
    return logger
