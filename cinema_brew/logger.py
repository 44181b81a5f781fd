# cinema_brew/logger.py
import logging
import logging.config
from typing import Optional
from cinema_brew.config import config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Third-party loggers and the level they run at relative to ours
_QUIET = {"httpx": "WARNING", "openai": "WARNING"}
_FOLLOW = ("uvicorn", "uvicorn.error", "uvicorn.access", "gunicorn.error", "gunicorn.access")

_configured = False


def logging_config(level: str) -> dict:
    """dictConfig payload: one stdout handler on the root, server loggers follow LOG_LEVEL."""
    loggers = {name: {"level": level} for name in _FOLLOW}
    loggers.update({name: {"level": lvl} for name, lvl in _QUIET.items()})
    loggers["sqlalchemy.engine"] = {"level": "INFO" if config.debug_sql else "WARNING"}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"plain": {"format": LOG_FORMAT}},
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "plain",
            },
        },
        "root": {"level": level, "handlers": ["stdout"]},
        "loggers": loggers,
    }


def configure_logging(level: Optional[str] = None) -> None:
    global _configured
    if _configured:
        return
    name = (level or config.log_level).upper()
    if not isinstance(logging.getLevelName(name), int):
        name = "INFO"
    logging.config.dictConfig(logging_config(name))
    _configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name or "cinema_brew")
