"""
Utility functions to set up logging
"""

from typing import Final, Dict, Any, Optional
import os
import sys
import logging, logging.config
from pathlib import Path
from datetime import date


DEBUG: Final[bool] = bool(os.getenv('DEBUG', ''))
LOG_NAME: Final[str] = 'objload'


def app_dir() -> Path:
    """Directory of the executable when frozen, of this script otherwise"""
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    return Path(__file__).resolve().parent


def log_file(log_dir: Path, day: Optional[date] = None) -> Path:
    day = day or date.today()
    return log_dir / f"{LOG_NAME}_{day.isoformat()}.log"


def log_config(logfile: Path, stdout_level: str = 'INFO') -> Dict[str, Any]:
    """
    Load summaries go to stdout, warnings and failed loads
    (with their source pointer) to the dated log file.
    The file is only created once something is written to it.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "format": "%(levelname)-8s : %(message)s",
            },
            "verbose": {
                "format": "[%(asctime)s]%(levelname)s|%(name)s|line#%(lineno)d| : %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S",
            }
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "level": stdout_level,
                "formatter": "simple",
                "stream": "ext://sys.stdout",
            },
            "file": {
                "class": "logging.FileHandler",
                "level": "WARNING",
                "formatter": "verbose",
                "filename": str(logfile),
                "encoding": "utf8",
                "delay": True,
            }
        },
        "loggers": {
            "root": {
                "level": "DEBUG",
                "handlers": [
                    "stdout",
                    "file",
                ]
            }
        }
    }


def setup_logger(log_dir: Optional[Path] = None, verbose: bool = False) -> Path:
    """Configures the root logger, returns the path of the log file"""
    if log_dir is None:
        log_dir = app_dir() / 'logs'
    if not log_dir.is_dir():
        log_dir.mkdir(parents=True)

    logfile = log_file(log_dir)
    stdout_level = 'DEBUG' if DEBUG or verbose else 'INFO'
    logging.config.dictConfig(log_config(logfile, stdout_level))
    return logfile


def shutdown_logger(logger: Optional[logging.Logger] = None) -> None:
    if logger is None:
        logger = logging.getLogger()
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logging.shutdown()
