"""
Configuration for the instance loader.
"""

import logging
from dataclasses import dataclass

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class LoaderConfig:
    """Settings shared by the loader and the command line tool"""

    # instance files are plain ASCII
    encoding: str = "ascii"
    enable_logging: bool = True
    log_level: str = "WARNING"


# Global configuration instance
config = LoaderConfig()


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``itcexam`` namespace"""
    logger = logging.getLogger(f"itcexam.{name}")
    if config.enable_logging and not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, config.log_level))
    return logger


def set_log_level(level: str) -> None:
    """Apply ``level`` to the config and to every logger already handed out."""
    level = level.upper()
    if not isinstance(getattr(logging, level, None), int):
        raise ValueError(f"unknown log level: {level}")
    config.log_level = level
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("itcexam."):
            logging.getLogger(name).setLevel(getattr(logging, level))
