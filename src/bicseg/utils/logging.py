import logging
import os

LOG_LEVEL_ENV = "BICSEG_LOG_LEVEL"


def get_logger(name: str) -> logging.Logger:
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="{asctime} {levelname} {name} {message}",
        style="{",
    )
    return logging.getLogger(name)
