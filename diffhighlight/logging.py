import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_FLAG = "_diffhighlight_handler"


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """
    Attach a stderr handler to the package logger.

    stdout carries the diff itself, so log records must never go there.
    Calling this again replaces the handler installed by the previous call.
    """
    logger = logging.getLogger("diffhighlight")
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, _HANDLER_FLAG, True)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
