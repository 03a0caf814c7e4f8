"""Package logging for graphpersist.

Every module logs through ``get_logger(__name__)``. Loggers are children of
the ``graphpersist`` logger, which gets one stdout handler at INFO the first
time a logger is requested. Records also propagate to the root logger, so
applications and pytest's ``caplog`` see them. Applications tune verbosity
with the standard API, e.g. ``logging.getLogger("graphpersist").setLevel(...)``.
"""

import logging
import sys

ROOT_LOGGER_NAME = "graphpersist"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_ROOT_LOGGER_CONFIGURED = False


def _configure_root_logger() -> None:
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for module `name` under the graphpersist root.

    Args:
        name: Logger name, typically ``__name__`` of the calling module.
    """
    _configure_root_logger()
    return logging.getLogger(name)
