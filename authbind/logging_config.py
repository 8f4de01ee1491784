from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_app_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the ``authbind`` logger hierarchy and return its root logger.

    Notes:
    - Host applications usually own the handlers; records propagate to them.
    - When nothing upstream handles records (no handler on ``authbind`` or the
      root logger), a stderr handler is attached so warnings such as tamper
      detection are not lost. Calling this again does not add a second one.
    - Set ``AUTHBIND_LOG_LEVEL=DEBUG`` to see resolution, bind and apply records.
    """

    package_logger = logging.getLogger("authbind")
    package_logger.setLevel(level.upper())
    package_logger.propagate = True

    if not package_logger.hasHandlers():
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

    return package_logger
