"""Logging setup shared by the API process and CLI entrypoints."""

import logging

from securenotes.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(settings: Settings) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(level)
    # SQL echo goes through sqlalchemy.engine when DEBUG is on.
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DEBUG else logging.WARNING
    )
