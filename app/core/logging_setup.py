# app/core/logging_setup.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logging once for the process.

    uvicorn installs its own handlers on the "uvicorn" loggers; application
    modules log through `logging.getLogger(__name__)` and end up here.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
