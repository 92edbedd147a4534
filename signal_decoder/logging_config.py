"""
Logging setup for applications embedding the decoder.
"""
import logging

from signal_decoder.constants import LOG_FORMAT, LOG_LEVEL_DEFAULT


def configure_logging(level: str = LOG_LEVEL_DEFAULT) -> None:
    """Configure the root logger once with the decoder's format.

    Calling it again only changes the level.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
