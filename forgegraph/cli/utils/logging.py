import logging
import sys


logger = logging.getLogger("forgegraph")


class LevelPrefixFormatter(logging.Formatter):
    """Plain messages, with warnings and errors prefixed by their level."""

    def format(self, record):
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            return f"Error: {message}"
        if record.levelno >= logging.WARNING:
            return f"Warning: {message}"
        return message


def configure_logging(debug: bool):
    """
    Configures the logging system based on the debug flag.

    Messages go to stderr; stdout is reserved for rendered output.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LevelPrefixFormatter("%(message)s"))

    log_level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(log_level)

    if not logger.hasHandlers():
        logger.addHandler(handler)
