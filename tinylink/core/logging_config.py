import logging

from tinylink.core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure the root logger once for the whole process."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
