"""Log output for the blueprints service: one stdout handler on the package logger."""
import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Points every `blueprints_api.*` logger at stdout with `level`.

    Safe to call again (tests build several apps); the previous handler is replaced.
    """
    package_logger = logging.getLogger("blueprints_api")
    package_logger.setLevel(level)
    for old in list(package_logger.handlers):
        package_logger.removeHandler(old)

    stream = logging.StreamHandler(sys.stdout)
    stream.setLevel(level)
    stream.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    package_logger.addHandler(stream)
