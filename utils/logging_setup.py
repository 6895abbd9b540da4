# utils/logging_setup.py
"""
Logging setup for the API process.
"""
import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
     """
     Configure the root logger once for the application.

     Args:
          level: Logging level (name or number)
     """
     if isinstance(level, str):
          level = logging.getLevelName(level.upper())
          if not isinstance(level, int):
               level = logging.INFO

     root_logger = logging.getLogger()
     root_logger.setLevel(level)

     # Clear existing handlers
     root_logger.handlers.clear()

     handler = logging.StreamHandler(sys.stdout)
     handler.setLevel(level)
     handler.setFormatter(logging.Formatter(LOG_FORMAT))
     root_logger.addHandler(handler)

     # Reduce verbosity of some libraries
     logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
     logging.getLogger("stripe").setLevel(logging.WARNING)
     logging.getLogger("urllib3").setLevel(logging.WARNING)
