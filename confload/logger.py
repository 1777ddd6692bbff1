"""
Event log.

Appends one "<timestamp> - <message>" line per event to the log file in
the state directory. Modules log through logging.getLogger(__name__).
"""

import logging
import os
from typing import Union

LOG_FORMAT = '%(asctime)s - %(message)s'
DATE_FORMAT = '%Y-%m-%dT%H:%M:%S'


def setup_logging(log_path: str, level: Union[str, int] = 'INFO') -> logging.Logger:
    """
    Attach an append-mode file handler to the package logger.

    Calling again with the same path does not add a second handler.
    """
    root = logging.getLogger('confload')
    root.setLevel(level if isinstance(level, int) else level.upper())

    log_path = os.path.abspath(log_path)
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == log_path:
            return root

    directory = os.path.dirname(log_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
    return root
