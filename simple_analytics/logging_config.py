"""
Logging setup for the command line client.

Tracking runs on background tasks and on the worker threads used for HTTP
requests. Records from the ``simple_analytics`` loggers go through a queue
and are written by one listener thread, so lines never interleave.
Applications embedding the tracker configure logging themselves.
"""

import logging
import sys
from logging.handlers import QueueHandler, QueueListener
from queue import Queue
from typing import Optional

PACKAGE_LOGGER = "simple_analytics"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_listener: Optional[QueueListener] = None
_queue_handler: Optional[QueueHandler] = None


def setup_logging(debug: bool = False) -> None:
    """
    Send package log records to stderr through a queue listener.

    Args:
        debug: Log at DEBUG instead of INFO, and let urllib3 connection logs through
    """
    global _listener, _queue_handler
    stop_logging()

    log_queue: Queue = Queue()
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _listener = QueueListener(log_queue, console_handler, respect_handler_level=True)
    _listener.start()

    _queue_handler = QueueHandler(log_queue)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.addHandler(_queue_handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    package_logger.propagate = False

    # requests logs every connection through urllib3
    logging.getLogger("urllib3").setLevel(logging.DEBUG if debug else logging.WARNING)


def stop_logging() -> None:
    """Flush pending records and detach the queue handler."""
    global _listener, _queue_handler
    if _listener is not None:
        _listener.stop()
        _listener = None
    if _queue_handler is not None:
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.removeHandler(_queue_handler)
        package_logger.setLevel(logging.NOTSET)
        package_logger.propagate = True
        _queue_handler = None
