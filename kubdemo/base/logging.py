"""
Logging for the kub-demo services.

Use :func:`getLogger` in place of :func:`logging.getLogger`. Records are
written to stderr (and to ``LOGFILE``, if set) as one JSON object per line, so
that they can be picked up by the cluster log collector without parsing.

.. code-block:: python

   from kubdemo.base import logging
   logger = logging.getLogger(__name__)

"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'
RENAME_FIELDS = {'levelname': 'level', 'asctime': 'timestamp'}


def _get_level() -> int:
    level = os.environ.get('LOGLEVEL', '20')
    try:
        return int(level)
    except ValueError:
        return logging.getLevelName(level.upper())  # type: ignore


def _formatter() -> logging.Formatter:
    return jsonlogger.JsonFormatter(FORMAT, rename_fields=RENAME_FIELDS)


def getLogger(name: str, stream=sys.stderr,
              logfile: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with JSON formatting.

    Parameters
    ----------
    name : str
        Usually ``__name__``.
    stream
        Stream to which records are written. Defaults to stderr.
    logfile : str
        Optional path to an additional log file. Falls back to the ``LOGFILE``
        environment variable.

    Returns
    -------
    :class:`logging.Logger`

    """
    logger = logging.getLogger(name)
    logger.setLevel(_get_level())
    logger.propagate = False
    if logger.handlers:     # Already configured.
        return logger

    handler = logging.StreamHandler(stream)
    handler.setFormatter(_formatter())
    logger.addHandler(handler)

    logfile = logfile or os.environ.get('LOGFILE')
    if logfile:
        file_handler = logging.FileHandler(logfile)
        file_handler.setFormatter(_formatter())
        logger.addHandler(file_handler)
    return logger
