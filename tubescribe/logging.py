"""
tubescribe.logging - Package logger setup.

Stage modules log through ``logging.getLogger(__name__)``; everything lands
under the ``tubescribe`` logger configured here.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("tubescribe")

# Chatty below WARNING when uploads and Ollama streams are in flight.
NOISY_LOGGERS = ("urllib3",)


def configure_logging(verbose: bool = False) -> None:
    """Send tubescribe log records to stderr.

    ``verbose`` shows stage progress and the exact commands run; otherwise
    only warnings such as cleanup failures are shown.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    logger.setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
