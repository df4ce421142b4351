"""Process-wide logging setup shared by the API and the CLI scripts."""

import logging
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pointsboard.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(settings: "Settings") -> None:
    """Configure the root logger at LOG_LEVEL (DEBUG forces debug output)."""
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL)
    # LOG_DATEFMT ends in Z, so timestamps must be UTC.
    logging.Formatter.converter = time.gmtime
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
