"""
Process-wide logging setup.

One stdout handler, one format. Never logs request bodies or API keys.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    numeric = getattr(logging, (level or "").strip().upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    # Request logging middleware already covers access logs.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
