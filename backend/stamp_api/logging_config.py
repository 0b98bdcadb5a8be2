from __future__ import annotations

import logging
import sys
import time


LOG_FORMAT = "%(asctime)sZ [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not root.handlers:
        formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
        formatter.converter = time.gmtime
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    # request lines come from the middleware in main.py
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
