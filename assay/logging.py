# assay/logging.py
import logging
import os
from pathlib import Path


def configure_logging(level: str | None = None):
    logging.basicConfig(
        level=level or os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def log_include(logger: logging.Logger, kind: str, source: Path, destination: Path):
    logger.info("include %s %s -> %s", kind, source, destination)
